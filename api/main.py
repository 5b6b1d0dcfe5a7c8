"""
IntakeFrame API — Main Application

POST /answers/analyze — Analyze a single answer
POST /metrics         — Compute frame metrics for a full session
POST /metrics/merge   — Blend an external score into computed metrics
GET  /axes            — Axis definitions
GET  /flags           — Flag definitions
GET  /questions       — Question bank
GET  /health          — Health check

The API is stateless: sessions and metrics are supplied by the caller
and handed back, never stored.
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.requests import Request

from intakeframe import __version__
from intakeframe.analyzer import ROUTES
from intakeframe.config import settings
from intakeframe.engine import FrameAnalysisEngine
from intakeframe.logging import setup_logging, get_logger
from intakeframe.reference import load_reference_spec
from intakeframe.scorer import coaching_recommendation
from intakeframe.schemas.metrics import (
    AnswerRequest,
    AnswerAnalysisResponse,
    SessionRequest,
    IntakeMetricsModel,
    MergeRequest,
    AxisResponse,
    FlagResponse,
    QuestionResponse,
    HealthResponse,
)

logger = get_logger("api")


# Lazy engine — the reference bundle is read on first use
_engine: Optional[FrameAnalysisEngine] = None


def _get_engine() -> FrameAnalysisEngine:
    global _engine
    if _engine is None:
        _engine = FrameAnalysisEngine(load_reference_spec(settings.SPEC_PATH))
    return _engine


# ============================================================
# STARTUP / SHUTDOWN
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the reference bundle on startup."""
    setup_logging()
    engine = _get_engine()
    if engine.is_degraded:
        logger.warning(
            "Reference bundle unavailable — all metrics will be placeholders",
            extra={"spec_path": settings.SPEC_PATH},
        )
    logger.info("IntakeFrame API starting")
    yield
    logger.info("IntakeFrame API shutting down")


app = FastAPI(
    title="IntakeFrame API",
    description="Frame analysis engine for intake questionnaires",
    version=f"{__version__} (engine {settings.ENGINE_VERSION})",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",")],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    allow_credentials=False,
)


# ============================================================
# GLOBAL ERROR HANDLER
# ============================================================

@app.exception_handler(Exception)
async def global_error_handler(request: Request, exc: Exception):
    """Catch unhandled exceptions — return structured error, don't leak internals."""
    logger.error(
        f"Unhandled exception: {type(exc).__name__}",
        extra={"error": str(exc), "path": request.url.path, "method": request.method},
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error. The analysis could not be completed.",
        },
    )


# ============================================================
# ROUTES
# ============================================================

@app.post("/answers/analyze", response_model=AnswerAnalysisResponse)
async def analyze_answer(request: AnswerRequest):
    """Analyze one answer with its question's detector."""
    answer = request.to_answer()
    analysis = _get_engine().analyze_answer(answer)
    return AnswerAnalysisResponse.from_analysis(answer, analysis)


@app.post("/metrics", response_model=IntakeMetricsModel)
async def compute_metrics(request: SessionRequest):
    """Compute metrics for a full session from its answers."""
    engine = _get_engine()
    start = time.time()

    metrics = engine.compute_metrics(request.to_session())
    coaching = coaching_recommendation(metrics.active_flags, engine.reference)

    duration = int((time.time() - start) * 1000)
    logger.info(
        f"Session scored: overall={metrics.overall_score} frame={metrics.frame_type.value}",
        extra={
            "overall_score": metrics.overall_score,
            "frame_type": metrics.frame_type.value,
            "integrity": metrics.integrity.value,
            "answers_count": len(request.answers),
            "duration_ms": duration,
        },
    )
    return IntakeMetricsModel.from_metrics(metrics, coaching=coaching)


@app.post("/metrics/merge", response_model=IntakeMetricsModel)
async def merge_metrics(request: MergeRequest):
    """Blend an external 0-100 score into previously computed metrics."""
    engine = _get_engine()
    base = request.metrics.to_metrics()
    merged = engine.merge_external_score(base, request.external_score)
    return IntakeMetricsModel.from_metrics(merged, coaching=request.metrics.coaching)


@app.get("/axes", response_model=list[AxisResponse])
async def get_axes():
    """Return axis definitions from the reference bundle."""
    reference = _get_engine().reference
    return [
        AxisResponse(
            id=a.id,
            name=a.name,
            description=a.description,
            scale_min=a.scale_min,
            scale_max=a.scale_max,
            low_meaning=a.low_meaning,
            high_meaning=a.high_meaning,
            mid_meaning=a.mid_meaning,
        )
        for a in reference.axes
    ]


@app.get("/flags", response_model=list[FlagResponse])
async def get_flags():
    """Return flag definitions from the reference bundle."""
    reference = _get_engine().reference
    return [
        FlagResponse(
            code=f.code,
            severity=f.severity,
            description=f.description,
            trigger_detectors=list(f.trigger_detectors),
            affects_axes=list(f.affects_axes),
        )
        for f in reference.flags
    ]


@app.get("/questions", response_model=list[QuestionResponse])
async def get_questions(tier: Optional[int] = None):
    """Return the question bank, optionally filtered by tier."""
    reference = _get_engine().reference
    questions = reference.questions
    if tier is not None:
        if tier < 1:
            raise HTTPException(400, f"Invalid tier: {tier}")
        questions = tuple(q for q in questions if q.tier == tier)
    return [
        QuestionResponse(
            id=q.id,
            tier=q.tier,
            prompt=q.prompt,
            question_type=q.question_type,
            input_type=q.input_type,
            optional=q.optional,
            analyzed=q.id in ROUTES,
            target_axes=list(q.target_axes),
            target_flags=list(q.target_flags),
        )
        for q in questions
    ]


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check. Reports degraded when the reference bundle failed to load."""
    reference = _get_engine().reference
    return {
        "status": "operational" if reference.is_loaded else "degraded",
        "version": __version__,
        "engine_version": settings.ENGINE_VERSION,
        "spec_loaded": reference.is_loaded,
        "spec_version": reference.version,
        "axes": len(reference.axes),
        "flags": len(reference.flags),
        "questions": len(reference.questions),
    }


# ============================================================
# MIDDLEWARE
# ============================================================

_RESPONSE_HEADERS = {
    "X-IntakeFrame-Version": __version__,
    "X-Engine-Version": settings.ENGINE_VERSION,
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

# 1 MB
_MAX_BODY_BYTES = 1_048_576


def _declared_length(request: Request) -> Optional[int]:
    try:
        return int(request.headers.get("content-length", ""))
    except ValueError:
        return None


def _body_too_large() -> JSONResponse:
    return JSONResponse(status_code=413, content={"detail": "Request body too large."})


@app.middleware("http")
async def add_response_headers(request: Request, call_next):
    """Stamp version and security headers on every response."""
    response = await call_next(request)
    response.headers.update(_RESPONSE_HEADERS)
    return response


@app.middleware("http")
async def limit_body_size(request: Request, call_next):
    """Reject session payloads over 1 MB, declared or actual."""
    declared = _declared_length(request)
    if declared is not None and declared > _MAX_BODY_BYTES:
        return _body_too_large()
    if request.method == "POST" and len(await request.body()) > _MAX_BODY_BYTES:
        return _body_too_large()
    return await call_next(request)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """One log line per analysis request; health probes are not logged."""
    if request.url.path == "/health":
        return await call_next(request)

    start = time.time()
    response = await call_next(request)
    duration_ms = round((time.time() - start) * 1000, 1)

    logger.info(
        f"{request.method} {request.url.path} {response.status_code} ({duration_ms}ms)",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )
    return response


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host=settings.HOST, port=settings.PORT)
