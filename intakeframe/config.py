"""
IntakeFrame Configuration

Central settings loaded from environment variables.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

_DEFAULT_SPEC_PATH = str(
    Path(__file__).resolve().parent / "data" / "business_frame_spec.json"
)


@dataclass(frozen=True)
class Settings:
    """Immutable application settings."""

    # --- Versioning ---
    ENGINE_VERSION: str = "1.0.0"
    API_VERSION: str = "1"

    # --- Reference bundle ---
    SPEC_PATH: str = os.getenv("INTAKEFRAME_SPEC_PATH", _DEFAULT_SPEC_PATH)

    # --- Server ---
    HOST: str = os.getenv("INTAKEFRAME_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("INTAKEFRAME_PORT", "8000"))

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("INTAKEFRAME_LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("INTAKEFRAME_LOG_FORMAT", "json")  # "json" or "text"

    # --- CORS ---
    CORS_ORIGINS: str = os.getenv("INTAKEFRAME_CORS_ORIGINS", "*")


settings = Settings()
