"""
Pattern Detectors — Deterministic Linguistic Markers

Three detectors, each a pure function over one answer's raw text:

  1. Locus / Authority:  internal vs. external attribution, and how
                         commanding the language is
  2. Motivation:         "towards" vs. "away" vocabulary
  3. Process clarity:    sequencing, concrete actions, vague conditionals

Every sub-score is anchored at 50 (neutral) and clamped to 0-100.
Counts are case-insensitive whole-word or fixed-phrase matches against
the small lexicons below. No model, no NLP library, no state.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from intakeframe.models import BASELINE, FlagCode, clamp_score


def _lexicon(*terms: str) -> re.Pattern:
    """
    Compile regex fragments into one case-insensitive whole-term matcher.

    Boundaries are lookarounds rather than \\b so that terms ending in
    punctuation ("1.", "right?") match when followed by whitespace or
    end of text.
    """
    return re.compile(
        r"(?<!\w)(?:" + "|".join(terms) + r")(?!\w)",
        re.IGNORECASE,
    )


def _count(pattern: re.Pattern, text: str) -> int:
    return len(pattern.findall(text))


def _normalize(text: str) -> str:
    # Typographic apostrophes from mobile keyboards
    return text.replace("’", "'").replace("‘", "'")


# ============================================================
# LEXICONS
# ============================================================

FIRST_PERSON = _lexicon(r"I've", r"I'd", r"I'm", r"I", r"me", r"my")

EXTERNAL_ATTRIBUTION = _lexicon(
    r"they", r"them", r"their",
    r"the\s+market", r"the\s+client", r"clients",
    r"it\s+was", r"luck", r"timing", r"economy", r"circumstances",
)

# was/were + participle ("was missed", "were taken")
PASSIVE_CONSTRUCTION = re.compile(r"\b(?:was|were)\s+\w+(?:ed|en)\b", re.IGNORECASE)

HEDGES = _lexicon(
    r"just", r"kind\s+of", r"sort\s+of", r"basically", r"probably",
    r"maybe", r"I\s+think", r"I\s+hope", r"I\s+guess", r"perhaps",
)

TAG_QUESTIONS = _lexicon(
    r"right\?", r"isn't\s+it\?", r"don't\s+you\s+think\?", r"you\s+know\?",
)

TOWARDS = _lexicon(
    r"get", r"achieve", r"build", r"create", r"launch", r"acquire",
    r"grow", r"expand", r"win", r"hit", r"reach", r"increase", r"gain",
    r"develop", r"start", r"make",
)

AWAY = _lexicon(
    r"stop", r"avoid", r"fix", r"prevent", r"reduce", r"eliminate",
    r"escape", r"get\s+rid\s+of", r"out\s+of", r"less", r"don't\s+want",
    r"no\s+more", r"quit", r"end",
)

SEQUENTIAL = _lexicon(
    r"first", r"second", r"third", r"1\.", r"2\.", r"3\.",
    r"then", r"next", r"finally", r"after", r"before", r"step", r"stage",
)

ACTION_VERBS = _lexicon(
    r"qualify", r"demo", r"close", r"present", r"follow\s+up", r"send",
    r"call", r"schedule", r"negotiate", r"sign", r"deliver",
)

CONDITIONAL = _lexicon(
    r"it\s+depends", r"usually", r"sometimes", r"maybe", r"try", r"if",
    r"might", r"could", r"varies",
)

SOFT_COMMITMENT = _lexicon(
    r"try", r"trying", r"tries", r"hope\s+to", r"hoping\s+to",
)


# ============================================================
# RESULTS
# ============================================================

@dataclass(frozen=True)
class LocusAuthorityResult:
    """Sub-scores from the locus/authority detector."""
    locus: int
    authority: int
    flags: tuple[FlagCode, ...] = ()
    counts: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class DetectorResult:
    """Single sub-score from the motivation or process detector."""
    score: int
    flags: tuple[FlagCode, ...] = ()
    counts: dict[str, int] = field(default_factory=dict)


# ============================================================
# DETECTORS
# ============================================================

def detect_locus_authority(text: str) -> LocusAuthorityResult:
    """
    Score locus of control (higher = more internal) and linguistic
    authority (higher = more commanding).

    Used for the failure narrative and the constraint question.
    """
    text = _normalize(text)
    first_person = _count(FIRST_PERSON, text)
    external = _count(EXTERNAL_ATTRIBUTION, text)
    passive = _count(PASSIVE_CONSTRUCTION, text)
    hedges = _count(HEDGES, text)
    tag_questions = _count(TAG_QUESTIONS, text)

    locus = BASELINE + (first_person - external) * 5 - passive * 8
    authority = BASELINE - hedges * 6 - passive * 4 - tag_questions * 8

    flags: list[FlagCode] = []
    if passive >= 2 or external > first_person + 2:
        flags.append(FlagCode.AGENCY_WARNING)
    if external > first_person:
        flags.append(FlagCode.LOCUS_EXTERNAL)
    if hedges >= 3 or tag_questions >= 1:
        flags.append(FlagCode.FRAME_STATUS_BETA)

    return LocusAuthorityResult(
        locus=int(clamp_score(locus)),
        authority=int(clamp_score(authority)),
        flags=tuple(flags),
        counts={
            "first_person": first_person,
            "external": external,
            "passive": passive,
            "hedges": hedges,
            "tag_questions": tag_questions,
        },
    )


def detect_motivation_direction(text: str) -> DetectorResult:
    """Score towards (high) vs. away (low) motivation. Raises no flags."""
    text = _normalize(text)
    towards = _count(TOWARDS, text)
    away = _count(AWAY, text)

    score = BASELINE + towards * 8 - away * 8

    return DetectorResult(
        score=int(clamp_score(score)),
        counts={"towards": towards, "away": away},
    )


def detect_process_clarity(text: str) -> DetectorResult:
    """Score how structured a described process is."""
    text = _normalize(text)
    sequential = _count(SEQUENTIAL, text)
    actions = _count(ACTION_VERBS, text)
    conditional = _count(CONDITIONAL, text)

    score = BASELINE + sequential * 10 + actions * 5 - conditional * 8

    flags: list[FlagCode] = []
    if conditional >= 3 or (sequential == 0 and actions < 2):
        flags.append(FlagCode.GAP_DETECTED)
    if SOFT_COMMITMENT.search(text):
        flags.append(FlagCode.COMMITMENT_SOFT)

    return DetectorResult(
        score=int(clamp_score(score)),
        flags=tuple(flags),
        counts={
            "sequential": sequential,
            "action_verbs": actions,
            "conditional": conditional,
        },
    )
