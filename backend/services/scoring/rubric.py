"""Generic scoring used when no dedicated validator applies.

- ``calculate_score_from_rubric``: inline rubric + keyword lists from config
- ``simple_length_score``: last-resort scorer based on total text length
- ``default_result``: fixed result for unusable configuration or input
- ``normalize_result``: coerce an externally produced result (LLM) into shape
"""

import logging
import math
from typing import Any, Mapping, Sequence

from models.responses import ValidationResult
from models.schemas.simulation import RubricCriterion
from models.schemas.submissions import coerce_int
from services.scoring.extractors import (
    check_keywords,
    clamp_score,
    has_min_length,
    round_half_up,
)

logger = logging.getLogger(__name__)

DEFAULT_SCORE = 50
DEFAULT_MESSAGE = "Please review your submission and try again"

# Share of a criterion's max awarded for meeting its minimum length / for
# writing more than DETAIL_LENGTH characters
MIN_LENGTH_SHARE = 0.3
DETAIL_SHARE = 0.2
DETAIL_LENGTH = 50

STRONG_SHARE = 0.8
WEAK_SHARE = 0.5

LENGTH_TARGET = 500
LENGTH_FLOOR = 20


def default_result(message: str | None = None) -> ValidationResult:
    return ValidationResult(
        score=DEFAULT_SCORE,
        breakdown={},
        strengths=[],
        improvements=[message or DEFAULT_MESSAGE],
        validation_method="default",
    )


def _field_text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def calculate_score_from_rubric(
    data: Mapping[str, Any],
    rubric: Mapping[str, RubricCriterion],
    keywords: Mapping[str, Sequence[str]] | None = None,
) -> ValidationResult:
    """Score each rubric field by keywords, minimum length and detail."""
    keywords = keywords or {}
    total = 0.0
    breakdown: dict[str, float] = {}
    strengths: list[str] = []
    improvements: list[str] = []

    for key, criterion in rubric.items():
        value = _field_text(data, key)
        max_score = criterion.max_score
        criterion_score = 0.0

        keyword_list = keywords.get(key) or ()
        if keyword_list:
            criterion_score += check_keywords(value, keyword_list) * max_score
        if criterion.min_length and has_min_length(value, criterion.min_length):
            criterion_score += max_score * MIN_LENGTH_SHARE
        if len(value) > DETAIL_LENGTH:
            criterion_score += max_score * DETAIL_SHARE

        criterion_score = min(criterion_score, max_score)
        breakdown[key] = round_half_up(criterion_score)
        total += criterion_score

        if criterion_score >= max_score * STRONG_SHARE:
            strengths.append(f"Strong {key} analysis")
        elif criterion_score < max_score * WEAK_SHARE:
            improvements.append(f"Improve {key} - add more detail and analysis")

    max_possible = sum(c.max_score for c in rubric.values())
    score = clamp_score(total / max_possible * 100) if max_possible > 0 else 0

    return ValidationResult(
        score=score,
        breakdown=breakdown,
        strengths=strengths or ["Good effort on the task"],
        improvements=improvements or ["Continue practicing"],
    )


def simple_length_score(data: Mapping[str, Any]) -> ValidationResult:
    """More content scores higher, capped at 100, never below the floor."""
    total_length = sum(len(v) for v in data.values() if isinstance(v, str))
    score = min(round_half_up(total_length / LENGTH_TARGET * 100), 100)

    return ValidationResult(
        score=max(score, LENGTH_FLOOR),
        breakdown={},
        strengths=["Good detail in your response"] if total_length > 200 else [],
        improvements=(
            ["Add more detail to your response"] if total_length < 100 else ["Keep practicing"]
        ),
        validation_method="length-fallback",
    )


def _string_list(value: Any, limit: int | None) -> list[str]:
    if not isinstance(value, list):
        return []
    items = [str(v) for v in value if isinstance(v, str) and v.strip()]
    return items[:limit] if limit is not None else items


def _finite_float(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def _or_default(value: int | None, default: int) -> int:
    return default if value is None else value


def normalize_result(
    raw: Any,
    method: str = "rule-based",
    limit: int | None = None,
    default_score: int = 0,
) -> ValidationResult:
    """Coerce a loosely shaped result mapping into a ValidationResult.

    A missing or unparseable score becomes ``default_score``.
    """
    if isinstance(raw, ValidationResult):
        return raw
    if not isinstance(raw, Mapping):
        logger.warning("Discarding malformed validation result of type %s", type(raw).__name__)
        return default_result("Invalid validation result")

    raw_breakdown = raw.get("breakdown") or raw.get("score_breakdown") or {}
    breakdown = {}
    if isinstance(raw_breakdown, Mapping):
        parsed = {str(k): _finite_float(v) for k, v in raw_breakdown.items()}
        breakdown = {k: v for k, v in parsed.items() if v is not None}

    return ValidationResult(
        score=_or_default(coerce_int(raw.get("score")), default_score),
        breakdown=breakdown,
        strengths=_string_list(raw.get("strengths"), limit),
        improvements=_string_list(raw.get("improvements"), limit),
        warnings=_string_list(raw.get("warnings"), limit),
        validation_method=method,
    )
