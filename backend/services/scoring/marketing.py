"""Validators for the marketing-foundations simulation.

Task types: multiple choice (creative headline, SEO keyword), short text
answers (campaign analysis, customer insight) and a closing reflection.
The expected answer, word limits and keywords come from the task's
``TaskConfig``.
"""

from types import MappingProxyType
from typing import Any, Mapping

from models.responses import ValidationResult
from models.schemas.simulation import TaskConfig
from models.schemas.submissions import ChoiceSubmission, TextResponseSubmission
from services.scoring.extractors import check_keywords, contains_any, word_count
from services.scoring.feedback import DEFAULT_THRESHOLDS, FeedbackThresholds
from services.scoring.validators import MAX_SUBSCORE, build_result

WRONG_ANSWER_CREDIT = 25

# Hitting this share of the configured keywords earns full relevance
KEYWORD_SATURATION = 0.5

REASONING_MARKERS: tuple[str, ...] = (
    "because", "since", "due to", "therefore", "which means",
    "as a result", "leads to", "so that",
)

MARKETING_ROLE_TERMS: tuple[str, ...] = (
    "creative", "strategist", "analyst", "analytics", "data", "seo",
    "customer", "insight", "brand", "content", "social media", "growth",
)

SHORT_TEXT_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "length_fit": 0.3, "relevance": 0.5, "reasoning": 0.2,
})
REFLECTION_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "depth": 0.4, "role_mention": 0.3, "reasoning": 0.3,
})


def _correct_option(config: TaskConfig) -> str | None:
    if config.correct_answer:
        return config.correct_answer
    for opt in config.options:
        if opt.is_correct:
            return opt.id
    return None


def _option_text(config: TaskConfig, option_id: str | None) -> str:
    for opt in config.options:
        if opt.id == option_id:
            return opt.text
    return ""


def validate_multiple_choice(
    data: Any,
    config: TaskConfig = TaskConfig(),
) -> ValidationResult:
    sub = ChoiceSubmission.parse(data)
    correct = _correct_option(config)

    if sub.selected_option is None:
        return ValidationResult(
            score=0,
            breakdown={"correctness": 0.0},
            strengths=["Completed the task"],
            improvements=["Select one of the options before submitting"],
        )

    if sub.selected_option == correct:
        return ValidationResult(
            score=100,
            breakdown={"correctness": MAX_SUBSCORE},
            strengths=["Chose the option that best fits the brief"],
            improvements=["Continue practicing"],
        )

    improvements = ["Re-read the brief and match the tone and audience it asks for"]
    answer = _option_text(config, correct)
    if answer:
        improvements.append(f'The strongest option was: "{answer}"')
    return ValidationResult(
        score=WRONG_ANSWER_CREDIT,
        breakdown={"correctness": WRONG_ANSWER_CREDIT / 100 * MAX_SUBSCORE},
        strengths=["Completed the task"],
        improvements=improvements,
    )


def _length_fit(words: int, min_words: int, max_words: int | None) -> float:
    if words == 0:
        return 0.0
    if words < min_words:
        return MAX_SUBSCORE * words / min_words
    if max_words is not None and words > max_words:
        return 3.0
    return MAX_SUBSCORE


def _reasoning(text: str) -> float:
    if not text.strip():
        return 0.0
    return MAX_SUBSCORE if contains_any(text, REASONING_MARKERS) else 2.0


def validate_short_text(
    data: Any,
    config: TaskConfig = TaskConfig(),
    weights: Mapping[str, float] = SHORT_TEXT_WEIGHTS,
    thresholds: FeedbackThresholds = DEFAULT_THRESHOLDS,
) -> ValidationResult:
    sub = TextResponseSubmission.parse(data)
    words = word_count(sub.response)
    length_fit = _length_fit(words, config.min_words, config.max_words)

    if config.keywords:
        coverage = check_keywords(sub.response, config.keywords)
        relevance = min(coverage / KEYWORD_SATURATION, 1.0) * MAX_SUBSCORE
    else:
        relevance = length_fit

    breakdown = {
        "length_fit": length_fit,
        "relevance": relevance,
        "reasoning": _reasoning(sub.response),
    }
    warnings = []
    if config.max_words is not None and words > config.max_words:
        warnings.append(f"Warning: Answer is longer than the {config.max_words} word limit")
    return build_result(breakdown, weights, warnings, thresholds)


def validate_reflection(
    data: Any,
    config: TaskConfig = TaskConfig(),
    weights: Mapping[str, float] = REFLECTION_WEIGHTS,
    thresholds: FeedbackThresholds = DEFAULT_THRESHOLDS,
) -> ValidationResult:
    sub = TextResponseSubmission.parse(data)
    words = word_count(sub.response)
    min_words = config.min_words or 20

    depth = MAX_SUBSCORE if words >= min_words else MAX_SUBSCORE * words / min_words

    role_terms = config.keywords or MARKETING_ROLE_TERMS
    if not words:
        role_mention = 0.0
    else:
        role_mention = MAX_SUBSCORE if contains_any(sub.response, role_terms) else 2.0

    breakdown = {
        "depth": depth,
        "role_mention": role_mention,
        "reasoning": _reasoning(sub.response),
    }
    warnings = []
    if words < min_words:
        warnings.append(f"Warning: Reflection is shorter than the {min_words} word minimum")
    return build_result(breakdown, weights, warnings, thresholds)
