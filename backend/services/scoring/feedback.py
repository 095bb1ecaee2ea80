"""Threshold-based strengths and improvements for 0-5 sub-score breakdowns."""

from typing import Mapping

from pydantic import BaseModel, ConfigDict

DEFAULT_STRENGTH = "Completed the task"
DEFAULT_IMPROVEMENT = "Continue practicing"


class FeedbackThresholds(BaseModel):
    """Cut-offs on the 0-5 sub-score scale.

    These are hand-tuned values carried over as configuration.
    """
    model_config = ConfigDict(frozen=True)

    strong_average: float = 4.0  # 80% of max
    excellent_any: float = 4.5
    good_average: float = 3.5
    weak_average: float = 3.0  # 60% of max
    poor_any: float = 2.0
    review_average: float = 4.0


DEFAULT_THRESHOLDS = FeedbackThresholds()


def _average(breakdown: Mapping[str, float]) -> float:
    if not breakdown:
        return 0.0
    return sum(breakdown.values()) / len(breakdown)


def generate_strengths(
    breakdown: Mapping[str, float],
    thresholds: FeedbackThresholds = DEFAULT_THRESHOLDS,
) -> list[str]:
    strengths: list[str] = []
    avg = _average(breakdown)

    if avg >= thresholds.strong_average:
        strengths.append("Strong overall performance across all criteria")
    if any(s >= thresholds.excellent_any for s in breakdown.values()):
        strengths.append("Excellent performance in key areas")
    if avg >= thresholds.good_average:
        strengths.append("Good understanding of core concepts")

    return strengths or [DEFAULT_STRENGTH]


def generate_improvements(
    breakdown: Mapping[str, float],
    thresholds: FeedbackThresholds = DEFAULT_THRESHOLDS,
) -> list[str]:
    improvements: list[str] = []
    avg = _average(breakdown)

    if avg < thresholds.weak_average:
        improvements.append("Consider providing more detailed responses")
    if any(s < thresholds.poor_any for s in breakdown.values()):
        improvements.append("Some areas need more attention to detail")
    if avg < thresholds.review_average:
        improvements.append("Review the example answers for guidance")

    return improvements or [DEFAULT_IMPROVEMENT]
