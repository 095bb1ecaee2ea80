"""Route a task submission to the configured scoring method.

    llm-based  -> Gemini, falling back to rule-based when it returns nothing
    rule-based -> named validator -> inline rubric -> length scorer

Scoring never raises: anything unexpected becomes the default result.
"""

import logging
from typing import Any, Mapping

from models.responses import ValidationResult
from models.schemas.simulation import SimulationConfig, TaskDefinition, ValidationRule
from services import llm_scorer
from services.scoring.registry import resolve_validator
from services.scoring.rubric import (
    calculate_score_from_rubric,
    default_result,
    normalize_result,
    simple_length_score,
)

logger = logging.getLogger(__name__)


def resolve_rule(task: TaskDefinition, simulation: SimulationConfig) -> ValidationRule | None:
    return simulation.validation_rules.get(task.id) or task.validation


def rule_based_validation(
    task: TaskDefinition,
    task_data: Mapping[str, Any],
    rule: ValidationRule,
    simulation: SimulationConfig,
) -> ValidationResult:
    validator = resolve_validator(rule.validator)
    if validator is not None:
        return normalize_result(validator(task_data, task, simulation))

    if rule.rubric:
        return calculate_score_from_rubric(task_data, rule.rubric, rule.keywords)

    return simple_length_score(task_data)


async def validate_task(
    task: TaskDefinition | None,
    task_data: Any,
    simulation: SimulationConfig,
) -> ValidationResult:
    """Score one submission for ``task`` within ``simulation``."""
    if task is None or not isinstance(task_data, Mapping):
        return default_result("Invalid task or task data")

    rule = resolve_rule(task, simulation)
    if rule is None:
        logger.warning("No validation rule found for task %s, using default", task.id)
        return default_result()

    try:
        if rule.method == "llm-based":
            result = await llm_scorer.score_with_llm(task, task_data, rule)
            if result is not None:
                return result
            logger.warning("Falling back to rule-based validation for %s", task.id)
        return rule_based_validation(task, task_data, rule, simulation)
    except Exception as e:
        logger.exception("Validation of %s/%s failed", simulation.slug, task.id)
        return default_result(f"Validation failed: {e}")
