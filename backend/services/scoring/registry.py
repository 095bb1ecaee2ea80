"""Closed registry of rule-based validators.

Validation rules name their validator by string (``"validateTask3"``,
``"multiple_choice"``). The name is resolved to a ``ValidatorKind`` once;
unknown names resolve to ``None`` and the caller falls back to the inline
rubric or the length scorer.
"""

import logging
from enum import Enum
from typing import Any, Callable, Mapping

from models.responses import ValidationResult
from models.schemas.simulation import SimulationConfig, TaskDefinition
from models.schemas.submissions import ChoiceSubmission, coerce_int
from services.scoring import decision_loop, marketing, validators

logger = logging.getLogger(__name__)

Validator = Callable[[Any, TaskDefinition, SimulationConfig], ValidationResult]


class ValidatorKind(str, Enum):
    MARKET_RESEARCH = "validateTask1"
    TEAM_COMPOSITION = "validateTask2"
    ROADMAP = "validateTask3"
    WIREFRAME = "validateTask4"
    GTM_STRATEGY = "validateTask5"
    ANALYTICS = "validateTask6"
    FINAL_PITCH = "validateTask7"
    MULTIPLE_CHOICE = "multiple_choice"
    SHORT_TEXT = "short_text"
    REFLECTION = "reflection"
    DECISION_LOOP = "decision_loop"


def _score_decision(data: Any, task: TaskDefinition, simulation: SimulationConfig) -> ValidationResult:
    """Score a single decision without session state.

    The budget comes from the payload's ``budgetRemaining`` when present,
    else the simulation's total budget.
    """
    if task.decision is None:
        raise ValueError(f"Task {task.id} has no decision loop configured")
    choice = ChoiceSubmission.parse(data)
    budget = None
    if isinstance(data, Mapping):
        budget = coerce_int(data.get("budgetRemaining"))
    if budget is None:
        budget = simulation.total_budget or 0
    state = decision_loop.apply_decision(task.decision, task.id, choice.selected_option, budget)
    return decision_loop.score_decision(task.decision, state)


_VALIDATORS: dict[ValidatorKind, Validator] = {
    ValidatorKind.MARKET_RESEARCH: lambda d, t, s: validators.validate_market_research(d),
    ValidatorKind.TEAM_COMPOSITION: lambda d, t, s: validators.validate_team_composition(d),
    ValidatorKind.ROADMAP: lambda d, t, s: validators.validate_roadmap(d),
    ValidatorKind.WIREFRAME: lambda d, t, s: validators.validate_wireframe(d),
    ValidatorKind.GTM_STRATEGY: lambda d, t, s: validators.validate_gtm_strategy(d),
    ValidatorKind.ANALYTICS: lambda d, t, s: validators.validate_analytics(d),
    ValidatorKind.FINAL_PITCH: lambda d, t, s: validators.validate_final_pitch(d),
    ValidatorKind.MULTIPLE_CHOICE: lambda d, t, s: marketing.validate_multiple_choice(d, t.config),
    ValidatorKind.SHORT_TEXT: lambda d, t, s: marketing.validate_short_text(d, t.config),
    ValidatorKind.REFLECTION: lambda d, t, s: marketing.validate_reflection(d, t.config),
    ValidatorKind.DECISION_LOOP: _score_decision,
}


def resolve_validator(name: str | None) -> Validator | None:
    """Map a configured validator name to its implementation, or None."""
    if not name:
        return None
    try:
        kind = ValidatorKind(name)
    except ValueError:
        logger.warning("Validator %s not found, falling back to generic scoring", name)
        return None
    return _VALIDATORS[kind]
