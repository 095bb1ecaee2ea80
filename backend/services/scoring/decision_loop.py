"""Budget-tracked decision loops (persona simulation).

Each loop offers a fixed set of options with fixed costs. The remaining
budget is carried forward through the persisted state of earlier loops:

    loop 1: 15000 - cost(A) -> state.budget_remaining
    loop 2: starts from loop 1's budget_remaining, and so on.

Loops are decided once each and in order, so a stored budget is never
invalidated by a later change to an earlier loop.

Scoring is a static lookup of (loop, option) plus small bonuses for
keeping budget in reserve and for following the previous loop's signal.
"""

import logging
from typing import Mapping, Sequence

from models.responses import ValidationResult
from models.schemas.decision import DecisionChoice, DecisionLoopConfig, DecisionState
from services.scoring.feedback import DEFAULT_IMPROVEMENT, DEFAULT_STRENGTH

logger = logging.getLogger(__name__)

_POSITIVE_OUTCOMES = {"positive", "strong"}


def carry_forward(
    prior_states: Mapping[str, DecisionState],
    previous_task_ids: Sequence[str],
    total_budget: int,
) -> tuple[int, list[DecisionChoice]]:
    """Budget and choice history inherited from the latest earlier loop."""
    budget = total_budget
    history: list[DecisionChoice] = []
    for task_id in previous_task_ids:
        state = prior_states.get(task_id)
        if state is not None and state.submitted:
            budget = state.budget_remaining
            history = list(state.choices_history)
    return budget, history


def first_open_loop(
    prior_states: Mapping[str, DecisionState],
    loop_ids: Sequence[str],
) -> str | None:
    """The first of ``loop_ids`` without a submitted decision, or None."""
    for task_id in loop_ids:
        state = prior_states.get(task_id)
        if state is None or not state.submitted:
            return task_id
    return None


def apply_decision(
    config: DecisionLoopConfig,
    task_id: str,
    option_id: str | None,
    budget: int,
    history: Sequence[DecisionChoice] = (),
) -> DecisionState:
    """Spend the chosen option's cost and record the choice.

    Unknown or unaffordable options leave the budget untouched and return
    an unsubmitted state.
    """
    option = config.option(option_id)
    if option is None or option.cost > budget:
        logger.info("Rejected decision %r for %s (budget %d)", option_id, task_id, budget)
        return DecisionState(
            selected_option=None,
            submitted=False,
            budget_remaining=budget,
            choices_history=list(history),
        )

    return DecisionState(
        selected_option=option.id,
        submitted=True,
        budget_remaining=budget - option.cost,
        choices_history=[
            *history,
            DecisionChoice(task_id=task_id, option=option.id, cost=option.cost),
        ],
        feedback=config.feedback.get(option.id),
    )


def score_decision(config: DecisionLoopConfig, state: DecisionState) -> ValidationResult:
    option = config.option(state.selected_option)
    if not state.submitted or option is None:
        return ValidationResult(
            score=0,
            breakdown={"decision": 0.0},
            strengths=[DEFAULT_STRENGTH],
            improvements=["Select an option you can afford with the remaining budget"],
            validation_method="decision-table",
        )

    scoring = config.scoring
    base = scoring.option_scores.get(option.id, 0)

    budget_bonus = (
        scoring.budget_bonus
        if state.budget_remaining >= scoring.budget_bonus_threshold
        else 0
    )

    # The choice just made is the last history entry; the one before it is
    # the previous loop's decision.
    previous = state.choices_history[-2].option if len(state.choices_history) >= 2 else None
    sequence_bonus = (
        scoring.sequence_bonus if previous and previous in option.recommended_after else 0
    )

    strengths: list[str] = []
    improvements: list[str] = []
    outcome = state.feedback.outcome if state.feedback else ""
    if option.is_best:
        strengths.append("Picked the option best supported by the evidence")
    if outcome in _POSITIVE_OUTCOMES:
        strengths.append("Your choice produced a strong signal")
    elif outcome == "negative":
        improvements.append("Revisit the evidence gathered so far before committing")
    if budget_bonus:
        strengths.append("Kept budget in reserve for later validation")
    if sequence_bonus:
        strengths.append("Built on the signal from your previous decision")
    if not budget_bonus and state.budget_remaining < scoring.budget_bonus_threshold:
        improvements.append("Watch the budget: cheaper signals can be just as useful")

    return ValidationResult(
        score=base + budget_bonus + sequence_bonus,
        breakdown={
            "decision": float(base),
            "budget_bonus": float(budget_bonus),
            "sequence_bonus": float(sequence_bonus),
        },
        strengths=strengths[:3] or [DEFAULT_STRENGTH],
        improvements=improvements[:3] or [DEFAULT_IMPROVEMENT],
        validation_method="decision-table",
    )
