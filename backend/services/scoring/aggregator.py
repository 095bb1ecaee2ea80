"""Combine per-task results into the final score, skill breakdown and report."""

import logging
from typing import Iterable, Mapping, Sequence

from models.responses import FinalReport, ValidationResult
from models.schemas.simulation import Ending, SimulationConfig
from services.scoring.extractors import round_half_up

logger = logging.getLogger(__name__)

REPORT_ITEM_LIMIT = 3
TOP_SKILL_COUNT = 3


def _score_of(results: Mapping[str, ValidationResult | int], task_id: str) -> int:
    result = results.get(task_id)
    if result is None:
        return 0
    if isinstance(result, ValidationResult):
        return result.score
    return int(result)


def calculate_final_score(
    results: Mapping[str, ValidationResult | int],
    weights: Mapping[str, int],
) -> int:
    """Weighted average of task scores; a task without a result counts as 0.

    >>> calculate_final_score({"task1": 80, "task2": 60}, {"task1": 50, "task2": 50})
    70
    """
    total_score = 0.0
    total_weight = 0.0
    for task_id, weight in weights.items():
        total_score += _score_of(results, task_id) * (weight / 100)
        total_weight += weight / 100
    if total_weight <= 0:
        return 0
    return round_half_up(total_score / total_weight)


def average_score(results: Mapping[str, ValidationResult | int]) -> int:
    """Unweighted mean, used for simulations without a task weight table."""
    if not results:
        return 0
    return round_half_up(sum(_score_of(results, t) for t in results) / len(results))


def calculate_skill_breakdown(
    results: Mapping[str, ValidationResult | int],
    skill_weights: Mapping[str, Mapping[str, float]],
    skills: Sequence[str] = (),
) -> dict[str, int]:
    """Weighted average per skill for ``task -> {skill: weight}`` tables."""
    totals = {skill: 0.0 for skill in skills}
    counts = {skill: 0.0 for skill in skills}

    for task_id, mapping in skill_weights.items():
        score = _score_of(results, task_id)
        for skill, weight in mapping.items():
            totals[skill] = totals.get(skill, 0.0) + score * weight
            counts[skill] = counts.get(skill, 0.0) + weight

    return {
        skill: round_half_up(totals[skill] / counts[skill]) if counts[skill] > 0 else 0
        for skill in totals
    }


def calculate_split_skill_breakdown(
    results: Mapping[str, ValidationResult | int],
    skill_tasks: Mapping[str, Sequence[str]],
    skills: Sequence[str] = (),
) -> dict[str, int]:
    """Per-skill average for ``skill -> [task ids]`` tables.

    A task's score is split evenly across every skill that lists it, then
    each skill averages the shares it received. A task without a result
    contributes 0; a skill no task maps to scores 0.
    """
    totals = {skill: 0.0 for skill in (skills or skill_tasks)}
    counts = {skill: 0 for skill in totals}

    task_ids = dict.fromkeys(t for ids in skill_tasks.values() for t in ids)
    for task_id in task_ids:
        task_skills = [s for s, ids in skill_tasks.items() if task_id in ids]
        if not task_skills:
            continue
        share = _score_of(results, task_id) / len(task_skills)
        for skill in task_skills:
            if skill in totals:
                totals[skill] += share
                counts[skill] += 1

    return {
        skill: round_half_up(totals[skill] / counts[skill]) if counts[skill] else 0
        for skill in totals
    }


def _top_unique(groups: Iterable[Sequence[str]], limit: int) -> list[str]:
    seen: list[str] = []
    for items in groups:
        for item in items:
            if item not in seen:
                seen.append(item)
                if len(seen) >= limit:
                    return seen
    return seen


def build_resume_snippet(
    simulation: SimulationConfig,
    final_score: int,
    skill_breakdown: Mapping[str, int],
) -> str:
    top_skills = [
        skill
        for skill, _ in sorted(skill_breakdown.items(), key=lambda kv: kv[1], reverse=True)
    ][:TOP_SKILL_COUNT]
    company = simulation.company_name or "the company"
    task_count = len(simulation.required_task_ids)
    return (
        f"Completed the {simulation.title} simulation for {company}, demonstrating "
        f"expertise in {', '.join(top_skills)}. Achieved {final_score}/100 overall "
        f"score across {task_count} tasks."
    )


def select_ending(simulation: SimulationConfig, final_score: int) -> Ending | None:
    if not simulation.endings:
        return None
    key = "high" if final_score >= simulation.high_ending_threshold else "low"
    return simulation.endings.get(key)


def build_final_report(
    results: Mapping[str, ValidationResult],
    simulation: SimulationConfig,
) -> FinalReport:
    """Aggregate scored submissions into the report shown at the end."""
    if simulation.task_weights:
        final_score = calculate_final_score(results, simulation.task_weights)
    else:
        final_score = average_score(results)

    if simulation.skill_weights:
        skills = calculate_skill_breakdown(
            results, simulation.skill_weights, simulation.skills_tested
        )
    else:
        skills = calculate_split_skill_breakdown(
            results, simulation.skill_tasks, simulation.skills_tested
        )

    ordered = [results[t] for t in simulation.required_task_ids if t in results]
    logger.info(
        "Final report for %s: score=%d over %d results", simulation.slug, final_score, len(ordered)
    )

    return FinalReport(
        final_score=final_score,
        skill_breakdown=skills,
        task_scores={t: r.score for t, r in results.items()},
        strengths=_top_unique((r.strengths for r in ordered), REPORT_ITEM_LIMIT),
        improvements=_top_unique((r.improvements for r in ordered), REPORT_ITEM_LIMIT),
        resume_snippet=build_resume_snippet(simulation, final_score, skills),
        ending=select_ending(simulation, final_score),
    )
