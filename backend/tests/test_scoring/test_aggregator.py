"""Tests for final score, skill breakdown and report aggregation."""

from models.responses import ValidationResult
from services.catalog import ARGO, NOAH, NOAH_SKILLS, NOAH_SKILL_WEIGHTS, PERSONA
from services.scoring.aggregator import (
    average_score,
    build_final_report,
    calculate_final_score,
    calculate_skill_breakdown,
    calculate_split_skill_breakdown,
    select_ending,
)


def _result(score, strengths=("Completed the task",), improvements=("Continue practicing",)):
    return ValidationResult(score=score, strengths=list(strengths), improvements=list(improvements))


class TestFinalScore:
    def test_weighted_average(self):
        assert calculate_final_score({"task1": 80, "task2": 60}, {"task1": 50, "task2": 50}) == 70

    def test_missing_task_counts_as_zero(self):
        assert calculate_final_score({"task1": 80}, {"task1": 50, "task2": 50}) == 40

    def test_empty_weights(self):
        assert calculate_final_score({"task1": 80}, {}) == 0

    def test_accepts_results(self):
        results = {"task1": _result(90), "task2": _result(70)}
        assert calculate_final_score(results, {"task1": 25, "task2": 75}) == 75

    def test_average_score(self):
        assert average_score({"a": 80, "b": 61}) == 71
        assert average_score({}) == 0


class TestWeightedSkillBreakdown:
    def test_all_perfect(self):
        scores = {t: 100 for t in NOAH_SKILL_WEIGHTS}
        breakdown = calculate_skill_breakdown(scores, NOAH_SKILL_WEIGHTS, NOAH_SKILLS)
        assert breakdown == {skill: 100 for skill in NOAH_SKILLS}

    def test_single_skill_task(self):
        breakdown = calculate_skill_breakdown({"task4": 80}, NOAH_SKILL_WEIGHTS, NOAH_SKILLS)
        assert breakdown["UX"] == 80
        assert breakdown["GTM & Marketing"] == 0

    def test_weighted_by_mapping(self):
        weights = {"task1": {"Data Insights": 0.25}, "task6": {"Data Insights": 0.75}}
        breakdown = calculate_skill_breakdown({"task1": 80, "task6": 60}, weights)
        assert breakdown == {"Data Insights": 65}


class TestSplitSkillBreakdown:
    def test_average_of_contributing_tasks(self):
        breakdown = calculate_split_skill_breakdown(
            {"task1": 80, "task6": 60}, {"Data Insights": ["task1", "task6"]}
        )
        assert breakdown == {"Data Insights": 70}

    def test_score_split_across_skills(self):
        breakdown = calculate_split_skill_breakdown(
            {"task1": 100}, ARGO.skill_tasks, ARGO.skills_tested
        )
        assert breakdown["Creative Writing"] == 50
        assert breakdown["Brand Tone"] == 50

    def test_skill_without_tasks_is_zero(self):
        breakdown = calculate_split_skill_breakdown(
            {"task1": 100}, ARGO.skill_tasks, ARGO.skills_tested
        )
        assert breakdown["Reflection"] == 0
        assert set(breakdown) == set(ARGO.skills_tested)


class TestFinalReport:
    def test_noah_report(self):
        results = {
            t: _result(80, strengths=["Good understanding of core concepts"])
            for t in NOAH.required_task_ids
        }
        report = build_final_report(results, NOAH)
        assert report.final_score == 80
        assert report.skill_breakdown["UX"] == 80
        assert report.strengths == ["Good understanding of core concepts"]
        assert report.ending is None
        assert "Noah Healthcare" in report.resume_snippet
        assert "80/100" in report.resume_snippet

    def test_top_three_unique_items(self):
        results = {
            "task1": _result(70, improvements=["a", "b"]),
            "task2": _result(70, improvements=["b", "c", "d"]),
        }
        report = build_final_report(results, NOAH)
        assert report.improvements == ["a", "b", "c"]

    def test_persona_endings(self):
        high = build_final_report({t: _result(90) for t in PERSONA.required_task_ids}, PERSONA)
        low = build_final_report({t: _result(40) for t in PERSONA.required_task_ids}, PERSONA)
        assert high.ending.title == "High Ending"
        assert low.ending.title == "Low Ending"

    def test_ending_threshold(self):
        assert select_ending(PERSONA, 70).title == "High Ending"
        assert select_ending(PERSONA, 69).title == "Low Ending"
        assert select_ending(NOAH, 100) is None
