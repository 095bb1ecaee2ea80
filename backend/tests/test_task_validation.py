"""Tests for validation routing and its fallback chain."""

import pytest

from models.responses import ValidationResult
from models.schemas.simulation import (
    RubricCriterion,
    SimulationConfig,
    TaskDefinition,
    ValidationRule,
)
from services import llm_scorer, task_validation
from services.catalog import ARGO, NOAH
from services.task_validation import validate_task

LONG_ANSWER = "A detailed answer about the launch plan and its risks. " * 4


def _simulation(rule: ValidationRule | None) -> tuple[TaskDefinition, SimulationConfig]:
    task = TaskDefinition(id="task1", type="text", name="Essay")
    rules = {"task1": rule} if rule else {}
    return task, SimulationConfig(slug="test-sim", title="Test", tasks=(task,), validation_rules=rules)


class TestRuleBased:
    @pytest.mark.asyncio
    async def test_named_validator(self):
        result = await validate_task(NOAH.task("task1"), {}, NOAH)
        assert result.validation_method == "rule-based"
        assert result.strengths == ["Completed the task"]

    @pytest.mark.asyncio
    async def test_task_config_reaches_validator(self):
        result = await validate_task(ARGO.task("task4"), {"selectedOption": "opt1"}, ARGO)
        assert result.score == 100

    @pytest.mark.asyncio
    async def test_unknown_validator_falls_back_to_rubric(self):
        rule = ValidationRule(
            validator="validateTask99",
            rubric={"answer": RubricCriterion(weight=1.0, max_score=10, min_length=20)},
        )
        task, sim = _simulation(rule)
        result = await validate_task(task, {"answer": LONG_ANSWER}, sim)
        assert result.score == 50
        assert result.validation_method == "rule-based"

    @pytest.mark.asyncio
    async def test_no_validator_or_rubric_uses_length(self):
        task, sim = _simulation(ValidationRule())
        result = await validate_task(task, {"answer": LONG_ANSWER}, sim)
        assert result.validation_method == "length-fallback"
        assert result.score >= 20


class TestDefaults:
    @pytest.mark.asyncio
    async def test_missing_task(self):
        result = await validate_task(None, {}, NOAH)
        assert result.score == 50
        assert result.improvements == ["Invalid task or task data"]

    @pytest.mark.asyncio
    async def test_non_mapping_data(self):
        result = await validate_task(NOAH.task("task1"), None, NOAH)
        assert result.validation_method == "default"

    @pytest.mark.asyncio
    async def test_no_rule(self):
        task, sim = _simulation(None)
        result = await validate_task(task, {"answer": "x"}, sim)
        assert result.score == 50
        assert result.validation_method == "default"

    @pytest.mark.asyncio
    async def test_validator_error_becomes_default(self, monkeypatch):
        def boom(*_):
            raise RuntimeError("boom")

        monkeypatch.setattr(task_validation, "resolve_validator", lambda name: boom)
        result = await validate_task(NOAH.task("task1"), {}, NOAH)
        assert result.score == 50
        assert result.improvements == ["Validation failed: boom"]


class TestLlmRouting:
    @pytest.mark.asyncio
    async def test_llm_result_used(self, monkeypatch):
        async def fake_llm(task, data, rule):
            return ValidationResult(score=91, validation_method="llm-based")

        monkeypatch.setattr(llm_scorer, "score_with_llm", fake_llm)
        task, sim = _simulation(ValidationRule(method="llm-based"))
        result = await validate_task(task, {"answer": "x"}, sim)
        assert result.score == 91
        assert result.validation_method == "llm-based"

    @pytest.mark.asyncio
    async def test_llm_unavailable_falls_back(self, monkeypatch):
        async def no_llm(task, data, rule):
            return None

        monkeypatch.setattr(llm_scorer, "score_with_llm", no_llm)
        rule = ValidationRule(method="llm-based", validator="validateTask4")
        task, sim = _simulation(rule)
        result = await validate_task(task, {}, sim)
        assert result.score == 34
        assert result.validation_method == "rule-based"
