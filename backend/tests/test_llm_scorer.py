"""Tests for the Gemini-backed scoring path (Gemini calls are stubbed)."""

import pytest

from config import settings
from models.schemas.simulation import TaskDefinition, ValidationRule
from services import gemini_client, llm_scorer, prompt_builder
from services.gemini_client import strip_code_fences

TASK = TaskDefinition(id="task2", type="short-text", name="Marketing Analyst")
RULE = ValidationRule(method="llm-based")


@pytest.fixture
def gemini_reply(monkeypatch):
    """Replace generate_json with a stub returning the given payload."""
    prompts = []

    def _install(payload):
        async def fake_generate_json(prompt):
            prompts.append(prompt)
            return payload

        monkeypatch.setattr(gemini_client, "generate_json", fake_generate_json)
        return prompts

    monkeypatch.setattr(settings, "llm_scoring_enabled", True)
    return _install


class TestScoreWithLlm:
    @pytest.mark.asyncio
    async def test_normalises_reply(self, gemini_reply):
        prompts = gemini_reply({
            "score": 88,
            "breakdown": {"insight": 4},
            "strengths": ["a", "b", "c", "d"],
            "improvements": ["x"],
        })
        result = await llm_scorer.score_with_llm(TASK, {"response": "Churn is high"}, RULE)
        assert result.score == 88
        assert result.strengths == ["a", "b", "c"]
        assert result.validation_method == "llm-based"
        assert "Churn is high" in prompts[0]

    @pytest.mark.asyncio
    async def test_missing_score_defaults_to_50(self, gemini_reply):
        gemini_reply({"strengths": []})
        result = await llm_scorer.score_with_llm(TASK, {}, RULE)
        assert result.score == 50

    @pytest.mark.asyncio
    async def test_oversized_score_string_defaults_to_50(self, gemini_reply):
        gemini_reply({"score": "9" * 5000})
        result = await llm_scorer.score_with_llm(TASK, {}, RULE)
        assert result.score == 50

    @pytest.mark.asyncio
    async def test_unavailable(self, gemini_reply):
        gemini_reply(None)
        assert await llm_scorer.score_with_llm(TASK, {}, RULE) is None

    @pytest.mark.asyncio
    async def test_disabled(self, gemini_reply, monkeypatch):
        prompts = gemini_reply({"score": 99})
        monkeypatch.setattr(settings, "llm_scoring_enabled", False)
        assert await llm_scorer.score_with_llm(TASK, {}, RULE) is None
        assert prompts == []


class TestGeminiClient:
    def test_strip_code_fences(self):
        assert strip_code_fences('```json\n{"score": 1}\n```') == '{"score": 1}'
        assert strip_code_fences('{"score": 1}') == '{"score": 1}'

    @pytest.mark.asyncio
    async def test_no_api_key(self, monkeypatch):
        monkeypatch.setattr(settings, "gemini_api_key", "")
        assert await gemini_client.generate_json("prompt") is None


class TestPromptBuilder:
    def test_custom_prompt_wins(self):
        assert prompt_builder.build_task_scoring_prompt("T", {}, None, "Grade it") == "Grade it"

    def test_default_prompt_includes_submission(self):
        prompt = prompt_builder.build_task_scoring_prompt("Reflection", {"response": "I liked SEO"})
        assert "Reflection" in prompt
        assert "I liked SEO" in prompt
        assert '"score"' in prompt
