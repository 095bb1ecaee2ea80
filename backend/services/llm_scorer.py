"""Alternative scoring path: grade a submission with Gemini.

Returns None whenever the model cannot be used so the caller can fall back
to the rule-based validators.
"""

import logging
from typing import Any, Mapping

from config import settings
from models.responses import ValidationResult
from models.schemas.simulation import TaskDefinition, ValidationRule
from services import gemini_client, prompt_builder
from services.scoring.rubric import DEFAULT_SCORE, normalize_result

logger = logging.getLogger(__name__)

LLM_ITEM_LIMIT = 3


async def score_with_llm(
    task: TaskDefinition,
    task_data: Mapping[str, Any],
    rule: ValidationRule,
) -> ValidationResult | None:
    if not settings.llm_scoring_enabled:
        logger.info("LLM scoring disabled, skipping %s", task.id)
        return None

    prompt = prompt_builder.build_task_scoring_prompt(
        task.name or task.id, task_data, rule.rubric, rule.prompt
    )
    raw = await gemini_client.generate_json(prompt)
    if raw is None:
        logger.warning("LLM scoring unavailable for %s", task.id)
        return None

    return normalize_result(
        raw, method="llm-based", limit=LLM_ITEM_LIMIT, default_score=DEFAULT_SCORE
    )
