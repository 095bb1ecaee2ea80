"""Prompt templates for LLM task scoring."""

import json
from typing import Any, Mapping

from models.schemas.simulation import RubricCriterion


def _rubric_json(rubric: Mapping[str, RubricCriterion]) -> str:
    return json.dumps(
        {k: c.model_dump(exclude_none=True) for k, c in rubric.items()},
        indent=2,
    )


def build_task_scoring_prompt(
    task_name: str,
    task_data: Mapping[str, Any],
    rubric: Mapping[str, RubricCriterion] | None = None,
    custom_prompt: str | None = None,
) -> str:
    """Prompt asking the model to grade one submission against a rubric.

    A simulation may supply its own prompt; it is sent as is.
    """
    if custom_prompt:
        return custom_prompt

    submission = json.dumps(dict(task_data), indent=2, default=str)

    return f"""You are an experienced hiring manager grading a work simulation task.

Evaluate this task submission based on the following rubric:
{_rubric_json(rubric or {})}

TASK: {task_name}

SUBMISSION:
---
{submission}
---

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{{
  "score": <integer 0-100>,
  "breakdown": {{<rubric criterion>: <number>}},
  "strengths": [<top 3 specific strengths>],
  "improvements": [<top 3 specific improvements>]
}}"""
