"""Static simulation configuration: tasks, validation rules and weight tables.

Loaded once from ``services.catalog`` and never mutated; scoring functions
receive these tables as parameters.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, model_validator

from models.schemas.decision import DecisionLoopConfig


class Ending(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    ceo_message: str = ""
    growth_lead_message: str = ""
    outcome: str = ""


class RubricCriterion(BaseModel):
    model_config = ConfigDict(frozen=True)

    weight: float = 0.0
    max_score: float = 0.0
    min_length: int | None = None


class ValidationRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    method: Literal["rule-based", "llm-based"] = "rule-based"
    validator: str | None = None  # resolved through services.scoring.registry
    rubric: dict[str, RubricCriterion] = {}
    keywords: dict[str, tuple[str, ...]] = {}
    prompt: str | None = None


class ChoiceOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    is_correct: bool = False


class TaskConfig(BaseModel):
    """Task-type specific settings (multiple choice, free text)."""
    model_config = ConfigDict(frozen=True)

    instruction: str = ""
    prompt: str = ""
    options: tuple[ChoiceOption, ...] = ()
    correct_answer: str | None = None
    min_words: int = 0
    max_words: int | None = None
    keywords: tuple[str, ...] = ()


class TaskDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    type: str
    name: str
    scored: bool = True  # intro tasks are not scored or required
    skills_tested: tuple[str, ...] = ()
    validation: ValidationRule | None = None
    config: TaskConfig = TaskConfig()
    decision: DecisionLoopConfig | None = None


class SimulationConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    title: str
    description: str = ""
    category: str = ""
    company_name: str = ""
    tasks: tuple[TaskDefinition, ...] = ()
    skills_tested: tuple[str, ...] = ()

    # task id -> percentage weight, sums to 100
    task_weights: dict[str, int] = {}
    # task id -> {skill: weight}; weighted-average skill breakdown
    skill_weights: dict[str, dict[str, float]] = {}
    # skill -> [task ids]; even-split skill breakdown
    skill_tasks: dict[str, tuple[str, ...]] = {}

    validation_rules: dict[str, ValidationRule] = {}

    total_budget: int | None = None
    endings: dict[str, Ending] = {}
    high_ending_threshold: int = 70

    @model_validator(mode="after")
    def _check_weights(self):
        if self.task_weights and sum(self.task_weights.values()) != 100:
            raise ValueError(
                f"task weights for {self.slug} sum to "
                f"{sum(self.task_weights.values())}, expected 100"
            )
        for task_id, skills in self.skill_weights.items():
            if skills and abs(sum(skills.values()) - 1.0) > 1e-6:
                raise ValueError(f"skill weights for {task_id} must sum to 1.0")
        return self

    def task(self, task_id: str) -> TaskDefinition | None:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None

    @property
    def required_task_ids(self) -> list[str]:
        return [t.id for t in self.tasks if t.scored]
