from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

from models.schemas.decision import DecisionState
from models.schemas.progress import ProgressRecord
from models.schemas.simulation import Ending


class ValidationResult(BaseModel):
    """Outcome of scoring one task submission. Stored verbatim with it."""

    model_config = ConfigDict(frozen=True)

    score: int = 0
    breakdown: dict[str, float] = {}
    strengths: list[str] = []
    improvements: list[str] = []
    warnings: list[str] = []
    validation_method: str = "rule-based"

    @field_validator("score", mode="before")
    @classmethod
    def _clamp_score(cls, value):
        try:
            value = int(round(float(value)))
        except (TypeError, ValueError, OverflowError):
            return 0
        return min(100, max(0, value))


class FinalReport(BaseModel):
    final_score: int = 0
    skill_breakdown: dict[str, int] = {}
    task_scores: dict[str, int] = {}
    strengths: list[str] = []
    improvements: list[str] = []
    resume_snippet: str = ""
    ending: Ending | None = None


class SimulationSummary(BaseModel):
    slug: str
    title: str
    description: str = ""
    category: str = ""
    task_ids: list[str] = []
    skills_tested: list[str] = []


class SessionResponse(BaseModel):
    session_id: str
    simulation_slug: str
    user_id: str
    status: str = "started"
    started_at: datetime
    progress: ProgressRecord


class SubmissionResponse(BaseModel):
    task_id: str
    result: ValidationResult
    progress: ProgressRecord
    report: FinalReport | None = None


class DecisionResponse(BaseModel):
    task_id: str
    state: DecisionState
    result: ValidationResult
    progress: ProgressRecord
    report: FinalReport | None = None


class TaskSummary(BaseModel):
    """Task as shown to the participant: no answers, scores or feedback."""
    id: str
    type: str
    name: str
    scored: bool = True
    skills_tested: list[str] = []
    instruction: str = ""
    prompt: str = ""
    options: list[dict[str, str | int]] = []
    min_words: int = 0
    max_words: int | None = None
    context: str = ""


class SimulationDetail(SimulationSummary):
    company_name: str = ""
    total_budget: int | None = None
    tasks: list[TaskSummary] = []
