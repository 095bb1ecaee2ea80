"""Stored session state: one attempt of one user at one simulation."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from models.responses import FinalReport, ValidationResult
from models.schemas.decision import DecisionState
from models.schemas.progress import ProgressRecord


class StoredSubmission(BaseModel):
    """Latest submission for a task. Re-submitting replaces it."""
    task_id: str
    task_data: dict[str, Any] = {}
    result: ValidationResult
    decision_state: DecisionState | None = None
    submitted_at: datetime


class SessionRecord(BaseModel):
    id: str
    user_id: str
    simulation_slug: str
    status: Literal["in_progress", "completed"] = "in_progress"
    started_at: datetime
    completed_at: datetime | None = None
    progress: ProgressRecord = Field(default_factory=ProgressRecord)
    submissions: dict[str, StoredSubmission] = {}
    report: FinalReport | None = None
