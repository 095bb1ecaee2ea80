from typing import Any

from pydantic import BaseModel, Field


class TaskSubmissionRequest(BaseModel):
    task_data: dict[str, Any] = Field(default_factory=dict, description="Raw field values collected by the UI")


class DecisionRequest(BaseModel):
    option_id: str = Field(..., max_length=16, description="Chosen option id for this loop")
