"""Per-user, per-simulation progress bookkeeping."""

from datetime import datetime

from pydantic import BaseModel


class ProgressRecord(BaseModel):
    """Which tasks are complete and, once finalised, the aggregate score.

    ``completed_task_ids`` has set semantics but keeps completion order.
    """
    completed_task_ids: list[str] = []
    percentage: int = 0  # 0-100
    final_score: int | None = None
    skill_breakdown: dict[str, int] | None = None
    completed_at: datetime | None = None

    @property
    def is_finalized(self) -> bool:
        return self.completed_at is not None
