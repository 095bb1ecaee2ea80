"""Progress bookkeeping. Records are treated as values: every helper returns
a new ``ProgressRecord`` instead of mutating its argument."""

from datetime import datetime, timezone
from typing import Sequence

from models.responses import FinalReport
from models.schemas.progress import ProgressRecord
from services.scoring.extractors import round_half_up


def new_progress() -> ProgressRecord:
    return ProgressRecord()


def _percentage(completed: Sequence[str], required_ids: Sequence[str]) -> int:
    if not required_ids:
        return 0
    done = sum(1 for t in required_ids if t in completed)
    return round_half_up(done / len(required_ids) * 100)


def mark_task_complete(
    progress: ProgressRecord,
    task_id: str,
    required_ids: Sequence[str],
) -> ProgressRecord:
    """Add ``task_id`` to the completed set and recompute the percentage.

    Tasks outside ``required_ids`` (intro screens) are recorded but never
    count toward the percentage.
    """
    if progress.is_finalized:
        return progress
    completed = list(progress.completed_task_ids)
    if task_id not in completed:
        completed.append(task_id)
    return progress.model_copy(
        update={
            "completed_task_ids": completed,
            "percentage": _percentage(completed, required_ids),
        }
    )


def is_complete(progress: ProgressRecord, required_ids: Sequence[str]) -> bool:
    return bool(required_ids) and all(t in progress.completed_task_ids for t in required_ids)


def finalize(progress: ProgressRecord, report: FinalReport) -> ProgressRecord:
    """Record the final score once. A finalised record is returned unchanged."""
    if progress.is_finalized:
        return progress
    return progress.model_copy(
        update={
            "percentage": 100,
            "final_score": report.final_score,
            "skill_breakdown": dict(report.skill_breakdown),
            "completed_at": datetime.now(timezone.utc),
        }
    )
