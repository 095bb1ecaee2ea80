"""In-process persistence for sessions, submissions and progress.

Keyed by session id; each session belongs to one (user, simulation) pair.
A user has at most one in-progress session per simulation.
"""

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Mapping

from models.responses import FinalReport, ValidationResult
from models.schemas.decision import DecisionState
from models.schemas.progress import ProgressRecord
from models.schemas.session import SessionRecord, StoredSubmission

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SessionStore:
    def __init__(self):
        self._sessions: dict[str, SessionRecord] = {}
        self._lock = threading.Lock()

    def start_session(self, user_id: str, simulation_slug: str) -> SessionRecord:
        """Return the user's in-progress session for the simulation, or a new one."""
        with self._lock:
            for session in self._sessions.values():
                if (
                    session.user_id == user_id
                    and session.simulation_slug == simulation_slug
                    and session.status == "in_progress"
                ):
                    return session

            session = SessionRecord(
                id=str(uuid.uuid4()),
                user_id=user_id,
                simulation_slug=simulation_slug,
                started_at=_now(),
            )
            self._sessions[session.id] = session
            logger.info("Started session %s for %s on %s", session.id, user_id, simulation_slug)
            return session

    def get_session(self, session_id: str, user_id: str | None = None) -> SessionRecord | None:
        session = self._sessions.get(session_id)
        if session is None or (user_id is not None and session.user_id != user_id):
            return None
        return session

    def save_submission(
        self,
        session_id: str,
        task_id: str,
        task_data: Mapping[str, Any],
        result: ValidationResult,
        decision_state: DecisionState | None = None,
    ) -> StoredSubmission:
        """Insert or replace the submission for ``task_id``."""
        submission = StoredSubmission(
            task_id=task_id,
            task_data=dict(task_data),
            result=result,
            decision_state=decision_state,
            submitted_at=_now(),
        )
        with self._lock:
            session = self._require(session_id)
            session.submissions[task_id] = submission
        return submission

    def results(self, session_id: str) -> dict[str, ValidationResult]:
        session = self._require(session_id)
        return {t: s.result for t, s in session.submissions.items()}

    def decision_states(self, session_id: str) -> dict[str, DecisionState]:
        session = self._require(session_id)
        return {
            t: s.decision_state
            for t, s in session.submissions.items()
            if s.decision_state is not None
        }

    def update_progress(self, session_id: str, progress: ProgressRecord) -> None:
        with self._lock:
            self._require(session_id).progress = progress

    def complete(self, session_id: str, report: FinalReport) -> SessionRecord:
        """Mark the session completed. The first report recorded is kept."""
        with self._lock:
            session = self._require(session_id)
            if session.status != "completed":
                session.status = "completed"
                session.completed_at = _now()
                session.report = report
                logger.info("Completed session %s with score %d", session_id, report.final_score)
            return session

    def clear(self) -> None:
        """Drop all sessions. Useful for testing."""
        with self._lock:
            self._sessions.clear()

    def _require(self, session_id: str) -> SessionRecord:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Unknown session: {session_id}")
        return session


_store = SessionStore()


def get_store() -> SessionStore:
    return _store
