"""In-process registry of live applicant interview sessions."""
from __future__ import annotations

import threading
from typing import Dict, Optional

from errors import NotFoundError
from take_interview import InterviewSession


class SessionRegistry:
    """Holds sessions by id, at most one per applicant.

    Closing the tab abandons the entry; it is dropped when the applicant opens
    a new session or completes one.
    """

    def __init__(self) -> None:
        self._sessions: Dict[str, InterviewSession] = {}
        self._lock = threading.Lock()

    def add(self, session: InterviewSession) -> InterviewSession:
        applicant_id = session.applicant.id
        with self._lock:
            stale = [sid for sid, live in self._sessions.items() if live.applicant.id == applicant_id]
            for sid in stale:
                del self._sessions[sid]
            self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> Optional[InterviewSession]:
        with self._lock:
            return self._sessions.get(session_id)

    def require(self, session_id: str) -> InterviewSession:
        session = self.get(session_id)
        if session is None:
            raise NotFoundError("session not found")
        return session

    def discard(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


__all__ = ["SessionRegistry"]
