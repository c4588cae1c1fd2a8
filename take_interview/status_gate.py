"""One-way completion flag for an applicant's interview."""
from __future__ import annotations

import threading
from typing import Set

from errors import NetworkError, PersistenceError
from observability import log_event
from storage import ApplicantStatus, Repository


class StatusGate:
    """Flips an applicant to Completed at most once.

    A second call for the same applicant is a no-op. A failed write leaves the
    gate open so the caller can retry.
    """

    def __init__(self, repository: Repository) -> None:
        self._repository = repository
        self._completed: Set[int] = set()
        self._lock = threading.Lock()

    def is_completed(self, applicant_id: int) -> bool:
        with self._lock:
            return applicant_id in self._completed

    def complete(self, applicant_id: int) -> bool:
        """Return True when this call performed the transition."""

        with self._lock:
            if applicant_id in self._completed:
                return False
            try:
                self._repository.set_applicant_status(applicant_id, ApplicantStatus.COMPLETED)
            except NetworkError as exc:
                raise PersistenceError("Error saving interview status, please try again.", detail=exc.message) from exc
            self._completed.add(applicant_id)
        log_event("status_completed", "-", applicant_id=applicant_id)
        return True


__all__ = ["StatusGate"]
