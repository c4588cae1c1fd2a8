"""Recruiter-facing question suggestions: request, hold, promote."""
from __future__ import annotations

import logging
import threading
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Callable, Dict, List, Optional

from errors import NetworkError, NotFoundError, ReadySetHireError
from observability import log_event
from storage import Question, Repository

from .dedup import RequestDeduplicator
from .schema import Suggestion


logger = logging.getLogger(__name__)


class SuggestionService:
    """Owns the de-duplicator and the per-interview set of offered suggestions.

    Offered suggestions live in memory only. Promoting one writes a real
    question and drops that text from the offered set.
    """

    def __init__(
        self,
        generate: Callable[[str], List[Suggestion]],
        repository: Repository,
        *,
        max_workers: int = 4,
        timeout_s: Optional[float] = None,
    ) -> None:
        self._requests: RequestDeduplicator[List[Suggestion]] = RequestDeduplicator(generate, max_workers=max_workers)
        self._repository = repository
        self._timeout_s = timeout_s
        self._offered: Dict[int, List[Suggestion]] = {}
        self._lock = threading.Lock()

    @property
    def requests(self) -> RequestDeduplicator[List[Suggestion]]:
        return self._requests

    def request_suggestions(self, job_role: str) -> List[Suggestion]:
        role = (job_role or "").strip()
        if not role:
            raise ValueError("Please add a job role to the interview first")
        future = self._requests.get_or_start(role)
        try:
            suggestions = future.result(timeout=self._timeout_s)
        except FutureTimeout as exc:
            log_event("suggestions_failed", "-", job_role=role, error="timeout")
            raise NetworkError("Timed out waiting for generated questions") from exc
        except ReadySetHireError as exc:
            log_event("suggestions_failed", "-", job_role=role, error=exc.code)
            raise
        log_event("suggestions_requested", "-", job_role=role, outcome=len(suggestions))
        return list(suggestions)

    def suggest_for_interview(self, interview_id: int) -> List[Suggestion]:
        interview = self._repository.get_interview(interview_id)
        suggestions = self.request_suggestions(interview.job_role)
        existing = {question.question for question in self._repository.list_questions(interview_id)}
        offered = [item for item in suggestions if item.question not in existing]
        with self._lock:
            self._offered[interview_id] = offered
        return list(offered)

    def offered(self, interview_id: int) -> List[Suggestion]:
        with self._lock:
            return list(self._offered.get(interview_id, []))

    def promote(self, interview_id: int, question_text: str) -> Question:
        with self._lock:
            offered = self._offered.get(interview_id, [])
            match = next((item for item in offered if item.question == question_text), None)
            if match is None:
                raise NotFoundError("Suggestion is not on offer for this interview")
            self._offered[interview_id] = [item for item in offered if item is not match]
        try:
            question = self._repository.create_question(interview_id, match.question, match.difficulty)
        except Exception:
            with self._lock:
                self._offered.setdefault(interview_id, []).append(match)
            raise
        log_event("suggestion_promoted", "-", question_id=question.id, outcome=interview_id)
        return question

    def shutdown(self) -> None:
        self._requests.shutdown()


__all__ = ["SuggestionService"]
