"""Ordered walk through an interview's questions for one applicant."""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Set, Union

from errors import NetworkError, NoQuestionsError, PersistenceError, SessionClosedError
from storage import Question, Repository

from .status_gate import StatusGate


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NextQuestion:
    index: int
    question_id: int


@dataclass(frozen=True)
class SessionComplete:
    answered: int


Outcome = Union[NextQuestion, SessionComplete]


class SessionWalker:
    """Advances through a fixed question list, persisting one answer per step.

    The question list is copied and ordered on construction so the walk order
    cannot shift mid-session. The index only moves after the answer write has
    succeeded; on the last question the status gate must also succeed.
    """

    def __init__(
        self,
        interview_id: int,
        applicant_id: int,
        questions: Sequence[Question],
        repository: Repository,
        gate: StatusGate,
        *,
        answered: Iterable[int] = (),
    ) -> None:
        foreign = [q.id for q in questions if q.interview_id != interview_id]
        if foreign:
            raise ValueError(f"Questions {foreign} do not belong to interview {interview_id}")
        self.interview_id = interview_id
        self.applicant_id = applicant_id
        self._questions: List[Question] = sorted(questions, key=lambda q: (q.position, q.id))
        self._repository = repository
        self._gate = gate
        self._complete = False
        stored = set(answered)
        # answers stored by an earlier, abandoned session are never written again
        self._persisted: Set[int] = {q.id for q in self._questions if q.id in stored}
        self._index = next(
            (i for i, q in enumerate(self._questions) if q.id not in self._persisted),
            max(len(self._questions) - 1, 0),
        )
        self._lock = threading.Lock()

    @property
    def index(self) -> int:
        return self._index

    @property
    def total(self) -> int:
        return len(self._questions)

    @property
    def complete(self) -> bool:
        return self._complete

    @property
    def questions(self) -> List[Question]:
        return list(self._questions)

    def is_last(self) -> bool:
        return self._index == len(self._questions) - 1

    def current_question(self) -> Question:
        if not self._questions:
            raise NoQuestionsError("This interview has no questions")
        return self._questions[self._index]

    def advance(self, captured_answer: str) -> Outcome:
        """Persist the answer for the current question, then move on."""

        with self._lock:
            question = self._checked_current()
            if question.id not in self._persisted:
                try:
                    self._repository.submit_answer(
                        self.interview_id, question.id, self.applicant_id, captured_answer
                    )
                except NetworkError as exc:
                    logger.error("Answer write failed question=%s applicant=%s", question.id, self.applicant_id)
                    raise PersistenceError("Error saving answer, please try again.", detail=exc.message) from exc
                self._persisted.add(question.id)
            return self._step()

    def skip(self) -> Outcome:
        """Move on without writing an answer for the current question."""

        with self._lock:
            self._checked_current()
            return self._step()

    def _checked_current(self) -> Question:
        if self._complete:
            raise SessionClosedError("Interview session already completed")
        return self.current_question()

    def _step(self) -> Outcome:
        if self.is_last():
            self._gate.complete(self.applicant_id)
            self._complete = True
            return SessionComplete(answered=len(self._persisted))
        self._index += 1
        return NextQuestion(index=self._index, question_id=self._questions[self._index].id)


__all__ = ["NextQuestion", "Outcome", "SessionComplete", "SessionWalker"]
