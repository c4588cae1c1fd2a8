"""Applicant-facing interview session: capture controls plus answer submission."""
from __future__ import annotations

import threading
import uuid
from typing import Any, Callable, Dict, List, Optional

from errors import NotFoundError, SessionClosedError
from observability import log_event, span
from storage import Applicant, ApplicantStatus, Interview, Repository

from .capture import AnswerCapture, CaptureState, RelayedSpeechEngine, SpeechEngine
from .status_gate import StatusGate
from .walker import NextQuestion, Outcome, SessionComplete, SessionWalker


EngineFactory = Callable[[], SpeechEngine]


class InterviewSession:
    """One applicant taking one interview.

    Submission is serialized: the capture controller for the next question is
    only created after the current answer has been written.
    """

    def __init__(
        self,
        session_id: str,
        interview: Interview,
        applicant: Applicant,
        walker: SessionWalker,
        engine: SpeechEngine,
        *,
        language: str = "en-US",
    ) -> None:
        self.session_id = session_id
        self.interview = interview
        self.applicant = applicant
        self.walker = walker
        self.engine = engine
        self.language = language
        self.events: List[Dict[str, Any]] = []
        self._capture = AnswerCapture(walker.current_question().id, engine, language=language)
        self._lock = threading.Lock()

    @property
    def capture_state(self) -> CaptureState:
        return self._capture.state

    @property
    def transcript(self) -> str:
        return self._capture.transcript

    @property
    def complete(self) -> bool:
        return self.walker.complete

    def start_capture(self) -> CaptureState:
        return self._capture_op(self._capture.start)

    def pause_capture(self) -> CaptureState:
        return self._capture_op(self._capture.pause)

    def resume_capture(self) -> CaptureState:
        return self._capture_op(self._capture.resume)

    def receive_transcript(self, fragment: str) -> str:
        """Append recognized speech relayed from the applicant's device."""

        self._ensure_open()
        if not isinstance(self.engine, RelayedSpeechEngine):
            raise TypeError("Session engine does not accept relayed transcripts")
        self.engine.push(fragment)
        return self._capture.transcript

    def submit_current_answer(self) -> Outcome:
        """Stop capture, persist the transcript and expose the next question."""

        with self._lock:
            self._ensure_open()
            question = self.walker.current_question()
            answer = self._capture.finalize()
            try:
                with span(self.events, "submit_answer"):
                    outcome = self.walker.advance(answer)
            except Exception as exc:
                self._capture.reopen()
                log_event(
                    "answer_failed",
                    self.session_id,
                    applicant_id=self.applicant.id,
                    question_id=question.id,
                    error=getattr(exc, "message", str(exc)),
                )
                raise
            log_event(
                "answer_submitted",
                self.session_id,
                applicant_id=self.applicant.id,
                question_id=question.id,
                index=self.walker.index,
                ms=self.events[-1]["ms"],
            )
            return self._after_step(outcome)

    def skip_current_question(self) -> Outcome:
        """Leave the current question unanswered without writing anything."""

        with self._lock:
            self._ensure_open()
            question = self.walker.current_question()
            if self._capture.state is CaptureState.RECORDING:
                self._capture.pause()
            outcome = self.walker.skip()
            log_event("answer_skipped", self.session_id, applicant_id=self.applicant.id, question_id=question.id)
            return self._after_step(outcome)

    def snapshot(self) -> Dict[str, Any]:
        question = None if self.complete else self.walker.current_question()
        return {
            "session_id": self.session_id,
            "interview_id": self.interview.id,
            "applicant_id": self.applicant.id,
            "index": self.walker.index,
            "total": self.walker.total,
            "is_last": self.walker.is_last(),
            "complete": self.complete,
            "question": question,
            "capture_state": self._capture.state,
            "transcript": self._capture.transcript,
            "language": self.language,
        }

    def _after_step(self, outcome: Outcome) -> Outcome:
        if isinstance(outcome, NextQuestion):
            self._capture = AnswerCapture(outcome.question_id, self.engine, language=self.language)
        elif isinstance(outcome, SessionComplete):
            log_event("session_completed", self.session_id, applicant_id=self.applicant.id, outcome=outcome.answered)
        return outcome

    def _capture_op(self, op: Callable[[], CaptureState]) -> CaptureState:
        with self._lock:
            self._ensure_open()
            state = op()
        log_event("capture_transition", self.session_id, applicant_id=self.applicant.id, state=state.value)
        return state

    def _ensure_open(self) -> None:
        if self.walker.complete:
            raise SessionClosedError("Interview session already completed")


def open_session(
    repository: Repository,
    gate: StatusGate,
    interview_id: int,
    applicant_id: int,
    *,
    engine_factory: Optional[EngineFactory] = None,
    language: str = "en-US",
) -> InterviewSession:
    """Load the interview, applicant and ordered questions and start at index 0."""

    interview = repository.get_interview(interview_id)
    applicant = repository.get_applicant(applicant_id)
    if applicant.interview_id != interview.id:
        raise NotFoundError(f"Applicant {applicant_id} is not registered for interview {interview_id}")
    if applicant.interview_status is ApplicantStatus.COMPLETED or gate.is_completed(applicant_id):
        raise SessionClosedError("This interview has already been completed")
    questions = repository.list_questions(interview_id)
    answered = {answer.question_id for answer in repository.list_answers(applicant.id, interview.id)}
    walker = SessionWalker(interview.id, applicant.id, questions, repository, gate, answered=answered)
    walker.current_question()
    engine = (engine_factory or RelayedSpeechEngine)()
    session = InterviewSession(uuid.uuid4().hex, interview, applicant, walker, engine, language=language)
    log_event(
        "session_started",
        session.session_id,
        applicant_id=applicant.id,
        index=walker.index,
        outcome=walker.total,
    )
    return session


__all__ = ["EngineFactory", "InterviewSession", "open_session"]
