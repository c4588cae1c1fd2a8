"""Typed record helpers on top of a resource store."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from errors import NetworkError, NotFoundError

from .base import ResourceStore
from .models import (
    Answer,
    Applicant,
    ApplicantStatus,
    Difficulty,
    Interview,
    InterviewWithCounts,
    Question,
)


logger = logging.getLogger(__name__)

INTERVIEW = "interview"
QUESTION = "question"
APPLICANT = "applicant"
ANSWER = "applicant_answer"

QUESTION_ORDER = [("position", "asc"), ("id", "asc")]


def _clean(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: getattr(value, "value", value) for key, value in data.items()}


def _one(rows: List[Dict[str, Any]], kind: str, record_id: int) -> Dict[str, Any]:
    if not rows:
        raise NotFoundError(f"{kind.capitalize()} {record_id} not found")
    return rows[0]


class Repository:
    """Interview, question, applicant and answer access for one store."""

    def __init__(self, store: ResourceStore) -> None:
        self.store = store

    # ------------------------------------------------------------------
    # Interviews
    # ------------------------------------------------------------------
    def create_interview(self, **fields: Any) -> Interview:
        return Interview.model_validate(self.store.insert(INTERVIEW, _clean(fields)))

    def list_interviews(self) -> List[Interview]:
        return [Interview.model_validate(row) for row in self.store.select(INTERVIEW, order=[("id", "asc")])]

    def get_interview(self, interview_id: int) -> Interview:
        rows = self.store.select(INTERVIEW, {"id": interview_id})
        return Interview.model_validate(_one(rows, "interview", interview_id))

    def update_interview(self, interview_id: int, **changes: Any) -> Interview:
        rows = self.store.update(INTERVIEW, {"id": interview_id}, _clean(changes))
        return Interview.model_validate(_one(rows, "interview", interview_id))

    def delete_interview(self, interview_id: int) -> None:
        self.store.delete(INTERVIEW, {"id": interview_id})

    def list_interviews_with_counts(self) -> List[InterviewWithCounts]:
        return [
            InterviewWithCounts(
                **interview.model_dump(),
                question_count=self.question_count(interview.id),
                applicant_count=self.applicant_count(interview.id),
            )
            for interview in self.list_interviews()
        ]

    # ------------------------------------------------------------------
    # Questions
    # ------------------------------------------------------------------
    def create_question(self, interview_id: int, question: str, difficulty: Difficulty | str) -> Question:
        existing = self.list_questions(interview_id)
        position = max((item.position for item in existing), default=-1) + 1
        row = self.store.insert(
            QUESTION,
            _clean(
                {
                    "interview_id": interview_id,
                    "question": question,
                    "difficulty": Difficulty(difficulty),
                    "position": position,
                }
            ),
        )
        return Question.model_validate(row)

    def list_questions(self, interview_id: int) -> List[Question]:
        rows = self.store.select(QUESTION, {"interview_id": interview_id}, order=QUESTION_ORDER)
        questions = [Question.model_validate(row) for row in rows]
        # stores that ignore ordering still yield the walk order
        return sorted(questions, key=lambda item: (item.position, item.id))

    def get_question(self, question_id: int) -> Question:
        rows = self.store.select(QUESTION, {"id": question_id})
        return Question.model_validate(_one(rows, "question", question_id))

    def update_question(self, question_id: int, **changes: Any) -> Question:
        if "difficulty" in changes:
            changes["difficulty"] = Difficulty(changes["difficulty"])
        rows = self.store.update(QUESTION, {"id": question_id}, _clean(changes))
        return Question.model_validate(_one(rows, "question", question_id))

    def delete_question(self, question_id: int) -> None:
        self.store.delete(QUESTION, {"id": question_id})

    def question_count(self, interview_id: int) -> int:
        return self._count(QUESTION, interview_id)

    # ------------------------------------------------------------------
    # Applicants
    # ------------------------------------------------------------------
    def create_applicant(self, **fields: Any) -> Applicant:
        fields.setdefault("interview_status", ApplicantStatus.NOT_STARTED)
        return Applicant.model_validate(self.store.insert(APPLICANT, _clean(fields)))

    def list_applicants(self, interview_id: int) -> List[Applicant]:
        rows = self.store.select(APPLICANT, {"interview_id": interview_id}, order=[("id", "asc")])
        return [Applicant.model_validate(row) for row in rows]

    def get_applicant(self, applicant_id: int) -> Applicant:
        rows = self.store.select(APPLICANT, {"id": applicant_id})
        return Applicant.model_validate(_one(rows, "applicant", applicant_id))

    def update_applicant(self, applicant_id: int, **changes: Any) -> Applicant:
        status = changes.get("interview_status")
        if status is not None and ApplicantStatus(status) is ApplicantStatus.NOT_STARTED:
            current = self.get_applicant(applicant_id)
            if current.interview_status is ApplicantStatus.COMPLETED:
                raise ValueError("A completed interview cannot be reset to Not Started")
        rows = self.store.update(APPLICANT, {"id": applicant_id}, _clean(changes))
        return Applicant.model_validate(_one(rows, "applicant", applicant_id))

    def set_applicant_status(self, applicant_id: int, status: ApplicantStatus) -> Applicant:
        return self.update_applicant(applicant_id, interview_status=status)

    def applicant_count(self, interview_id: int) -> int:
        return self._count(APPLICANT, interview_id)

    # ------------------------------------------------------------------
    # Answers
    # ------------------------------------------------------------------
    def submit_answer(self, interview_id: int, question_id: int, applicant_id: int, answer: str) -> Answer:
        row = self.store.insert(
            ANSWER,
            {
                "interview_id": interview_id,
                "question_id": question_id,
                "applicant_id": applicant_id,
                "answer": answer,
            },
        )
        return Answer.model_validate(row)

    def list_answers(self, applicant_id: int, interview_id: Optional[int] = None) -> List[Answer]:
        filters: Dict[str, Any] = {"applicant_id": applicant_id}
        if interview_id is not None:
            filters["interview_id"] = interview_id
        rows = self.store.select(ANSWER, filters, order=[("id", "asc")])
        return [Answer.model_validate(row) for row in rows]

    def _count(self, table: str, interview_id: int) -> int:
        # Counts are informational only; a failed read shows as zero.
        try:
            return self.store.count(table, {"interview_id": interview_id})
        except NetworkError as exc:
            logger.warning("Error fetching %s count for interview %s: %s", table, interview_id, exc)
            return 0


__all__ = ["Repository", "QUESTION_ORDER"]
