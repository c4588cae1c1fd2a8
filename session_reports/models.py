from __future__ import annotations  # Answer review models

from typing import List, Optional

from pydantic import BaseModel, Field

SKIPPED_TEXT = "No answer provided, question skipped."


class ReviewEntry(BaseModel):  # One question with the applicant's answer
    sequence: int
    question_id: int
    question: str
    difficulty: Optional[str] = None
    answer: str = ""

    @property
    def skipped(self) -> bool:
        return not self.answer.strip()

    @property
    def display_answer(self) -> str:
        return SKIPPED_TEXT if self.skipped else self.answer


class AnswerReview(BaseModel):  # All submitted answers for one applicant
    interview_id: int
    interview_title: str
    job_role: str
    applicant_id: int
    applicant_name: str
    interview_status: str
    entries: List[ReviewEntry] = Field(default_factory=list)


__all__ = ["AnswerReview", "ReviewEntry", "SKIPPED_TEXT"]
