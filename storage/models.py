"""Records exchanged with the resource store."""
from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class InterviewStatus(str, Enum):
    DRAFT = "Draft"
    PUBLISHED = "Published"


class Difficulty(str, Enum):
    EASY = "Easy"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class ApplicantStatus(str, Enum):
    NOT_STARTED = "Not Started"
    COMPLETED = "Completed"


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore", use_enum_values=False)


class Interview(_Record):
    id: int
    title: str
    job_role: str = ""
    status: InterviewStatus = InterviewStatus.DRAFT
    description: Optional[str] = None


class Question(_Record):
    id: int
    interview_id: int
    question: str
    difficulty: Difficulty
    position: int = 0


class Applicant(_Record):
    id: int
    interview_id: int
    title: str
    firstname: str
    surname: str
    phone_number: Optional[str] = None
    email_address: str
    interview_status: ApplicantStatus = ApplicantStatus.NOT_STARTED

    @property
    def full_name(self) -> str:
        return f"{self.firstname} {self.surname}".strip()


class Answer(_Record):
    id: Optional[int] = None
    interview_id: int
    question_id: int
    applicant_id: int
    answer: str = Field(default="")


class InterviewWithCounts(Interview):
    question_count: int = 0
    applicant_count: int = 0


__all__ = [
    "Answer",
    "Applicant",
    "ApplicantStatus",
    "Difficulty",
    "Interview",
    "InterviewStatus",
    "InterviewWithCounts",
    "Question",
]
