"""Pydantic schemas for the applicant session and recruiter APIs."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from storage import ApplicantStatus, Difficulty, InterviewStatus, Question
from suggestions import Suggestion
from take_interview import CaptureState


class StartReq(BaseModel):
    interview_id: int
    applicant_id: int


class TranscriptReq(BaseModel):
    text: str


class CaptureReq(BaseModel):
    microphone_available: bool = True


class WelcomePayload(BaseModel):
    interview_title: str
    job_role: str
    applicant_name: str
    email_address: str
    phone_number: Optional[str] = None
    question_count: int


class SessionResp(BaseModel):
    session_id: str
    interview_id: int
    applicant_id: int
    index: int
    total: int
    is_last: bool
    complete: bool
    question: Optional[Question] = None
    capture_state: CaptureState
    transcript: str = ""
    language: str
    welcome: Optional[WelcomePayload] = None


class InterviewIn(BaseModel):
    title: str
    job_role: str = ""
    description: Optional[str] = None
    status: InterviewStatus = InterviewStatus.DRAFT


class InterviewPatch(BaseModel):
    title: Optional[str] = None
    job_role: Optional[str] = None
    description: Optional[str] = None
    status: Optional[InterviewStatus] = None


class QuestionIn(BaseModel):
    question: str = Field(min_length=1)
    difficulty: Difficulty


class QuestionPatch(BaseModel):
    question: Optional[str] = Field(default=None, min_length=1)
    difficulty: Optional[Difficulty] = None


class ApplicantIn(BaseModel):
    interview_id: int
    title: str
    firstname: str
    surname: str
    phone_number: Optional[str] = None
    email_address: str


class ApplicantPatch(BaseModel):
    title: Optional[str] = None
    firstname: Optional[str] = None
    surname: Optional[str] = None
    phone_number: Optional[str] = None
    email_address: Optional[str] = None
    interview_status: Optional[ApplicantStatus] = None


class PromoteReq(BaseModel):
    question: str


class SuggestionsResp(BaseModel):
    interview_id: int
    job_role: str
    questions: List[Suggestion] = Field(default_factory=list)
