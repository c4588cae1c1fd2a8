"""FastAPI routes for recruiters: interviews, questions, applicants, answers, suggestions."""
from __future__ import annotations

import re
from typing import List

from fastapi import APIRouter, Depends, Response

from api.deps import get_repository, get_suggestion_service
from api.schemas import (
    ApplicantIn,
    ApplicantPatch,
    InterviewIn,
    InterviewPatch,
    PromoteReq,
    QuestionIn,
    QuestionPatch,
    SuggestionsResp,
)
from session_reports import AnswerReview, build_review, render_review_pdf
from storage import Applicant, Interview, InterviewWithCounts, Question, Repository
from suggestions import SuggestionService


router = APIRouter(prefix="/api")


def _changes(patch) -> dict:
    return patch.model_dump(exclude_unset=True, exclude_none=True)


# ----------------------------------------------------------------------
# Interviews
# ----------------------------------------------------------------------
@router.get("/interviews", response_model=List[InterviewWithCounts])
def list_interviews(repository: Repository = Depends(get_repository)) -> List[InterviewWithCounts]:
    return repository.list_interviews_with_counts()


@router.post("/interviews", response_model=Interview, status_code=201)
def create_interview(payload: InterviewIn, repository: Repository = Depends(get_repository)) -> Interview:
    return repository.create_interview(**payload.model_dump())


@router.get("/interviews/{interview_id}", response_model=Interview)
def get_interview(interview_id: int, repository: Repository = Depends(get_repository)) -> Interview:
    return repository.get_interview(interview_id)


@router.patch("/interviews/{interview_id}", response_model=Interview)
def update_interview(
    interview_id: int, payload: InterviewPatch, repository: Repository = Depends(get_repository)
) -> Interview:
    changes = _changes(payload)
    if not changes:
        return repository.get_interview(interview_id)
    return repository.update_interview(interview_id, **changes)


@router.delete("/interviews/{interview_id}", status_code=204)
def delete_interview(interview_id: int, repository: Repository = Depends(get_repository)) -> Response:
    repository.get_interview(interview_id)
    repository.delete_interview(interview_id)
    return Response(status_code=204)


# ----------------------------------------------------------------------
# Questions
# ----------------------------------------------------------------------
@router.get("/interviews/{interview_id}/questions", response_model=List[Question])
def list_questions(interview_id: int, repository: Repository = Depends(get_repository)) -> List[Question]:
    return repository.list_questions(interview_id)


@router.post("/interviews/{interview_id}/questions", response_model=Question, status_code=201)
def create_question(
    interview_id: int, payload: QuestionIn, repository: Repository = Depends(get_repository)
) -> Question:
    repository.get_interview(interview_id)
    return repository.create_question(interview_id, payload.question, payload.difficulty)


@router.patch("/questions/{question_id}", response_model=Question)
def update_question(
    question_id: int, payload: QuestionPatch, repository: Repository = Depends(get_repository)
) -> Question:
    changes = _changes(payload)
    if not changes:
        return repository.get_question(question_id)
    return repository.update_question(question_id, **changes)


@router.delete("/questions/{question_id}", status_code=204)
def delete_question(question_id: int, repository: Repository = Depends(get_repository)) -> Response:
    repository.get_question(question_id)
    repository.delete_question(question_id)
    return Response(status_code=204)


# ----------------------------------------------------------------------
# Applicants
# ----------------------------------------------------------------------
@router.get("/interviews/{interview_id}/applicants", response_model=List[Applicant])
def list_applicants(interview_id: int, repository: Repository = Depends(get_repository)) -> List[Applicant]:
    return repository.list_applicants(interview_id)


@router.post("/applicants", response_model=Applicant, status_code=201)
def create_applicant(payload: ApplicantIn, repository: Repository = Depends(get_repository)) -> Applicant:
    repository.get_interview(payload.interview_id)
    return repository.create_applicant(**payload.model_dump())


@router.get("/applicants/{applicant_id}", response_model=Applicant)
def get_applicant(applicant_id: int, repository: Repository = Depends(get_repository)) -> Applicant:
    return repository.get_applicant(applicant_id)


@router.patch("/applicants/{applicant_id}", response_model=Applicant)
def update_applicant(
    applicant_id: int, payload: ApplicantPatch, repository: Repository = Depends(get_repository)
) -> Applicant:
    changes = _changes(payload)
    if not changes:
        return repository.get_applicant(applicant_id)
    return repository.update_applicant(applicant_id, **changes)


@router.get("/applicants/{applicant_id}/answers", response_model=AnswerReview)
def applicant_answers(applicant_id: int, repository: Repository = Depends(get_repository)) -> AnswerReview:
    applicant = repository.get_applicant(applicant_id)
    return build_review(repository, applicant.interview_id, applicant.id)


@router.get("/applicants/{applicant_id}/answers.pdf")
def applicant_answers_pdf(applicant_id: int, repository: Repository = Depends(get_repository)) -> Response:
    applicant = repository.get_applicant(applicant_id)
    review = build_review(repository, applicant.interview_id, applicant.id)
    filename = f"answers_{_safe_slug(review.applicant_name)}_{applicant.id}.pdf"
    return Response(
        content=render_review_pdf(review),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ----------------------------------------------------------------------
# Suggestions
# ----------------------------------------------------------------------
@router.post("/interviews/{interview_id}/suggestions", response_model=SuggestionsResp)
def suggest_questions(
    interview_id: int,
    repository: Repository = Depends(get_repository),
    service: SuggestionService = Depends(get_suggestion_service),
) -> SuggestionsResp:
    interview = repository.get_interview(interview_id)
    offered = service.suggest_for_interview(interview_id)
    return SuggestionsResp(interview_id=interview_id, job_role=interview.job_role, questions=offered)


@router.get("/interviews/{interview_id}/suggestions", response_model=SuggestionsResp)
def offered_questions(
    interview_id: int,
    repository: Repository = Depends(get_repository),
    service: SuggestionService = Depends(get_suggestion_service),
) -> SuggestionsResp:
    interview = repository.get_interview(interview_id)
    return SuggestionsResp(
        interview_id=interview_id, job_role=interview.job_role, questions=service.offered(interview_id)
    )


@router.post("/interviews/{interview_id}/suggestions/promote", response_model=Question, status_code=201)
def promote_suggestion(
    interview_id: int,
    payload: PromoteReq,
    service: SuggestionService = Depends(get_suggestion_service),
) -> Question:
    return service.promote(interview_id, payload.question)


def _safe_slug(value: str) -> str:  # Sanitize value for filenames
    slug = re.sub(r"[^A-Za-z0-9]+", "_", value).strip("_")
    return slug or "applicant"
