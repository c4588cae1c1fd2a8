from __future__ import annotations  # Pair stored answers with their questions for review

from typing import Dict

from errors import NotFoundError
from storage import Question, Repository

from .models import AnswerReview, ReviewEntry


def build_review(repository: Repository, interview_id: int, applicant_id: int) -> AnswerReview:
    """Answers in walk order; answers to since-deleted questions show as unknown."""

    interview = repository.get_interview(interview_id)
    applicant = repository.get_applicant(applicant_id)
    if applicant.interview_id != interview.id:
        raise NotFoundError(f"Applicant {applicant_id} is not registered for interview {interview_id}")
    questions: Dict[int, Question] = {q.id: q for q in repository.list_questions(interview_id)}
    order = {question_id: index for index, question_id in enumerate(questions)}
    answers = sorted(
        repository.list_answers(applicant_id, interview_id),
        key=lambda answer: (order.get(answer.question_id, len(order)), answer.id or 0),
    )
    entries = []
    for sequence, answer in enumerate(answers, start=1):
        question = questions.get(answer.question_id)
        entries.append(
            ReviewEntry(
                sequence=sequence,
                question_id=answer.question_id,
                question=question.question if question else "(question removed)",
                difficulty=question.difficulty.value if question else None,
                answer=answer.answer,
            )
        )
    return AnswerReview(
        interview_id=interview.id,
        interview_title=interview.title,
        job_role=interview.job_role,
        applicant_id=applicant.id,
        applicant_name=applicant.full_name,
        interview_status=applicant.interview_status.value,
        entries=entries,
    )


__all__ = ["build_review"]
