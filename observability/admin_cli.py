"""Lightweight CLI helpers for inspecting interviews and submitted answers."""
from __future__ import annotations

import argparse
from typing import Optional

from storage import Repository, SqliteStore


def list_interviews(repository: Repository) -> None:
    for item in repository.list_interviews_with_counts():
        print(
            f"[{item.id}] {item.title} ({item.status.value}) role={item.job_role or '-'} "
            f"questions={item.question_count} applicants={item.applicant_count}"
        )


def show_answers(repository: Repository, applicant_id: int) -> None:
    applicant = repository.get_applicant(applicant_id)
    questions = {q.id: q.question for q in repository.list_questions(applicant.interview_id)}
    print(f"{applicant.full_name} <{applicant.email_address}> status={applicant.interview_status.value}")
    for answer in repository.list_answers(applicant_id, applicant.interview_id):
        text = answer.answer or "(skipped)"
        print(f"  Q{answer.question_id}: {questions.get(answer.question_id, '?')}\n    -> {text}")


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--db", help="SQLite database path (defaults to settings.DB_PATH)")
    parser.add_argument("--interviews", action="store_true", help="List interviews with counts")
    parser.add_argument("--answers", type=int, metavar="APPLICANT_ID", help="Show an applicant's answers")
    args = parser.parse_args(argv)

    repository = Repository(SqliteStore(args.db))
    if args.interviews:
        list_interviews(repository)
    if args.answers:
        show_answers(repository, args.answers)


if __name__ == "__main__":
    main()
