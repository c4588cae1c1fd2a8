"""Applicant session facade: capture, submit, skip and completion."""
from __future__ import annotations

import pytest

from errors import NoQuestionsError, NotFoundError, PersistenceError, SessionClosedError
from session_reports import SKIPPED_TEXT, build_review
from storage import ApplicantStatus
from take_interview import CaptureState, NextQuestion, SessionComplete, StatusGate, open_session


def _open(repository, seeded, gate=None):
    return open_session(
        repository,
        gate or StatusGate(repository),
        seeded["interview"].id,
        seeded["applicant"].id,
    )


def test_two_question_walk_with_empty_second_answer(repository, seeded):
    session = _open(repository, seeded)
    first, second = seeded["questions"]
    assert session.snapshot()["question"].id == first.id
    assert session.snapshot()["total"] == 2

    session.start_capture()
    session.receive_transcript("I am a developer")
    outcome = session.submit_current_answer()
    assert outcome == NextQuestion(index=1, question_id=second.id)
    assert session.capture_state is CaptureState.IDLE
    assert session.transcript == ""
    assert session.snapshot()["is_last"] is True

    session.start_capture()
    assert isinstance(session.submit_current_answer(), SessionComplete)
    assert session.complete

    applicant = repository.get_applicant(seeded["applicant"].id)
    assert applicant.interview_status is ApplicantStatus.COMPLETED
    review = build_review(repository, seeded["interview"].id, applicant.id)
    assert [(e.question, e.answer) for e in review.entries] == [
        ("Tell me about yourself", "I am a developer"),
        ("Why this role?", ""),
    ]
    assert review.entries[1].display_answer == SKIPPED_TEXT
    assert any(event["span"] == "submit_answer" for event in session.events)


def test_failed_submit_reopens_capture_with_transcript(repository, seeded, flaky_store):
    session = _open(repository, seeded)
    session.start_capture()
    session.receive_transcript("draft answer")
    flaky_store.fail_writes.add("applicant_answer")

    with pytest.raises(PersistenceError):
        session.submit_current_answer()
    assert session.capture_state is CaptureState.PAUSED
    assert session.transcript == "draft answer"
    assert session.walker.index == 0

    flaky_store.fail_writes.clear()
    session.resume_capture()
    session.receive_transcript("and more")
    session.submit_current_answer()
    answers = repository.list_answers(seeded["applicant"].id)
    assert [a.answer for a in answers] == ["draft answer and more"]


def test_skip_leaves_no_answer(repository, seeded):
    session = _open(repository, seeded)
    session.start_capture()
    session.skip_current_question()
    assert session.walker.index == 1
    assert repository.list_answers(seeded["applicant"].id) == []


def test_closed_session_rejects_further_actions(repository, seeded):
    session = _open(repository, seeded)
    session.submit_current_answer()
    session.submit_current_answer()
    with pytest.raises(SessionClosedError):
        session.start_capture()
    with pytest.raises(SessionClosedError):
        session.submit_current_answer()


def test_completed_applicant_cannot_restart(repository, seeded):
    gate = StatusGate(repository)
    gate.complete(seeded["applicant"].id)
    with pytest.raises(SessionClosedError):
        _open(repository, seeded, gate)


def test_interview_without_questions_is_rejected(repository, seeded):
    empty = repository.create_interview(title="Empty", job_role="Ops")
    applicant = repository.create_applicant(
        interview_id=empty.id, title="Mr", firstname="Sam", surname="Lee", email_address="sam@example.com"
    )
    with pytest.raises(NoQuestionsError):
        open_session(repository, StatusGate(repository), empty.id, applicant.id)


def test_applicant_from_other_interview_is_rejected(repository, seeded):
    other = repository.create_interview(title="Other", job_role="Ops")
    with pytest.raises(NotFoundError):
        open_session(repository, StatusGate(repository), other.id, seeded["applicant"].id)


def test_question_deleted_mid_session_keeps_capture_usable(repository, seeded):
    session = _open(repository, seeded)
    first = seeded["questions"][0]
    session.start_capture()
    session.receive_transcript("hello")
    repository.delete_question(first.id)

    with pytest.raises(PersistenceError):
        session.submit_current_answer()
    assert session.capture_state is CaptureState.PAUSED
    assert session.transcript == "hello"
    assert session.walker.index == 0

    assert session.resume_capture() is CaptureState.RECORDING
    assert isinstance(session.skip_current_question(), NextQuestion)
    assert session.capture_state is CaptureState.IDLE


def test_unexpected_submit_failure_reopens_capture(repository, seeded, monkeypatch):
    session = _open(repository, seeded)
    session.start_capture()
    session.receive_transcript("kept")

    def boom(*args, **kwargs):
        raise RuntimeError("disk gone")

    monkeypatch.setattr(repository, "submit_answer", boom)
    with pytest.raises(RuntimeError):
        session.submit_current_answer()
    assert session.capture_state is CaptureState.PAUSED

    monkeypatch.delattr(repository, "submit_answer")
    session.submit_current_answer()
    assert [a.answer for a in repository.list_answers(seeded["applicant"].id)] == ["kept"]


def test_reopened_session_resumes_after_stored_answers(repository, seeded):
    gate = StatusGate(repository)
    first, second = seeded["questions"]
    abandoned = _open(repository, seeded, gate)
    abandoned.start_capture()
    abandoned.receive_transcript("first answer")
    abandoned.submit_current_answer()

    session = _open(repository, seeded, gate)
    assert session.walker.index == 1
    assert session.snapshot()["question"].id == second.id

    assert isinstance(session.submit_current_answer(), SessionComplete)
    answers = repository.list_answers(seeded["applicant"].id)
    assert [(a.question_id, a.answer) for a in answers] == [(first.id, "first answer"), (second.id, "")]
