"""One-way applicant completion."""
from __future__ import annotations

import pytest

from errors import PersistenceError
from storage import ApplicantStatus
from take_interview import StatusGate


def test_complete_is_idempotent(repository, seeded, flaky_store):
    gate = StatusGate(repository)
    applicant_id = seeded["applicant"].id

    assert gate.complete(applicant_id) is True
    assert gate.complete(applicant_id) is False
    assert gate.is_completed(applicant_id)
    assert flaky_store.writes.count(("update", "applicant")) == 1
    assert repository.get_applicant(applicant_id).interview_status is ApplicantStatus.COMPLETED


def test_failed_update_leaves_gate_open(repository, seeded, flaky_store):
    gate = StatusGate(repository)
    applicant_id = seeded["applicant"].id
    flaky_store.fail_writes.add("applicant")

    with pytest.raises(PersistenceError):
        gate.complete(applicant_id)
    assert not gate.is_completed(applicant_id)
    assert repository.get_applicant(applicant_id).interview_status is ApplicantStatus.NOT_STARTED

    flaky_store.fail_writes.clear()
    assert gate.complete(applicant_id) is True


def test_completed_applicant_cannot_be_reset(repository, seeded):
    applicant_id = seeded["applicant"].id
    StatusGate(repository).complete(applicant_id)
    with pytest.raises(ValueError):
        repository.set_applicant_status(applicant_id, ApplicantStatus.NOT_STARTED)
