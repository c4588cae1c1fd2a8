import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from api import deps
from config.settings import settings
from errors import NetworkError
from storage import Difficulty, Repository, SqliteStore
from storage.migrate import migrate


class FlakyStore:
    """Wraps a real store; writes to tables listed in ``fail_writes`` raise NetworkError."""

    def __init__(self, inner):
        self.inner = inner
        self.fail_writes = set()
        self.fail_counts = False
        self.writes = []

    def _check(self, table):
        if table in self.fail_writes:
            raise NetworkError("HTTP error! status: 500")

    def insert(self, table, row):
        self._check(table)
        self.writes.append(("insert", table))
        return self.inner.insert(table, row)

    def select(self, table, filters=None, order=None):
        return self.inner.select(table, filters, order)

    def update(self, table, filters, changes):
        self._check(table)
        self.writes.append(("update", table))
        return self.inner.update(table, filters, changes)

    def delete(self, table, filters):
        self._check(table)
        return self.inner.delete(table, filters)

    def count(self, table, filters=None):
        if self.fail_counts:
            raise NetworkError("HTTP error! status: 503")
        return self.inner.count(table, filters)


@pytest.fixture(autouse=True)
def tmp_db(monkeypatch):
    td = tempfile.TemporaryDirectory()
    db_path = os.path.join(td.name, "test.db")
    monkeypatch.setattr(settings, "DB_PATH", db_path, raising=False)
    monkeypatch.setattr(settings, "STORE_BACKEND", "sqlite", raising=False)
    migrate(db_path)
    deps.reset_providers()
    try:
        yield db_path
    finally:
        deps.reset_providers()
        td.cleanup()


@pytest.fixture
def flaky_store(tmp_db):
    return FlakyStore(SqliteStore(tmp_db, username="tester"))


@pytest.fixture
def repository(flaky_store):
    return Repository(flaky_store)


@pytest.fixture
def seeded(repository):
    interview = repository.create_interview(
        title="Backend Engineer", job_role="Python developer", description="Platform team"
    )
    first = repository.create_question(interview.id, "Tell me about yourself", Difficulty.EASY)
    second = repository.create_question(interview.id, "Why this role?", Difficulty.INTERMEDIATE)
    applicant = repository.create_applicant(
        interview_id=interview.id,
        title="Ms",
        firstname="Jane",
        surname="Doe",
        phone_number="0400 000 000",
        email_address="jane@example.com",
    )
    return {"interview": interview, "questions": [first, second], "applicant": applicant}
