"""SQLite schema migrations for the local resource store."""
from __future__ import annotations

import os
import sqlite3
from typing import Iterable

SCHEMA: Iterable[str] = [
    """
CREATE TABLE IF NOT EXISTS interview (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  title TEXT NOT NULL,
  job_role TEXT NOT NULL DEFAULT '',
  status TEXT NOT NULL DEFAULT 'Draft',
  description TEXT,
  username TEXT
);
""",
    """
CREATE TABLE IF NOT EXISTS question (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  interview_id INTEGER NOT NULL REFERENCES interview(id) ON DELETE CASCADE,
  question TEXT NOT NULL,
  difficulty TEXT NOT NULL,
  position INTEGER NOT NULL DEFAULT 0,
  username TEXT
);
""",
    """
CREATE TABLE IF NOT EXISTS applicant (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  interview_id INTEGER NOT NULL REFERENCES interview(id) ON DELETE CASCADE,
  title TEXT NOT NULL,
  firstname TEXT NOT NULL,
  surname TEXT NOT NULL,
  phone_number TEXT,
  email_address TEXT NOT NULL,
  interview_status TEXT NOT NULL DEFAULT 'Not Started',
  username TEXT
);
""",
    """
CREATE TABLE IF NOT EXISTS applicant_answer (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  interview_id INTEGER NOT NULL REFERENCES interview(id) ON DELETE CASCADE,
  question_id INTEGER NOT NULL REFERENCES question(id) ON DELETE CASCADE,
  applicant_id INTEGER NOT NULL REFERENCES applicant(id) ON DELETE CASCADE,
  answer TEXT NOT NULL DEFAULT '',
  username TEXT
);
""",
    "CREATE INDEX IF NOT EXISTS idx_question_interview ON question(interview_id, position);",
    "CREATE INDEX IF NOT EXISTS idx_answer_applicant ON applicant_answer(applicant_id);",
    "CREATE UNIQUE INDEX IF NOT EXISTS idx_answer_once ON applicant_answer(question_id, applicant_id);",
]


def migrate(db_path: str = "data/readysethire.db") -> None:
    """Apply schema migrations to the SQLite database."""

    directory = os.path.dirname(db_path) or "."
    os.makedirs(directory, exist_ok=True)
    conn = sqlite3.connect(db_path)
    try:
        cur = conn.cursor()
        for stmt in SCHEMA:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


if __name__ == "__main__":
    from config.settings import settings

    migrate(settings.DB_PATH)
