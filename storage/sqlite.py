"""SQLite-backed resource store for local development and tests."""
from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Any, Iterator, List, Mapping, Optional

from config.settings import settings
from errors import NetworkError

from .base import Filters, Order, Row, check_table
from .migrate import migrate


logger = logging.getLogger(__name__)


@contextmanager
def get_conn(db_path: Optional[str] = None) -> Iterator[sqlite3.Connection]:
    """Yield a SQLite connection, ensuring the data directory exists."""

    path = db_path or settings.DB_PATH
    directory = os.path.dirname(path) or "."
    os.makedirs(directory, exist_ok=True)
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    try:
        yield conn
        conn.commit()
    except sqlite3.Error as exc:
        conn.rollback()
        logger.error("SQLite store failure path=%s: %s", path, exc)
        raise NetworkError(f"Store request failed: {exc}") from exc
    finally:
        conn.close()


def _where(filters: Optional[Filters]) -> tuple[str, list[Any]]:
    if not filters:
        return "", []
    columns = [_column(name) for name in filters]
    clause = " AND ".join(f"{column} = ?" for column in columns)
    return f" WHERE {clause}", [_value(value) for value in filters.values()]


def _column(name: str) -> str:
    if not name.replace("_", "").isalnum():
        raise ValueError(f"Invalid column name: {name}")
    return name


def _value(value: Any) -> Any:
    # str-valued enums are stored by value
    return getattr(value, "value", value)


class SqliteStore:
    """Same contract as the REST store, persisted to a local SQLite file."""

    def __init__(self, db_path: Optional[str] = None, *, username: Optional[str] = None) -> None:
        self._db_path = db_path or settings.DB_PATH
        self._username = settings.STORE_USERNAME if username is None else username
        migrate(self._db_path)

    def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        data = {**row, "username": self._username}
        columns = [_column(name) for name in data]
        placeholders = ", ".join("?" for _ in columns)
        with get_conn(self._db_path) as conn:
            cur = conn.execute(
                f"INSERT INTO {check_table(table)} ({', '.join(columns)}) VALUES ({placeholders})",
                [_value(value) for value in data.values()],
            )
            stored = conn.execute(f"SELECT * FROM {table} WHERE id = ?", (cur.lastrowid,)).fetchone()
            return dict(stored)

    def select(self, table: str, filters: Optional[Filters] = None, order: Optional[Order] = None) -> List[Row]:
        where, params = _where(filters)
        order_sql = ""
        if order:
            parts = []
            for column, direction in order:
                if direction not in ("asc", "desc"):
                    raise ValueError(f"Invalid order direction: {direction}")
                parts.append(f"{_column(column)} {direction.upper()}")
            order_sql = " ORDER BY " + ", ".join(parts)
        with get_conn(self._db_path) as conn:
            rows = conn.execute(f"SELECT * FROM {check_table(table)}{where}{order_sql}", params).fetchall()
            return [dict(row) for row in rows]

    def update(self, table: str, filters: Filters, changes: Mapping[str, Any]) -> List[Row]:
        data = {**changes, "username": self._username}
        assignments = ", ".join(f"{_column(name)} = ?" for name in data)
        where, params = _where(filters)
        with get_conn(self._db_path) as conn:
            conn.execute(
                f"UPDATE {check_table(table)} SET {assignments}{where}",
                [_value(value) for value in data.values()] + params,
            )
            rows = conn.execute(f"SELECT * FROM {table}{where}", params).fetchall()
            return [dict(row) for row in rows]

    def delete(self, table: str, filters: Filters) -> None:
        where, params = _where(filters)
        with get_conn(self._db_path) as conn:
            conn.execute(f"DELETE FROM {check_table(table)}{where}", params)

    def count(self, table: str, filters: Optional[Filters] = None) -> int:
        where, params = _where(filters)
        with get_conn(self._db_path) as conn:
            row = conn.execute(f"SELECT COUNT(*) FROM {check_table(table)}{where}", params).fetchone()
            return int(row[0])


__all__ = ["SqliteStore", "get_conn"]
