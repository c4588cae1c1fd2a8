"""Resource store protocol shared by the REST and SQLite backends."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

Row = Dict[str, Any]
Filters = Mapping[str, Any]
Order = Sequence[Tuple[str, str]]

TABLES = ("interview", "question", "applicant", "applicant_answer")


class ResourceStore(Protocol):
    """Resource-oriented persistence for interview records.

    Filters are equality matches on column values. ``order`` is a list of
    ``(column, "asc" | "desc")`` pairs. Writes return the stored representation.
    """

    def insert(self, table: str, row: Mapping[str, Any]) -> Row: ...

    def select(self, table: str, filters: Optional[Filters] = None, order: Optional[Order] = None) -> List[Row]: ...

    def update(self, table: str, filters: Filters, changes: Mapping[str, Any]) -> List[Row]: ...

    def delete(self, table: str, filters: Filters) -> None: ...

    def count(self, table: str, filters: Optional[Filters] = None) -> int: ...


def check_table(table: str) -> str:
    if table not in TABLES:
        raise ValueError(f"Unknown table: {table}")
    return table


__all__ = ["Filters", "Order", "ResourceStore", "Row", "TABLES", "check_table"]
