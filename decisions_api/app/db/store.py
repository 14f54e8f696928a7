"""
Table storage for the in-memory database.

``RecordStore`` owns one list of records per table.  It offers only the
primitive operations the query builders need; filtering and copying are
the builders' concern.
"""

from typing import Any, Callable, Dict, List, Mapping

TABLE_NAMES = (
    "assembly",
    "political_party",
    "elected_official",
    "decision",
    "individual_vote",
)

Record = Dict[str, Any]


def _empty_tables() -> Dict[str, List[Record]]:
    return {name: [] for name in TABLE_NAMES}


class RecordStore:
    """In-process rows for the five application tables."""

    def __init__(self) -> None:
        self._tables = _empty_tables()

    def read_all(self, table: str) -> List[Record]:
        """Return the live list of records for ``table``."""
        return self._tables[table]

    def append(self, table: str, record: Record) -> Record:
        self._tables[table].append(record)
        return record

    def replace_at(self, table: str, index: int, record: Record) -> Record:
        self._tables[table][index] = record
        return record

    def remove_where(self, table: str, predicate: Callable[[Mapping[str, Any]], bool]) -> int:
        """Remove every record for which ``predicate`` holds.

        Returns the number of removed records.  Remaining records keep
        their relative order.
        """
        records = self._tables[table]
        kept = [record for record in records if not predicate(record)]
        self._tables[table] = kept
        return len(records) - len(kept)

    def seed(self, table: str, records: List[Mapping[str, Any]]) -> None:
        """Replace the contents of ``table`` with copies of ``records``."""
        if table not in self._tables:
            raise KeyError(f"Unknown table {table}")
        self._tables[table] = [dict(record) for record in records]

    def reset(self) -> None:
        # Swap in a whole new mapping so no half-cleared state is visible.
        self._tables = _empty_tables()
