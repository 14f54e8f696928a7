"""
Chainable query builders backed by a ``RecordStore``.

The builders mirror the call shapes the repositories use against the
SQL backend::

    await db.select_from("decision").select_all().where("id", "=", x).execute_take_first()
    await db.insert_into("decision").values(row).returning(["id"]).execute_take_first_or_throw()
    await db.update_table("decision").set(changes).where("id", "=", x).returning(["id"]).execute()
    await db.delete_from("decision").where("id", "=", x).execute()

Each builder is a frozen dataclass.  Configuration calls return a new
builder, terminal calls (``execute``, ``execute_take_first`` and
``execute_take_first_or_throw``) are coroutines and are the only
methods that read or change the store.  Projection, joins, ordering
and paging are accepted for compatibility but do not affect results.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .predicates import Condition, Predicate, build_condition, filter_records, matches_all
from .store import Record, RecordStore

logger = logging.getLogger(__name__)


class NoResultError(LookupError):
    """Raised by ``execute_take_first_or_throw`` when nothing qualifies."""


@dataclass(frozen=True)
class SelectQueryBuilder:
    store: RecordStore
    table: str
    columns: Tuple[str, ...] = ("*",)
    conditions: Tuple[Condition, ...] = ()

    def select(self, columns: Union[str, Sequence[str]]) -> "SelectQueryBuilder":
        if isinstance(columns, str):
            columns = [columns]
        return replace(self, columns=tuple(columns))

    def select_all(self) -> "SelectQueryBuilder":
        return replace(self, columns=("*",))

    def where(self, column, operator: Optional[str] = None, value: Any = None) -> "SelectQueryBuilder":
        condition = build_condition(column, operator, value)
        return replace(self, conditions=self.conditions + (condition,))

    def left_join(self, *args: Any) -> "SelectQueryBuilder":
        return self

    def limit(self, *args: Any) -> "SelectQueryBuilder":
        return self

    def offset(self, *args: Any) -> "SelectQueryBuilder":
        return self

    def order_by(self, *args: Any) -> "SelectQueryBuilder":
        return self

    def group_by(self, *args: Any) -> "SelectQueryBuilder":
        return self

    def _matching(self) -> List[Record]:
        return filter_records(self.store.read_all(self.table), self.conditions)

    async def execute(self) -> List[Record]:
        rows = [dict(record) for record in self._matching()]
        logger.debug("select %s: %d row(s)", self.table, len(rows))
        return rows

    async def execute_take_first(self) -> Optional[Record]:
        rows = self._matching()
        looks_up_id = any(
            isinstance(condition, Predicate)
            and condition.column == "id"
            and condition.operator == "="
            and condition.value is not None
            for condition in self.conditions
        )
        if looks_up_id and not rows:
            return None
        return dict(rows[0]) if rows else None

    async def execute_take_first_or_throw(self) -> Record:
        row = await self.execute_take_first()
        if row is None:
            raise NoResultError(f"No records found in table {self.table}")
        return row


@dataclass(frozen=True)
class InsertValuesBuilder:
    store: RecordStore
    table: str
    records: Tuple[Dict[str, Any], ...]
    returning_columns: Tuple[str, ...] = ()

    def returning(self, columns: Union[str, Sequence[str], None] = None) -> "InsertValuesBuilder":
        if columns is None:
            columns = ("*",)
        elif isinstance(columns, str):
            columns = (columns,)
        return replace(self, returning_columns=tuple(columns))

    async def execute(self) -> List[Record]:
        inserted = []
        for record in self.records:
            stored = self.store.append(self.table, dict(record))
            inserted.append(dict(stored))
        logger.debug("insert %s: %d row(s)", self.table, len(inserted))
        return inserted

    async def execute_take_first(self) -> Optional[Record]:
        inserted = await self.execute()
        return inserted[0] if inserted else None

    async def execute_take_first_or_throw(self) -> Record:
        row = await self.execute_take_first()
        if row is None:
            raise NoResultError(f"Failed to insert into {self.table}")
        return row


@dataclass(frozen=True)
class InsertQueryBuilder:
    store: RecordStore
    table: str

    def values(self, data: Union[Dict[str, Any], Sequence[Dict[str, Any]]]) -> InsertValuesBuilder:
        records = data if isinstance(data, (list, tuple)) else [data]
        return InsertValuesBuilder(self.store, self.table, tuple(records))


@dataclass(frozen=True)
class UpdateWhereBuilder:
    """An update with its single condition fixed; only terminals remain."""

    store: RecordStore
    table: str
    changes: Dict[str, Any]
    condition: Condition
    returning_columns: Tuple[str, ...] = ()

    def returning(self, columns: Union[str, Sequence[str], None] = None) -> "UpdateWhereBuilder":
        if columns is None:
            columns = ("*",)
        elif isinstance(columns, str):
            columns = (columns,)
        return replace(self, returning_columns=tuple(columns))

    async def execute(self) -> List[Record]:
        updated = []
        for index, record in enumerate(self.store.read_all(self.table)):
            if matches_all(record, (self.condition,)):
                merged = {**record, **self.changes}
                self.store.replace_at(self.table, index, merged)
                updated.append(dict(merged))
        logger.debug("update %s: %d row(s)", self.table, len(updated))
        return updated

    async def execute_take_first(self) -> Optional[Record]:
        updated = await self.execute()
        return updated[0] if updated else None

    async def execute_take_first_or_throw(self) -> Record:
        row = await self.execute_take_first()
        if row is None:
            raise NoResultError(f"No records updated in {self.table}")
        return row


@dataclass(frozen=True)
class UpdateSetBuilder:
    store: RecordStore
    table: str
    changes: Dict[str, Any] = field(default_factory=dict)

    def where(self, column, operator: Optional[str] = None, value: Any = None) -> UpdateWhereBuilder:
        condition = build_condition(column, operator, value)
        return UpdateWhereBuilder(self.store, self.table, self.changes, condition)


@dataclass(frozen=True)
class UpdateQueryBuilder:
    store: RecordStore
    table: str

    def set(self, changes: Dict[str, Any]) -> UpdateSetBuilder:
        return UpdateSetBuilder(self.store, self.table, dict(changes))


@dataclass(frozen=True)
class DeleteWhereBuilder:
    store: RecordStore
    table: str
    condition: Condition

    async def execute(self) -> List[Dict[str, int]]:
        affected = self.store.remove_where(self.table, self.condition.matches)
        logger.debug("delete %s: %d row(s)", self.table, affected)
        return [{"affected": affected}]


@dataclass(frozen=True)
class DeleteQueryBuilder:
    store: RecordStore
    table: str

    def where(self, column, operator: Optional[str] = None, value: Any = None) -> DeleteWhereBuilder:
        return DeleteWhereBuilder(self.store, self.table, build_condition(column, operator, value))


class _InertStatement:
    """Schema statement that accepts any chain and does nothing."""

    def if_not_exists(self) -> "_InertStatement":
        return self

    def if_exists(self) -> "_InertStatement":
        return self

    def add_column(self, *args: Any, **kwargs: Any) -> "_InertStatement":
        return self

    async def execute(self) -> Dict[str, Any]:
        return {}


class InertSchema:
    def create_table(self, name: str) -> _InertStatement:
        return _InertStatement()

    def drop_table(self, name: str) -> _InertStatement:
        return _InertStatement()


class InMemoryDatabase:
    """Query entry points over a ``RecordStore``."""

    def __init__(self, store: RecordStore) -> None:
        self.store = store
        self.schema = InertSchema()

    def select_from(self, table: str) -> SelectQueryBuilder:
        return SelectQueryBuilder(self.store, table)

    def insert_into(self, table: str) -> InsertQueryBuilder:
        return InsertQueryBuilder(self.store, table)

    def update_table(self, table: str) -> UpdateQueryBuilder:
        return UpdateQueryBuilder(self.store, table)

    def delete_from(self, table: str) -> DeleteQueryBuilder:
        return DeleteQueryBuilder(self.store, table)

    async def destroy(self) -> None:
        return None
