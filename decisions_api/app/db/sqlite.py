"""
SQLite database integration and simple migration system.

``SqliteDatabaseProvider`` is the persistent backend.  Its query
interface exposes the same builder chains as the in-memory database
(``select_from``, ``insert_into``, ``update_table``, ``delete_from``)
and compiles them to parameterized SQL.  Column names are checked
against a strict identifier pattern before they are placed in a
statement; values are always bound as parameters.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import json
import logging
import os
import re
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass, replace
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from ..core.config import Settings
from .builders import NoResultError
from .predicates import AnyOf, Condition, build_condition
from .provider import DatabaseProvider

logger = logging.getLogger(__name__)

MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS assembly (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS political_party (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            acronym TEXT,
            color TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS elected_official (
            id TEXT PRIMARY KEY,
            first_name TEXT NOT NULL,
            last_name TEXT NOT NULL,
            party TEXT,
            party_id TEXT,
            position TEXT,
            region TEXT,
            constituency TEXT,
            mandate_start DATE,
            mandate_end DATE,
            assembly_id TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS decision (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            summary TEXT NOT NULL,
            full_text TEXT,
            date DATE NOT NULL,
            source TEXT,
            assembly_id TEXT,
            in_favor INTEGER NOT NULL DEFAULT 0,
            against INTEGER NOT NULL DEFAULT 0,
            abstention INTEGER NOT NULL DEFAULT 0,
            absent INTEGER NOT NULL DEFAULT 0,
            total_voters INTEGER NOT NULL DEFAULT 0,
            is_passed INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS individual_vote (
            id TEXT PRIMARY KEY,
            decision_id TEXT NOT NULL,
            elected_official_id TEXT NOT NULL,
            vote_value TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE INDEX IF NOT EXISTS idx_decision_assembly ON decision(assembly_id);
        CREATE INDEX IF NOT EXISTS idx_vote_decision ON individual_vote(decision_id);
        """,
    ),
    # Migration 2: public profile fields for elected officials
    (
        2,
        """
        -- contact_info holds the ContactInfo object as JSON text.
        ALTER TABLE elected_official ADD COLUMN bio TEXT;
        ALTER TABLE elected_official ADD COLUMN image_url TEXT;
        ALTER TABLE elected_official ADD COLUMN contact_info TEXT;
        """,
    ),
]

_IDENTIFIER = r"[A-Za-z_][A-Za-z0-9_]*"
_COLUMN_RE = re.compile(rf"^{_IDENTIFIER}(\.{_IDENTIFIER})?$")
_SELECTION_RE = re.compile(rf"^{_IDENTIFIER}(\.{_IDENTIFIER})?(\s+as\s+{_IDENTIFIER})?$", re.IGNORECASE)
_COMPARISONS = {"=", "!=", ">", ">=", "<", "<="}


def get_database_path(settings: Settings) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths and ``:memory:`` are used as they are; relative
    paths are resolved against the project root.
    """
    db_url = settings.database_url
    if db_url == ":memory:" or os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def _column(name: str) -> str:
    if not _COLUMN_RE.match(name):
        raise ValueError(f"Invalid column name '{name}'")
    return name


def _selection(name: str) -> str:
    if name == "*":
        return name
    if not _SELECTION_RE.match(name):
        raise ValueError(f"Invalid column selection '{name}'")
    return name


def adapt_value(value: Any) -> Any:
    """Convert Python values to types SQLite stores natively."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return value


def compile_condition(condition: Condition) -> Tuple[str, List[Any]]:
    """Compile a predicate tree into an SQL fragment and its parameters."""
    if isinstance(condition, AnyOf):
        parts, params = [], []
        for inner in condition.predicates:
            sql, inner_params = compile_condition(inner)
            parts.append(sql)
            params.extend(inner_params)
        return "(" + " OR ".join(parts) + ")", params
    column = _column(condition.column)
    operator = condition.operator.lower()
    if operator == "ilike":
        return f"LOWER({column}) LIKE LOWER(?)", [condition.value]
    if operator not in _COMPARISONS:
        raise ValueError(f"Unsupported operator '{condition.operator}'")
    if condition.value is None and operator in {"=", "!="}:
        return f"{column} {'IS' if operator == '=' else 'IS NOT'} ?", [None]
    return f"{column} {operator} ?", [adapt_value(condition.value)]


def _where_clause(conditions: Sequence[Condition]) -> Tuple[str, List[Any]]:
    if not conditions:
        return "", []
    parts, params = [], []
    for condition in conditions:
        sql, condition_params = compile_condition(condition)
        parts.append(sql)
        params.extend(condition_params)
    return " WHERE " + " AND ".join(parts), params


def _as_tuple(columns: Union[str, Sequence[str], None]) -> Tuple[str, ...]:
    if columns is None:
        return ("*",)
    if isinstance(columns, str):
        return (columns,)
    return tuple(columns)


@dataclass(frozen=True)
class SqliteSelectBuilder:
    database: "SqliteDatabase"
    table: str
    columns: Tuple[str, ...] = ("*",)
    conditions: Tuple[Condition, ...] = ()
    joins: Tuple[str, ...] = ()
    ordering: Tuple[str, ...] = ()
    grouping: Tuple[str, ...] = ()
    limit_value: Optional[int] = None
    offset_value: Optional[int] = None

    def select(self, columns: Union[str, Sequence[str]]) -> "SqliteSelectBuilder":
        return replace(self, columns=_as_tuple(columns))

    def select_all(self) -> "SqliteSelectBuilder":
        return replace(self, columns=("*",))

    def where(self, column, operator: Optional[str] = None, value: Any = None) -> "SqliteSelectBuilder":
        return replace(self, conditions=self.conditions + (build_condition(column, operator, value),))

    def left_join(self, table: str, left: str, right: str) -> "SqliteSelectBuilder":
        join = f"LEFT JOIN {_column(table)} ON {_column(left)} = {_column(right)}"
        return replace(self, joins=self.joins + (join,))

    def order_by(self, column: str, direction: str = "asc") -> "SqliteSelectBuilder":
        direction = "DESC" if direction.lower() == "desc" else "ASC"
        return replace(self, ordering=self.ordering + (f"{_column(column)} {direction}",))

    def group_by(self, columns: Union[str, Sequence[str]]) -> "SqliteSelectBuilder":
        return replace(self, grouping=self.grouping + tuple(_column(c) for c in _as_tuple(columns)))

    def limit(self, value: int) -> "SqliteSelectBuilder":
        return replace(self, limit_value=int(value))

    def offset(self, value: int) -> "SqliteSelectBuilder":
        return replace(self, offset_value=int(value))

    def to_sql(self) -> Tuple[str, List[Any]]:
        table = _column(self.table)
        if self.columns == ("*",):
            selection = f"{table}.*"
        else:
            selection = ", ".join(_selection(c) for c in self.columns)
        query = f"SELECT {selection} FROM {table}"
        if self.joins:
            query += " " + " ".join(self.joins)
        where, params = _where_clause(self.conditions)
        query += where
        if self.grouping:
            query += " GROUP BY " + ", ".join(self.grouping)
        if self.ordering:
            query += " ORDER BY " + ", ".join(self.ordering)
        if self.limit_value is not None:
            query += " LIMIT ?"
            params.append(self.limit_value)
            if self.offset_value is not None:
                query += " OFFSET ?"
                params.append(self.offset_value)
        return query, params

    async def execute(self) -> List[Dict[str, Any]]:
        query, params = self.to_sql()
        return self.database.fetch_all(query, params)

    async def execute_take_first(self) -> Optional[Dict[str, Any]]:
        rows = await self.execute()
        return rows[0] if rows else None

    async def execute_take_first_or_throw(self) -> Dict[str, Any]:
        row = await self.execute_take_first()
        if row is None:
            raise NoResultError(f"No records found in table {self.table}")
        return row


@dataclass(frozen=True)
class SqliteInsertBuilder:
    database: "SqliteDatabase"
    table: str
    records: Tuple[Dict[str, Any], ...] = ()

    def values(self, data: Union[Dict[str, Any], Sequence[Dict[str, Any]]]) -> "SqliteInsertBuilder":
        records = data if isinstance(data, (list, tuple)) else [data]
        return replace(self, records=tuple(records))

    def returning(self, columns: Union[str, Sequence[str], None] = None) -> "SqliteInsertBuilder":
        return self

    async def execute(self) -> List[Dict[str, Any]]:
        table = _column(self.table)
        inserted = []
        with self.database.transaction() as cursor:
            for record in self.records:
                columns = [_column(name) for name in record]
                placeholders = ", ".join("?" for _ in columns)
                cursor.execute(
                    f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})",
                    [adapt_value(value) for value in record.values()],
                )
                row = cursor.execute(f"SELECT * FROM {table} WHERE rowid = ?", (cursor.lastrowid,)).fetchone()
                inserted.append(dict(row))
        return inserted

    async def execute_take_first(self) -> Optional[Dict[str, Any]]:
        inserted = await self.execute()
        return inserted[0] if inserted else None

    async def execute_take_first_or_throw(self) -> Dict[str, Any]:
        row = await self.execute_take_first()
        if row is None:
            raise NoResultError(f"Failed to insert into {self.table}")
        return row


@dataclass(frozen=True)
class SqliteUpdateBuilder:
    database: "SqliteDatabase"
    table: str
    changes: Tuple[Tuple[str, Any], ...] = ()
    condition: Optional[Condition] = None

    def set(self, changes: Dict[str, Any]) -> "SqliteUpdateBuilder":
        return replace(self, changes=tuple(changes.items()))

    def where(self, column, operator: Optional[str] = None, value: Any = None) -> "SqliteUpdateBuilder":
        return replace(self, condition=build_condition(column, operator, value))

    def returning(self, columns: Union[str, Sequence[str], None] = None) -> "SqliteUpdateBuilder":
        return self

    async def execute(self) -> List[Dict[str, Any]]:
        table = _column(self.table)
        where, params = _where_clause([self.condition] if self.condition is not None else [])
        with self.database.transaction() as cursor:
            rowids = [row[0] for row in cursor.execute(f"SELECT rowid FROM {table}{where}", params).fetchall()]
            if not rowids:
                return []
            marks = ", ".join("?" for _ in rowids)
            if self.changes:
                assignments = ", ".join(f"{_column(name)} = ?" for name, _ in self.changes)
                cursor.execute(
                    f"UPDATE {table} SET {assignments} WHERE rowid IN ({marks})",
                    [adapt_value(value) for _, value in self.changes] + rowids,
                )
            rows = cursor.execute(
                f"SELECT * FROM {table} WHERE rowid IN ({marks}) ORDER BY rowid", rowids
            ).fetchall()
        return [dict(row) for row in rows]

    async def execute_take_first(self) -> Optional[Dict[str, Any]]:
        updated = await self.execute()
        return updated[0] if updated else None

    async def execute_take_first_or_throw(self) -> Dict[str, Any]:
        row = await self.execute_take_first()
        if row is None:
            raise NoResultError(f"No records updated in {self.table}")
        return row


@dataclass(frozen=True)
class SqliteDeleteBuilder:
    database: "SqliteDatabase"
    table: str
    condition: Optional[Condition] = None

    def where(self, column, operator: Optional[str] = None, value: Any = None) -> "SqliteDeleteBuilder":
        return replace(self, condition=build_condition(column, operator, value))

    async def execute(self) -> List[Dict[str, int]]:
        where, params = _where_clause([self.condition] if self.condition is not None else [])
        with self.database.transaction() as cursor:
            cursor.execute(f"DELETE FROM {_column(self.table)}{where}", params)
            affected = cursor.rowcount
        return [{"affected": affected}]


class SqliteDatabase:
    """Query entry points over one SQLite connection."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor, committing on success and rolling back on error."""
        cursor = self.conn.cursor()
        try:
            yield cursor
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise
        finally:
            cursor.close()

    def fetch_all(self, query: str, params: Sequence[Any]) -> List[Dict[str, Any]]:
        logger.debug("SQL %s %s", query, params)
        with self.transaction() as cursor:
            return [dict(row) for row in cursor.execute(query, params).fetchall()]

    def select_from(self, table: str) -> SqliteSelectBuilder:
        return SqliteSelectBuilder(self, table)

    def insert_into(self, table: str) -> SqliteInsertBuilder:
        return SqliteInsertBuilder(self, table)

    def update_table(self, table: str) -> SqliteUpdateBuilder:
        return SqliteUpdateBuilder(self, table)

    def delete_from(self, table: str) -> SqliteDeleteBuilder:
        return SqliteDeleteBuilder(self, table)

    async def destroy(self) -> None:
        self.conn.close()


class SqliteDatabaseProvider(DatabaseProvider):
    """Provider backed by an SQLite file."""

    def _create_db(self) -> SqliteDatabase:
        db_path = get_database_path(self.settings)
        # FastAPI may call us from worker threads; one connection is
        # shared and statements are short.
        conn = sqlite3.connect(db_path, check_same_thread=False)
        # Return rows as dict-like objects keyed by column name
        conn.row_factory = sqlite3.Row
        logger.info("Opened SQLite database at %s", db_path)
        return SqliteDatabase(conn)

    def init_db(self) -> None:
        """Apply pending migrations.

        Creates the ``migrations`` table if it does not exist, checks the
        current schema version, and applies any newer entries of
        ``MIGRATIONS`` in order.
        """
        db = self.get_db()
        with db.transaction() as cursor:
            cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
            cursor.execute("SELECT MAX(version) as version FROM migrations")
            row = cursor.fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    cursor.executescript(sql)
                    cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                    logger.info("Applied migration %s", version)
                    current_version = version
