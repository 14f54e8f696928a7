"""
In-memory database provider.

``InMemoryDatabaseProvider`` behaves like the SQL provider from the
repositories' point of view but keeps its rows in a ``RecordStore``.
Tests also use its administrative helpers, which work on the store
directly instead of going through the query builders:

* ``seed_table`` replaces the contents of one table;
* ``reset`` empties every table;
* ``scoped_run`` / ``scoped_database`` give a throwaway provider that
  is reset however the enclosed code exits.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Iterable, Mapping, Optional, Tuple, TypeVar

from ..core.config import Settings, settings as default_settings
from .builders import InMemoryDatabase
from .provider import DatabaseProvider
from .store import RecordStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InMemoryDatabaseProvider(DatabaseProvider):
    """Provider whose tables live in process memory."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        super().__init__(settings or default_settings)
        self.store = RecordStore()

    def _create_db(self) -> InMemoryDatabase:
        return InMemoryDatabase(self.store)

    def seed_table(self, table: str, records: Iterable[Mapping[str, Any]]) -> None:
        """Replace ``table``'s rows with ``records`` (not an append)."""
        records = list(records)
        self.store.seed(table, records)
        logger.debug("Seeded %s with %d row(s)", table, len(records))

    def reset(self) -> None:
        self.store.reset()


@asynccontextmanager
async def scoped_database() -> AsyncIterator[Tuple[InMemoryDatabase, InMemoryDatabaseProvider]]:
    """Yield a fresh ``(db, provider)`` pair and reset it on exit."""
    provider = InMemoryDatabaseProvider()
    try:
        yield provider.get_db(), provider
    finally:
        provider.reset()


async def scoped_run(
    callback: Callable[[InMemoryDatabase, InMemoryDatabaseProvider], Awaitable[T]],
) -> T:
    """Run ``callback`` against a throwaway database and return its result."""
    async with scoped_database() as (db, provider):
        return await callback(db, provider)
