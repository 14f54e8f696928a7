"""
Database provider selection.

A provider owns one query interface (``get_db``) and releases it on
shutdown (``destroy``).  Which backend backs the application is decided
by ``settings.db_backend``:

``sqlite``
    Rows live in an SQLite file; see ``db.sqlite``.
``memory``
    Rows live in process memory; see ``db.in_memory``.  Used by tests
    and for quick local runs without a database file.

``get_database_provider`` is the FastAPI dependency used by the
repositories.  Tests replace it through ``app.dependency_overrides``.
"""

import logging
from typing import Any, Optional

from ..core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class DatabaseProvider:
    """Base class for providers; subclasses implement ``_create_db``."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._db: Optional[Any] = None

    def get_db(self) -> Any:
        if self._db is None:
            self._db = self._create_db()
        return self._db

    def _create_db(self) -> Any:
        raise NotImplementedError

    def init_db(self) -> None:
        """Prepare the backend before the first request (no-op by default)."""

    async def destroy(self) -> None:
        if self._db is not None:
            await self._db.destroy()
            self._db = None


def create_database_provider(settings: Settings) -> DatabaseProvider:
    """Build the provider configured by ``settings.db_backend``."""
    backend = settings.db_backend.lower()
    if backend == "memory":
        from .in_memory import InMemoryDatabaseProvider

        provider: DatabaseProvider = InMemoryDatabaseProvider(settings)
    elif backend == "sqlite":
        from .sqlite import SqliteDatabaseProvider

        provider = SqliteDatabaseProvider(settings)
    else:
        raise ValueError(f"Unsupported DB_BACKEND '{settings.db_backend}'")
    logger.info("Using %s database backend", backend)
    return provider


_provider: Optional[DatabaseProvider] = None


def get_database_provider() -> DatabaseProvider:
    """Return the application-wide provider, creating it on first use."""
    global _provider
    if _provider is None:
        _provider = create_database_provider(default_settings)
    return _provider
