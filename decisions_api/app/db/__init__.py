"""
Database layer.

Repositories talk to a query interface obtained from a
``DatabaseProvider``.  Two interchangeable backends exist: an SQLite
database (``sqlite``) and an in-memory substitute (``in_memory``) that
reproduces the same builder chains over plain Python lists.
"""

from .builders import InMemoryDatabase, NoResultError
from .in_memory import InMemoryDatabaseProvider, scoped_database, scoped_run
from .predicates import MISSING
from .provider import DatabaseProvider, create_database_provider, get_database_provider
from .store import TABLE_NAMES, RecordStore

__all__ = [
    "DatabaseProvider",
    "InMemoryDatabase",
    "InMemoryDatabaseProvider",
    "MISSING",
    "NoResultError",
    "RecordStore",
    "TABLE_NAMES",
    "create_database_provider",
    "get_database_provider",
    "scoped_database",
    "scoped_run",
]
