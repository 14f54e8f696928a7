"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables, with defaults for every field, so the service
starts without any configuration file.  In a production deployment
override these via environment variables.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Decisions API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional path of a log file in addition to console output.
    log_file: str = os.getenv("LOG_FILE", "")

    # Level for the query builder traces; empty means same as LOG_LEVEL.
    db_log_level: str = os.getenv("DB_LOG_LEVEL", "")

    # Which backend serves the repositories: ``sqlite`` keeps data in
    # the database file below, ``memory`` keeps it in process memory
    # and loses it on restart.
    db_backend: str = os.getenv("DB_BACKEND", "sqlite")

    # Path of the SQLite database.  A relative path is resolved against
    # the project root by ``db.sqlite``; ``:memory:`` is accepted too.
    database_url: str = os.getenv("DATABASE_URL", "decisions.db")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes defaults when the class is defined, environment variables
# must be set before importing this module.
settings = Settings()
