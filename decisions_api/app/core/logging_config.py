"""
Logging setup for the Decisions API.

``setup_logging`` attaches a console handler (and optionally a file
handler) to the root logger once per process.  The query builders in
``app.db`` trace every executed chain at DEBUG level; ``db_level``
lets those traces be switched on without making the rest of the
application verbose.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DB_LOGGER = "decisions_api.app.db"


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    db_level: Optional[str] = None,
) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level : str
        Root level name, case insensitive.  Unknown names fall back to
        ``INFO``.
    logfile : Optional[str]
        Also write records to this file.
    db_level : Optional[str]
        Level for the database layer loggers.  Defaults to ``level``.
    """
    root = logging.getLogger()
    logging.getLogger(DB_LOGGER).setLevel(_level(db_level or level))
    if root.handlers:
        # create_app may run several times in one process (tests).
        return

    root.setLevel(_level(level))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
