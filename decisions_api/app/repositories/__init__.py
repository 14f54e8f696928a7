"""
Repositories translate between API schemas and table rows.

They are the only code that issues query builder chains, so they run
unchanged against either database backend.
"""

from typing import Any, Mapping

from ..db.predicates import MISSING, resolve_column


def row_value(row: Mapping[str, Any], column: str) -> Any:
    """Read ``column`` from ``row``, accepting a camelCase key as well.

    Returns ``None`` when the row has neither form of the column.
    """
    value = resolve_column(row, column)
    return None if value is MISSING else value
