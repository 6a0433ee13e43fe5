"""Field decoders for Snowflake result rows.

Rows are mappings from column name to value as returned by a `DictCursor`.
`SHOW` commands return lowercase keys while `information_schema` queries
return uppercase keys, so lookups are case-insensitive.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping

from sfmap.core.errors import ColumnError

Row = Mapping[str, Any]


def _lookup(row: Row, column: str) -> Any:
    """Return the raw value for `column`, raising ColumnError if absent."""
    for key in (column, column.upper(), column.lower()):
        if key in row:
            return row[key]
    wanted = column.lower()
    for key, value in row.items():
        if str(key).lower() == wanted:
            return value
    raise ColumnError(column, "column not present in result row")


def get_str(row: Row, column: str) -> str:
    """Decode a text field; NULL becomes an empty string."""
    value = _lookup(row, column)
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def get_int(row: Row, column: str) -> int | None:
    """
    Decode an optional integer field.

    NULL or an empty string decodes to None. Anything else must be an
    integer value (or text that parses as one).

    Raises:
        ColumnError: If the value cannot be read as an integer.
    """
    value = _lookup(row, column)
    if value is None:
        return None
    if isinstance(value, bool):
        raise ColumnError(column, f"Failed to parse as integer: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, (Decimal, float)):
        try:
            as_int = int(value)
        except (ValueError, OverflowError) as exc:
            raise ColumnError(column, f"Failed to parse as integer: {exc}") from exc
        if value != as_int:
            raise ColumnError(column, f"Failed to parse as integer: {value!r}")
        return as_int

    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError as exc:
        raise ColumnError(column, f"Failed to parse as integer: {exc}") from exc


def get_yes_no(row: Row, column: str) -> bool:
    """Decode a YES/NO flag; only a case-insensitive 'YES' is true."""
    return get_str(row, column).upper() == "YES"
