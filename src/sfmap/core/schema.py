"""Grouping of column rows into table documents.

`information_schema.columns` rows arrive sorted by schema, table and
ordinal position. `aggregate_tables` folds that stream into one
`TableInfo` per contiguous `(schema, table)` run in a single pass.
"""

from __future__ import annotations

from typing import Iterable

from sfmap.core.decode import Row, get_int, get_str, get_yes_no
from sfmap.core.errors import QueryError
from sfmap.core.models import ColumnInfo, TableInfo


def decode_column(row: Row) -> ColumnInfo:
    """Decode the column part of one `information_schema.columns` row."""
    return ColumnInfo(
        name=get_str(row, "column_name"),
        data_type=get_str(row, "data_type"),
        is_nullable=get_yes_no(row, "is_nullable"),
        character_maximum_length=get_int(row, "character_maximum_length"),
        numeric_precision=get_int(row, "numeric_precision"),
        numeric_scale=get_int(row, "numeric_scale"),
    )


def aggregate_tables(database: str, rows: Iterable[Row]) -> list[TableInfo]:
    """
    Group ordered column rows into tables.

    A new table starts whenever the `(table_schema, table_name)` key
    differs from the current one. `database_name` is always the
    `database` argument, never read from the rows.

    Args:
        database: Database the rows were read from.
        rows: Column rows ordered by schema, table, ordinal position.

    Returns:
        Tables in first-appearance order; empty if `rows` is empty.

    Raises:
        ColumnError: If a row field cannot be decoded.
        QueryError: If a table's rows are not contiguous in the stream.
    """
    tables: list[TableInfo] = []
    closed: set[tuple[str, str]] = set()
    current: TableInfo | None = None

    for row in rows:
        key = (get_str(row, "table_schema"), get_str(row, "table_name"))

        if current is None or current.key != key:
            if current is not None:
                tables.append(current)
                closed.add(current.key)
            if key in closed:
                raise QueryError(
                    f"column rows for database {database} are not ordered: "
                    f"table {key[0]}.{key[1]} appears in more than one run"
                )
            current = TableInfo(
                database_name=database,
                schema_name=key[0],
                table_name=key[1],
            )

        current.columns.append(decode_column(row))

    if current is not None:
        tables.append(current)

    return tables
