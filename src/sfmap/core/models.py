"""Core domain models for the Snowflake catalog.

These models represent catalog entities in a simple form, free of
connector types and UI/CLI concerns. Every model serializes to a plain
JSON-compatible dict via `to_dict`.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class DatabaseInfo:
    """One database as reported by `SHOW DATABASES`."""

    name: str
    created_on: str = ""
    owner: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class WarehouseInfo:
    """One compute warehouse as reported by `SHOW WAREHOUSES`."""

    name: str
    size: str = ""
    state: str = ""
    type: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ColumnInfo:
    """
    Column metadata from `information_schema.columns`.

    Attributes:
        name: Column name.
        data_type: Snowflake data type (e.g. TEXT, NUMBER).
        is_nullable: True if the column accepts NULL values.
        character_maximum_length: Max length for character types, else None.
        numeric_precision: Precision for numeric types, else None.
        numeric_scale: Scale for numeric types, else None.
    """

    name: str
    data_type: str
    is_nullable: bool
    character_maximum_length: int | None = None
    numeric_precision: int | None = None
    numeric_scale: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class TableInfo:
    """
    A table and its columns in ordinal order.

    Built incrementally while grouping column rows, so `columns` is a
    mutable list until the table is handed to the writer.
    """

    database_name: str
    schema_name: str
    table_name: str
    columns: list[ColumnInfo] = field(default_factory=list)

    @property
    def key(self) -> tuple[str, str]:
        """Grouping key `(schema_name, table_name)`."""
        return self.schema_name, self.table_name

    @property
    def full_name(self) -> str:
        return f"{self.database_name}.{self.schema_name}.{self.table_name}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "database_name": self.database_name,
            "schema_name": self.schema_name,
            "table_name": self.table_name,
            "columns": [c.to_dict() for c in self.columns],
        }
