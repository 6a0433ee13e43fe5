from __future__ import annotations

import logging

from sfmap.core.adapters.session import SnowflakeSession
from sfmap.core.identifiers import quote_identifier
from sfmap.core.decode import Row, get_str
from sfmap.core.models import DatabaseInfo, WarehouseInfo

logger = logging.getLogger(__name__)

_COLUMNS_SQL = """\
SELECT table_schema, table_name, column_name, data_type,
       is_nullable, character_maximum_length, numeric_precision, numeric_scale
FROM {database}.information_schema.columns
ORDER BY table_schema, table_name, ordinal_position"""


class SnowflakeCatalogAdapter:
    """Adapter issuing the catalog metadata queries against a Snowflake session."""

    def __init__(self, session: SnowflakeSession) -> None:
        self.session = session

    def list_databases(self) -> list[DatabaseInfo]:
        """List all databases visible to the active role."""
        rows = self.session.execute("SHOW DATABASES", intent="Failed to list databases")
        out = [
            DatabaseInfo(
                name=get_str(r, "name"),
                created_on=get_str(r, "created_on"),
                owner=get_str(r, "owner"),
            )
            for r in rows
        ]
        logger.info("Found %d databases", len(out))
        return out

    def list_warehouses(self) -> list[WarehouseInfo]:
        """List all warehouses visible to the active role."""
        rows = self.session.execute("SHOW WAREHOUSES", intent="Failed to list warehouses")
        out = [
            WarehouseInfo(
                name=get_str(r, "name"),
                size=get_str(r, "size"),
                state=get_str(r, "state"),
                type=get_str(r, "type"),
            )
            for r in rows
        ]
        logger.info("Found %d warehouses", len(out))
        return out

    def list_columns(self, database: str) -> list[Row]:
        """
        Return raw column rows for every table in `database`.

        Rows are ordered by schema, table and ordinal position; grouping
        in `sfmap.core.schema` relies on that order.
        """
        sql = _COLUMNS_SQL.format(database=quote_identifier(database))
        return self.session.execute(
            sql, intent=f"Failed to get tables for database {database}"
        )

    def use_warehouse(self, name: str) -> None:
        self.session.use_warehouse(name)

    def use_role(self, name: str) -> None:
        self.session.use_role(name)
