from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

import snowflake.connector
from snowflake.connector import DictCursor
from snowflake.connector.errors import Error as SnowflakeError

from sfmap.core.config import SnowflakeConfig
from sfmap.core.errors import QueryError, SnowflakeConnectionError
from sfmap.core.identifiers import normalize_identifier, quote_identifier

logger = logging.getLogger(__name__)


class SnowflakeSession:
    """Owns a single lazily-established Snowflake connection."""

    def __init__(
        self,
        config: SnowflakeConfig,
        *,
        connect: Callable[..., Any] = snowflake.connector.connect,
    ) -> None:
        self.config = config
        self._connect = connect
        self._connection: Any | None = None

    @property
    def connected(self) -> bool:
        return self._connection is not None

    def connect(self) -> None:
        """Open the connection unless one is already open."""
        if self._connection is not None:
            return

        cfg = self.config
        logger.info("Connecting to Snowflake account %s as %s", cfg.account, cfg.username)
        try:
            connection = self._connect(
                account=cfg.account,
                user=cfg.username,
                password=cfg.password,
                warehouse=cfg.warehouse,
                database=cfg.database,
                role=cfg.role,
                login_timeout=cfg.timeout,
                network_timeout=cfg.timeout,
            )
        except (SnowflakeError, OSError) as exc:
            raise SnowflakeConnectionError(str(exc)) from exc

        self._connection = connection
        logger.info("Connected to Snowflake")

    def execute(
        self,
        sql: str,
        params: Mapping[str, Any] | None = None,
        *,
        intent: str,
    ) -> list[dict[str, Any]]:
        """
        Run one statement and return its rows as dicts.

        Args:
            sql: Statement text (pyformat placeholders allowed).
            params: Optional bind parameters.
            intent: Short description used in error messages.

        Raises:
            SnowflakeConnectionError: If connecting fails.
            QueryError: If the statement fails.
        """
        self.connect()
        logger.debug("Executing query: %s", sql)
        try:
            cursor = self._connection.cursor(DictCursor)
            try:
                cursor.execute(sql, params)
                rows = cursor.fetchall()
            finally:
                cursor.close()
        except (SnowflakeError, OSError) as exc:
            raise QueryError(f"{intent}: {exc}") from exc

        logger.debug("Rows returned: %d", len(rows))
        return list(rows)

    def use_warehouse(self, name: str) -> None:
        """Make `name` the active warehouse for this session."""
        self.execute(
            f"USE WAREHOUSE {quote_identifier(normalize_identifier(name))}",
            intent=f"Failed to set warehouse {name}",
        )
        logger.info("Active warehouse: %s", name)

    def use_role(self, name: str) -> None:
        """Make `name` the active role for this session."""
        self.execute(
            f"USE ROLE {quote_identifier(normalize_identifier(name))}",
            intent=f"Failed to set role {name}",
        )
        logger.info("Active role: %s", name)

    def close(self) -> None:
        """Close the connection if open; the session can reconnect afterwards."""
        if self._connection is None:
            return
        connection, self._connection = self._connection, None
        try:
            connection.close()
        except (SnowflakeError, OSError) as exc:
            logger.warning("Error while closing Snowflake connection: %s", exc)
        else:
            logger.info("Disconnected from Snowflake")

    def __enter__(self) -> "SnowflakeSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
