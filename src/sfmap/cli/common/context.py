"""Application context management for the CLI."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from sfmap.cli.common.exits import abort
from sfmap.cli.common.output import out
from sfmap.core.adapters.catalog import SnowflakeCatalogAdapter
from sfmap.core.adapters.session import SnowflakeSession
from sfmap.core.config import SnowflakeConfig, load_config
from sfmap.core.errors import MapperError
from sfmap.core.retry import RetryPolicy
from sfmap.core.warehouse import prepare_session


@dataclass
class MapperAppContext:
    """Application context holding the Snowflake session and catalog adapter."""

    config: SnowflakeConfig
    session: SnowflakeSession
    adapter: SnowflakeCatalogAdapter
    warehouse: str


@contextmanager
def mapper_context(
    fallback_warehouse: str, retry: RetryPolicy
) -> Iterator[MapperAppContext]:
    """
    Build the application context and close the session afterwards.

    Loads configuration from the environment, connects, selects the
    warehouse (falling back to `fallback_warehouse` if needed) and
    activates the configured role. Listing warehouses follows `retry`.
    """
    try:
        config = load_config()
    except MapperError as exc:
        abort(exc)

    session = SnowflakeSession(config)
    adapter = SnowflakeCatalogAdapter(session)
    try:
        try:
            with out.status("Connecting to Snowflake..."):
                session.connect()
                warehouse = prepare_session(
                    adapter,
                    warehouse=config.warehouse,
                    fallback_warehouse=fallback_warehouse,
                    role=config.role,
                    retry=retry,
                )
        except MapperError as exc:
            abort(exc)

        yield MapperAppContext(
            config=config, session=session, adapter=adapter, warehouse=warehouse
        )
    finally:
        session.close()
