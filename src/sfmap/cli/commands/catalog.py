"""Commands listing Snowflake catalog objects."""

from __future__ import annotations

from sfmap.cli.common.context import mapper_context
from sfmap.cli.common.exits import abort, warn_exit
from sfmap.cli.common.options import FallbackWarehouseOpt, RetriesOpt, RetryDelayOpt
from sfmap.cli.common.output import out
from sfmap.core.errors import MapperError
from sfmap.core.retry import RetryPolicy, with_retry


def warehouses_command(
    fallback_warehouse: str = FallbackWarehouseOpt,
    retries: int = RetriesOpt,
    retry_delay: float = RetryDelayOpt,
):
    """List warehouses visible to the configured role."""
    retry = RetryPolicy(max_retries=retries, delay=retry_delay)
    with mapper_context(fallback_warehouse, retry) as appctx:
        try:
            with out.status("Loading warehouses..."):
                warehouses = with_retry(
                    appctx.adapter.list_warehouses, retry, description="list warehouses"
                )
        except MapperError as exc:
            abort(exc)

    if not warehouses:
        warn_exit("No warehouses found.", code=0)

    out.info(f"Active: {appctx.warehouse} | Warehouses: {len(warehouses)}")
    out.warehouses_table(warehouses)


def databases_command(
    fallback_warehouse: str = FallbackWarehouseOpt,
    retries: int = RetriesOpt,
    retry_delay: float = RetryDelayOpt,
):
    """List databases visible to the configured role."""
    retry = RetryPolicy(max_retries=retries, delay=retry_delay)
    with mapper_context(fallback_warehouse, retry) as appctx:
        try:
            with out.status("Loading databases..."):
                databases = with_retry(
                    appctx.adapter.list_databases, retry, description="list databases"
                )
        except MapperError as exc:
            abort(exc)

    if not databases:
        warn_exit("No databases found.", code=0)

    out.info(f"Databases: {len(databases)}")
    out.databases_table(databases)
