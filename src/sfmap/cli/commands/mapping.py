"""Command mapping Snowflake databases to JSON artifacts."""

from __future__ import annotations

from pathlib import Path

from sfmap.cli.common.context import mapper_context
from sfmap.cli.common.exits import abort, warn_exit
from sfmap.cli.common.options import (
    DatabasesOpt,
    FallbackWarehouseOpt,
    OutputDirOpt,
    RetriesOpt,
    RetryDelayOpt,
    SkipFailedOpt,
    WriteCatalogOpt,
)
from sfmap.cli.common.output import out
from sfmap.cli.common.progress import database_progress
from sfmap.core.config import RunOptions
from sfmap.core.errors import MapperError
from sfmap.core.mapper import map_databases, resolve_databases, write_catalog_snapshot
from sfmap.core.retry import RetryPolicy


def split_names(values: list[str] | None) -> list[str]:
    """Flatten `-d a,b -d c` into `["a", "b", "c"]`, dropping blanks."""
    names: list[str] = []
    for value in values or []:
        names.extend(part.strip() for part in value.split(",") if part.strip())
    return names


def map_command(
    databases: list[str] | None = DatabasesOpt,
    output_dir: Path = OutputDirOpt,
    retries: int = RetriesOpt,
    retry_delay: float = RetryDelayOpt,
    skip_failed_tables: bool = SkipFailedOpt,
    fallback_warehouse: str = FallbackWarehouseOpt,
    write_catalog: bool = WriteCatalogOpt,
):
    """
    Fetch the schema of each database and write it to <output-dir>/<database>.json.
    """
    options = RunOptions(
        output_dir=output_dir,
        retry=RetryPolicy(max_retries=retries, delay=retry_delay),
        skip_failed=skip_failed_tables,
        fallback_warehouse=fallback_warehouse,
        write_catalog=write_catalog,
    )

    with mapper_context(fallback_warehouse, options.retry) as appctx:
        adapter = appctx.adapter

        try:
            with out.status("Loading databases..."):
                targets = resolve_databases(
                    adapter, split_names(databases), retry=options.retry
                )
        except MapperError as exc:
            abort(exc)

        if not targets:
            warn_exit("No databases found.", code=0)

        out.run_summary(
            "Mapping databases",
            {
                "Warehouse": appctx.warehouse,
                "Databases": len(targets),
                "Output": options.output_dir,
            },
        )

        try:
            if options.write_catalog:
                with out.status("Writing catalog snapshot..."):
                    write_catalog_snapshot(adapter, targets, options)
            with database_progress(len(targets)) as progress:
                report = map_databases(adapter, targets, options, progress=progress)
        except MapperError as exc:
            abort(exc, prefix="Run aborted")

    out.mapping_report_table(report)
    if report.skipped:
        out.warn(f"Skipped {len(report.skipped)} database(s) after errors.")
    out.success(f"Wrote {len(report.written)} of {report.total} database(s).")
