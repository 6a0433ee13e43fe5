"""Common CLI options for the CLI."""

from pathlib import Path

import typer

from sfmap.core.config import DEFAULT_FALLBACK_WAREHOUSE

DatabasesOpt = typer.Option(
    None,
    "--databases",
    "-d",
    help="Databases to process (comma-separated, reusable). Default: all accessible.",
    show_default=False,
)

OutputDirOpt = typer.Option(
    Path("output"),
    "--output-dir",
    "-o",
    help="Output directory for the JSON files",
)

RetriesOpt = typer.Option(
    3,
    "--retries",
    "-r",
    min=0,
    help="Number of retries for failed operations",
)

RetryDelayOpt = typer.Option(
    5.0,
    "--retry-delay",
    min=0.0,
    help="Delay in seconds between retries",
)

SkipFailedOpt = typer.Option(
    False,
    "--skip-failed-tables",
    help="Skip databases that fail to process instead of aborting",
)

FallbackWarehouseOpt = typer.Option(
    DEFAULT_FALLBACK_WAREHOUSE,
    "--fallback-warehouse",
    envvar="SNOWFLAKE_FALLBACK_WAREHOUSE",
    help="Warehouse to use when SNOWFLAKE_WAREHOUSE does not exist",
)

WriteCatalogOpt = typer.Option(
    False,
    "--write-catalog",
    help="Also write warehouses.json and databases.json to the output directory",
)

DebugOpt = typer.Option(
    False,
    "--debug",
    help="Enable debug logging (includes executed SQL)",
)
