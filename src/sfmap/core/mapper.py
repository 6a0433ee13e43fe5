"""Run orchestration: map every target database to a JSON artifact.

Databases are processed strictly one at a time over a single session.
Catalog reads and artifact writes are wrapped in the run's retry policy.
A failing database either aborts the run or, with `skip_failed`, is
recorded in the report and skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Protocol

from sfmap.core.config import RunOptions
from sfmap.core.decode import Row
from sfmap.core.errors import MapperError
from sfmap.core.export import write_formatted_output
from sfmap.core.identifiers import normalize_identifier
from sfmap.core.models import DatabaseInfo, TableInfo, WarehouseInfo
from sfmap.core.retry import RetryPolicy, with_retry
from sfmap.core.schema import aggregate_tables

logger = logging.getLogger(__name__)


class CatalogAdapter(Protocol):
    """Interface for the catalog queries used by a mapping run."""

    def list_databases(self) -> list[DatabaseInfo]:
        """Return all databases visible to the current role."""
        ...

    def list_warehouses(self) -> list[WarehouseInfo]:
        """Return all warehouses visible to the current role."""
        ...

    def list_columns(self, database: str) -> list[Row]:
        """Return column rows ordered by schema, table, ordinal position."""
        ...


class ProgressReporter(Protocol):
    """Receives per-database progress notifications."""

    def start(self, database: str) -> None:
        ...

    def advance(self) -> None:
        ...


@dataclass
class MappingReport:
    """
    Outcome of a mapping run.

    Attributes:
        written: Database name -> artifact path, for databases written.
        skipped: Database name -> error message, for databases skipped.
    """

    written: dict[str, Path] = field(default_factory=dict)
    skipped: dict[str, str] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.written) + len(self.skipped)


def resolve_databases(
    adapter: CatalogAdapter,
    names: Iterable[str] | None,
    *,
    retry: RetryPolicy,
) -> list[DatabaseInfo]:
    """
    Return the databases to process.

    Explicit names become placeholder entries with empty metadata, in the
    given order and without duplicates. They are normalized the way
    Snowflake resolves unquoted identifiers (`sales` -> `SALES`, `"sales"`
    -> `sales`). Without names, the full catalog is listed.
    """
    if names:
        seen: list[str] = []
        for raw in names:
            name = normalize_identifier(raw)
            if name and name not in seen:
                seen.append(name)
        if seen:
            return [DatabaseInfo(name=n) for n in seen]

    return with_retry(adapter.list_databases, retry, description="list databases")


def fetch_tables(
    adapter: CatalogAdapter, database: str, *, retry: RetryPolicy
) -> list[TableInfo]:
    """Read and group the column rows of one database."""
    rows = with_retry(
        lambda: adapter.list_columns(database),
        retry,
        description=f"list columns of {database}",
    )
    return aggregate_tables(database, rows)


def write_catalog_snapshot(
    adapter: CatalogAdapter,
    databases: list[DatabaseInfo],
    options: RunOptions,
) -> None:
    """Write `warehouses.json` and `databases.json` into the output directory."""
    warehouses = with_retry(
        adapter.list_warehouses, options.retry, description="list warehouses"
    )
    for name, document in (("warehouses", warehouses), ("databases", databases)):
        path = options.output_dir / f"{name}.json"
        with_retry(
            lambda: write_formatted_output(path, document),
            options.retry,
            description=f"write {path}",
        )
        logger.info("Wrote %s", path)


def map_database(
    adapter: CatalogAdapter, database: str, options: RunOptions
) -> Path:
    """Fetch, group and write one database. Returns the artifact path."""
    tables = fetch_tables(adapter, database, retry=options.retry)
    path = options.output_path(database)
    with_retry(
        lambda: write_formatted_output(path, tables),
        options.retry,
        description=f"write {path}",
    )
    logger.info(
        "Processed database %s: %d tables, %d columns",
        database,
        len(tables),
        sum(len(t.columns) for t in tables),
    )
    return path


def map_databases(
    adapter: CatalogAdapter,
    databases: list[DatabaseInfo],
    options: RunOptions,
    *,
    progress: ProgressReporter | None = None,
) -> MappingReport:
    """
    Map each database in order.

    Raises:
        MapperError: The first per-database failure, unless
            `options.skip_failed` is set.
    """
    report = MappingReport()

    for db in databases:
        if progress is not None:
            progress.start(db.name)

        try:
            report.written[db.name] = map_database(adapter, db.name, options)
        except MapperError as exc:
            logger.error("Failed to process database %s: %s", db.name, exc)
            if not options.skip_failed:
                raise
            report.skipped[db.name] = str(exc)

        if progress is not None:
            progress.advance()

    return report
