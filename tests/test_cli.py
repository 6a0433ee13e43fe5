from contextlib import contextmanager
from types import SimpleNamespace

import pytest
from typer.testing import CliRunner

from sfmap.cli import cli as cli_module
from sfmap.cli.commands import mapping
from sfmap.cli.commands.mapping import split_names
from sfmap.cli.common.progress import _truncate
from sfmap.core.errors import QueryError
from sfmap.core.models import DatabaseInfo, WarehouseInfo

runner = CliRunner()

_ENV_VARS = [
    "SNOWFLAKE_ACCOUNT",
    "SNOWFLAKE_USERNAME",
    "SNOWFLAKE_PASSWORD",
    "SNOWFLAKE_WAREHOUSE",
]


class _Adapter:
    def __init__(self, failing: set[str] = frozenset()):
        self.failing = failing

    def list_databases(self):
        return [DatabaseInfo(name="A"), DatabaseInfo(name="B"), DatabaseInfo(name="C")]

    def list_warehouses(self):
        return [WarehouseInfo(name="COMPUTE_WH")]

    def list_columns(self, database: str):
        if database in self.failing:
            raise QueryError(f"Failed to get tables for database {database}: denied")
        return [
            {
                "TABLE_SCHEMA": "PUBLIC",
                "TABLE_NAME": "T",
                "COLUMN_NAME": "ID",
                "DATA_TYPE": "NUMBER",
                "IS_NULLABLE": "NO",
                "CHARACTER_MAXIMUM_LENGTH": None,
                "NUMERIC_PRECISION": 38,
                "NUMERIC_SCALE": 0,
            }
        ]


@pytest.fixture
def fake_context(monkeypatch):
    def _install(adapter):
        @contextmanager
        def _ctx(fallback_warehouse: str, retry):
            yield SimpleNamespace(adapter=adapter, warehouse="COMPUTE_WH")

        monkeypatch.setattr(mapping, "mapper_context", _ctx)

    return _install


def test_split_names_flattens_comma_lists():
    assert split_names(["a,b", " c ", "", "d,,"]) == ["a", "b", "c", "d"]
    assert split_names(None) == []


def test_truncate_long_database_names():
    assert _truncate("x" * 50, 10) == "xxxxxxx..."
    assert _truncate("short", 10) == "short"


def test_map_fails_fast_on_missing_env_var(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    result = runner.invoke(cli_module.app, ["map"])

    assert result.exit_code == 1
    assert "SNOWFLAKE_ACCOUNT" in result.output


def test_map_skip_failed_writes_remaining_databases(fake_context, tmp_path):
    fake_context(_Adapter(failing={"B"}))

    result = runner.invoke(
        cli_module.app,
        ["map", "-d", "A,B,C", "-o", str(tmp_path), "-r", "0", "--skip-failed-tables"],
    )

    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in tmp_path.iterdir()) == ["A.json", "C.json"]


def test_map_without_skip_aborts_with_non_zero_exit(fake_context, tmp_path):
    fake_context(_Adapter(failing={"B"}))

    result = runner.invoke(
        cli_module.app,
        ["map", "--databases", "A,B,C", "--output-dir", str(tmp_path), "--retries", "0"],
    )

    assert result.exit_code == 1
    assert sorted(p.name for p in tmp_path.iterdir()) == ["A.json"]
    assert "Run aborted" in result.output


def test_map_all_databases_with_catalog_snapshot(fake_context, tmp_path):
    fake_context(_Adapter())

    result = runner.invoke(
        cli_module.app,
        ["map", "-o", str(tmp_path), "-r", "0", "--write-catalog"],
    )

    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in tmp_path.iterdir()) == [
        "A.json",
        "B.json",
        "C.json",
        "databases.json",
        "warehouses.json",
    ]


def test_map_rejects_negative_retries(tmp_path):
    result = runner.invoke(cli_module.app, ["map", "-r", "-1", "-o", str(tmp_path)])

    assert result.exit_code == 2
