from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Import the local src tree rather than an installed copy.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))


@pytest.fixture
def column_row():
    """Factory for `information_schema.columns` rows as a DictCursor returns them."""

    def _make(schema: str, table: str, column: str, **overrides):
        row = {
            "TABLE_SCHEMA": schema,
            "TABLE_NAME": table,
            "COLUMN_NAME": column,
            "DATA_TYPE": "TEXT",
            "IS_NULLABLE": "YES",
            "CHARACTER_MAXIMUM_LENGTH": 16777216,
            "NUMERIC_PRECISION": None,
            "NUMERIC_SCALE": None,
        }
        row.update(overrides)
        return row

    return _make
