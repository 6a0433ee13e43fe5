import pytest

from sfmap.core.errors import ColumnError, QueryError
from sfmap.core.schema import aggregate_tables


def test_aggregate_groups_contiguous_runs(column_row):
    rows = [
        column_row("S1", "T1", "A"),
        column_row("S1", "T1", "B"),
        column_row("S2", "T2", "C"),
    ]

    tables = aggregate_tables("DB", rows)

    assert [(t.schema_name, t.table_name) for t in tables] == [("S1", "T1"), ("S2", "T2")]
    assert [len(t.columns) for t in tables] == [2, 1]
    assert [c.name for c in tables[0].columns] == ["A", "B"]


def test_aggregate_empty_stream_yields_no_tables():
    assert aggregate_tables("DB", []) == []


def test_aggregate_uses_database_argument_not_row(column_row):
    rows = [column_row("S1", "T1", "A", TABLE_CATALOG="OTHER")]

    tables = aggregate_tables("SALES", rows)

    assert tables[0].database_name == "SALES"


def test_aggregate_preserves_counts_and_first_appearance_order(column_row):
    keys = [("A", "X"), ("A", "Y"), ("B", "X"), ("C", "Z")]
    rows = [
        column_row(schema, table, f"col{i}")
        for n, (schema, table) in enumerate(keys, start=1)
        for i in range(n)
    ]

    tables = aggregate_tables("DB", rows)

    assert [t.key for t in tables] == keys
    assert [len(t.columns) for t in tables] == [1, 2, 3, 4]
    assert sum(len(t.columns) for t in tables) == len(rows)


def test_aggregate_accepts_generators(column_row):
    rows = (column_row("S", "T", c) for c in "ABC")

    tables = aggregate_tables("DB", rows)

    assert [c.name for c in tables[0].columns] == ["A", "B", "C"]


def test_aggregate_same_table_name_in_different_schemas_is_split(column_row):
    rows = [column_row("S1", "T", "A"), column_row("S2", "T", "A")]

    tables = aggregate_tables("DB", rows)

    assert len(tables) == 2


def test_aggregate_rejects_unordered_rows(column_row):
    rows = [
        column_row("S1", "T1", "A"),
        column_row("S1", "T2", "B"),
        column_row("S1", "T1", "C"),
    ]

    with pytest.raises(QueryError, match="S1.T1"):
        aggregate_tables("DB", rows)


def test_aggregate_decodes_column_metadata(column_row):
    rows = [
        column_row(
            "S",
            "T",
            "AMOUNT",
            DATA_TYPE="NUMBER",
            IS_NULLABLE="NO",
            CHARACTER_MAXIMUM_LENGTH=None,
            NUMERIC_PRECISION="38",
            NUMERIC_SCALE="2",
        )
    ]

    column = aggregate_tables("DB", rows)[0].columns[0]

    assert column.data_type == "NUMBER"
    assert column.is_nullable is False
    assert column.character_maximum_length is None
    assert column.numeric_precision == 38
    assert column.numeric_scale == 2


def test_aggregate_propagates_decode_failures(column_row):
    rows = [column_row("S", "T", "A"), column_row("S", "T", "B", NUMERIC_SCALE="abc")]

    with pytest.raises(ColumnError, match="numeric_scale"):
        aggregate_tables("DB", rows)
