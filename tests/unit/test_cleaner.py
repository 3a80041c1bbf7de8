from __future__ import annotations

import math

import pytest

from dqaudit.models.cell import EMPTY, Cell, CellKind
from dqaudit.tabular.cleaner import clean_table, is_blank, to_cell
from dqaudit.tabular.reader import ParsedTable


@pytest.mark.parametrize("value", [None, ""])
def test_blank_markers(value: object):
    assert is_blank(value)
    assert to_cell(value) is EMPTY


def test_nan_is_an_empty_cell_but_not_a_blank_marker():
    assert not is_blank(math.nan)
    assert to_cell(math.nan) is EMPTY


def test_clean_keeps_row_of_nan_values():
    table = ParsedTable(columns=["a", "b"], rows=[[math.nan, math.nan], [1, "x"]])
    ds = clean_table(table)
    assert len(ds) == 2
    assert ds.records[0].cells == (EMPTY, EMPTY)
    assert ds.records[1].row_index == 1


@pytest.mark.parametrize("value", [{"k": 1}, [1, 2], (1,), {1}, object()])
def test_non_primitive_values_become_empty(value: object):
    assert to_cell(value) is EMPTY


def test_primitives_pass_through():
    assert to_cell(3) == Cell.number(3)
    assert to_cell(2.5) == Cell.number(2.5)
    assert to_cell(True) == Cell.boolean(True)
    assert to_cell("x") == Cell.string("x")
    # bool は Number ではなく Boolean
    assert to_cell(False).kind is CellKind.BOOLEAN


def test_clean_drops_fully_empty_rows_and_renumbers():
    table = ParsedTable(
        columns=["a", "b"],
        rows=[[1, "x"], [None, None], ["", None], [2, None]],
    )
    ds = clean_table(table)
    assert ds.columns == ("a", "b")
    assert len(ds) == 2
    assert [r.row_index for r in ds.records] == [0, 1]
    assert [r.source_row for r in ds.records] == [1, 4]
    assert ds.records[1].get("b") is EMPTY


def test_clean_keeps_row_with_only_object_value():
    # オブジェクト値は空ではないので行は残り、セルは空に正規化される
    table = ParsedTable(columns=["a"], rows=[[{"k": 1}]])
    ds = clean_table(table)
    assert len(ds) == 1
    assert ds.records[0].cells == (EMPTY,)


def test_clean_preserves_duplicate_columns():
    table = ParsedTable(columns=["a", "a"], rows=[[1, 2]])
    ds = clean_table(table)
    assert ds.columns == ("a", "a")
    assert ds.records[0].cells == (Cell.number(1), Cell.number(2))
    assert ds.records[0].get("a") == Cell.number(1)


def test_record_get_unknown_column():
    ds = clean_table(ParsedTable(columns=["a"], rows=[[1]]))
    with pytest.raises(KeyError):
        ds.records[0].get("missing")


def test_column_cells_yields_row_indexes():
    ds = clean_table(ParsedTable(columns=["a", "b"], rows=[[1, "x"], [None, None], [2, "y"]]))
    assert list(ds.column_cells(1)) == [(0, Cell.string("x")), (1, Cell.string("y"))]
