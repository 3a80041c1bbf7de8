from __future__ import annotations

import logging
import math
import numbers
from typing import Any

from ..models.cell import EMPTY, Cell
from ..models.dataset import Dataset, Record
from .reader import ParsedTable

"""Row cleaning.

Drops rows whose every field is missing and turns each remaining field into a
Cell. Surviving rows are renumbered so row_index is the post-drop position.
"""

__all__ = [
    "clean_table",
    "is_blank",
    "to_cell",
]

logger = logging.getLogger(__name__)


def is_blank(value: Any) -> bool:
    """True for the raw missing markers (None and the empty string).

    Only these make a row droppable; NaN is a value here and becomes an
    Empty cell in to_cell.
    """
    return value is None or (isinstance(value, str) and value == "")


def to_cell(value: Any) -> Cell:
    """Normalize one raw value into a Cell.

    None, "", NaN and any non-primitive value (dict, list, other objects)
    become the empty sentinel.
    """
    if is_blank(value) or (isinstance(value, float) and math.isnan(value)):
        return EMPTY
    # bool は int のサブクラスなので先に判定
    if isinstance(value, bool):
        return Cell.boolean(value)
    if isinstance(value, numbers.Integral):
        return Cell.number(int(value))
    if isinstance(value, numbers.Real):
        return Cell.number(float(value))
    if isinstance(value, str):
        return Cell.string(value)
    return EMPTY


def clean_table(table: ParsedTable) -> Dataset:
    """Clean a parsed table into a Dataset with the same column order."""
    columns = tuple(table.columns)
    records: list[Record] = []
    dropped = 0
    for source_row, raw in enumerate(table.rows, start=1):
        if all(is_blank(v) for v in raw):
            dropped += 1
            continue
        records.append(
            Record(
                row_index=len(records),
                columns=columns,
                cells=tuple(to_cell(v) for v in raw),
                source_row=source_row,
            )
        )
    if dropped:
        logger.debug(f"dropped {dropped} fully-empty row(s)")
    return Dataset(columns=columns, records=tuple(records))
