from __future__ import annotations

from collections.abc import Iterable

from ..models.cell import Cell, CellKind
from ..models.report import REASON_MISSING, REASON_TYPE_MISMATCH, BadCell

"""Bad-cell detection.

A cell is bad when it is missing (the empty sentinel) or when its kind differs
from the column's inferred type. In a boolean column, Number cells equal to
0 or 1 are exempt from the kind comparison.
"""

__all__ = [
    "classify_cell",
    "detect_bad_cells",
]


def classify_cell(cell: Cell, inferred_type: str) -> str | None:
    """Return the bad-cell reason for cell, or None when the cell is fine."""
    if cell.is_missing:
        return REASON_MISSING
    if cell.kind.value == inferred_type:
        return None
    if inferred_type == CellKind.BOOLEAN.value and cell.is_zero_or_one:
        return None
    return REASON_TYPE_MISMATCH


def detect_bad_cells(
    column: str, inferred_type: str, cells: Iterable[tuple[int, Cell]]
) -> list[BadCell]:
    """Flag every missing or type-mismatched cell of one column.

    Args:
        column: Column name recorded on each BadCell
        inferred_type: The column's inferred type tag
        cells: (row_index, cell) pairs in row order, missing cells included

    Returns:
        BadCells in row order. Its length is the column's type_mismatch_count.
    """
    bad: list[BadCell] = []
    for row_index, cell in cells:
        reason = classify_cell(cell, inferred_type)
        if reason is not None:
            bad.append(BadCell(column=column, row_index=row_index, value=cell.value, reason=reason))
    return bad
