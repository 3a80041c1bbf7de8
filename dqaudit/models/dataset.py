from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from .cell import Cell

"""Record and Dataset models for the data-quality audit pipeline.

A Record is one cleaned row. Its row_index is the position after fully-empty
rows have been dropped and is the identifier used by every later stage.
"""

__all__ = [
    "Record",
    "Dataset",
]


@dataclass(frozen=True)
class Record:
    """Logical representation of a single row after cleaning.

    cells is aligned with Dataset.columns, so duplicate column names keep one
    cell each.
    """
    row_index: int  # 0-based, post-drop position
    columns: tuple[str, ...]
    cells: tuple[Cell, ...]
    source_row: int | None = None  # 1-based data row in the input (before drop)

    def get(self, column: str) -> Cell:
        """Return the first cell stored under column."""
        try:
            return self.cells[self.columns.index(column)]
        except ValueError:
            raise KeyError(column) from None

    def as_dict(self) -> dict[str, Any]:
        """Column -> raw value. Duplicate column names collapse (last wins)."""
        return {col: cell.value for col, cell in zip(self.columns, self.cells)}


@dataclass(frozen=True)
class Dataset:
    """Ordered cleaned records sharing one fixed ordered column set."""
    columns: tuple[str, ...]
    records: tuple[Record, ...] = ()

    def __len__(self) -> int:
        return len(self.records)

    def column_cells(self, index: int) -> Iterator[tuple[int, Cell]]:
        """Yield (row_index, cell) for the column at position index."""
        for record in self.records:
            yield record.row_index, record.cells[index]

    def head(self, n: int) -> list[dict[str, Any]]:
        return [r.as_dict() for r in self.records[:n]]
