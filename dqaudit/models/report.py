from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any, Union

"""Report models for the data-quality audit pipeline.

ColumnStat holds the descriptive statistics of one column, BadCell flags one
missing or type-inconsistent cell, and Report ties them together with the
row accounting.
"""

__all__ = [
    "NOT_APPLICABLE",
    "REASON_MISSING",
    "REASON_TYPE_MISMATCH",
    "ColumnStat",
    "BadCell",
    "Report",
]

# Placeholder for statistics that do not apply to non-numeric columns
NOT_APPLICABLE = "N/A"

REASON_MISSING = "missing"
REASON_TYPE_MISMATCH = "type_mismatch"

StatValue = Union[int, float, str]


@dataclass(frozen=True)
class ColumnStat:
    """Per-column statistics.

    mean is pre-formatted in scientific notation; median/min/max stay raw
    numbers. All four are NOT_APPLICABLE unless the column infers as number.
    """
    column: str
    inferred_type: str  # number / boolean / string
    mean: str
    median: StatValue
    min: StatValue
    max: StatValue
    unique_count: int
    nan_count: int  # 欠損セル数
    type_mismatch_count: int  # 欠損 + 型不一致の合計


@dataclass(frozen=True)
class BadCell:
    """A missing or type-inconsistent cell, identified by column and row."""
    column: str
    row_index: int  # 0-based, post-drop
    value: Any  # raw cell value ("" when missing)
    reason: str = REASON_TYPE_MISMATCH

    @property
    def is_missing(self) -> bool:
        return self.reason == REASON_MISSING


@dataclass(frozen=True)
class Report:
    """Final audit result for one dataset."""
    column_stats: tuple[ColumnStat, ...]
    bad_cells: tuple[BadCell, ...]
    total_rows: int  # rows after cleaning
    valid_rows: int  # rows without any bad cell

    @property
    def invalid_row_indexes(self) -> set[int]:
        return {b.row_index for b in self.bad_cells}

    @property
    def is_clean(self) -> bool:
        return not self.bad_cells

    def to_dict(self) -> dict[str, Any]:
        return {
            "column_stats": [asdict(s) for s in self.column_stats],
            "bad_cells": [asdict(b) for b in self.bad_cells],
            "total_rows": self.total_rows,
            "valid_rows": self.valid_rows,
        }

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize the report. Key order is fixed, so equal reports give equal text."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)
