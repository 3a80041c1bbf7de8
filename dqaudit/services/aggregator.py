from __future__ import annotations

from collections.abc import Iterable

from ..models.report import BadCell, ColumnStat, Report

"""Report aggregation.

Combines the per-column statistics and the flat bad-cell list into a Report.
A row is valid when no column flagged it; a row flagged by several columns is
counted once.
"""


def build_report(
    column_stats: Iterable[ColumnStat], bad_cells: Iterable[BadCell], total_rows: int
) -> Report:
    """Build the final Report.

    Args:
        column_stats: One ColumnStat per column, in input column order
        bad_cells: Every BadCell of every column
        total_rows: Row count of the cleaned dataset

    Returns:
        Report with valid_rows = total_rows - distinct flagged rows
    """
    stats = tuple(column_stats)
    bad = tuple(bad_cells)
    invalid_rows = {b.row_index for b in bad}
    return Report(
        column_stats=stats,
        bad_cells=bad,
        total_rows=total_rows,
        valid_rows=total_rows - len(invalid_rows),
    )
