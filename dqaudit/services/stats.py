from __future__ import annotations

import math
import statistics
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from ..models.cell import Cell, CellKind
from ..models.report import NOT_APPLICABLE, ColumnStat

"""Per-column descriptive statistics.

Two uniqueness rules coexist on purpose:
- count_unique_as_text: non-number columns, values compared by their text
  form, so 1, 1.0 and "1" are one value.
- count_unique_exact: number columns, values compared by numeric equality
  within a kind, so 1 and 1.0 are one value but Boolean true and 1 are two.

The median is the element at index n // 2 of the sorted values, i.e. the
upper-middle element for even n. Reports produced by earlier versions of the
tool rely on this.
"""

__all__ = [
    "compute_column_stats",
    "count_unique_as_text",
    "count_unique_exact",
    "format_mean",
    "upper_median",
]

MEAN_DIGITS = 2


def count_unique_as_text(cells: Sequence[Cell]) -> int:
    """Distinct text forms among present cells."""
    return len({c.as_text() for c in cells if not c.is_missing})


def count_unique_exact(cells: Sequence[Cell]) -> int:
    """Distinct (kind, numeric value) pairs among cells with a numeric reading."""
    seen = set()
    for c in cells:
        if c.is_missing:
            continue
        n = c.as_number()
        if n is not None:
            seen.add((c.kind, n))
    return len(seen)


def upper_median(values: Sequence[int | float]) -> int | float:
    """Element at index n // 2 after an ascending sort."""
    ordered = sorted(values)
    return ordered[len(ordered) // 2]


def _quantize_at(value: Decimal, exponent: int) -> Decimal:
    step = Decimal(1).scaleb(exponent - MEAN_DIGITS)
    return value.quantize(step, rounding=ROUND_HALF_UP)


def format_mean(value: float) -> str:
    """Normalized scientific notation with 2 fractional digits.

    The exponent carries its sign and no zero padding: 12.5 -> "1.25e+1",
    0.05 -> "5.00e-2". Ties on the exact binary value round away from zero
    (1.125 -> "1.13e+0"), as JavaScript's toExponential does.
    """
    if not math.isfinite(value):
        return str(value)
    exact = Decimal(value)
    if exact.is_zero():
        return f"{0:.{MEAN_DIGITS}f}e+0"
    exp = exact.adjusted()
    rounded = _quantize_at(exact, exp)
    # 9.999 -> 10.00 のように桁が繰り上がった場合は指数を 1 つ上げて丸め直す
    if rounded.adjusted() > exp:
        exp += 1
        rounded = _quantize_at(exact, exp)
    mantissa = rounded.scaleb(-exp)
    sign = "+" if exp >= 0 else "-"
    return f"{mantissa:.{MEAN_DIGITS}f}e{sign}{abs(exp)}"


def compute_column_stats(
    column: str, inferred_type: str, cells: Sequence[Cell], type_mismatch_count: int = 0
) -> ColumnStat:
    """Compute the ColumnStat for one column.

    Args:
        column: Column name
        inferred_type: Tag returned by infer_type
        cells: All cells of the column in row order, missing ones included
        type_mismatch_count: Number of bad cells detected for the column

    Returns:
        ColumnStat; mean/median/min/max are NOT_APPLICABLE unless the column
        is numeric and has at least one numeric value.
    """
    nan_count = sum(1 for c in cells if c.is_missing)

    numeric: list[int | float] = []
    if inferred_type == CellKind.NUMBER.value:
        for c in cells:
            if c.is_missing:
                continue
            n = c.as_number()
            if n is not None:
                numeric.append(n)

    if not numeric:
        return ColumnStat(
            column=column,
            inferred_type=inferred_type,
            mean=NOT_APPLICABLE,
            median=NOT_APPLICABLE,
            min=NOT_APPLICABLE,
            max=NOT_APPLICABLE,
            unique_count=count_unique_as_text(cells),
            nan_count=nan_count,
            type_mismatch_count=type_mismatch_count,
        )

    return ColumnStat(
        column=column,
        inferred_type=inferred_type,
        mean=format_mean(statistics.fmean(numeric)),
        median=upper_median(numeric),
        min=min(numeric),
        max=max(numeric),
        unique_count=count_unique_exact(cells),
        nan_count=nan_count,
        type_mismatch_count=type_mismatch_count,
    )
