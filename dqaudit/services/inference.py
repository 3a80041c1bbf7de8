from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from ..models.cell import Cell, CellKind

"""Column type inference.

Rules, in order:
1. Every present cell is a Number equal to 0 or 1 -> "boolean".
2. Otherwise the kind with the highest count among present cells wins;
   on a tie the kind seen first in column order wins.
3. No present cells -> "string".

Missing cells never take part.
"""

__all__ = [
    "DEFAULT_TYPE",
    "infer_type",
]

DEFAULT_TYPE = CellKind.STRING.value


def infer_type(cells: Iterable[Cell]) -> str:
    """Return the inferred type tag ("number", "boolean" or "string") of a column."""
    present = [c for c in cells if not c.is_missing]
    if not present:
        return DEFAULT_TYPE

    if all(c.is_zero_or_one for c in present):
        return CellKind.BOOLEAN.value

    # Counter は挿入順を保持するので max() は同数なら先に出現した型を返す
    counts = Counter(c.kind for c in present)
    majority = max(counts, key=lambda kind: counts[kind])
    return majority.value
