from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

"""Cell variant for the data-quality audit pipeline.

Every field of a cleaned record is one of four kinds: Number, Boolean, String
or Empty. Type inference and bad-cell detection compare the kind tag directly
instead of inspecting Python runtime types.
"""

__all__ = [
    "CellKind",
    "Cell",
    "EMPTY",
    "EMPTY_SENTINEL",
    "NUMERIC_PATTERN",
    "parse_number",
]

# Canonical representation of a missing value after cleaning
EMPTY_SENTINEL = ""

# Integer / decimal literal grammar (optional minus, optional exponent)
NUMERIC_PATTERN = re.compile(r"^\s*-?(\d+\.?|\.\d+|\d+\.\d+)([eE][-+]?\d+)?\s*$")

Scalar = Union[int, float, bool, str]


class CellKind(Enum):
    """Kind tag of a cell.

    NUMBER / BOOLEAN / STRING double as column type tags; EMPTY never does.
    """
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING = "string"
    EMPTY = "empty"


@dataclass(frozen=True)
class Cell:
    """A single cleaned field value."""
    kind: CellKind
    value: Scalar

    @classmethod
    def number(cls, value: int | float) -> Cell:
        return cls(CellKind.NUMBER, value)

    @classmethod
    def boolean(cls, value: bool) -> Cell:
        return cls(CellKind.BOOLEAN, bool(value))

    @classmethod
    def string(cls, value: str) -> Cell:
        # 空文字は欠損として扱う
        if value == EMPTY_SENTINEL:
            return EMPTY
        return cls(CellKind.STRING, value)

    @property
    def is_missing(self) -> bool:
        return self.kind is CellKind.EMPTY

    @property
    def is_zero_or_one(self) -> bool:
        """True for a Number cell whose value is exactly 0 or 1."""
        return self.kind is CellKind.NUMBER and self.value in (0, 1)

    def as_text(self) -> str:
        """String coercion used for text-based uniqueness counting.

        Integral numbers drop their fractional part (1.0 -> "1") and booleans
        render as lowercase literals, so "1", 1 and 1.0 collapse to one value.
        """
        if self.kind is CellKind.NUMBER:
            return _number_text(self.value)  # type: ignore[arg-type]
        if self.kind is CellKind.BOOLEAN:
            return "true" if self.value else "false"
        return str(self.value)

    def as_number(self) -> int | float | None:
        """Numeric reading of the cell, or None when it has none.

        Booleans read as 0/1; strings are read only when they match the
        numeric literal grammar and parse to a finite value.
        """
        if self.kind is CellKind.NUMBER:
            return self.value  # type: ignore[return-value]
        if self.kind is CellKind.BOOLEAN:
            return int(bool(self.value))
        if self.kind is CellKind.STRING and NUMERIC_PATTERN.match(str(self.value)):
            n = parse_number(str(self.value))
            return n if math.isfinite(n) else None
        return None


EMPTY = Cell(CellKind.EMPTY, EMPTY_SENTINEL)


def parse_number(token: str) -> int | float:
    """Parse a token already known to match NUMERIC_PATTERN."""
    stripped = token.strip()
    if "." in stripped or "e" in stripped or "E" in stripped:
        return float(stripped)
    return int(stripped)


def _number_text(value: int | float) -> str:
    if isinstance(value, float):
        if math.isfinite(value) and value == int(value):
            return str(int(value))
        return repr(value)
    return str(value)
