from __future__ import annotations

import csv
import io
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

import pandas as pd

from ..models.cell import NUMERIC_PATTERN, parse_number

"""Delimited text reader.

The first row is the header. Data tokens are coerced at parse time:
- numeric literals -> int / float
- true/TRUE/false/FALSE -> bool
- "" -> None (missing marker)
- anything else stays the original string

pandas does the tokenizing (quotes, delimiters). It pads short rows instead of
rejecting them, so field counts are verified per record with the csv module.
Malformed text (unterminated quote, ragged rows) raises ParseFailure; there is
no partial recovery.
"""

__all__ = [
    "AnalysisError",
    "ParseFailure",
    "ParsedTable",
    "coerce_token",
    "parse_csv_text",
    "parse_rows",
]

TRUE_LITERALS = frozenset({"true", "TRUE"})
FALSE_LITERALS = frozenset({"false", "FALSE"})

# Numeric literals beyond this magnitude (ints or floats) stay text
MAX_SAFE_INTEGER = 2**53 - 1


class AnalysisError(Exception):
    """Generic pipeline failure. diagnostic keeps the underlying message for logs."""

    error_type = "ANALYSIS_ERROR"

    def __init__(self, diagnostic: str) -> None:
        super().__init__(diagnostic)
        self.diagnostic = diagnostic


class ParseFailure(AnalysisError):
    """Raised when the input cannot be tokenized into a rectangular table."""

    error_type = "PARSE_FAILURE"


@dataclass
class ParsedTable:
    columns: list[str]
    rows: list[list[Any]]  # 列順に並んだ生値 (None = 欠損)


def coerce_token(token: str) -> Any:
    """Coerce one raw token to its literal value.

    Numeric tokens whose value is not finite or exceeds 2**53 in magnitude are
    returned unchanged.
    """
    if token == "":
        return None
    if token in TRUE_LITERALS:
        return True
    if token in FALSE_LITERALS:
        return False
    if NUMERIC_PATTERN.match(token):
        value = parse_number(token)
        # 範囲外 (inf を含む) の数値は元の文字列のまま
        if not math.isfinite(value) or abs(value) > MAX_SAFE_INTEGER:
            return token
        return value
    return token


def _is_blank_record(record: list[str]) -> bool:
    # read_csv(skip_blank_lines=True) と同じく空行・空白だけの行は数えない
    return not record or (len(record) == 1 and record[0].strip() == "")


def _check_field_counts(text: str, delimiter: str) -> None:
    """Raise ParseFailure when a data record's field count differs from the header's."""
    try:
        records = [
            r for r in csv.reader(io.StringIO(text), delimiter=delimiter)
            if not _is_blank_record(r)
        ]
    except csv.Error as e:
        raise ParseFailure(str(e)) from e
    if not records:
        return
    width = len(records[0])
    for n, record in enumerate(records[1:], start=1):
        if len(record) != width:
            raise ParseFailure(f"Expected {width} fields in record {n}, saw {len(record)}")


def parse_csv_text(text: str, delimiter: str = ",") -> ParsedTable:
    """Parse delimited text with a header row into a ParsedTable.

    Parameters
    ----------
    text: ファイル内容 (ヘッダ行必須)
    delimiter: 区切り文字 (1文字)

    Raises
    ------
    ParseFailure: no header row, unterminated quote, or inconsistent field count
    """
    try:
        # 全列を文字列で読み、NA 変換は行わない (型変換は coerce_token が担当)
        df = pd.read_csv(
            io.StringIO(text),
            sep=delimiter,
            header=None,
            dtype=str,
            na_filter=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError as e:
        raise ParseFailure(f"no header row: {e}") from e
    except pd.errors.ParserError as e:
        raise ParseFailure(str(e).strip()) from e

    # pandas はフィールド不足の行を "" で埋めるので列数は別途確認する
    _check_field_counts(text, delimiter)

    header = df.iloc[0]
    columns = [str(c) for c in header.tolist()]
    rows: list[list[Any]] = []
    for raw in df.iloc[1:].itertuples(index=False, name=None):
        rows.append([coerce_token(tok) for tok in raw])
    return ParsedTable(columns=columns, rows=rows)


def parse_rows(header: Sequence[str], rows: Iterable[Sequence[Any]]) -> ParsedTable:
    """Build a ParsedTable from already-tokenized rows.

    String tokens are coerced like parsed text; other values pass through so
    the cleaner can normalize them.
    """
    columns = [str(c) for c in header]
    if not columns:
        raise ParseFailure("no header row")
    out: list[list[Any]] = []
    for n, row in enumerate(rows, start=1):
        if len(row) != len(columns):
            raise ParseFailure(
                f"Expected {len(columns)} fields in record {n}, saw {len(row)}"
            )
        out.append([coerce_token(v) if isinstance(v, str) else v for v in row])
    return ParsedTable(columns=columns, rows=out)
