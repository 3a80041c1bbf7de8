from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from ..models.config_models import AuditConfig
from ..models.dataset import Dataset
from ..models.report import BadCell, ColumnStat, Report
from ..tabular.cleaner import clean_table
from ..tabular.reader import AnalysisError, ParseFailure, parse_csv_text, parse_rows
from .aggregator import build_report
from .bad_cells import detect_bad_cells
from .inference import infer_type
from .progress import ColumnProgressTracker
from .stats import compute_column_stats

"""Audit pipeline orchestration.

parse -> clean -> (infer type, detect bad cells, compute stats per column)
-> aggregate. Everything runs synchronously in one pass; a failure in parsing
aborts the run without a partial report.
"""

__all__ = [
    "AnalysisError",
    "NoInputError",
    "ParseFailure",
    "analyze_dataset",
    "analyze_file",
    "analyze_rows",
    "analyze_text",
    "load_dataset",
    "read_text",
]

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_ROWS = 50


class NoInputError(AnalysisError):
    """Raised when the analysis is invoked without a dataset source."""

    error_type = "NO_INPUT"


def analyze_dataset(dataset: Dataset, progress: ColumnProgressTracker | None = None) -> Report:
    """Analyze a cleaned Dataset column by column.

    Args:
        dataset: Cleaned dataset
        progress: Optional tracker advanced once per column

    Returns:
        Report with column stats in column order and bad cells grouped by column
    """
    column_stats: list[ColumnStat] = []
    bad_cells: list[BadCell] = []
    for index, column in enumerate(dataset.columns):
        if progress is not None:
            progress.start_column(column)
        pairs = list(dataset.column_cells(index))
        cells = [cell for _, cell in pairs]

        inferred = infer_type(cells)
        column_bad = detect_bad_cells(column, inferred, pairs)
        stat = compute_column_stats(column, inferred, cells, type_mismatch_count=len(column_bad))

        logger.debug(
            f"column={column!r} type={inferred} bad={len(column_bad)} nan={stat.nan_count}"
        )
        column_stats.append(stat)
        bad_cells.extend(column_bad)
        if progress is not None:
            progress.finish_column(bad_cells=len(bad_cells))

    return build_report(column_stats, bad_cells, total_rows=len(dataset))


def load_dataset(
    text: str, delimiter: str = ",", preview_rows: int = DEFAULT_PREVIEW_ROWS
) -> Dataset:
    """Parse and clean text; logs a preview of the first rows at DEBUG."""
    dataset = clean_table(parse_csv_text(text, delimiter=delimiter))
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"columns={list(dataset.columns)} rows={len(dataset)}")
        for row in dataset.head(preview_rows):
            logger.debug(f"  {row}")
    return dataset


def analyze_rows(header: Sequence[str], rows: Iterable[Sequence[Any]]) -> Report:
    """Analyze already-tokenized rows (header + one sequence per row)."""
    dataset = clean_table(parse_rows(header, rows))
    return analyze_dataset(dataset)


def analyze_text(
    text: str | None,
    delimiter: str = ",",
    *,
    preview_rows: int = DEFAULT_PREVIEW_ROWS,
    progress: ColumnProgressTracker | None = None,
) -> Report:
    """Analyze raw delimited text with a header row.

    Raises:
        NoInputError: text is None
        ParseFailure: text cannot be tokenized into a rectangular table
    """
    if text is None:
        raise NoInputError("no dataset supplied")
    dataset = load_dataset(text, delimiter, preview_rows)
    return analyze_dataset(dataset, progress=progress)


def read_text(path: Path, encoding: str = "utf-8") -> str:
    """Read a dataset file into text.

    Raises:
        NoInputError: path does not exist or is not a file
        ParseFailure: the file cannot be decoded with encoding
    """
    if not path.exists() or not path.is_file():
        raise NoInputError(f"file not found: {path}")
    try:
        return path.read_text(encoding=encoding)
    except UnicodeDecodeError as e:
        raise ParseFailure(f"cannot decode {path.name} as {encoding}: {e}") from e


def analyze_file(path: Path, config: AuditConfig | None = None) -> Report:
    """Read path and analyze it with the delimiter/encoding from config."""
    cfg = config or AuditConfig()
    text = read_text(path, cfg.encoding)
    logger.info(f"Analyzing file: {path}")
    # 列数はパース後に確定するため tracker はその後に生成
    dataset = load_dataset(text, cfg.delimiter, cfg.preview_rows)
    with ColumnProgressTracker(len(dataset.columns)) as progress:
        return analyze_dataset(dataset, progress=progress)
