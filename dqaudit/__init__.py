"""Data-quality audit for delimited tabular files.

Parses a CSV, cleans it, infers one type per column, computes per-column
statistics and flags missing or type-inconsistent cells.
"""

from .models import BadCell, Cell, CellKind, ColumnStat, Dataset, Record, Report
from .services.orchestrator import (
    AnalysisError,
    NoInputError,
    ParseFailure,
    analyze_dataset,
    analyze_file,
    analyze_rows,
    analyze_text,
)

__all__ = [
    # Pipeline entrypoints
    "analyze_dataset",
    "analyze_file",
    "analyze_rows",
    "analyze_text",
    # Errors
    "AnalysisError",
    "NoInputError",
    "ParseFailure",
    # Models
    "BadCell",
    "Cell",
    "CellKind",
    "ColumnStat",
    "Dataset",
    "Record",
    "Report",
]

__version__ = "0.1.0"
