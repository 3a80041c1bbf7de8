"""Domain models for the data-quality audit tool.

This package contains the domain model classes shared by the parser, the
analysis services and the CLI.
"""

from .cell import EMPTY, EMPTY_SENTINEL, Cell, CellKind
from .config_models import AuditConfig
from .dataset import Dataset, Record
from .error_record import ErrorRecord
from .report import NOT_APPLICABLE, BadCell, ColumnStat, Report

__all__ = [
    # Cell variant
    "Cell",
    "CellKind",
    "EMPTY",
    "EMPTY_SENTINEL",
    # Dataset models
    "Dataset",
    "Record",
    # Report models
    "BadCell",
    "ColumnStat",
    "NOT_APPLICABLE",
    "Report",
    # Configuration / logging models
    "AuditConfig",
    "ErrorRecord",
]
