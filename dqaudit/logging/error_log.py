from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord
from ..tabular.reader import AnalysisError

"""Run-failure error log.

A run that aborts (no input, unreadable or unparseable CSV) leaves one JSON
Lines entry per failure in `<logs_dir>/errors-YYYYMMDD-HHMMSS.log` (UTC).
The file is created on the first flush that has something to write, so a
clean run never touches the logs directory. Bad cells are audit findings
and go to the report, not here.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
    "UNKNOWN_ROW",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"

# Failures are raised before any row is tied to them
UNKNOWN_ROW = -1


class ErrorLogBuffer:
    """Collects ErrorRecords for one run and appends them on flush().

    - ファイル名は最初の書き出し時に決定し、以降の flush も同じファイルへ追記
    - シリアル実行前提 (ロック不要)
    """

    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None
        self._logs_dir = logs_dir if logs_dir is not None else LOGS_DIR

    @property
    def logs_dir(self) -> Path:
        return self._logs_dir

    def _resolve_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"errors-{stamp}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def record_failure(self, file_name: str, error: AnalysisError) -> ErrorRecord:
        """Buffer a record for an aborted audit of file_name.

        error_type comes from the exception class (NO_INPUT, PARSE_FAILURE, ...)
        and message is its diagnostic, not the user-facing text.
        """
        record = ErrorRecord.create(
            file=file_name,
            row=UNKNOWN_ROW,
            error_type=error.error_type,
            message=error.diagnostic,
        )
        self.append(record)
        return record

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the log path, or None when nothing was buffered."""
        if not self._records:
            return None
        fp = self._resolve_path()
        with fp.open("a", encoding="utf-8") as f:
            f.writelines(r.to_json_line() + "\n" for r in self._records)
        self._records.clear()
        return fp
