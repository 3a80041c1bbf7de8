from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display service with tqdm (TTY only).

One bar per audit run, advanced once per analyzed column. In non-TTY
environments (CI, pipes) the bar is disabled so no ANSI control sequences end
up in redirected output.
"""

__all__ = [
    "ColumnProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """Check if TTY output is enabled.

    Returns:
        True if stdout is a TTY and progress should be displayed, False otherwise
    """
    return sys.stdout.isatty()


class ColumnProgressTracker:
    """Progress tracker over the columns of one dataset."""

    def __init__(self, total_columns: int, *, description: str = "Analyzing columns") -> None:
        self.total_columns = total_columns
        self.description = description
        self.current_column = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_columns,
                desc=description,
                unit="col",
                leave=False,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def start_column(self, column: str) -> None:
        self.current_column += 1
        if self.enabled and self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({column})")

    def finish_column(self, bad_cells: int = 0) -> None:
        """Advance the bar; bad_cells is shown as a running postfix."""
        if self.enabled and self.pbar is not None:
            self.pbar.update(1)
            if bad_cells:
                self.pbar.set_postfix(bad=bad_cells)
            self.pbar.set_description(self.description)

    def close(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ColumnProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
