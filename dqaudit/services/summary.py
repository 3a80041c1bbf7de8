from __future__ import annotations

from ..models.report import Report

"""Summary line rendering service.

Format:
SUMMARY columns={C} rows={T} valid_rows={V} bad_cells={B} elapsed_sec={E}
"""


def _format_seconds(elapsed: float) -> str:
    if elapsed == 0:
        return "0"
    if elapsed == int(elapsed):
        return str(int(elapsed))
    if elapsed < 0.01:
        # Format very small numbers to avoid scientific notation
        return f"{elapsed:.6f}".rstrip("0").rstrip(".")
    return f"{elapsed:.3f}".rstrip("0").rstrip(".")


def render_summary_line(report: Report, elapsed_seconds: float) -> str:
    """Render a SUMMARY line for a finished audit.

    Examples:
        >>> from dqaudit.models.report import Report
        >>> render_summary_line(Report((), (), total_rows=0, valid_rows=0), 2.0)
        'SUMMARY columns=0 rows=0 valid_rows=0 bad_cells=0 elapsed_sec=2'
    """
    return (
        f"SUMMARY columns={len(report.column_stats)} "
        f"rows={report.total_rows} "
        f"valid_rows={report.valid_rows} "
        f"bad_cells={len(report.bad_cells)} "
        f"elapsed_sec={_format_seconds(elapsed_seconds)}"
    )
