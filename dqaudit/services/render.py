from __future__ import annotations

import pandas as pd

from ..models.report import Report

"""Report rendering for terminal output.

Two text tables (column statistics, bad cells) built with pandas, or the
report's JSON form. Row numbers are shown 1-based and an empty value is
shown as EMPTY.
"""

__all__ = [
    "CLEAN_MESSAGE",
    "render_bad_cells_table",
    "render_report",
    "render_stats_table",
]

CLEAN_MESSAGE = "No bad rows detected. Data looks clean!"
EMPTY_LABEL = "EMPTY"

STAT_HEADERS = {
    "column": "Column",
    "inferred_type": "Inferred Type",
    "mean": "Mean",
    "median": "Median",
    "min": "Min",
    "max": "Max",
    "unique_count": "Unique Values",
    "type_mismatch_count": "Type Mismatch",
    "nan_count": "NaN",
}


def _display_value(value: object) -> str:
    if value == "":
        return EMPTY_LABEL
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def render_stats_table(report: Report) -> str:
    rows = [{key: getattr(s, key) for key in STAT_HEADERS} for s in report.column_stats]
    df = pd.DataFrame(rows, columns=list(STAT_HEADERS)).rename(columns=STAT_HEADERS)
    # 混在型の列を object のまま文字列化 (float 化による 15 -> 15.0 を防ぐ)
    return df.astype(str).to_string(index=False)


def render_bad_cells_table(report: Report, limit: int = 0) -> str:
    """Bad cells as a table; limit > 0 truncates and appends a remainder line."""
    if report.is_clean:
        return CLEAN_MESSAGE
    shown = report.bad_cells if limit <= 0 else report.bad_cells[:limit]
    df = pd.DataFrame(
        {
            "Column": [b.column for b in shown],
            "Row": [b.row_index + 1 for b in shown],
            "Value": [_display_value(b.value) for b in shown],
            "Reason": [b.reason for b in shown],
        }
    )
    text = df.to_string(index=False)
    remaining = len(report.bad_cells) - len(shown)
    if remaining > 0:
        text += f"\n... and {remaining} more"
    return text


def render_report(report: Report, output_format: str = "table", max_bad_cells: int = 0) -> str:
    """Render the full report as text tables or JSON."""
    if output_format == "json":
        return report.to_json()
    parts = [
        f"Valid/Total Rows: {report.valid_rows}/{report.total_rows}",
        "",
        "Data Statistics",
        render_stats_table(report),
        "",
    ]
    if report.is_clean:
        parts.append(CLEAN_MESSAGE)
    else:
        parts.extend(["Bad Rows", render_bad_cells_table(report, limit=max_bad_cells)])
    return "\n".join(parts)
