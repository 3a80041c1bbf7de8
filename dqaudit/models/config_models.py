from __future__ import annotations

from dataclasses import dataclass, replace

"""Config dataclasses for the data-quality audit tool.

The loader in dqaudit/config/loader.py builds these from YAML after schema
validation; everything downstream only sees the typed object.
"""

__all__ = [
    "OUTPUT_FORMATS",
    "AuditConfig",
]

OUTPUT_FORMATS = ("table", "json")


@dataclass(frozen=True)
class AuditConfig:
    """Root configuration object for an audit run."""
    delimiter: str = ","
    encoding: str = "utf-8"
    output_format: str = "table"  # table / json
    max_bad_cells: int = 0  # 0 = 全件表示
    preview_rows: int = 50  # --preview / DEBUG preview の行数
    error_log_dir: str = "./logs"

    def with_overrides(self, **overrides: object) -> AuditConfig:
        """Return a copy with the non-None overrides applied (CLI flags)."""
        values = {k: v for k, v in overrides.items() if v is not None}
        if not values:
            return self
        return replace(self, **values)
