from __future__ import annotations

import argparse
import os
import sys
import time
from pathlib import Path

from dotenv import load_dotenv

from dqaudit.config.loader import ConfigError, load_config
from dqaudit.logging.error_log import ErrorLogBuffer
from dqaudit.logging.init import log_summary, set_debug, setup_logging
from dqaudit.models.config_models import OUTPUT_FORMATS, AuditConfig
from dqaudit.services.orchestrator import (
    AnalysisError,
    NoInputError,
    analyze_file,
    load_dataset,
    read_text,
)
from dqaudit.services.render import render_report
from dqaudit.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then the YAML config (DQAUDIT_CONFIG or --config)
- Analyze the given CSV file
- Print the report (table or JSON) and a SUMMARY line

Exit codes: 0 clean, 2 report has bad cells, 1 fatal.
"""

EXIT_CLEAN = 0
EXIT_BAD_CELLS = 2
EXIT_FATAL = 1

CONFIG_ENV = "DQAUDIT_CONFIG"
USER_FACING_FAILURE = "Failed to process the CSV file."


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv. Failures only warn."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except OSError as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Audit a CSV file for missing and type-inconsistent cells")
    p.add_argument("file", nargs="?", help="CSV file with a header row")
    p.add_argument("--config", help="YAML config path (default: $DQAUDIT_CONFIG or config/audit.yml)")
    p.add_argument("--format", dest="output_format", choices=OUTPUT_FORMATS, help="Report output format")
    p.add_argument("--max-bad-cells", type=int, help="Show at most N bad cells (0 = all)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--preview", action="store_true", help="Print header & first cleaned rows then exit")
    return p.parse_args(argv)


def _resolve_config(args: argparse.Namespace) -> AuditConfig:
    explicit = args.config or os.getenv(CONFIG_ENV)
    if explicit:
        cfg = load_config(Path(explicit), required=True)
    else:
        cfg = load_config(None)
    return cfg.with_overrides(output_format=args.output_format, max_bad_cells=args.max_bad_cells)


def _record_failure(cfg: AuditConfig, file_name: str, error: AnalysisError) -> Path | None:
    buffer = ErrorLogBuffer(Path(cfg.error_log_dir))
    buffer.record_failure(file_name, error)
    return buffer.flush()


def _preview(path: Path, cfg: AuditConfig) -> int:
    dataset = load_dataset(read_text(path, cfg.encoding), cfg.delimiter, cfg.preview_rows)
    print(f"FILE: {path.name} cols={list(dataset.columns)} rows={len(dataset)}")
    for row in dataset.head(cfg.preview_rows):
        print(f"  {row}")
    return EXIT_CLEAN


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみ sys.argv を読む ([] はテストからの明示的な空引数)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    try:
        cfg = _resolve_config(args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        set_debug(True)
        logger.debug("debug mode enabled")

    file_name = args.file or ""
    started = time.perf_counter()
    try:
        if not args.file:
            raise NoInputError("no input file given")
        path = Path(args.file)
        if args.preview:
            return _preview(path, cfg)
        report = analyze_file(path, cfg)
    except AnalysisError as e:
        logger.error(USER_FACING_FAILURE)
        logger.error(f"diagnostic: {e.diagnostic}")
        log_path = _record_failure(cfg, Path(file_name).name, e)
        if log_path is not None:
            logger.debug(f"error log: {log_path}")
        return EXIT_FATAL
    elapsed = time.perf_counter() - started

    print(render_report(report, cfg.output_format, cfg.max_bad_cells))

    log_summary(render_summary_line(report, elapsed))

    return EXIT_CLEAN if report.is_clean else EXIT_BAD_CELLS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
