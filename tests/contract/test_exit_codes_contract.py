from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

from dqaudit.cli.__main__ import EXIT_BAD_CELLS, EXIT_CLEAN, EXIT_FATAL, main as cli_main

"""Exit code contract: 0 clean, 2 bad cells found, 1 fatal."""


def test_exit_code_clean(temp_workdir: Path, clean_csv: Path, fresh_logging, capsys):
    code = cli_main([str(clean_csv)])
    out = capsys.readouterr().out
    assert code == EXIT_CLEAN == 0
    assert "No bad rows detected. Data looks clean!" in out
    assert "SUMMARY columns=2 rows=2 valid_rows=2 bad_cells=0" in out


def test_exit_code_bad_cells(temp_workdir: Path, dirty_csv: Path, fresh_logging, capsys):
    code = cli_main([str(dirty_csv)])
    out = capsys.readouterr().out
    assert code == EXIT_BAD_CELLS == 2
    assert "Valid/Total Rows: 1/4" in out
    assert "SUMMARY columns=4 rows=4 valid_rows=1 bad_cells=4" in out


def test_exit_code_no_input_file(temp_workdir: Path, fresh_logging, capsys):
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == EXIT_FATAL == 1
    assert "ERROR Failed to process the CSV file." in out
    assert "ERROR diagnostic: no input file given" in out


def test_exit_code_missing_file_writes_error_log(temp_workdir: Path, fresh_logging, capsys):
    code = cli_main([str(temp_workdir / "data" / "absent.csv")])
    assert code == EXIT_FATAL
    logs = list((temp_workdir / "logs").glob("errors-*.log"))
    assert len(logs) == 1
    record = json.loads(logs[0].read_text(encoding="utf-8").strip())
    assert record["error_type"] == "NO_INPUT"
    assert record["file"] == "absent.csv"
    assert record["row"] == -1


def test_exit_code_parse_failure(temp_workdir: Path, fresh_logging, capsys):
    bad = temp_workdir / "data" / "ragged.csv"
    bad.write_text("a,b\n1,2,3\n", encoding="utf-8")
    code = cli_main([str(bad)])
    out = capsys.readouterr().out
    assert code == EXIT_FATAL
    assert "ERROR Failed to process the CSV file." in out
    # パース失敗時はレポートを出さない
    assert "Valid/Total Rows" not in out
    assert "SUMMARY" not in out
    logs = list((temp_workdir / "logs").glob("errors-*.log"))
    record = json.loads(logs[0].read_text(encoding="utf-8").strip())
    assert record["error_type"] == "PARSE_FAILURE"


def test_exit_code_config_error(temp_workdir: Path, clean_csv: Path, fresh_logging, capsys):
    code = cli_main(["--config", str(temp_workdir / "config" / "missing.yml"), str(clean_csv)])
    out = capsys.readouterr().out
    assert code == EXIT_FATAL
    assert "ERROR config:" in out


def test_exit_code_follows_report_not_analysis(temp_workdir: Path, clean_csv: Path, fresh_logging, capsys):
    from dqaudit.models.report import BadCell, Report

    fake = Report(column_stats=(), bad_cells=(BadCell("a", 0, ""),), total_rows=1, valid_rows=0)
    with patch("dqaudit.cli.__main__.analyze_file", return_value=fake):
        code = cli_main([str(clean_csv)])
    assert code == EXIT_BAD_CELLS


def test_exit_code_short_row(temp_workdir: Path, fresh_logging, capsys):
    bad = temp_workdir / "data" / "short.csv"
    bad.write_text("a,b\n1\n2,3\n", encoding="utf-8")
    code = cli_main([str(bad)])
    out = capsys.readouterr().out
    assert code == EXIT_FATAL
    assert "ERROR diagnostic: Expected 2 fields in record 1, saw 1" in out
    assert "Valid/Total Rows" not in out
