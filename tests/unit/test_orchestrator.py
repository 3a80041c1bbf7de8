from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from dqaudit.models.config_models import AuditConfig
from dqaudit.services.orchestrator import (
    AnalysisError,
    NoInputError,
    ParseFailure,
    analyze_dataset,
    analyze_file,
    analyze_rows,
    analyze_text,
    load_dataset,
    read_text,
)


def test_analyze_text_none_is_no_input():
    with pytest.raises(NoInputError) as e:
        analyze_text(None)
    assert isinstance(e.value, AnalysisError)
    assert e.value.diagnostic == "no dataset supplied"


def test_analyze_text_parse_failure_is_analysis_error():
    with pytest.raises(AnalysisError):
        analyze_text("a,b\n1,2,3\n")


def test_analyze_dataset_advances_progress_per_column():
    dataset = load_dataset("a,b,c\n1,x,true\n")
    progress = MagicMock()
    analyze_dataset(dataset, progress=progress)
    assert [c.args[0] for c in progress.start_column.call_args_list] == ["a", "b", "c"]
    assert progress.finish_column.call_count == 3


def test_analyze_rows_handles_object_cells():
    report = analyze_rows(["a", "b"], [["1", {"x": 1}], ["2", "y"]])
    assert report.total_rows == 2
    assert [(b.column, b.row_index, b.reason) for b in report.bad_cells] == [("b", 0, "missing")]


def test_type_mismatch_count_includes_missing():
    report = analyze_text("a,b\n1,x\n,y\n2,\nfoo,z\n")
    a_stat, b_stat = report.column_stats
    assert a_stat.inferred_type == "number"
    assert a_stat.type_mismatch_count == 2
    assert b_stat.type_mismatch_count == 1
    assert [(b.column, b.row_index, b.reason) for b in report.bad_cells] == [
        ("a", 1, "missing"),
        ("a", 3, "type_mismatch"),
        ("b", 2, "missing"),
    ]
    assert report.valid_rows == 1


def test_read_text_missing_file(temp_workdir: Path):
    with pytest.raises(NoInputError):
        read_text(temp_workdir / "nope.csv")


def test_read_text_decode_error(temp_workdir: Path):
    f = temp_workdir / "latin.csv"
    f.write_bytes("a\ncaf\xe9\n".encode("latin-1"))
    with pytest.raises(ParseFailure):
        read_text(f, "utf-8")
    assert read_text(f, "latin-1") == "a\ncafé\n"


def test_analyze_file_uses_config_delimiter(temp_workdir: Path):
    f = temp_workdir / "semi.csv"
    f.write_text("a;b\n1;x\n2;y\n", encoding="utf-8")
    with patch("dqaudit.services.orchestrator.ColumnProgressTracker") as mock_tracker:
        mock_tracker.return_value.__enter__.return_value = MagicMock()
        report = analyze_file(f, AuditConfig(delimiter=";"))
    mock_tracker.assert_called_once_with(2)
    assert [s.column for s in report.column_stats] == ["a", "b"]
    assert report.valid_rows == 2
