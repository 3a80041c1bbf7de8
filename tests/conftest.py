# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pytest

from dqaudit.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("DQAUDIT_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """delimiter: ","
encoding: utf-8
output_format: table
max_bad_cells: 0
preview_rows: 5
error_log_dir: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "audit.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def clean_csv(temp_workdir: Path) -> Path:
    f = temp_workdir / "data" / "clean.csv"
    f.write_text("a,b\n1,x\n2,y\n,\n", encoding="utf-8")
    return f


@pytest.fixture()
def dirty_csv(temp_workdir: Path) -> Path:
    f = temp_workdir / "data" / "dirty.csv"
    f.write_text(
        "id,score,active,name\n"
        "1,10.5,true,alice\n"
        ",,,\n"
        "2,,false,bob\n"
        "3,abc,true,\n"
        "4,7,2,dave\n",
        encoding="utf-8",
    )
    return f


@pytest.fixture()
def fresh_logging():
    # 各テストでロガーを再生成し capsys の stdout に張り直す
    reset_logging()
    yield
    reset_logging()
