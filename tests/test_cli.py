"""Tests for the click CLI."""

import json
import shutil
from pathlib import Path

import pytest
from click.testing import CliRunner

from strict_migrate import cli as cli_module
from strict_migrate.cli import cli
from strict_migrate.oracle.base import BaseOracle, OracleError

FIXTURES = Path(__file__).parent / "fixtures"


class CleanOracle(BaseOracle):
    def __init__(self, failing=(), broken=False):
        self.failing = set(failing)
        self.broken = broken

    def check_file(self, file_path):
        if self.broken:
            raise OracleError("mypy: command crashed")
        return 3 if Path(file_path).name in self.failing else 0


@pytest.fixture
def py_project(tmp_path):
    target = tmp_path / "py_project"
    shutil.copytree(FIXTURES / "py_project", target)
    return target


@pytest.fixture
def runner():
    return CliRunner()


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_candidates(runner):
    result = runner.invoke(cli, ["candidates", str(FIXTURES / "py_project")])
    assert result.exit_code == 0, result.output
    assert "Cycle of 2 files:" in result.output
    assert "- [ ] ./app/models.py" in result.output
    assert "depended on by 1" in result.output
    assert "Progress: 2/7 files checked, 4 eligible" in result.output


def test_candidates_without_counts(runner):
    result = runner.invoke(cli, ["candidates", str(FIXTURES / "py_project"), "--no-counts"])
    assert result.exit_code == 0
    assert "depended on by" not in result.output


def test_candidates_invalid_allowlist(runner, tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("[")
    result = runner.invoke(cli, ["candidates", str(FIXTURES / "py_project"), "--allowlist", str(bad)])
    assert result.exit_code != 0
    assert "Invalid allow-list" in result.output


def test_migrate(runner, py_project, monkeypatch):
    monkeypatch.setattr(cli_module, "_make_oracle", lambda *args: CleanOracle(failing={"service.py"}))
    result = runner.invoke(cli, ["migrate", str(py_project)])
    assert result.exit_code == 0, result.output
    assert "Added 4 file(s):" in result.output
    assert "app/service.py  (3 error(s))" in result.output

    data = json.loads((py_project / "strict-files.json").read_text())
    assert "./app/cycle_a.py" in data["files"]
    assert "./app/service.py" not in data["files"]


def test_migrate_oracle_failure(runner, py_project, monkeypatch):
    monkeypatch.setattr(cli_module, "_make_oracle", lambda *args: CleanOracle(broken=True))
    result = runner.invoke(cli, ["migrate", str(py_project)])
    assert result.exit_code == 1
    assert "command crashed" in result.output


def test_migrate_max_passes(runner, py_project, monkeypatch):
    monkeypatch.setattr(cli_module, "_make_oracle", lambda *args: CleanOracle())
    result = runner.invoke(cli, ["migrate", str(py_project), "--max-passes", "1"])
    assert result.exit_code == 0
    assert "Stopped before reaching a fixpoint." in result.output


def test_report(runner, tmp_path):
    out = tmp_path / "report"
    result = runner.invoke(cli, ["report", str(FIXTURES / "py_project"), "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert "Progress: 2/7 files checked" in result.output
    assert "Components: 6 (1 cycles)" in result.output
    assert (out / "report.json").exists()
    assert (out / "data.js").exists()


def test_make_oracle_prefers_checker(tmp_path):
    oracle = cli_module._make_oracle(tmp_path, "pyright {file}", "mypy")
    assert oracle.build_args(str(tmp_path / "a.py")) == ["pyright", "a.py"]
    mypy = cli_module._make_oracle(tmp_path, None, "/usr/bin/mypy")
    assert mypy.build_args(str(tmp_path / "a.py"))[0] == "/usr/bin/mypy"
