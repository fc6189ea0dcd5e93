"""Tests for the cellcalc command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from cellcalc.cli import main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def grid_csv(tmp_path: Path) -> Path:
    path = tmp_path / "grid.csv"
    path.write_text("label,A,B\nr1,10,2\nr2,3,x\n")
    return path


class TestEval:
    def test_arithmetic(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(main, ["eval", "=2+3*4", "--config-dir", str(tmp_path)])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "14"

    def test_with_grid(self, runner: CliRunner, tmp_path: Path, grid_csv: Path) -> None:
        result = runner.invoke(
            main, ["eval", "=A1/B1 + A2", "--grid", str(grid_csv), "--config-dir", str(tmp_path)]
        )
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "8"

    def test_self_reference(self, runner: CliRunner, tmp_path: Path, grid_csv: Path) -> None:
        result = runner.invoke(
            main,
            ["eval", "=A1+1", "--grid", str(grid_csv), "--select", "A1", "--config-dir", str(tmp_path)],
        )
        assert result.exit_code == 1
        assert "reference itself" in result.output

    def test_select_requires_grid(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(main, ["eval", "=1", "--select", "A1", "--config-dir", str(tmp_path)])
        assert result.exit_code == 1
        assert "--select requires --grid" in result.output

    def test_division_by_zero(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(main, ["eval", "=10/0", "--config-dir", str(tmp_path)])
        assert result.exit_code == 1
        assert "Division by zero" in result.output

    def test_number_format_from_config(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "cellcalc.yaml").write_text('number_format: "{:.2f}"\n')
        result = runner.invoke(main, ["eval", "=1/3", "--config-dir", str(tmp_path)])
        assert result.output.strip() == "0.33"

    def test_events_written(self, runner: CliRunner, tmp_path: Path) -> None:
        runner.invoke(main, ["eval", "=1+1", "--config-dir", str(tmp_path)])
        assert (tmp_path / "logs" / "events.ndjson").exists()

        result = runner.invoke(main, ["events", "--config-dir", str(tmp_path)])
        assert result.exit_code == 0, result.output
        assert "formula_evaluated" in result.output

    def test_events_filtered(self, runner: CliRunner, tmp_path: Path) -> None:
        runner.invoke(main, ["eval", "=FOO(1)", "--config-dir", str(tmp_path)])
        result = runner.invoke(main, ["events", "--level", "error", "--config-dir", str(tmp_path)])
        assert "(unknown_function)" in result.output
        assert "formula_evaluated" not in result.output

    def test_no_events(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(main, ["events", "--config-dir", str(tmp_path)])
        assert result.output.strip() == "No events found."


class TestTokensAndTree:
    def test_tokens_text(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["tokens", "=SIN(A1)"])
        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[0].split() == ["FUNCTION_NAME", "SIN"]
        assert lines[2].split() == ["CELL_REFERENCE", "A1"]

    def test_tokens_json(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["tokens", "=1+2", "--json"])
        data = json.loads(result.output)
        assert data == [
            {"type": "NUMBER", "value": "1"},
            {"type": "OPERATOR", "value": "+"},
            {"type": "NUMBER", "value": "2"},
        ]

    def test_tokens_bad_character(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["tokens", "=1 # 2"])
        assert result.exit_code == 1

    def test_tree(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(main, ["tree", "=1+2*3", "--config-dir", str(tmp_path)])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "(1 + (2 * 3))"

    def test_tree_resolves_references(self, runner: CliRunner, tmp_path: Path, grid_csv: Path) -> None:
        result = runner.invoke(
            main, ["tree", "=max(A1, B1)", "--grid", str(grid_csv), "--config-dir", str(tmp_path)]
        )
        assert result.output.strip() == "MAX(10, 2)"


class TestInit:
    def test_init_writes_config(self, runner: CliRunner, tmp_path: Path) -> None:
        target = tmp_path / "proj"
        result = runner.invoke(main, ["init", str(target)])
        assert result.exit_code == 0, result.output
        assert (target / "cellcalc.yaml").exists()

    def test_init_refuses_overwrite(self, runner: CliRunner, tmp_path: Path) -> None:
        runner.invoke(main, ["init", str(tmp_path)])
        result = runner.invoke(main, ["init", str(tmp_path)])
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["--version"])
        assert "cellcalc" in result.output
