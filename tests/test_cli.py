"""Tests for the Click CLI layer.

Uses Click's CliRunner to invoke commands without spawning subprocesses.
Runs against the real pipeline with fixture CSVs; the insights adapter is
mocked so no network calls are made.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from spending_dashboard import __version__
from spending_dashboard.cli import cli

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def runner() -> CliRunner:
    """Click CLI test runner."""
    return CliRunner()


class TestAnalyze:
    def test_prints_summary(self, runner, chase_sample_csv, amex_sample_csv):
        result = runner.invoke(cli, ["analyze", str(chase_sample_csv), str(amex_sample_csv)])

        assert result.exit_code == 0, result.output
        assert "== Spending Summary ==" in result.output
        assert "Top merchant:    DELTA AIR LINES" in result.output

    def test_writes_json(self, runner, tmp_path, chase_sample_csv):
        out = tmp_path / "metrics.json"

        result = runner.invoke(cli, ["analyze", str(chase_sample_csv), "--json", str(out)])

        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["totalSpent"] == 105.57
        assert "transactions" not in data

    def test_writes_json_with_transactions(self, runner, tmp_path, chase_sample_csv):
        out = tmp_path / "metrics.json"

        result = runner.invoke(
            cli,
            ["analyze", str(chase_sample_csv), "--json", str(out), "--include-transactions"],
        )

        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text(encoding="utf-8"))
        assert len(data["transactions"]) == 4

    def test_top_categories_option(self, runner, tmp_path, chase_sample_csv):
        out = tmp_path / "metrics.json"

        result = runner.invoke(
            cli,
            ["analyze", str(chase_sample_csv), "--json", str(out), "--top-categories", "1"],
        )

        assert result.exit_code == 0, result.output
        names = [c["name"] for c in json.loads(out.read_text())["categoryBreakdown"]]
        assert names == ["Groceries", "Other"]

    def test_config_file(self, runner, tmp_path, chase_sample_csv):
        config = tmp_path / "config.toml"
        config.write_text("[aggregation]\ntop_categories = 1\n")
        out = tmp_path / "metrics.json"

        result = runner.invoke(
            cli,
            ["analyze", str(chase_sample_csv), "--config", str(config), "--json", str(out)],
        )

        assert result.exit_code == 0, result.output
        assert len(json.loads(out.read_text())["categoryBreakdown"]) == 2

    def test_invalid_config_exits_1(self, runner, tmp_path, chase_sample_csv):
        config = tmp_path / "config.toml"
        config.write_text("[aggregation]\ntop_categories = 0\n")

        result = runner.invoke(cli, ["analyze", str(chase_sample_csv), "--config", str(config)])

        assert result.exit_code == 1
        assert "Error loading configuration" in result.output

    def test_unknown_format_is_reported_and_batch_continues(self, runner, chase_sample_csv):
        result = runner.invoke(
            cli, ["analyze", str(FIXTURES / "unknown_format.csv"), str(chase_sample_csv)]
        )

        assert result.exit_code == 0, result.output
        assert "Errors: 1" in result.output
        assert "unrecognized CSV format" in result.output

    def test_no_valid_transactions_exits_1(self, runner):
        result = runner.invoke(cli, ["analyze", str(FIXTURES / "unknown_format.csv")])

        assert result.exit_code == 1
        assert "no valid transactions" in result.output

    def test_requires_files(self, runner):
        result = runner.invoke(cli, ["analyze"])
        assert result.exit_code == 2

    def test_insights_printed(self, runner, chase_sample_csv):
        adapter = MagicMock()
        adapter.generate.return_value = "- Coffee adds up."

        with patch("spending_dashboard.insights.get_adapter", return_value=adapter):
            result = runner.invoke(cli, ["analyze", str(chase_sample_csv), "--insights"])

        assert result.exit_code == 0, result.output
        assert "== Insights ==" in result.output
        assert "- Coffee adds up." in result.output
        sent = adapter.generate.call_args.args[0]
        assert len(sent) == 4
        assert sent[0]["description"] == "CHIPOTLE MEXICAN GRIL"

    def test_insights_failure_does_not_fail_command(self, runner, chase_sample_csv):
        adapter = MagicMock()
        adapter.generate.return_value = ""

        with patch("spending_dashboard.insights.get_adapter", return_value=adapter):
            result = runner.invoke(cli, ["analyze", str(chase_sample_csv), "--insights"])

        assert result.exit_code == 0, result.output
        assert "== Spending Summary ==" in result.output
        assert "no insights available" in result.output


class TestInit:
    def test_creates_config(self, runner, tmp_path):
        result = runner.invoke(cli, ["init", "--dir", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "config.toml").exists()
        assert "Wrote default configuration" in result.output


class TestVersion:
    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
