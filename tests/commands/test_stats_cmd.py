"""Tests for the stats command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from travelctl.cli import cli


@pytest.mark.usefixtures("_isolated_data")
class TestStatsCommand:
    def test_empty(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "stats"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert data["total_countries"] == 197
        assert data["visited"] == 0
        assert data["visited_percentage"] == 0.0
        assert data["most_visited"] == []

    def test_counts(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["status", "set", "FR", "visited"])
        cli_runner.invoke(cli, ["status", "set", "DE", "wishlist"])
        cli_runner.invoke(cli, ["visit", "add", "FR", "--arrival", "2019", "--transport", "plane"])
        cli_runner.invoke(cli, ["visit", "add", "FR", "--arrival", "2021", "--transport", "train"])
        result = cli_runner.invoke(cli, ["--json", "stats"])
        data = json.loads(result.stdout)["data"]
        assert data["visited"] == 1
        assert data["wishlist"] == 1
        assert data["not_visited"] == 196
        assert data["total_visits"] == 2
        assert data["transportation"]["plane"] == 1
        assert data["transportation"]["train"] == 1
        assert data["most_visited"][0]["code"] == "FR"
        assert data["most_visited"][0]["visits"] == 2

    def test_human_output(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["status", "set", "FR", "visited"])
        result = cli_runner.invoke(cli, ["stats"])
        assert result.exit_code == 0
        assert "Regions" in result.output
        assert "Europe" in result.output
        assert "visited_percentage: 0.5%" in result.output

    def test_top_limits_most_visited(self, cli_runner: CliRunner) -> None:
        for code in ("FR", "DE", "IT"):
            cli_runner.invoke(cli, ["status", "set", code, "visited"])
            cli_runner.invoke(cli, ["visit", "add", code, "--arrival", "2020"])
        result = cli_runner.invoke(cli, ["--json", "stats", "--top", "2"])
        assert len(json.loads(result.stdout)["data"]["most_visited"]) == 2

    def test_top_must_be_positive(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "stats", "--top", "0"])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "INVALID_INPUT"
