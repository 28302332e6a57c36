"""Tests for the history command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from travelctl.cli import cli


def _seed(cli_runner: CliRunner) -> None:
    for args in (
        ["status", "set", "FR", "visited"],
        ["status", "set", "JP", "visited"],
        ["status", "set", "IT", "wishlist"],
        ["visit", "add", "FR", "--arrival", "2019-07", "--id", "fr-1"],
        ["visit", "add", "JP", "--arrival", "2023-04-02", "--id", "jp-1"],
        ["visit", "add", "IT", "--arrival", "2024", "--id", "it-1"],
    ):
        assert cli_runner.invoke(cli, args).exit_code == 0


@pytest.mark.usefixtures("_isolated_data")
class TestHistoryCommand:
    def test_empty(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["history"])
        assert result.exit_code == 0
        assert "No visits recorded for visited countries." in result.output

    def test_most_recent_first(self, cli_runner: CliRunner) -> None:
        _seed(cli_runner)
        result = cli_runner.invoke(cli, ["--json", "history"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert [item["id"] for item in data["items"]] == ["JP-jp-1", "FR-fr-1"]
        assert data["total_visits"] == 2
        assert data["unique_countries"] == 2

    def test_wishlist_visits_hidden(self, cli_runner: CliRunner) -> None:
        _seed(cli_runner)
        result = cli_runner.invoke(cli, ["history"])
        assert result.exit_code == 0
        assert "Japan" in result.output
        assert "July 2019" in result.output
        assert "Italy" not in result.output

    def test_quiet_prints_entry_ids(self, cli_runner: CliRunner) -> None:
        _seed(cli_runner)
        result = cli_runner.invoke(cli, ["-q", "history"])
        assert result.output.strip().splitlines() == ["JP-jp-1", "FR-fr-1"]
