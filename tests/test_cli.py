"""Tests for the root travelctl CLI."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from travelctl import __version__
from travelctl.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "travelctl" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


def test_lists_commands(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    for name in ("status", "visit", "history", "stats", "visa", "export", "import", "catalog"):
        assert name in result.output


# --- Global flags ---


def test_json_flag_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--json", "--version"])
    assert result.exit_code == 0


def test_quiet_flag_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-q", "--version"])
    assert result.exit_code == 0


def test_help_does_not_create_database(
    cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TRAVELCTL_CONFIG", raising=False)
    result = cli_runner.invoke(cli, ["status", "--help"])
    assert result.exit_code == 0
    assert not (tmp_path / ".travelctl").exists()
