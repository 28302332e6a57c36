"""Parametrized help tests for all CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from travelctl.cli import cli

# (CLI args, expected keywords in output)
HELP_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["status", "--help"], ["set", "list"]),
    (["status", "set", "--help"], ["CODE", "none", "visited", "wishlist"]),
    (["status", "list", "--help"], ["--status"]),
    (["visit", "--help"], ["add", "delete", "list"]),
    (["visit", "add", "--help"], ["--arrival", "--departure", "--transport", "--note", "--id"]),
    (["visit", "delete", "--help"], ["CODE", "VISIT_ID"]),
    (["visit", "list", "--help"], ["CODE"]),
    (["history", "--help"], ["most recent first"]),
    (["stats", "--help"], ["--top"]),
    (["visa", "--help"], ["add", "delete", "list"]),
    (["visa", "add", "--help"], ["--type", "--issue", "--expiry", "--max-stay", "--schengen"]),
    (["visa", "list", "--help"], ["--today"]),
    (["export", "--help"], ["csv"]),
    (["export", "csv", "--help"], ["--output"]),
    (["import", "--help"], ["csv"]),
    (["import", "csv", "--help"], ["PATH", "--replace"]),
    (["catalog", "--help"], ["--region"]),
]


def _help_id(args_keywords: tuple[list[str], list[str]]) -> str:
    """Generate a readable test ID from args."""
    args, _ = args_keywords
    return "_".join(a for a in args if a != "--help")


@pytest.mark.parametrize(
    "args,expected_keywords",
    HELP_COMMANDS,
    ids=[_help_id(item) for item in HELP_COMMANDS],
)
def test_command_help(cli_runner: CliRunner, args: list[str], expected_keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    for kw in expected_keywords:
        assert kw in result.output, f"Expected '{kw}' in help output for {args}"
