"""Locate and read ``travelctl.toml``.

The file is looked up in the starting directory and each of its parents.
``TRAVELCTL_CONFIG`` names a file directly and disables the walk-up.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import click

CONFIG_FILENAME = "travelctl.toml"
CONFIG_ENV_VAR = "TRAVELCTL_CONFIG"


def _search_dirs(start: Path) -> Iterator[Path]:
    current = start.resolve()
    yield current
    yield from current.parents


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start* (default: cwd), or None.

    An env var pointing at a missing file yields None rather than falling
    back to the walk-up.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    for directory in _search_dirs(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_config(path: Path | None) -> dict[str, Any]:
    """Parse the TOML file at *path* into raw section tables.

    A missing path reads as an empty config. Malformed TOML is reported
    as a :class:`click.ClickException` so the CLI exits with a message
    instead of a traceback.
    """
    if path is None or not path.is_file():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc
