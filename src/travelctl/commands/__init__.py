"""Subcommand modules for travelctl.

Provides register_commands() which uses deferred imports to keep
``travelctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from travelctl.commands.export import export
    from travelctl.commands.import_cmd import import_cmd
    from travelctl.commands.status import status
    from travelctl.commands.visa import visa
    from travelctl.commands.visit import visit

    cli.add_command(status)
    cli.add_command(visit)
    cli.add_command(visa)
    cli.add_command(export)
    cli.add_command(import_cmd)

    # --- Standalone commands ---
    from travelctl.commands.catalog import catalog
    from travelctl.commands.history import history
    from travelctl.commands.stats import stats

    cli.add_command(history)
    cli.add_command(stats)
    cli.add_command(catalog)
