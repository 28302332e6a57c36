"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy store initialization and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from travelctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from travelctl.config.settings import TravelSettings
    from travelctl.infrastructure.store import TravelStore
    from travelctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The store is lazily
    initialized on first use so ``--help`` and ``--version`` never
    create a database.
    """

    def __init__(self, settings: TravelSettings) -> None:
        self.settings = settings
        self._store: TravelStore | None = None

        from travelctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def store(self) -> TravelStore:
        """The store instance (created lazily on first access)."""
        if self._store is None:
            from travelctl.infrastructure.store import TravelStore

            self._store = TravelStore(self.settings)
        return self._store

    def close(self) -> None:
        if self._store is not None:
            self._store.close()
            self._store = None

    def emit(self, result: ServiceResult, *, raw: str | None = None) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
          When *raw* is given it is written verbatim instead of the
          rendered result, except in JSON mode.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        if result.ok and raw is not None and not settings.json_output:
            output = raw
        else:
            output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
