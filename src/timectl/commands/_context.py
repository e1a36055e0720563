"""AppContext: shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Owns logging setup, the lazily built TimeService,
and result emission (stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from timectl.config.logging import configure_logging
from timectl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from timectl.config.settings import TimeSettings
    from timectl.services.result import ServiceResult
    from timectl.services.time import TimeService


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: TimeSettings) -> None:
        self.settings = settings
        self._service: TimeService | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            from timectl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def service(self) -> TimeService:
        """The TimeService, built on first use from ``[defaults]``."""
        if self._service is None:
            from timectl.services.time import TimeService

            self._service = TimeService(self.settings.engine_config())
        return self._service

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout and returns. Warnings go to stderr so
          they never pollute piped output.
        * Failure: writes to stderr and exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
