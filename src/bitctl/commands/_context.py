"""AppContext: shared Click context for all commands.

Created once by the root CLI group and handed to subcommands through
``@click.pass_obj``. Owns logging setup, the service instance, and
result emission (stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bitctl.config.logging import configure_logging
from bitctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from bitctl.config.settings import BitSettings
    from bitctl.services.convert import ConvertService
    from bitctl.services.result import ServiceResult


class AppContext:
    """Context object flowing through Click's command hierarchy."""

    def __init__(self, settings: BitSettings) -> None:
        self.settings = settings
        self._convert: ConvertService | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from bitctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def convert(self) -> ConvertService:
        """The conversion service (created on first use)."""
        if self._convert is None:
            from bitctl.services.convert import ConvertService

            self._convert = ConvertService(self.settings)
        return self._convert

    def default_layout(self, layout: str | None) -> str:
        """The ``--type`` value, or the configured default when omitted."""
        return layout or str(self.settings.display.default_layout)

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            group_bits=self.settings.display.group_bits,
        )

    def render(self, result: ServiceResult) -> str:
        return format_result(result, settings=self.output_settings)

    def emit(self, result: ServiceResult) -> None:
        """Print a ServiceResult with the right stream and exit code.

        * Success: stdout, normal return. Warnings go to stderr so piped
          output stays clean.
        * Failure: stderr, exit code 1.
        """
        output = self.render(result)
        if result.ok:
            click.echo(output)
            # JSON output already carries the warnings.
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
