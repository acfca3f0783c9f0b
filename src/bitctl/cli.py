"""Root CLI group for bitctl with global flags and command registration."""

from __future__ import annotations

import click
from pydantic import ValidationError

from bitctl import __version__
from bitctl.commands import register_commands
from bitctl.commands._context import AppContext
from bitctl.config.settings import BitSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="bitctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the converted value.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with timing and debug logs.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """bitctl: convert between decimal values and their bit patterns."""
    try:
        settings = BitSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    except ValidationError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
