"""Custom Click base classes and shared options.

BitCommand and BitGroup accept an ``examples`` parameter. Passing
``--examples`` prints them and exits, which keeps ``--help`` short.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click

from bitctl.domain.layouts import LayoutName

F = TypeVar("F", bound=Callable[..., Any])

LAYOUT_CHOICES = [name.value for name in LayoutName]


def _add_examples_option(cmd: click.Command | click.Group, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class BitCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class BitGroup(click.Group):
    """Click Group whose subcommands are BitCommands by default."""

    command_class = BitCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


def layout_option(func: F) -> F:
    """``-t/--type``: layout name, case-insensitive. Defaults to the config value."""
    return click.option(
        "-t",
        "--type",
        "layout",
        type=click.Choice(LAYOUT_CHOICES, case_sensitive=False),
        default=None,
        help="Numeric layout. Defaults to [display] default_layout.",
    )(func)


def precision_option(func: F) -> F:
    """``-p/--precision``: decimal places shown for float layouts."""
    return click.option(
        "-p",
        "--precision",
        type=click.IntRange(min=0),
        default=None,
        help="Decimal places for float output (clamped to 10 for Float32, 20 for Float64).",
    )(func)
