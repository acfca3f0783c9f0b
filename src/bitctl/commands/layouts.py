"""Command group: inspect the supported layouts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bitctl.commands._base import BitGroup

if TYPE_CHECKING:
    from bitctl.commands._context import AppContext


@click.group(
    cls=BitGroup,
    examples="""\
  bitctl layouts list
  bitctl -v layouts list
  bitctl layouts show Float32
  bitctl --json layouts show int16""",
)
def layouts() -> None:
    """List and describe numeric layouts."""


@layouts.command(
    "list",
    examples="""\
  bitctl layouts list
  bitctl -q layouts list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List every supported layout with its range."""
    app.emit(app.convert.list_layouts())


@layouts.command(
    examples="""\
  bitctl layouts show Float64
  bitctl layouts show uint8""",
)
@click.argument("name")
@click.pass_obj
def show(app: AppContext, name: str) -> None:
    """Show field widths, range and an example pattern for layout NAME."""
    app.emit(app.convert.describe_layout(name))
