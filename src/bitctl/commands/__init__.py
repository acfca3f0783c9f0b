"""Subcommand modules for bitctl.

``register_commands()`` imports command modules lazily so that
``bitctl --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the layouts group and the standalone commands on the root group."""
    from bitctl.commands.layouts import layouts

    cli.add_command(layouts)

    from bitctl.commands.convert import decode, encode, hex_cmd
    from bitctl.commands.shell import shell

    cli.add_command(encode)
    cli.add_command(decode)
    cli.add_command(hex_cmd)
    cli.add_command(shell)
