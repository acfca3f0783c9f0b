"""Command: interactive converter shell.

A line-oriented stand-in for a converter form. Each line edits one
field of a :class:`ConverterSession` and the three linked fields are
redrawn after every edit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bitctl.commands._base import BitCommand, layout_option
from bitctl.domain.layouts import parse_layout_name
from bitctl.services.session import ConverterSession

if TYPE_CHECKING:
    from collections.abc import Callable

    from bitctl.commands._context import AppContext

SHELL_HELP = """\
  d VALUE        edit the decimal field
  b BITS         edit the binary field (spaces allowed)
  h HEX          edit the hexadecimal field
  type NAME      switch layout (clears the fields)
  precision N    decimal places for float layouts
  history        list recent conversions
  select N       restore history entry N
  clear          clear the fields
  clear-history  forget all history entries
  help           show this text
  quit           leave the shell"""

QUIT_VERBS = frozenset({"quit", "q", "exit"})


def _set_layout(session: ConverterSession, arg: str) -> str | None:
    name = parse_layout_name(arg)
    if name is None:
        return f"Unknown layout '{arg}'."
    session.set_layout(name)
    return None


def _set_precision(session: ConverterSession, arg: str) -> str | None:
    try:
        precision = int(arg)
    except ValueError:
        return f"Precision must be a whole number, got '{arg}'."
    session.set_precision(precision)
    return None


def _show_history(session: ConverterSession, _arg: str) -> str | None:
    if not session.history:
        return "No conversions yet."
    return "\n".join(
        f"  {index:>3}  {item.layout:<8} {item.decimal}  ->  {item.binary}"
        for index, item in enumerate(session.history)
    )


def _select(session: ConverterSession, arg: str) -> str | None:
    if not arg.isdecimal() or int(arg) >= len(session.history):
        return f"No history entry '{arg}'."
    session.select(int(arg))
    return None


_VERBS: dict[str, Callable[[ConverterSession, str], str | None]] = {
    "d": ConverterSession.edit_decimal,
    "b": ConverterSession.edit_bits,
    "h": ConverterSession.edit_hex,
    "type": _set_layout,
    "precision": _set_precision,
    "p": _set_precision,
    "history": _show_history,
    "select": _select,
    "clear": lambda session, _arg: session.clear(),
    "clear-history": lambda session, _arg: session.clear_history(),
    "help": lambda _session, _arg: SHELL_HELP,
    "?": lambda _session, _arg: SHELL_HELP,
}

# Verbs that only print text; the others redraw the fields.
_TEXT_VERBS = frozenset({"history", "help", "?"})


def run_line(session: ConverterSession, line: str) -> tuple[str | None, bool]:
    """Apply one shell line to *session*.

    Returns ``(message, redraw)``: text to print first, and whether the
    session fields should be redrawn afterwards.
    """
    verb, _, arg = line.strip().partition(" ")
    verb = verb.lower()
    handler = _VERBS.get(verb)
    if handler is None:
        return f"Unknown command '{verb}'. Type 'help' for commands.", False
    message = handler(session, arg.strip())
    return message, message is None and verb not in _TEXT_VERBS


@click.command(
    cls=BitCommand,
    examples="""\
  bitctl shell
  bitctl shell -t Int16
  printf 'd 1.5\\nb 0 10000000 00000000000000000000000\\nquit\\n' | bitctl shell""",
)
@layout_option
@click.pass_obj
def shell(app: AppContext, layout: str | None) -> None:
    """Interactive converter: edit decimal, binary or hex and see the rest."""
    session = ConverterSession(app.settings, layout=app.default_layout(layout))
    if not app.settings.quiet:
        click.echo(f"bitctl shell ({session.layout.name}). Type 'help' for commands.")

    while True:
        try:
            line = click.prompt("bitctl", prompt_suffix="> ", default="", show_default=False)
        except click.Abort:
            break
        if not line.strip():
            continue
        if line.strip().lower() in QUIT_VERBS:
            break
        message, redraw = run_line(session, line)
        if message:
            click.echo(message)
        if redraw:
            click.echo(app.render(session.to_result()))
