"""Rich Console factory and theme for bitctl output.

Consoles render into a StringIO buffer so renderers keep a plain
``str`` return contract. Rich drops color codes automatically when the
output is not a terminal (tests, pipes).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

BIT_THEME = Theme(
    {
        "bit.ok": "bold green",
        "bit.error": "bold red",
        "bit.warning": "bold yellow",
        "bit.op": "bold cyan",
        "bit.key": "dim",
        "bit.decimal": "bold",
        "bit.hex": "bold blue",
        "bit.sign": "magenta",
        "bit.exponent": "green",
        "bit.mantissa": "cyan",
        "bit.state": "italic",
    }
)

_FIELD_STYLES: dict[str, str] = {
    "sign": "bit.sign",
    "exponent": "bit.exponent",
    "mantissa": "bit.mantissa",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override the terminal width; wide enough for 64 grouped bits by default.
    """
    return Console(
        file=StringIO(),
        theme=BIT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_field(field_name: str) -> str:
    """Theme style for an IEEE-754 field name (``sign``, ``exponent``, ``mantissa``)."""
    return _FIELD_STYLES.get(field_name, "")
