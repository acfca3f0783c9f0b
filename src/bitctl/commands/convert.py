"""Commands: encode, decode, hex."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bitctl.commands._base import BitCommand, layout_option, precision_option

if TYPE_CHECKING:
    from bitctl.commands._context import AppContext


@click.command(
    cls=BitCommand,
    context_settings={"ignore_unknown_options": True},
    examples="""\
  bitctl encode 1.0
  bitctl encode -1 --type Int8
  bitctl encode 255 -t uint8
  bitctl encode 6.022e23 -t Float64
  bitctl encode -- -0.0 -t Float32
  bitctl -q encode 42 -t Int16
  bitctl --json encode nan""",
)
@click.argument("value")
@layout_option
@precision_option
@click.pass_obj
def encode(app: AppContext, value: str, layout: str | None, precision: int | None) -> None:
    """Encode a decimal VALUE as a bit pattern."""
    result = app.convert.encode(value, app.default_layout(layout), precision=precision)
    app.emit(result)


@click.command(
    cls=BitCommand,
    examples="""\
  bitctl decode 11111111 -t Int8
  bitctl decode 1010 -t UInt16
  bitctl decode 0 01111111 00000000000000000000000
  bitctl decode 0100000000001001001000011111101101010100010001000010110100011000 -t Float64 -p 20
  bitctl -q decode 10000000 -t Int8""",
)
@click.argument("bits", nargs=-1, required=True)
@layout_option
@precision_option
@click.pass_obj
def decode(
    app: AppContext,
    bits: tuple[str, ...],
    layout: str | None,
    precision: int | None,
) -> None:
    """Decode BITS into a decimal value.

    Groups may be separated by spaces, so grouped output can be pasted
    back. Integer layouts zero-pad short input; float layouts need every bit.
    """
    result = app.convert.decode(" ".join(bits), app.default_layout(layout), precision=precision)
    app.emit(result)


@click.command(
    "hex",
    cls=BitCommand,
    examples="""\
  bitctl hex 3F800000
  bitctl hex 3f 80 00 00 -t Float32
  bitctl hex FF -t Int8
  bitctl hex 400921FB54442D18 -t Float64""",
)
@click.argument("hex_digits", nargs=-1, required=True)
@layout_option
@precision_option
@click.pass_obj
def hex_cmd(
    app: AppContext,
    hex_digits: tuple[str, ...],
    layout: str | None,
    precision: int | None,
) -> None:
    """Decode hexadecimal HEX_DIGITS into a decimal value."""
    result = app.convert.decode_hex(
        " ".join(hex_digits), app.default_layout(layout), precision=precision
    )
    app.emit(result)
