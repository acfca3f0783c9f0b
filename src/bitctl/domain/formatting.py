"""Presentation helpers: bit grouping, hex packing, decimal display.

These are display helpers, not validating boundaries: ``bits_to_hex``
returns an empty string for input it cannot render instead of failing.
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import TYPE_CHECKING

from bitctl.domain.layouts import FloatLayout, IntegerLayout, resolve_layout
from bitctl.domain.result import ConversionResult, ErrorCode, Ok, fail

if TYPE_CHECKING:
    from bitctl.domain.layouts import Layout, LayoutName

_BITS_PATTERN = re.compile(r"[01]+")
_HEX_PATTERN = re.compile(r"[0-9A-Fa-f]*")
_WHITESPACE = re.compile(r"\s+")

BYTE_BITS = 8


def normalize_bits(text: str) -> str:
    """Remove whitespace so grouped display strings can be fed back in."""
    return _WHITESPACE.sub("", text)


def _chunks_from_right(text: str, size: int) -> list[str]:
    """Split *text* into *size*-wide chunks aligned to its right end."""
    head = len(text) % size
    chunks = [text[:head]] if head else []
    chunks.extend(text[i : i + size] for i in range(head, len(text), size))
    return chunks


def format_bits_for_display(bits: str, layout: Layout | LayoutName | str) -> str:
    """Group a bit string for reading.

    Integers are grouped into bytes from the least significant end.
    Floats are split into sign, exponent and mantissa; segments that the
    (possibly partial) input does not reach are dropped.
    """
    if not bits:
        return ""
    match resolve_layout(layout):
        case FloatLayout(exponent_bits=exponent_bits):
            exponent_end = 1 + exponent_bits
            segments = [bits[:1], bits[1:exponent_end], bits[exponent_end:]]
            return " ".join(segment for segment in segments if segment)
        case IntegerLayout():
            return " ".join(_chunks_from_right(bits, BYTE_BITS))


def bits_to_hex(bits: str) -> str:
    """Pack a bit string into uppercase hex digits.

    Input is left-padded with zeros to a multiple of four bits first.
    Returns ``""`` for empty input or input with characters other than 0/1.
    """
    if not bits or not _BITS_PATTERN.fullmatch(bits):
        return ""
    padded = bits.zfill((len(bits) + 3) // 4 * 4)
    return "".join(f"{int(padded[i : i + 4], 2):X}" for i in range(0, len(padded), 4))


def hex_to_bits(hex_text: str) -> ConversionResult[str]:
    """Expand hex digits into a bit string, four bits per digit.

    Whitespace is ignored; any other non-hex character is an error.
    """
    cleaned = _WHITESPACE.sub("", hex_text)
    if not _HEX_PATTERN.fullmatch(cleaned):
        return fail(ErrorCode.INVALID_HEX, "Invalid hexadecimal string.")
    return Ok("".join(f"{int(digit, 16):04b}" for digit in cleaned))


def format_hex_for_display(hex_text: str) -> str:
    """Group hex digits into space-separated bytes, left to right."""
    return " ".join(hex_text[i : i + 2] for i in range(0, len(hex_text), 2))


def format_decimal_for_display(value: float, precision: int) -> str:
    """Render *value* in fixed point with exactly *precision* fraction digits.

    Rounding works on the exact binary value (half away from zero). A
    nonzero value too small to show at *precision* falls back to
    exponential notation so it never reads as zero. Non-finite values
    render as ``Infinity``, ``-Infinity`` and ``NaN``.

    Examples:
        >>> format_decimal_for_display(0.1, 3)
        '0.100'
        >>> format_decimal_for_display(0, 3)
        '0.000'
        >>> format_decimal_for_display(1e-200, 2)
        '1.00e-200'
    """
    if precision < 0:
        raise ValueError(f"precision must be >= 0, got {precision}")
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return f"{0:.{precision}f}"

    exact = Decimal(value)
    context = Context(prec=max(28, exact.adjusted() + precision + 2), rounding=ROUND_HALF_UP)
    rounded = exact.quantize(Decimal(1).scaleb(-precision), context=context)
    if rounded.is_zero():
        return f"{value:.{precision}e}"
    return f"{rounded:f}"


def format_decimal(
    value: int | float,
    layout: Layout | LayoutName | str,
    precision: int,
) -> str:
    """Render a decoded value the way its layout should be displayed."""
    match resolve_layout(layout):
        case IntegerLayout():
            return str(int(value))
        case FloatLayout():
            return format_decimal_for_display(value, precision)
