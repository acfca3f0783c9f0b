"""Encoder and decoder between decimal values and fixed-width bit strings.

Integers use two's complement (signed) or plain binary (unsigned).
Floats use the IEEE-754 binary32/binary64 interchange formats with the
most significant byte first. Pure functions, no infrastructure
dependencies.
"""

from __future__ import annotations

import math
import re
import struct
from decimal import Decimal
from typing import TYPE_CHECKING

from bitctl.domain.layouts import FloatLayout, IntegerLayout, resolve_layout
from bitctl.domain.result import ConversionResult, Err, ErrorCode, Ok, fail

if TYPE_CHECKING:
    from bitctl.domain.layouts import Layout, LayoutName

_BITS_PATTERN = re.compile(r"[01]+")
_INT_LITERAL = re.compile(r"[+-]?\d+")


def parse_decimal(text: str) -> ConversionResult[int | float]:
    """Parse decimal text into a number.

    Integer literals stay exact ``int`` values so wide integers never pass
    through a float. Everything else goes through ``float()``, which also
    accepts exponents, ``inf`` and ``nan``.
    """
    stripped = text.strip()
    if _INT_LITERAL.fullmatch(stripped):
        try:
            return Ok(int(stripped))
        except ValueError:
            # int() refuses literals past sys.get_int_max_str_digits();
            # Decimal has no such limit and still converts exactly.
            return Ok(int(Decimal(stripped)))
    try:
        return Ok(float(stripped))
    except ValueError:
        return fail(ErrorCode.INVALID_FLOAT, "Invalid decimal input.")


def encode_decimal(
    value: int | float | str,
    layout: Layout | LayoutName | str,
) -> ConversionResult[str]:
    """Encode *value* as a bit string exactly ``layout.bit_width`` long.

    *value* may be a number or decimal text. Returns an :class:`Err` for
    non-numeric input, non-integers on integer layouts, and out-of-range
    integers.
    """
    target = resolve_layout(layout)

    number: int | float
    if isinstance(value, str):
        parsed = parse_decimal(value)
        if isinstance(parsed, Err):
            return parsed
        number = parsed.value
    elif isinstance(value, (int, float)):
        number = value
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return fail(ErrorCode.INVALID_FLOAT, "Invalid floating point number.")

    match target:
        case IntegerLayout():
            return _encode_integer(number, target)
        case FloatLayout():
            return _encode_float(number, target)


def _encode_integer(number: int | float, layout: IntegerLayout) -> ConversionResult[str]:
    if isinstance(number, float):
        # False for NaN and the infinities too
        if not number.is_integer():
            return fail(ErrorCode.NOT_INTEGER, "Only integers are allowed for this data type.")
        number = int(number)

    if number < layout.min or number > layout.max:
        return fail(
            ErrorCode.OUT_OF_RANGE,
            f"Value out of range for {layout.name} ({layout.min} to {layout.max}).",
        )

    if number < 0:
        number += 1 << layout.bits
    return Ok(format(number, f"0{layout.bits}b"))


def _encode_float(number: int | float, layout: FloatLayout) -> ConversionResult[str]:
    try:
        packed = struct.pack(layout.struct_format, number)
    except OverflowError:
        # Finite magnitude beyond the format's range rounds to infinity.
        packed = struct.pack(layout.struct_format, -math.inf if number < 0 else math.inf)
    return Ok("".join(f"{byte:08b}" for byte in packed))


def decode_bits(
    bits: str,
    layout: Layout | LayoutName | str,
) -> ConversionResult[int | float]:
    """Decode a bit string into the number it represents under *layout*.

    Integer layouts left-pad short input with zeros. Float layouts require
    the exact width because sign and exponent positions are fixed.
    """
    target = resolve_layout(layout)

    if not _BITS_PATTERN.fullmatch(bits):
        return fail(
            ErrorCode.INVALID_CHARACTER,
            "Invalid binary string: only 0 and 1 are allowed.",
        )

    width = target.bit_width
    if len(bits) > width:
        return fail(
            ErrorCode.LENGTH_EXCEEDED,
            f"Expected {width} bits for {target.name}, got {len(bits)}.",
        )

    match target:
        case IntegerLayout(signed=signed):
            padded = bits.zfill(width)
            value = int(padded, 2)
            if signed and padded[0] == "1":
                value -= 1 << width
            return Ok(value)
        case FloatLayout():
            if len(bits) < width:
                return fail(
                    ErrorCode.LENGTH_MISMATCH,
                    f"Expected {width} bits for {target.name}, got {len(bits)}.",
                )
            raw = bytes(int(bits[i : i + 8], 2) for i in range(0, width, 8))
            (number,) = struct.unpack(target.struct_format, raw)
            return Ok(number)
