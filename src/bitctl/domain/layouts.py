"""Layout registry: the eight fixed numeric layouts.

Integer and float layouts are distinct frozen types so callers dispatch
with ``match`` instead of checking ``is_float`` / ``signed`` flags.

INVARIANT: The registry is built once at import time and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType

FLOAT32_MAX = 3.4028234663852886e38
FLOAT64_MAX = 1.7976931348623157e308


class LayoutName(StrEnum):
    """Names of the supported layouts."""

    INT8 = "Int8"
    UINT8 = "UInt8"
    INT16 = "Int16"
    UINT16 = "UInt16"
    INT32 = "Int32"
    UINT32 = "UInt32"
    FLOAT32 = "Float32"
    FLOAT64 = "Float64"


@dataclass(frozen=True)
class IntegerLayout:
    """Two's-complement (signed) or plain binary (unsigned) integer."""

    name: LayoutName
    bits: int
    signed: bool
    min: int
    max: int
    description: str
    example: str

    @property
    def bit_width(self) -> int:
        return self.bits

    @property
    def is_float(self) -> bool:
        return False


@dataclass(frozen=True)
class FloatLayout:
    """IEEE-754 binary interchange float, stored big-endian."""

    name: LayoutName
    bits: int
    exponent_bits: int
    mantissa_bits: int
    max: float
    default_precision: int
    max_precision: int
    description: str
    example: str

    @property
    def bit_width(self) -> int:
        return self.bits

    @property
    def is_float(self) -> bool:
        return True

    @property
    def signed(self) -> bool:
        return True

    @property
    def min(self) -> float:
        return -self.max

    @property
    def struct_format(self) -> str:
        """``struct`` format string for the big-endian byte layout."""
        return ">f" if self.bits == 32 else ">d"


type Layout = IntegerLayout | FloatLayout


def _int_layout(name: LayoutName, bits: int, *, signed: bool, example: str) -> IntegerLayout:
    if signed:
        lo, hi = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        lo, hi = 0, (1 << bits) - 1
    kind = "signed" if signed else "unsigned"
    return IntegerLayout(
        name=name,
        bits=bits,
        signed=signed,
        min=lo,
        max=hi,
        description=f"{bits}-bit {kind} integer.",
        example=example,
    )


_LAYOUTS: dict[LayoutName, Layout] = {
    LayoutName.INT8: _int_layout(LayoutName.INT8, 8, signed=True, example="11111111"),
    LayoutName.UINT8: _int_layout(LayoutName.UINT8, 8, signed=False, example="10000000"),
    LayoutName.INT16: _int_layout(
        LayoutName.INT16, 16, signed=True, example="1000000000000001"
    ),
    LayoutName.UINT16: _int_layout(LayoutName.UINT16, 16, signed=False, example="1" * 16),
    LayoutName.INT32: _int_layout(LayoutName.INT32, 32, signed=True, example="0" + "1" * 31),
    LayoutName.UINT32: _int_layout(LayoutName.UINT32, 32, signed=False, example="1" + "0" * 31),
    LayoutName.FLOAT32: FloatLayout(
        name=LayoutName.FLOAT32,
        bits=32,
        exponent_bits=8,
        mantissa_bits=23,
        max=FLOAT32_MAX,
        default_precision=7,
        max_precision=10,
        description="32-bit single-precision float (IEEE 754).",
        # pi, 0x40490FDB
        example="0100" "0000" "0100" "1001" "0000" "1111" "1101" "1011",
    ),
    LayoutName.FLOAT64: FloatLayout(
        name=LayoutName.FLOAT64,
        bits=64,
        exponent_bits=11,
        mantissa_bits=52,
        max=FLOAT64_MAX,
        default_precision=15,
        max_precision=20,
        description="64-bit double-precision float (IEEE 754).",
        # pi, 0x400921FB54442D18
        example=(
            "0100" "0000" "0000" "1001" "0010" "0001" "1111" "1011"
            "0101" "0100" "0100" "0100" "0010" "1101" "0001" "1000"
        ),
    ),
}

LAYOUTS: MappingProxyType[LayoutName, Layout] = MappingProxyType(_LAYOUTS)

_BY_LOWER: dict[str, LayoutName] = {name.value.lower(): name for name in LayoutName}


def parse_layout_name(name: str) -> LayoutName | None:
    """Match *name* case-insensitively against the layout names.

    Returns None when *name* is not a supported layout.
    """
    return _BY_LOWER.get(name.strip().lower())


def get_layout(name: LayoutName | str) -> Layout:
    """Return the layout registered under *name*.

    Raises:
        KeyError: *name* is not one of the eight supported layouts.
    """
    key = name if isinstance(name, LayoutName) else parse_layout_name(name)
    if key is None:
        raise KeyError(f"Unknown layout: {name!r}")
    return LAYOUTS[key]


def resolve_layout(layout: Layout | LayoutName | str) -> Layout:
    """Pass a layout through unchanged, or look it up by name."""
    if isinstance(layout, (IntegerLayout, FloatLayout)):
        return layout
    return get_layout(layout)


def clamp_precision(layout: Layout, precision: int | None) -> int:
    """Clamp a display precision to the layout's limits.

    Integer layouts always display with precision 0. ``None`` selects the
    layout default.
    """
    match layout:
        case IntegerLayout():
            return 0
        case FloatLayout(default_precision=default, max_precision=limit):
            if precision is None:
                return default
            return max(0, min(precision, limit))
