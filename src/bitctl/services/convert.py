"""ConvertService: one-shot conversions between decimal, binary and hex.

Wraps the pure codec in :class:`ServiceResult` envelopes. Each successful
conversion reports the canonical full-width bit string together with its
grouped, hex and decimal renderings so front ends never recompute them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from bitctl.domain.codec import decode_bits, encode_decimal
from bitctl.domain.formatting import (
    bits_to_hex,
    format_bits_for_display,
    format_decimal,
    format_hex_for_display,
    hex_to_bits,
    normalize_bits,
)
from bitctl.domain.layouts import LAYOUTS, FloatLayout
from bitctl.domain.result import Err, ErrorCode
from bitctl.services.base import BaseService
from bitctl.services.result import ServiceResult, failure, success
from bitctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from bitctl.domain.layouts import Layout, LayoutName

logger = logging.getLogger(__name__)


class ConvertService(BaseService):
    """Encode, decode, and describe layouts."""

    @traced
    def encode(
        self,
        value: str,
        layout: LayoutName | str,
        *,
        precision: int | None = None,
    ) -> ServiceResult:
        """Encode decimal text as a bit pattern of *layout*."""
        op = "encode"
        target = self._lookup_layout(layout)
        if target is None:
            return self._unknown_layout(op, str(layout))

        with trace_span("encode_decimal") as span:
            encoded = encode_decimal(value, target)
            if span is not None:
                span.annotate("layout", str(target.name))
        if isinstance(encoded, Err):
            return self._conversion_failure(op, encoded, layout=str(target.name), input=value)

        bits = encoded.value
        # Re-decode so float results show the value actually stored.
        stored = decode_bits(bits, target)
        if isinstance(stored, Err):
            return self._conversion_failure(op, stored, layout=str(target.name), input=value)

        logger.debug("encode %s as %s -> %s", value, target.name, bits)
        data = {"input": value, **self._payload(target, bits, stored.value, precision)}
        return success(op, data)

    @traced
    def decode(
        self,
        bits: str,
        layout: LayoutName | str,
        *,
        precision: int | None = None,
    ) -> ServiceResult:
        """Decode a bit string. Whitespace between groups is ignored."""
        op = "decode"
        target = self._lookup_layout(layout)
        if target is None:
            return self._unknown_layout(op, str(layout))
        return self._decode(op, normalize_bits(bits), target, precision, source=bits)

    @traced
    def decode_hex(
        self,
        hex_text: str,
        layout: LayoutName | str,
        *,
        precision: int | None = None,
    ) -> ServiceResult:
        """Decode a hex string by expanding it to bits first."""
        op = "decode_hex"
        target = self._lookup_layout(layout)
        if target is None:
            return self._unknown_layout(op, str(layout))

        with trace_span("hex_to_bits"):
            expanded = hex_to_bits(hex_text)
        if isinstance(expanded, Err):
            return self._conversion_failure(op, expanded, layout=str(target.name), input=hex_text)
        if not expanded.value:
            return failure(
                op,
                ErrorCode.INVALID_HEX,
                "Hexadecimal string is empty.",
                layout=str(target.name),
                input=hex_text,
            )
        return self._decode(op, expanded.value, target, precision, source=hex_text)

    @traced
    def list_layouts(self) -> ServiceResult:
        """Summarise every supported layout."""
        items = [_layout_summary(layout) for layout in LAYOUTS.values()]
        return success("list_layouts", {"count": len(items), "items": items})

    @traced
    def describe_layout(self, layout: LayoutName | str) -> ServiceResult:
        """Full detail for one layout, including its example bit pattern."""
        op = "describe_layout"
        target = self._lookup_layout(layout)
        if target is None:
            return self._unknown_layout(op, str(layout))

        example_hex = bits_to_hex(target.example)
        data: dict[str, Any] = {
            **_layout_summary(target),
            "example": target.example,
            "example_display": format_bits_for_display(target.example, target),
            "example_hex": format_hex_for_display(example_hex),
        }
        if isinstance(target, FloatLayout):
            data["exponent_bits"] = target.exponent_bits
            data["mantissa_bits"] = target.mantissa_bits
            data["default_precision"] = self._settings.precision_for(target)
            data["max_precision"] = target.max_precision
        return success(op, data)

    # ── Internals ─────────────────────────────────────────────────────

    def _decode(
        self,
        op: str,
        bits: str,
        target: Layout,
        precision: int | None,
        *,
        source: str,
    ) -> ServiceResult:
        with trace_span("decode_bits") as span:
            decoded = decode_bits(bits, target)
            if span is not None:
                span.annotate("input_bits", len(bits))
        if isinstance(decoded, Err):
            return self._conversion_failure(op, decoded, layout=str(target.name), input=source)

        warnings: list[str] = []
        width = target.bit_width
        if len(bits) < width:
            warnings.append(f"Input zero-padded from {len(bits)} to {width} bits.")
            bits = bits.zfill(width)

        logger.debug("%s %s as %s -> %r", op, source, target.name, decoded.value)
        return success(op, self._payload(target, bits, decoded.value, precision), warnings)

    def _payload(
        self,
        target: Layout,
        bits: str,
        value: int | float,
        precision: int | None,
    ) -> dict[str, Any]:
        hex_digits = bits_to_hex(bits)
        shown = self._settings.precision_for(target, precision)
        data: dict[str, Any] = {
            "layout": str(target.name),
            "bits": bits,
            "bits_display": format_bits_for_display(bits, target),
            "hex": hex_digits,
            "hex_display": format_hex_for_display(hex_digits),
            "value": value,
            "decimal": format_decimal(value, target, shown),
        }
        if target.is_float:
            data["precision"] = shown
        return data


def _layout_summary(layout: Layout) -> dict[str, Any]:
    return {
        "name": str(layout.name),
        "bits": layout.bit_width,
        "signed": layout.signed,
        "float": layout.is_float,
        "min": layout.min,
        "max": layout.max,
        "description": layout.description,
    }
