"""Tests for encode_decimal / decode_bits."""

import math

import pytest

from bitctl.domain.codec import decode_bits, encode_decimal, parse_decimal
from bitctl.domain.layouts import (
    FLOAT32_MAX,
    FLOAT64_MAX,
    LAYOUTS,
    IntegerLayout,
    LayoutName,
    get_layout,
)
from bitctl.domain.result import Err, ErrorCode, Ok

FLOAT32_ONE = "00111111100000000000000000000000"
FLOAT32_PI = "01000000010010010000111111011011"
FLOAT32_INF = "0" + "1" * 8 + "0" * 23


def _hex32(value: int) -> str:
    return format(value, "032b")


class TestParseDecimal:
    def test_integer_literal_stays_exact(self) -> None:
        parsed = parse_decimal("  18446744073709551617 ")
        assert parsed == Ok(18446744073709551617)

    def test_integer_literal_past_digit_limit(self) -> None:
        parsed = parse_decimal("9" * 5000)
        assert isinstance(parsed, Ok)
        assert parsed.value == 10**5000 - 1

    @pytest.mark.parametrize("text", ["1.5", "1e3", "-0.0", "inf", "nan"])
    def test_non_integer_text_is_float(self, text: str) -> None:
        parsed = parse_decimal(text)
        assert isinstance(parsed, Ok)
        assert isinstance(parsed.value, float)

    @pytest.mark.parametrize("text", ["", "abc", "1,5", "0x10", "--1"])
    def test_rejects_garbage(self, text: str) -> None:
        parsed = parse_decimal(text)
        assert isinstance(parsed, Err)
        assert parsed.code is ErrorCode.INVALID_FLOAT
        assert parsed.message == "Invalid decimal input."


class TestEncodeInteger:
    @pytest.mark.parametrize(
        "value,layout,bits",
        [
            (-1, "Int8", "11111111"),
            (-128, "Int8", "10000000"),
            (127, "Int8", "01111111"),
            (255, "UInt8", "11111111"),
            (0, "UInt8", "00000000"),
            (-2, "Int16", "1111111111111110"),
            (65535, "UInt16", "1" * 16),
            (-2147483648, "Int32", "1" + "0" * 31),
            (4294967295, "UInt32", "1" * 32),
        ],
    )
    def test_vectors(self, value: int, layout: str, bits: str) -> None:
        assert encode_decimal(value, layout) == Ok(bits)

    def test_text_input(self) -> None:
        assert encode_decimal("-1", LayoutName.INT8) == Ok("11111111")

    def test_integral_float_accepted(self) -> None:
        assert encode_decimal("2.0", "Int8") == Ok("00000010")
        assert encode_decimal("1e2", "Int8") == Ok("01100100")

    @pytest.mark.parametrize("value", ["1.5", 0.25, "nan", "inf"])
    def test_not_integer(self, value: object) -> None:
        result = encode_decimal(value, "Int16")  # type: ignore[arg-type]
        assert isinstance(result, Err)
        assert result.code is ErrorCode.NOT_INTEGER
        assert result.message == "Only integers are allowed for this data type."

    @pytest.mark.parametrize(
        "value,layout,message",
        [
            (128, "Int8", "Value out of range for Int8 (-128 to 127)."),
            (-129, "Int8", "Value out of range for Int8 (-128 to 127)."),
            (-1, "UInt8", "Value out of range for UInt8 (0 to 255)."),
            (65536, "UInt16", "Value out of range for UInt16 (0 to 65535)."),
        ],
    )
    def test_out_of_range(self, value: int, layout: str, message: str) -> None:
        result = encode_decimal(value, layout)
        assert isinstance(result, Err)
        assert result.code is ErrorCode.OUT_OF_RANGE
        assert result.message == message

    def test_invalid_text(self) -> None:
        result = encode_decimal("twelve", "Int32")
        assert isinstance(result, Err)
        assert result.code is ErrorCode.INVALID_FLOAT

    def test_unsupported_type(self) -> None:
        result = encode_decimal(None, "Int32")  # type: ignore[arg-type]
        assert isinstance(result, Err)
        assert result.code is ErrorCode.INVALID_FLOAT

    def test_output_width_matches_layout(self) -> None:
        for layout in LAYOUTS.values():
            result = encode_decimal(0, layout)
            assert isinstance(result, Ok)
            assert len(result.value) == layout.bit_width


class TestEncodeFloat:
    def test_one(self) -> None:
        assert encode_decimal("1.0", "Float32") == Ok(FLOAT32_ONE)

    def test_pi(self) -> None:
        assert encode_decimal(math.pi, "Float32") == Ok(FLOAT32_PI)
        assert encode_decimal(math.pi, "Float64") == Ok(get_layout("Float64").example)

    @pytest.mark.parametrize(
        "value,word",
        [(-2.5, 0xC0200000), (0.1, 0x3DCCCCCD), (0.0, 0x00000000)],
    )
    def test_float32_vectors(self, value: float, word: int) -> None:
        assert encode_decimal(value, "Float32") == Ok(_hex32(word))

    def test_float64_one(self) -> None:
        assert encode_decimal(1.0, "Float64") == Ok(format(0x3FF0000000000000, "064b"))

    def test_negative_zero_keeps_sign(self) -> None:
        assert encode_decimal("-0.0", "Float32") == Ok("1" + "0" * 31)

    def test_integer_text_on_float_layout(self) -> None:
        assert encode_decimal("1", "Float32") == Ok(FLOAT32_ONE)

    def test_float32_overflow_rounds_to_infinity(self) -> None:
        assert encode_decimal("1e39", "Float32") == Ok(FLOAT32_INF)
        assert encode_decimal(-1e39, "Float32") == Ok("1" + FLOAT32_INF[1:])

    def test_huge_integer_rounds_to_infinity(self) -> None:
        result = encode_decimal("1" + "0" * 400, "Float64")
        assert result == Ok("0" + "1" * 11 + "0" * 52)

    def test_literal_past_int_digit_limit(self) -> None:
        digits = "1" * 5000
        assert encode_decimal(digits, "Float64") == Ok("0" + "1" * 11 + "0" * 52)
        assert encode_decimal("-" + digits, "Float32") == Ok("1" + "1" * 8 + "0" * 23)
        result = encode_decimal(digits, "Int8")
        assert isinstance(result, Err)
        assert result.code is ErrorCode.OUT_OF_RANGE

    def test_infinity_text(self) -> None:
        assert encode_decimal("inf", "Float32") == Ok(FLOAT32_INF)

    def test_nan(self) -> None:
        result = encode_decimal("nan", "Float32")
        assert isinstance(result, Ok)
        assert result.value[1:9] == "1" * 8
        assert "1" in result.value[9:]


class TestDecodeInteger:
    @pytest.mark.parametrize(
        "bits,layout,value",
        [
            ("11111111", "Int8", -1),
            ("10000000", "Int8", -128),
            ("11111111", "UInt8", 255),
            ("1111111111111110", "Int16", -2),
            ("1" * 32, "UInt32", 4294967295),
            ("0" + "1" * 31, "Int32", 2147483647),
        ],
    )
    def test_vectors(self, bits: str, layout: str, value: int) -> None:
        assert decode_bits(bits, layout) == Ok(value)

    def test_short_input_zero_padded(self) -> None:
        assert decode_bits("1010", "UInt16") == Ok(10)
        # Padding happens before the sign bit is read.
        assert decode_bits("1111", "Int8") == Ok(15)

    def test_round_trip_extremes(self) -> None:
        for layout in LAYOUTS.values():
            if layout.is_float:
                continue
            for value in (layout.min, layout.max):
                encoded = encode_decimal(value, layout)
                assert isinstance(encoded, Ok)
                assert decode_bits(encoded.value, layout) == Ok(value)


class TestDecodeFloat:
    def test_one(self) -> None:
        assert decode_bits(FLOAT32_ONE, "Float32") == Ok(1.0)

    def test_pi_is_single_precision(self) -> None:
        result = decode_bits(FLOAT32_PI, "Float32")
        assert result == Ok(3.1415927410125732)

    def test_infinities(self) -> None:
        assert decode_bits(FLOAT32_INF, "Float32") == Ok(math.inf)
        assert decode_bits("1" + FLOAT32_INF[1:], "Float32") == Ok(-math.inf)

    def test_nan(self) -> None:
        result = decode_bits(_hex32(0x7FC00000), "Float32")
        assert isinstance(result, Ok)
        assert math.isnan(result.value)

    def test_negative_zero(self) -> None:
        result = decode_bits("1" + "0" * 63, "Float64")
        assert isinstance(result, Ok)
        assert result.value == 0.0
        assert math.copysign(1.0, result.value) == -1.0

    def test_short_input_rejected(self) -> None:
        result = decode_bits("1010", LayoutName.FLOAT32)
        assert isinstance(result, Err)
        assert result.code is ErrorCode.LENGTH_MISMATCH
        assert result.message == "Expected 32 bits for Float32, got 4."


class TestDecodeErrors:
    @pytest.mark.parametrize("bits", ["", "10201", "0b101", "1 0"])
    def test_invalid_character(self, bits: str) -> None:
        result = decode_bits(bits, "Int8")
        assert isinstance(result, Err)
        assert result.code is ErrorCode.INVALID_CHARACTER
        assert result.message == "Invalid binary string: only 0 and 1 are allowed."

    def test_too_long(self) -> None:
        result = decode_bits("1" * 9, "Int8")
        assert isinstance(result, Err)
        assert result.code is ErrorCode.LENGTH_EXCEEDED
        assert result.message == "Expected 8 bits for Int8, got 9."

    def test_too_long_float(self) -> None:
        result = decode_bits("0" * 33, "Float32")
        assert isinstance(result, Err)
        assert result.code is ErrorCode.LENGTH_EXCEEDED


class TestRoundTrip:
    @pytest.mark.parametrize(
        "layout", [lay for lay in LAYOUTS.values() if isinstance(lay, IntegerLayout)]
    )
    def test_range_edges_rejected(self, layout: IntegerLayout) -> None:
        for value in (layout.min - 1, layout.max + 1):
            result = encode_decimal(value, layout)
            assert isinstance(result, Err)
            assert result.code is ErrorCode.OUT_OF_RANGE

    @pytest.mark.parametrize(
        "name,value",
        [
            *(("Float32", v) for v in (1.0, -2.5, 0.15625, 2.0**-149, FLOAT32_MAX, -0.0)),
            *(("Float64", v) for v in (1.0, -2.5, 0.1, 5e-324, FLOAT64_MAX, -0.0)),
        ],
    )
    def test_float_bit_exact(self, name: str, value: float) -> None:
        encoded = encode_decimal(value, name)
        assert isinstance(encoded, Ok)
        decoded = decode_bits(encoded.value, name)
        assert isinstance(decoded, Ok)
        assert decoded.value == value
        assert math.copysign(1.0, decoded.value) == math.copysign(1.0, value)

    def test_nan_decodes_to_nan(self) -> None:
        for name in ("Float32", "Float64"):
            encoded = encode_decimal(math.nan, name)
            assert isinstance(encoded, Ok)
            decoded = decode_bits(encoded.value, name)
            assert isinstance(decoded, Ok)
            assert math.isnan(decoded.value)

    @pytest.mark.parametrize("name", ["Int8", "UInt8", "Int16", "UInt16"])
    def test_every_value_of_narrow_integers(self, name: str) -> None:
        layout = get_layout(name)
        assert isinstance(layout, IntegerLayout)
        for value in range(layout.min, layout.max + 1):
            encoded = encode_decimal(value, layout)
            assert isinstance(encoded, Ok)
            assert decode_bits(encoded.value, layout) == Ok(value)
