"""Conversion result union and error taxonomy.

INVARIANT: Core conversion functions return ``Ok | Err`` and never raise
for bad input. Exceptions are reserved for programming errors.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ErrorCode(StrEnum):
    """Reasons a conversion can fail."""

    NOT_INTEGER = "NOT_INTEGER"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    INVALID_FLOAT = "INVALID_FLOAT"
    INVALID_CHARACTER = "INVALID_CHARACTER"
    LENGTH_MISMATCH = "LENGTH_MISMATCH"
    LENGTH_EXCEEDED = "LENGTH_EXCEEDED"
    INVALID_HEX = "INVALID_HEX"


@dataclass(frozen=True)
class ConversionError:
    """Human-readable failure with a machine-readable code."""

    code: ErrorCode
    message: str


@dataclass(frozen=True)
class Ok[T]:
    """Successful conversion."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed conversion."""

    error: ConversionError

    @property
    def ok(self) -> bool:
        return False

    @property
    def code(self) -> ErrorCode:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message


type ConversionResult[T] = Ok[T] | Err


def fail(code: ErrorCode, message: str) -> Err:
    """Shorthand for building an :class:`Err`."""
    return Err(ConversionError(code=code, message=message))
