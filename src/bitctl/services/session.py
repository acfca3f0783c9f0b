"""ConverterSession: the interactive converter as an explicit state machine.

The session keeps three linked fields (decimal text, bit string, and the
hex view derived from the bits) for one layout. Whichever field the user
is editing drives the others; ``state`` records which one that is so a
redraw never overwrites text the user is still typing.

States::

    idle ──edit_decimal──> editing-decimal
      │ ──edit_bits─────> editing-bits
      │ ──edit_hex──────> editing-hex
      <──clear / set_layout / select── (any)

Every edit that yields a complete conversion is recorded in a bounded,
newest-first history.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
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
from bitctl.domain.layouts import LayoutName, clamp_precision, get_layout
from bitctl.domain.result import Err, ErrorCode
from bitctl.services._helpers import new_item_id, now_utc
from bitctl.services.base import BaseService
from bitctl.services.result import ServiceResult, success

if TYPE_CHECKING:
    from bitctl.config.settings import BitSettings
    from bitctl.domain.layouts import Layout
    from bitctl.domain.result import ConversionError

logger = logging.getLogger(__name__)


class EditState(StrEnum):
    """Which field the user last edited."""

    IDLE = "idle"
    EDITING_DECIMAL = "editing-decimal"
    EDITING_BITS = "editing-bits"
    EDITING_HEX = "editing-hex"


@dataclass(frozen=True)
class ConversionHistoryItem:
    """Snapshot of one completed conversion."""

    id: str
    decimal: str
    binary: str
    layout: LayoutName
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "decimal": self.decimal,
            "binary": self.binary,
            "layout": str(self.layout),
            "timestamp": self.timestamp.isoformat(),
        }


def is_partial_decimal(text: str) -> bool:
    """True for text the user is plainly still typing (``-``, ``1.``, ``2e-``)."""
    lowered = text.strip().lower()
    return (
        lowered in ("", "-", "+")
        or lowered.endswith(".")
        or lowered.endswith(("e", "e-", "e+"))
    )


class ConverterSession(BaseService):
    """Mutable, single-owner converter state for one interactive user."""

    def __init__(
        self,
        settings: BitSettings | None = None,
        *,
        layout: LayoutName | str | None = None,
    ) -> None:
        super().__init__(settings)
        self.layout: Layout = get_layout(layout or self._settings.display.default_layout)
        self.precision = self._settings.precision_for(self.layout)
        self.state = EditState.IDLE
        self.decimal_text = ""
        self.bits = ""
        self.error: ConversionError | None = None
        self._history: list[ConversionHistoryItem] = []

    # ── Derived views ─────────────────────────────────────────────────

    @property
    def bits_display(self) -> str:
        return format_bits_for_display(self.bits, self.layout)

    @property
    def hex_display(self) -> str:
        return format_hex_for_display(bits_to_hex(self.bits))

    @property
    def history(self) -> tuple[ConversionHistoryItem, ...]:
        return tuple(self._history)

    def field_error(self, field: EditState) -> str | None:
        """The current error message if it belongs to *field*."""
        if self.error is None or self.state is not field:
            return None
        return self.error.message

    # ── Transitions ───────────────────────────────────────────────────

    def set_layout(self, layout: LayoutName | str) -> None:
        """Switch layout; clears all fields and resets the precision.

        Raises:
            KeyError: *layout* is not a supported layout name.
        """
        self.layout = get_layout(layout)
        self.precision = self._settings.precision_for(self.layout)
        self.clear()

    def set_precision(self, precision: int) -> None:
        """Change the decimal precision and re-render the decimal field.

        The decimal is redrawn even while it is being edited, since the
        user asked for a different format explicitly.
        """
        self.precision = clamp_precision(self.layout, precision)
        if not self.bits:
            return
        decoded = decode_bits(self.bits, self.layout)
        if not isinstance(decoded, Err):
            self.decimal_text = format_decimal(decoded.value, self.layout, self.precision)

    def edit_decimal(self, text: str) -> None:
        """The user typed into the decimal field."""
        self.state = EditState.EDITING_DECIMAL
        self.decimal_text = text
        if is_partial_decimal(text):
            self.bits = ""
            self.error = None
            return

        encoded = encode_decimal(text, self.layout)
        if isinstance(encoded, Err):
            self.bits = ""
            self.error = encoded.error
            return
        self.bits = encoded.value
        self.error = None
        self._record()

    def edit_bits(self, text: str) -> None:
        """The user typed into the binary field. Whitespace is ignored."""
        self.state = EditState.EDITING_BITS
        cleaned = normalize_bits(text)
        if not cleaned:
            self._clear_fields()
            return
        self._apply_bits(cleaned)

    def edit_hex(self, text: str) -> None:
        """The user typed into the hexadecimal field."""
        self.state = EditState.EDITING_HEX
        expanded = hex_to_bits(text)
        if isinstance(expanded, Err):
            self.bits = ""
            self.decimal_text = ""
            self.error = expanded.error
            return
        if not expanded.value:
            self._clear_fields()
            return
        self._apply_bits(expanded.value)

    def clear(self) -> None:
        """Empty every field and return to idle. History is kept."""
        self._clear_fields()
        self.state = EditState.IDLE

    def clear_history(self) -> None:
        self._history.clear()

    def select(self, index: int) -> ConversionHistoryItem:
        """Restore history entry *index* (0 = newest).

        Raises:
            IndexError: No history entry at *index*.
        """
        item = self._history[index]
        if item.layout != self.layout.name:
            self.set_layout(item.layout)
        self.clear()
        self._apply_bits(item.binary, record=False)
        self.state = EditState.IDLE
        return item

    # ── Rendering ─────────────────────────────────────────────────────

    def to_result(self) -> ServiceResult:
        """Snapshot the session as a ``session`` ServiceResult.

        A field error is part of the form state, not a failed operation,
        so it travels in ``data["error"]`` and the result stays ``ok``.
        """
        data: dict[str, Any] = {
            "layout": str(self.layout.name),
            "state": str(self.state),
            "decimal": self.decimal_text,
            "bits": self.bits,
            "bits_display": self.bits_display,
            "hex_display": self.hex_display,
            "error": None,
        }
        if self.layout.is_float:
            data["precision"] = self.precision
        if self.error is not None:
            data["error"] = {
                "field": str(self.state),
                "code": str(self.error.code),
                "message": self.error.message,
            }
        return success("session", data)

    # ── Internals ─────────────────────────────────────────────────────

    def _clear_fields(self) -> None:
        self.decimal_text = ""
        self.bits = ""
        self.error = None

    def _apply_bits(self, bits: str, *, record: bool = True) -> None:
        decoded = decode_bits(bits, self.layout)
        if isinstance(decoded, Err):
            # Keep partial input visible unless it is not binary at all.
            self.bits = "" if decoded.code is ErrorCode.INVALID_CHARACTER else bits
            self.decimal_text = ""
            self.error = decoded.error
            return
        self.bits = bits
        self.decimal_text = format_decimal(decoded.value, self.layout, self.precision)
        self.error = None
        if record:
            self._record()

    def _record(self) -> None:
        limit = self._settings.history.limit
        if limit == 0 or len(self.bits) != self.layout.bit_width:
            return
        newest = self._history[0] if self._history else None
        if newest and newest.binary == self.bits and newest.layout == self.layout.name:
            return
        item = ConversionHistoryItem(
            id=new_item_id(),
            decimal=self.decimal_text,
            binary=self.bits,
            layout=self.layout.name,
            timestamp=now_utc(),
        )
        self._history.insert(0, item)
        del self._history[limit:]
        logger.debug("history += %s %s", item.layout, item.binary)
