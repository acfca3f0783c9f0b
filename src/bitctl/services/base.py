"""BaseService: shared plumbing for bitctl services.

Every service receives the frozen :class:`BitSettings` at construction
time and reads display defaults from it. Layout lookup and the mapping
of core conversion errors onto :class:`ServiceResult` live here so each
operation reports failures the same way.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from bitctl.config.settings import BitSettings
from bitctl.domain.layouts import LayoutName, get_layout, parse_layout_name
from bitctl.services.result import ServiceResult, failure

if TYPE_CHECKING:
    from bitctl.domain.layouts import Layout
    from bitctl.domain.result import Err

logger = logging.getLogger(__name__)

UNKNOWN_LAYOUT = "UNKNOWN_LAYOUT"


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ConvertService(BaseService):
            def encode(self, value: str, layout: str) -> ServiceResult:
                target = self._lookup_layout(layout)
                ...
    """

    def __init__(self, settings: BitSettings | None = None) -> None:
        self._settings = settings if settings is not None else BitSettings()

    @property
    def settings(self) -> BitSettings:
        return self._settings

    @staticmethod
    def _lookup_layout(name: LayoutName | str) -> Layout | None:
        key = name if isinstance(name, LayoutName) else parse_layout_name(name)
        return None if key is None else get_layout(key)

    @staticmethod
    def _unknown_layout(op: str, name: str) -> ServiceResult:
        choices = ", ".join(LayoutName)
        return failure(
            op,
            UNKNOWN_LAYOUT,
            f"Unknown layout '{name}'. Choose one of: {choices}.",
            layout=name,
        )

    @staticmethod
    def _conversion_failure(op: str, err: Err, **detail: Any) -> ServiceResult:
        logger.debug("%s failed: %s (%s)", op, err.message, err.code)
        return failure(op, err.code, err.message, **detail)
