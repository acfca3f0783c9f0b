"""Pydantic configuration sections with code-baked defaults.

``bitctl.toml`` only needs the values it overrides::

    [display]
    default_layout = "Int16"
    float64_precision = 17

    [history]
    limit = 20
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from bitctl.domain.layouts import LayoutName, parse_layout_name


class DisplayConfig(BaseModel):
    """[display] section."""

    model_config = {"frozen": True}

    default_layout: LayoutName = LayoutName.FLOAT32
    float32_precision: int = Field(default=7, ge=0)
    float64_precision: int = Field(default=15, ge=0)
    group_bits: bool = True

    @field_validator("default_layout", mode="before")
    @classmethod
    def _match_layout_case(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_layout_name(value) or value
        return value


class HistoryConfig(BaseModel):
    """[history] section."""

    model_config = {"frozen": True}

    limit: int = Field(default=50, ge=0)
