"""ServiceResult and ServiceError: the contract every service returns.

INVARIANT: Service methods never raise for bad user input. The CLI and
the interactive shell consume this type and decide how to present it.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True, "ser_json_inf_nan": "strings"}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Uniform envelope for service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"encode"``, ``"decode"``, ``"list_layouts"`` ...).
        data: Operation payload on success.
        warnings: Non-fatal notes, e.g. that short input was zero-padded.
        error: Populated when ``ok`` is False.
        meta: Optional metadata such as the telemetry span tree.

    JSON output writes non-finite floats as the strings ``"Infinity"``,
    ``"-Infinity"`` and ``"NaN"`` so decoded special values survive.
    """

    model_config = {"frozen": True, "ser_json_inf_nan": "strings"}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None


def success(op: str, data: dict[str, Any], warnings: list[str] | None = None) -> ServiceResult:
    """Build a successful result."""
    return ServiceResult(ok=True, op=op, data=data, warnings=warnings or [])


def failure(op: str, code: str, message: str, **detail: Any) -> ServiceResult:
    """Build a failed result carrying a :class:`ServiceError`."""
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=detail),
    )
