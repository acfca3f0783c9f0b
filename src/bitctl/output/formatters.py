"""Output mode selection for ServiceResult.

Humans get Rich-rendered text, scripts get ``--json``, and ``--quiet``
prints only the primary value so it can be piped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from bitctl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from bitctl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Presentation flags taken from the global CLI options."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    group_bits: bool = True


def format_result(
    result: ServiceResult,
    *,
    settings: OutputSettings | None = None,
    json_output: bool = False,
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        settings: Output flags. When omitted, *json_output* alone decides.
        json_output: Shorthand for ``OutputSettings(json_output=True)``.
    """
    if settings is None:
        settings = OutputSettings(json_output=json_output)
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose, group_bits=settings.group_bits)
