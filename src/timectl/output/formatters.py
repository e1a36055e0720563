"""Adapt a ServiceResult to the requested output mode.

Three modes: JSON (``--json``, the full result model), quiet (``-q``,
only the value), and human (Rich rendering, the default).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from timectl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from timectl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Output flags taken from the root CLI group."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    JSON wins over quiet, which wins over human output.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2, exclude_none=True)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
