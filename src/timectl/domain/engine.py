"""Process-wide, read-only engine configuration.

Built once at startup and passed explicitly to every component instead
of being read from module globals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import tzinfo

from timectl.domain.layouts import LayoutPattern, LayoutRegistry, resolve_layout
from timectl.domain.zones import load_zone

DEFAULT_TIMEZONE = "UTC"
DEFAULT_FORMAT = "RFC3339"


@dataclass(frozen=True)
class EngineConfig:
    """Layout registry plus the default zone and output format."""

    registry: LayoutRegistry = field(default_factory=LayoutRegistry)
    default_timezone: str = DEFAULT_TIMEZONE
    default_format: str = DEFAULT_FORMAT

    def zone(self, name: str, *, label: str = "IANA timezone name") -> tzinfo:
        """Load *name*, or the default zone when *name* is empty."""
        return load_zone(name or self.default_timezone, label=label)

    def layout(self, name: str) -> LayoutPattern:
        """Registry or literal layout for *name*, the default format when empty."""
        return resolve_layout(name or self.default_format, self.registry)
