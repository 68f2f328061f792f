"""Data models for loaded configuration fragments."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, override


class FragmentKind(str, Enum):
    """Position of a fragment within the merge order."""

    DEFAULT = "default"
    LOCALE = "locale"
    OVERRIDE = "override"

    @override
    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(slots=True, frozen=True)
class Fragment:
    """A configuration mapping parsed from one existing file.

    Attributes:
        stem: The extensionless path that was probed
        source: The file that was actually read
        data: Parsed top-level mapping
        kind: Whether the fragment came from the default, a locale or the override stem
    """

    stem: Path
    source: Path
    data: dict[str, Any] = field(default_factory=dict)  # pyright: ignore[reportExplicitAny] # Parsed file content
    kind: FragmentKind = FragmentKind.LOCALE

    def with_kind(self, kind: FragmentKind) -> Fragment:
        """Return a copy of this fragment tagged with a different kind."""
        return Fragment(stem=self.stem, source=self.source, data=self.data, kind=kind)

    @property
    def label(self) -> str:
        """Human readable source label used in audit trails and error messages."""
        return str(self.source)
