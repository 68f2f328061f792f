"""Protocol definitions for pluggable collaborators.

These protocols establish the contracts LocaleConfig relies on without
requiring inheritance, so callers can substitute their own file-format
parsers or fragment loaders.
"""

from pathlib import Path
from typing import Protocol, runtime_checkable

from config_locale.types.aliases import ConfigDict
from config_locale.types.models import Fragment


@runtime_checkable
class FormatLoader(Protocol):
    """Protocol for single-format configuration file parsers."""

    extensions: tuple[str, ...]

    def load(self, path: Path) -> ConfigDict:
        """Parse one configuration file.

        Args:
            path: File to parse

        Returns:
            Parsed top-level mapping

        Raises:
            ConfigLoadError: If the file cannot be read or parsed
        """
        ...


@runtime_checkable
class FragmentLoader(Protocol):
    """Protocol for loaders that resolve a stem to a parsed fragment."""

    def load(self, stem: Path) -> Fragment | None:
        """Load the configuration file matching a stem.

        Args:
            stem: Extensionless path to probe

        Returns:
            The parsed fragment, or None when no file exists for the stem
        """
        ...
