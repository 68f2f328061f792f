"""Stem construction from identity combinations."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from config_locale.exceptions import ConfigurationError
from config_locale.types.aliases import Combination
from config_locale.types.models import FragmentKind

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = "."
DEFAULT_STEM_NAME = "default"
OVERRIDE_STEM_NAME = "override"


def validate_separator(separator: str) -> str:
    """Ensure the separator is exactly one character.

    Args:
        separator: Candidate separator

    Returns:
        The separator unchanged

    Raises:
        ValueError: If the separator is not a single character
    """
    if len(separator) != 1:
        raise ValueError("The separator must be a single character")
    return separator


class StemBuilder:
    """Builds extensionless file paths for each combination.

    The default stem is always first and the override stem always last.
    Neither is decorated with prefix or suffix, and both are resolved
    against the directory so absolute paths are kept as given.
    """

    def __init__(
        self,
        directory: Path | str = ".",
        separator: str = DEFAULT_SEPARATOR,
        prefix: str = "",
        suffix: str = "",
        default_stem: Path | str | None = DEFAULT_STEM_NAME,
        override_stem: Path | str | None = OVERRIDE_STEM_NAME,
    ) -> None:
        """Initialize StemBuilder.

        Args:
            directory: Directory the stems are resolved against
            separator: Single character joining combination values
            prefix: String prepended to every combination stem
            suffix: String appended to every combination stem
            default_stem: Stem loaded before all others, or None to skip it
            override_stem: Stem loaded after all others, or None to skip it

        Raises:
            ConfigurationError: If the separator is not a single character
        """
        try:
            self.separator: str = validate_separator(separator)
        except ValueError as e:
            raise ConfigurationError(str(e), context={"separator": separator}) from e

        self.directory: Path = Path(directory)
        self.prefix: str = prefix
        self.suffix: str = suffix
        self.default_path: Path | None = self._resolve(default_stem)
        self.override_path: Path | None = self._resolve(override_stem)

    def _resolve(self, stem: Path | str | None) -> Path | None:
        # An empty stem would name the directory itself
        if stem is None or Path(stem) == Path("."):
            return None
        # Joining onto an absolute path yields that path unchanged
        return self.directory / Path(stem)

    def stem_name(self, combination: Combination) -> str:
        """Return the decorated file name for one combination."""
        return f"{self.prefix}{self.separator.join(combination)}{self.suffix}"

    def build_tagged(self, combinations: Iterable[Combination]) -> list[tuple[Path, FragmentKind]]:
        """Build stems paired with the kind of fragment they would produce.

        Args:
            combinations: Combinations ordered from least to most specific

        Returns:
            Ordered (stem, kind) pairs: default, locale stems, override
        """
        stems: list[tuple[Path, FragmentKind]] = []

        if self.default_path is not None:
            stems.append((self.default_path, FragmentKind.DEFAULT))

        for combination in combinations:
            name = self.stem_name(combination)
            if not name:
                # The empty combination would point at the directory itself
                logger.debug("Skipping empty stem for combination %s", combination)
                continue
            stems.append((self.directory / name, FragmentKind.LOCALE))

        if self.override_path is not None:
            stems.append((self.override_path, FragmentKind.OVERRIDE))

        return stems

    def build(self, combinations: Iterable[Combination]) -> list[Path]:
        """Build the ordered stem paths for the given combinations."""
        return [stem for stem, _ in self.build_tagged(combinations)]
