"""Multi-format loader that resolves extensionless stems to parsed fragments."""

from __future__ import annotations

import glob
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from config_locale.exceptions import ConfigLoadError
from config_locale.types.models import Fragment, FragmentKind
from config_locale.types.protocols import FormatLoader

from .json_loader import JsonLoader
from .toml_loader import TomlLoader
from .yaml_loader import YamlLoader

logger = logging.getLogger(__name__)


def default_format_loaders() -> list[FormatLoader]:
    """Return the built-in format loaders in their fixed trial order."""
    return [YamlLoader(), JsonLoader(), TomlLoader()]


class StemLoader:
    """Loads the first configuration file found for a stem.

    With ``use_ext`` enabled the file extension selects the parser, and the
    formats are probed in the order of ``loaders``. With ``use_ext`` disabled
    every ``<stem>.*`` file is considered in sorted name order and each
    parser is tried until one succeeds.
    """

    def __init__(
        self,
        loaders: Sequence[FormatLoader] | None = None,
        use_ext: bool = True,
    ) -> None:
        """Initialize StemLoader.

        Args:
            loaders: Format loaders in trial order (defaults to YAML, JSON, TOML)
            use_ext: Whether the file extension decides which parser is used
        """
        self.loaders: list[FormatLoader] = list(loaders) if loaders is not None else default_format_loaders()
        self.use_ext: bool = use_ext

    @property
    def extensions(self) -> list[str]:
        """All extensions recognized by the configured loaders, in trial order."""
        return [ext for loader in self.loaders for ext in loader.extensions]

    def load(self, stem: Path) -> Fragment | None:
        """Load the configuration file matching a stem.

        Args:
            stem: Extensionless path to probe

        Returns:
            The parsed fragment, or None if no file exists for the stem

        Raises:
            ConfigLoadError: If a matching file exists but cannot be parsed
        """
        if self.use_ext:
            return self._load_by_extension(stem)
        return self._load_by_sniffing(stem)

    def load_stems(
        self,
        stems: Iterable[Path | tuple[Path, FragmentKind]],
    ) -> list[Fragment]:
        """Load every stem that has a matching file, preserving stem order.

        Args:
            stems: Stems, optionally paired with the kind of fragment they produce

        Returns:
            Fragments for the stems that exist
        """
        fragments: list[Fragment] = []
        for entry in stems:
            stem, kind = entry if isinstance(entry, tuple) else (entry, FragmentKind.LOCALE)
            fragment = self.load(stem)
            if fragment is None:
                continue
            fragments.append(fragment.with_kind(kind))
        return fragments

    def _load_by_extension(self, stem: Path) -> Fragment | None:
        for loader in self.loaders:
            for ext in loader.extensions:
                path = stem.parent / f"{stem.name}{ext}"
                if not path.is_file():
                    continue
                logger.debug("Loading %s", path)
                return Fragment(stem=stem, source=path, data=loader.load(path))

        logger.debug("No configuration file found for stem %s", stem)
        return None

    def _load_by_sniffing(self, stem: Path) -> Fragment | None:
        pattern = f"{glob.escape(stem.name)}.*"
        candidates = sorted(
            path for path in stem.parent.glob(pattern)
            # Path.stem strips only the final suffix, so "a.b.yaml" does not match stem "a"
            if path.is_file() and path.stem == stem.name
        )

        for path in candidates:
            errors: list[str] = []
            for loader in self.loaders:
                try:
                    data = loader.load(path)
                except ConfigLoadError as e:
                    errors.append(str(e))
                    continue
                logger.debug("Loaded %s with %s", path, type(loader).__name__)
                return Fragment(stem=stem, source=path, data=data)

            raise ConfigLoadError(
                f"Failed to load {path}: no supported format could parse it",
                file_path=str(path),
                context={"attempts": errors},
            )

        logger.debug("No configuration file found for stem %s", stem)
        return None
