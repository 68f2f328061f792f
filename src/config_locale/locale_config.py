"""Load and merge locale-specific configuration files.

LocaleConfig takes an identity, derives the candidate file stems for it,
loads every stem that exists and merges the fragments so that the most
specific file wins. Given ``identity=["db", "1", "qa"]`` the following stems
are probed, least specific first::

    default
    all.all.all
    all.all.qa
    all.1.all
    all.1.qa
    db.all.all
    db.all.qa
    db.1.all
    db.1.qa
    override

Every derived value is computed on first access and cached for the lifetime
of the instance.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from functools import cached_property
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from config_locale.combinations import DEFAULT_WILDCARD, Algorithm, generate_combinations
from config_locale.exceptions import handle_config_error
from config_locale.loader.stem_loader import StemLoader
from config_locale.manager.config_merger import ConfigMerger, MergeBehavior, OverrideMode
from config_locale.settings import LocaleSettings
from config_locale.stems import DEFAULT_SEPARATOR, DEFAULT_STEM_NAME, OVERRIDE_STEM_NAME, StemBuilder
from config_locale.types.aliases import Combination, ConfigDict, Identity
from config_locale.types.models import Fragment, FragmentKind
from config_locale.types.protocols import FragmentLoader
from config_locale.utils.logging import resolution_context

logger = logging.getLogger(__name__)

# Splits the first hostname label on anything that is not a letter or digit
HOSTNAME_SPLIT_PATTERN: Final[re.Pattern[str]] = re.compile(r"[^A-Za-z0-9]+")


class LocaleConfig:
    """Identity-driven configuration loader and merger.

    Example:
        >>> locale = LocaleConfig(["db", "1", "qa"], directory="etc/app")
        >>> locale.config["database"]["host"]
        'qa-db-1.internal'
    """

    def __init__(
        self,
        identity: Sequence[str],
        *,
        directory: Path | str = ".",
        wildcard: str | None = DEFAULT_WILDCARD,
        default_stem: Path | str | None = DEFAULT_STEM_NAME,
        override_stem: Path | str | None = OVERRIDE_STEM_NAME,
        separator: str = DEFAULT_SEPARATOR,
        prefix: str = "",
        suffix: str = "",
        algorithm: Algorithm | str = Algorithm.NESTED,
        merge_behavior: MergeBehavior | str = MergeBehavior.LEFT_PRECEDENT,
        override_mode: OverrideMode | str = OverrideMode.MERGE,
        require_defaults: bool = False,
        use_ext: bool = True,
        loader: FragmentLoader | None = None,
    ) -> None:
        """Initialize LocaleConfig.

        Args:
            identity: Ordered identity values the configuration is loaded for
            directory: Directory to load configuration files from
            wildcard: Placeholder for omitted identity values, or None to drop them
            default_stem: Stem loaded before all others, or None to skip it
            override_stem: Stem loaded after all others, or None to skip it
            separator: Single character joining identity values in file names
            prefix: String prepended to combination file names
            suffix: String appended to combination file names
            algorithm: NESTED keeps identity order, PERMUTE tries every ordering
            merge_behavior: Precedence used when folding fragments
            override_mode: MERGE deep merges the override, REPLACE swaps its top-level keys
            require_defaults: Reject keys not declared in the default fragment
            use_ext: Select the parser from the file extension
            loader: Custom fragment loader (defaults to a StemLoader)

        Raises:
            ConfigurationError: If any parameter is invalid
        """
        try:
            self.settings: LocaleSettings = LocaleSettings(
                identity=tuple(identity) if not isinstance(identity, str) else identity,  # pyright: ignore[reportArgumentType] # Rejected by validation
                directory=Path(directory),
                wildcard=wildcard,
                default_stem=default_stem,  # pyright: ignore[reportArgumentType] # Coerced by validation
                override_stem=override_stem,  # pyright: ignore[reportArgumentType] # Coerced by validation
                separator=separator,
                prefix=prefix,
                suffix=suffix,
                algorithm=algorithm,  # pyright: ignore[reportArgumentType] # Coerced by validation
                merge_behavior=merge_behavior,  # pyright: ignore[reportArgumentType] # Coerced by validation
                override_mode=override_mode,  # pyright: ignore[reportArgumentType] # Coerced by validation
                require_defaults=require_defaults,
                use_ext=use_ext,
            )
        except ValidationError as e:
            raise handle_config_error(e, "LocaleConfig construction") from e

        self.stem_builder: StemBuilder = StemBuilder(
            directory=self.settings.directory,
            separator=self.settings.separator,
            prefix=self.settings.prefix,
            suffix=self.settings.suffix,
            default_stem=self.settings.default_stem,
            override_stem=self.settings.override_stem,
        )
        self.loader: FragmentLoader = loader if loader is not None else StemLoader(use_ext=self.settings.use_ext)
        self._merger: ConfigMerger = ConfigMerger(
            behavior=self.settings.merge_behavior,
            track_sources=True,
        )

    @classmethod
    def from_hostname(
        cls,
        hostname: str,
        *,
        pattern: re.Pattern[str] = HOSTNAME_SPLIT_PATTERN,
        **kwargs: Any,  # pyright: ignore[reportAny, reportExplicitAny] # Forwarded to __init__
    ) -> LocaleConfig:
        """Build a LocaleConfig whose identity is derived from a hostname.

        Only the first DNS label is used, so ``db-1-qa.example.com`` yields
        the identity ``("db", "1", "qa")``.

        Args:
            hostname: Host name to derive the identity from
            pattern: Pattern separating identity values within the first label
            **kwargs: Remaining LocaleConfig parameters

        Returns:
            Configured LocaleConfig instance
        """
        return cls(identity_from_hostname(hostname, pattern), **kwargs)  # pyright: ignore[reportAny]

    @property
    def identity(self) -> Identity:
        """The identity the configuration is resolved for."""
        return self.settings.identity

    @property
    def directory(self) -> Path:
        """The directory configuration files are loaded from."""
        return self.settings.directory

    @cached_property
    def combinations(self) -> list[Combination]:
        """All combinations of the identity, least specific first."""
        return generate_combinations(
            self.settings.identity,
            wildcard=self.settings.wildcard,
            algorithm=self.settings.algorithm,
        )

    @cached_property
    def _tagged_stems(self) -> list[tuple[Path, FragmentKind]]:
        return self.stem_builder.build_tagged(self.combinations)

    @cached_property
    def stems(self) -> list[Path]:
        """Stems probed for configuration files: default, combinations, override."""
        return [stem for stem, _ in self._tagged_stems]

    @cached_property
    def fragments(self) -> list[Fragment]:
        """One fragment for each stem that has a configuration file."""
        fragments: list[Fragment] = []
        with resolution_context(self.settings.identity):
            for stem, kind in self._tagged_stems:
                fragment = self.loader.load(stem)
                if fragment is None:
                    continue
                fragments.append(fragment.with_kind(kind))
            logger.debug(
                "Loaded %d of %d stems from %s",
                len(fragments),
                len(self._tagged_stems),
                self.settings.directory,
            )
        return fragments

    @cached_property
    def configs(self) -> list[ConfigDict]:
        """Parsed mappings of every loaded fragment, least specific first."""
        return [fragment.data for fragment in self.fragments]

    @cached_property
    def default_config(self) -> ConfigDict:
        """Merged content of the default fragment, empty if there is none."""
        return self._kind_config(FragmentKind.DEFAULT)

    @cached_property
    def override_config(self) -> ConfigDict:
        """Merged content of the override fragment, empty if there is none."""
        return self._kind_config(FragmentKind.OVERRIDE)

    @cached_property
    def config(self) -> ConfigDict:
        """The final configuration merged from all fragments.

        Raises:
            ConfigValidationError: If require_defaults is set and a fragment declares an unknown key
        """
        with resolution_context(self.settings.identity):
            self._merger.clear_audit_trail()
            merged = self._merger.merge_fragments(
                self.fragments,
                require_defaults=self.settings.require_defaults,
                override_mode=self.settings.override_mode,
            )
            logger.info(
                "Resolved configuration from %d files",
                len(self.fragments),
                extra={"sources": [fragment.label for fragment in self.fragments]},
            )
        return merged

    @cached_property
    def audit_trail(self) -> dict[str, str]:
        """Mapping of dotted key paths to the file that supplied each value."""
        _ = self.config
        return self._merger.get_audit_trail()

    def _kind_config(self, kind: FragmentKind) -> ConfigDict:
        merger = ConfigMerger(behavior=MergeBehavior.LEFT_PRECEDENT)
        return merger.merge_fragments([f for f in self.fragments if f.kind is kind])

    def __repr__(self) -> str:
        """Return a debugging representation."""
        return (
            f"{type(self).__name__}(identity={list(self.settings.identity)!r}, "
            f"directory={str(self.settings.directory)!r}, algorithm={self.settings.algorithm})"
        )


def identity_from_hostname(
    hostname: str,
    pattern: re.Pattern[str] = HOSTNAME_SPLIT_PATTERN,
) -> Identity:
    """Split the first label of a hostname into identity values.

    Args:
        hostname: Host name such as ``db-1-qa.example.com``
        pattern: Pattern separating identity values

    Returns:
        Identity tuple, e.g. ``("db", "1", "qa")``
    """
    label = hostname.strip().split(".", 1)[0]
    return tuple(part for part in pattern.split(label) if part)
