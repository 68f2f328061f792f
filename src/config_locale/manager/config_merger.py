"""Configuration merging functionality for combining locale fragments."""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Sequence
from enum import Enum
from typing import override

from config_locale.exceptions import ConfigMergeError, ConfigValidationError
from config_locale.types.aliases import ConfigDict
from config_locale.types.models import Fragment, FragmentKind

logger = logging.getLogger(__name__)


class MergeBehavior(str, Enum):
    """Which argument of a two-way merge wins on conflicting keys."""

    LEFT_PRECEDENT = "LEFT_PRECEDENT"
    RIGHT_PRECEDENT = "RIGHT_PRECEDENT"

    @override
    def __str__(self) -> str:
        """Return string representation."""
        return self.value


class OverrideMode(str, Enum):
    """How the override fragment is applied on top of everything else.

    MERGE folds the override like any other fragment, so under RIGHT_PRECEDENT
    earlier fragments still win over it. Only REPLACE wins under both merge
    behaviors.
    """

    MERGE = "MERGE"
    REPLACE = "REPLACE"

    @override
    def __str__(self) -> str:
        """Return string representation."""
        return self.value


class ConfigMerger:
    """Deep merger for configuration fragments with configurable precedence.

    Nested dictionaries are merged key by key. Every other value, lists
    included, is replaced wholesale by the winning side.
    """

    def __init__(
        self,
        behavior: MergeBehavior = MergeBehavior.LEFT_PRECEDENT,
        track_sources: bool = False,
    ) -> None:
        """Initialize ConfigMerger.

        Args:
            behavior: Precedence applied to conflicting keys
            track_sources: Whether to track source information for audit trail
        """
        self.behavior: MergeBehavior = MergeBehavior(behavior)
        self._track_sources: bool = track_sources
        self._audit_trail: dict[str, str] = {}

    def merge(self, left: object, right: object) -> ConfigDict:
        """Merge two configuration dictionaries.

        With LEFT_PRECEDENT values from ``left`` win, with RIGHT_PRECEDENT
        values from ``right`` win. Neither argument is modified.

        Args:
            left: Left configuration dictionary
            right: Right configuration dictionary

        Returns:
            Merged configuration dictionary

        Raises:
            ConfigMergeError: If either argument is not a dictionary
        """
        if not isinstance(left, dict):
            raise ConfigMergeError("Left configuration must be a dictionary")
        if not isinstance(right, dict):
            raise ConfigMergeError("Right configuration must be a dictionary")

        result: ConfigDict = copy.deepcopy(left)  # pyright: ignore[reportUnknownArgumentType] # dict after isinstance check

        if self._track_sources:
            self._record_sources(result, "left", "")

        self._deep_merge(
            result,
            right,  # pyright: ignore[reportUnknownArgumentType] # dict after isinstance check
            "right",
            "",
            overwrite=self.behavior is MergeBehavior.RIGHT_PRECEDENT,
        )

        return result

    def merge_fragments(
        self,
        fragments: Sequence[Fragment],
        require_defaults: bool = False,
        override_mode: OverrideMode = OverrideMode.MERGE,
    ) -> ConfigDict:
        """Fold fragments, least specific first, into one configuration.

        Each step is equivalent to ``config = merge(fragment.data, config)``,
        so under LEFT_PRECEDENT later fragments override earlier ones.

        Args:
            fragments: Fragments ordered from least to most specific
            require_defaults: Reject top-level keys not declared by a default fragment
            override_mode: Deep merge the override fragment, or replace its top-level keys

        Returns:
            Merged configuration dictionary

        Raises:
            ConfigValidationError: If require_defaults is set and a fragment declares an unknown key
            ConfigMergeError: If a fragment does not hold a dictionary
        """
        defaults = self._default_keys(fragments)
        config: ConfigDict = {}

        for fragment in fragments:
            if not isinstance(fragment.data, dict):  # pyright: ignore[reportUnnecessaryIsInstance] # Fragments from custom loaders
                raise ConfigMergeError(
                    f"Configuration from {fragment.label} must be a dictionary",
                    context={"file_path": fragment.label},
                )

            if require_defaults and fragment.kind is not FragmentKind.DEFAULT:
                self.validate_keys(fragment, defaults)

            if fragment.kind is FragmentKind.OVERRIDE and override_mode is OverrideMode.REPLACE:
                logger.debug("Replacing top-level keys from %s", fragment.label)
                for key, value in fragment.data.items():  # pyright: ignore[reportAny]
                    config[key] = copy.deepcopy(value)  # pyright: ignore[reportAny]
                    if self._track_sources:
                        self._forget_sources(str(key))
                        self._audit_trail[str(key)] = fragment.label
                        if isinstance(value, dict):
                            self._record_sources(value, fragment.label, str(key))  # pyright: ignore[reportUnknownArgumentType]
                continue

            logger.debug("Merging %s (%s)", fragment.label, fragment.kind)
            self._deep_merge(
                config,
                fragment.data,
                fragment.label,
                "",
                overwrite=self.behavior is MergeBehavior.LEFT_PRECEDENT,
            )

        return config

    @staticmethod
    def validate_keys(fragment: Fragment, defaults: Iterable[str]) -> None:
        """Ensure every top-level key of a fragment is declared in the defaults.

        Args:
            fragment: Fragment to check
            defaults: Keys declared by the default fragments

        Raises:
            ConfigValidationError: On the first undeclared key
        """
        declared = set(defaults)
        for key in fragment.data:
            if key in declared:
                continue
            raise ConfigValidationError(
                f"The {key} key is not declared in the default config file: {fragment.label}",
                key=str(key),
                file_path=fragment.label,
            )

    @staticmethod
    def _default_keys(fragments: Iterable[Fragment]) -> set[str]:
        keys: set[str] = set()
        for fragment in fragments:
            if fragment.kind is FragmentKind.DEFAULT:
                keys.update(fragment.data)
        return keys

    def _deep_merge(
        self,
        target: ConfigDict,
        source: ConfigDict,
        source_name: str,
        path: str,
        overwrite: bool,
    ) -> None:
        """Recursively merge source dictionary into target dictionary.

        Args:
            target: Target dictionary to merge into
            source: Source dictionary to merge from
            source_name: Name of the source for audit trail
            path: Current path in the configuration hierarchy
            overwrite: Whether source values win over existing target values
        """
        for key, value in source.items():  # pyright: ignore[reportAny]
            current_path = f"{path}.{key}" if path else str(key)

            if key not in target:
                target[key] = copy.deepcopy(value)  # pyright: ignore[reportAny]
                if self._track_sources:
                    self._audit_trail[current_path] = source_name
                    if isinstance(value, dict):
                        self._record_sources(value, source_name, current_path)  # pyright: ignore[reportUnknownArgumentType]
            elif isinstance(target[key], dict) and isinstance(value, dict):
                self._deep_merge(target[key], value, source_name, current_path, overwrite)  # pyright: ignore[reportAny, reportUnknownArgumentType]
            elif overwrite:
                # Lists and scalars are replaced, never combined
                target[key] = copy.deepcopy(value)  # pyright: ignore[reportAny]
                if self._track_sources:
                    self._forget_sources(current_path)
                    self._audit_trail[current_path] = source_name
                    if isinstance(value, dict):
                        self._record_sources(value, source_name, current_path)  # pyright: ignore[reportUnknownArgumentType]

    def _record_sources(self, config: ConfigDict, source_name: str, path: str) -> None:
        """Record source information for all keys in a configuration dictionary.

        Args:
            config: Configuration dictionary
            source_name: Name of the source
            path: Current path in the configuration hierarchy
        """
        for key, value in config.items():  # pyright: ignore[reportAny]
            current_path = f"{path}.{key}" if path else str(key)
            self._audit_trail[current_path] = source_name

            if isinstance(value, dict):
                self._record_sources(value, source_name, current_path)  # pyright: ignore[reportUnknownArgumentType]

    def _forget_sources(self, path: str) -> None:
        """Drop audit entries for a path whose value was replaced wholesale."""
        nested_prefix = f"{path}."
        for recorded in [p for p in self._audit_trail if p == path or p.startswith(nested_prefix)]:
            del self._audit_trail[recorded]

    def get_audit_trail(self) -> dict[str, str]:
        """Get audit trail information showing which source provided each configuration value.

        Returns:
            Dictionary mapping configuration paths to source names
        """
        return self._audit_trail.copy()

    def clear_audit_trail(self) -> None:
        """Clear the audit trail information."""
        self._audit_trail.clear()
