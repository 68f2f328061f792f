"""Validated construction parameters for LocaleConfig.

Parameters are checked eagerly by Pydantic so that a malformed separator or
an unknown algorithm fails when the LocaleConfig is built, not when files
are first probed.
"""

from __future__ import annotations

from os import PathLike
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config_locale.combinations import DEFAULT_WILDCARD, Algorithm
from config_locale.manager.config_merger import MergeBehavior, OverrideMode
from config_locale.stems import (
    DEFAULT_SEPARATOR,
    DEFAULT_STEM_NAME,
    OVERRIDE_STEM_NAME,
    validate_separator,
)


class LocaleSettings(BaseModel):
    """Construction parameters of a LocaleConfig."""

    model_config: ConfigDict = ConfigDict(  # pyright: ignore[reportIncompatibleVariableOverride]
        extra="forbid",
        frozen=True,
        validate_default=True,
    )

    identity: Annotated[
        tuple[str, ...],
        Field(description="Ordered identity values, e.g. hostname components"),
    ]
    directory: Annotated[
        Path,
        Field(description="Directory configuration files are loaded from"),
    ] = Path(".")
    wildcard: Annotated[
        str | None,
        Field(description="Placeholder for omitted identity values, or None to drop them"),
    ] = DEFAULT_WILDCARD
    default_stem: Annotated[
        Path | None,
        Field(description="Stem loaded before all others, relative to directory"),
    ] = Path(DEFAULT_STEM_NAME)
    override_stem: Annotated[
        Path | None,
        Field(description="Stem loaded after all others, relative to directory"),
    ] = Path(OVERRIDE_STEM_NAME)
    separator: Annotated[
        str,
        Field(description="Single character joining identity values in file names"),
    ] = DEFAULT_SEPARATOR
    prefix: Annotated[
        str,
        Field(description="String prepended to combination file names"),
    ] = ""
    suffix: Annotated[
        str,
        Field(description="String appended to combination file names"),
    ] = ""
    algorithm: Annotated[
        Algorithm,
        Field(description="Combination strategy"),
    ] = Algorithm.NESTED
    merge_behavior: Annotated[
        MergeBehavior,
        Field(description="Precedence used when folding fragments"),
    ] = MergeBehavior.LEFT_PRECEDENT
    override_mode: Annotated[
        OverrideMode,
        Field(description="Whether the override fragment is deep merged or replaces top-level keys"),
    ] = OverrideMode.MERGE
    require_defaults: Annotated[
        bool,
        Field(description="Reject keys that are not declared in the default fragment"),
    ] = False
    use_ext: Annotated[
        bool,
        Field(description="Select the parser from the file extension"),
    ] = True

    @field_validator("separator", mode="after")
    @classmethod
    def validate_separator_length(cls, v: str) -> str:
        """Validate that the separator is a single character.

        Args:
            v: Separator value

        Returns:
            Validated separator

        Raises:
            ValueError: If the separator is not exactly one character
        """
        return validate_separator(v)

    @field_validator("default_stem", "override_stem", mode="before")
    @classmethod
    def blank_stem_disables(cls, v: object) -> object:
        """Treat an empty stem like None.

        An empty path resolves to the directory itself, so a file named after
        the directory would be loaded from its parent.

        Args:
            v: Raw stem value

        Returns:
            None for empty stems, otherwise the value unchanged
        """
        if isinstance(v, (str, PathLike)) and Path(v) == Path("."):
            return None
        return v

    @field_validator("algorithm", "merge_behavior", "override_mode", mode="before")
    @classmethod
    def normalize_enum_names(cls, v: object) -> object:
        """Accept enum names case-insensitively.

        Args:
            v: Raw enum value

        Returns:
            Upper-cased string, or the value unchanged if it is not a string
        """
        if isinstance(v, str):
            return v.strip().upper()
        return v
