"""Config Locale - Load and merge identity-specific configuration files.

This package derives candidate configuration file stems from an ordered
identity (for example the role, index and environment parts of a hostname),
loads every stem that exists in YAML, JSON or TOML and deep-merges the
results so that the most specific file wins.
"""

from config_locale.combinations import (
    Algorithm,
    generate_combinations,
    nested_combinations,
    permute_combinations,
)
from config_locale.exceptions import (
    ConfigLoadError,
    ConfigMergeError,
    ConfigurationError,
    ConfigValidationError,
    LocaleConfigError,
)
from config_locale.locale_config import LocaleConfig, identity_from_hostname
from config_locale.manager.config_merger import ConfigMerger, MergeBehavior, OverrideMode
from config_locale.stems import StemBuilder
from config_locale.types.models import Fragment, FragmentKind

__all__ = [
    "Algorithm",
    "ConfigLoadError",
    "ConfigMergeError",
    "ConfigMerger",
    "ConfigValidationError",
    "ConfigurationError",
    "Fragment",
    "FragmentKind",
    "LocaleConfig",
    "LocaleConfigError",
    "MergeBehavior",
    "OverrideMode",
    "StemBuilder",
    "generate_combinations",
    "identity_from_hostname",
    "nested_combinations",
    "permute_combinations",
]
