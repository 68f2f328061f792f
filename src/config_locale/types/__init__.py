"""Shared types for locale configuration resolution."""

from config_locale.types.aliases import Combination, ConfigDict, Identity
from config_locale.types.models import Fragment, FragmentKind
from config_locale.types.protocols import FormatLoader, FragmentLoader

__all__ = [
    "Combination",
    "ConfigDict",
    "Fragment",
    "FormatLoader",
    "FragmentKind",
    "FragmentLoader",
    "Identity",
]
