"""Configuration file loaders for YAML, JSON and TOML stems."""

from __future__ import annotations

from .json_loader import JsonLoader
from .stem_loader import StemLoader, default_format_loaders
from .toml_loader import TomlLoader
from .yaml_loader import YamlLoader
from ..exceptions import ConfigLoadError

__all__ = [
    "ConfigLoadError",
    "JsonLoader",
    "StemLoader",
    "TomlLoader",
    "YamlLoader",
    "default_format_loaders",
]
