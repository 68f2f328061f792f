"""TOML configuration loader."""

from __future__ import annotations

import tomllib
from pathlib import Path

from config_locale.exceptions import ConfigLoadError
from config_locale.types.aliases import ConfigDict


class TomlLoader:
    """Loader for TOML configuration files."""

    extensions: tuple[str, ...] = (".toml",)

    def load(self, path: Path) -> ConfigDict:
        """Load configuration from a TOML file.

        Args:
            path: Path to the TOML configuration file

        Returns:
            Parsed configuration as a dictionary

        Raises:
            ConfigLoadError: If the file cannot be loaded or parsed
        """
        try:
            with open(path, 'rb') as f:
                return tomllib.load(f)
        except (OSError, ValueError) as e:
            raise ConfigLoadError(f"Failed to load {path}: {e}", file_path=str(path)) from e
