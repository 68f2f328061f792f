"""YAML configuration loader."""

from __future__ import annotations

from pathlib import Path

import yaml

from config_locale.exceptions import ConfigLoadError
from config_locale.types.aliases import ConfigDict


class YamlLoader:
    """Loader for YAML configuration files."""

    extensions: tuple[str, ...] = (".yaml", ".yml")

    def load(self, path: Path) -> ConfigDict:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file

        Returns:
            Parsed configuration as a dictionary

        Raises:
            ConfigLoadError: If the file cannot be loaded or parsed
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                content = yaml.safe_load(f)  # pyright: ignore[reportAny] # yaml.safe_load returns Any
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigLoadError(f"Failed to load {path}: {e}", file_path=str(path)) from e

        # Empty files and explicit nulls are empty configurations
        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigLoadError(
                f"Failed to load {path}: top level must be a mapping, got {type(content).__name__}",  # pyright: ignore[reportAny]
                file_path=str(path),
            )
        return content  # pyright: ignore[reportUnknownVariableType] # content is dict after isinstance check
