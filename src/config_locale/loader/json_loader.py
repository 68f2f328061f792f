"""JSON configuration loader."""

from __future__ import annotations

import json
from pathlib import Path

from config_locale.exceptions import ConfigLoadError
from config_locale.types.aliases import ConfigDict


class JsonLoader:
    """Loader for JSON configuration files."""

    extensions: tuple[str, ...] = (".json",)

    def load(self, path: Path) -> ConfigDict:
        """Load configuration from a JSON file.

        Args:
            path: Path to the JSON configuration file

        Returns:
            Parsed configuration as a dictionary

        Raises:
            ConfigLoadError: If the file cannot be loaded or parsed
        """
        try:
            text = path.read_text(encoding='utf-8')
            content: object = json.loads(text) if text.strip() else None
        except (OSError, ValueError) as e:
            raise ConfigLoadError(f"Failed to load {path}: {e}", file_path=str(path)) from e

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigLoadError(
                f"Failed to load {path}: top level must be an object, got {type(content).__name__}",
                file_path=str(path),
            )
        return content  # pyright: ignore[reportUnknownVariableType] # content is dict after isinstance check
