"""Tests for the YAML, JSON and TOML format loaders."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from config_locale.exceptions import ConfigLoadError
from config_locale.loader.json_loader import JsonLoader
from config_locale.loader.toml_loader import TomlLoader
from config_locale.loader.yaml_loader import YamlLoader


class TestYamlLoader:
    """Test suite for YamlLoader class."""

    def test_load_valid_yaml_file(self, tmp_path: Path) -> None:
        """Test loading a valid YAML file."""
        loader = YamlLoader()
        test_data = {
            "database": {"host": "db.internal", "port": 5432},
            "replicas": ["a", "b"],
        }
        path = tmp_path / "db.yaml"
        _ = path.write_text(yaml.safe_dump(test_data), encoding="utf-8")

        assert loader.load(path) == test_data

    def test_load_empty_yaml_file(self, tmp_path: Path) -> None:
        """Test loading an empty YAML file returns empty dict."""
        path = tmp_path / "empty.yaml"
        _ = path.write_text("", encoding="utf-8")

        assert YamlLoader().load(path) == {}

    def test_load_null_yaml_file(self, tmp_path: Path) -> None:
        """Test loading YAML file with null content returns empty dict."""
        path = tmp_path / "null.yml"
        _ = path.write_text("null", encoding="utf-8")

        assert YamlLoader().load(path) == {}

    def test_load_nonexistent_file(self) -> None:
        """Test loading a non-existent file raises ConfigLoadError."""
        nonexistent_path = Path("/non/existent/file.yaml")

        with pytest.raises(ConfigLoadError) as exc_info:
            _ = YamlLoader().load(nonexistent_path)

        assert "Failed to load" in str(exc_info.value)
        assert exc_info.value.file_path == str(nonexistent_path)

    def test_load_invalid_yaml_file(self, tmp_path: Path) -> None:
        """Test loading an invalid YAML file raises ConfigLoadError."""
        path = tmp_path / "broken.yaml"
        _ = path.write_text("key: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigLoadError, match="Failed to load"):
            _ = YamlLoader().load(path)

    def test_load_non_mapping_yaml_file(self, tmp_path: Path) -> None:
        """Test a top-level list is rejected."""
        path = tmp_path / "list.yaml"
        _ = path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigLoadError, match="must be a mapping"):
            _ = YamlLoader().load(path)

    def test_load_non_utf8_yaml_file(self, tmp_path: Path) -> None:
        """Test undecodable bytes raise ConfigLoadError naming the file."""
        path = tmp_path / "latin1.yaml"
        _ = path.write_bytes(b"key: \xff\xfe\n")

        with pytest.raises(ConfigLoadError) as exc_info:
            _ = YamlLoader().load(path)

        assert exc_info.value.file_path == str(path)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)


class TestJsonLoader:
    """Test suite for JsonLoader class."""

    def test_load_valid_json_file(self, tmp_path: Path) -> None:
        """Test loading a valid JSON file."""
        path = tmp_path / "app.json"
        _ = path.write_text('{"workers": 4, "debug": false}', encoding="utf-8")

        assert JsonLoader().load(path) == {"workers": 4, "debug": False}

    def test_load_blank_json_file(self, tmp_path: Path) -> None:
        """Test a whitespace-only JSON file is an empty configuration."""
        path = tmp_path / "blank.json"
        _ = path.write_text("  \n", encoding="utf-8")

        assert JsonLoader().load(path) == {}

    def test_load_invalid_json_file(self, tmp_path: Path) -> None:
        """Test malformed JSON raises ConfigLoadError."""
        path = tmp_path / "broken.json"
        _ = path.write_text('{"workers": ', encoding="utf-8")

        with pytest.raises(ConfigLoadError) as exc_info:
            _ = JsonLoader().load(path)

        assert exc_info.value.file_path == str(path)

    def test_load_non_object_json_file(self, tmp_path: Path) -> None:
        """Test a top-level array is rejected."""
        path = tmp_path / "array.json"
        _ = path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ConfigLoadError, match="must be an object"):
            _ = JsonLoader().load(path)


class TestTomlLoader:
    """Test suite for TomlLoader class."""

    def test_load_valid_toml_file(self, tmp_path: Path) -> None:
        """Test loading a valid TOML file."""
        path = tmp_path / "app.toml"
        _ = path.write_text('name = "web"\n\n[server]\nport = 8080\n', encoding="utf-8")

        assert TomlLoader().load(path) == {"name": "web", "server": {"port": 8080}}

    def test_load_invalid_toml_file(self, tmp_path: Path) -> None:
        """Test malformed TOML raises ConfigLoadError."""
        path = tmp_path / "broken.toml"
        _ = path.write_text("name = \n", encoding="utf-8")

        with pytest.raises(ConfigLoadError, match="Failed to load"):
            _ = TomlLoader().load(path)


def test_extensions_declared() -> None:
    """Test every loader declares the extensions it handles."""
    assert YamlLoader.extensions == (".yaml", ".yml")
    assert JsonLoader.extensions == (".json",)
    assert TomlLoader.extensions == (".toml",)
