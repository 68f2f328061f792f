"""Test suite for configuration merging functionality."""

from __future__ import annotations

from pathlib import Path

import pytest

from config_locale.exceptions import ConfigMergeError, ConfigValidationError
from config_locale.manager.config_merger import ConfigMerger, MergeBehavior, OverrideMode
from config_locale.types.models import Fragment, FragmentKind


def fragment(name: str, data: dict[str, object], kind: FragmentKind = FragmentKind.LOCALE) -> Fragment:
    """Build an in-memory fragment sourced from a fake YAML file."""
    return Fragment(stem=Path(name), source=Path(f"{name}.yaml"), data=data, kind=kind)


class TestConfigMerger:
    """Test two-way merging."""

    def test_merge_empty_configs(self) -> None:
        """Test merging empty configurations."""
        merger = ConfigMerger()
        assert merger.merge({}, {}) == {}

    def test_left_precedent_left_wins(self) -> None:
        """Test LEFT_PRECEDENT keeps left values on conflicts."""
        merger = ConfigMerger()
        result = merger.merge({"b": 3, "c": 4}, {"a": 1, "b": 2})
        assert result == {"a": 1, "b": 3, "c": 4}

    def test_right_precedent_right_wins(self) -> None:
        """Test RIGHT_PRECEDENT keeps right values on conflicts."""
        merger = ConfigMerger(behavior=MergeBehavior.RIGHT_PRECEDENT)
        result = merger.merge({"b": 3, "c": 4}, {"a": 1, "b": 2})
        assert result == {"a": 1, "b": 2, "c": 4}

    def test_merge_nested_configs(self) -> None:
        """Test merging nested configuration dictionaries."""
        merger = ConfigMerger()
        specific = {
            "database": {"host": "remote", "ssl": True},
            "api": {"timeout": 30},
        }
        general = {
            "database": {"host": "localhost", "port": 5432},
            "cache": {"ttl": 300},
        }
        result = merger.merge(specific, general)
        assert result == {
            "database": {"host": "remote", "port": 5432, "ssl": True},
            "cache": {"ttl": 300},
            "api": {"timeout": 30},
        }

    def test_merge_list_replaced(self) -> None:
        """Test that lists are completely replaced, not concatenated."""
        merger = ConfigMerger()
        result = merger.merge({"items": [4, 5]}, {"items": [1, 2, 3]})
        assert result == {"items": [4, 5]}

    def test_merge_type_conflicts(self) -> None:
        """Test a scalar on the winning side replaces a nested mapping."""
        merger = ConfigMerger()
        assert merger.merge({"value": "string"}, {"value": {"nested": True}}) == {"value": "string"}

    def test_merge_preserves_original_configs(self) -> None:
        """Test that original configuration dictionaries are not modified."""
        merger = ConfigMerger()
        left = {"b": {"y": 20}}
        right = {"a": 1, "b": {"x": 10}}

        result = merger.merge(left, right)
        result["b"]["z"] = 30

        assert left == {"b": {"y": 20}}
        assert right == {"a": 1, "b": {"x": 10}}

    def test_merge_error_handling(self) -> None:
        """Test error handling in merge operations."""
        merger = ConfigMerger()

        with pytest.raises(ConfigMergeError):
            _ = merger.merge("not a dict", {})

        with pytest.raises(ConfigMergeError):
            _ = merger.merge({}, "not a dict")

    def test_merge_with_audit_trail(self) -> None:
        """Test merging with audit trail tracking."""
        merger = ConfigMerger(track_sources=True)
        _ = merger.merge({"b": {"y": 20}, "c": 3}, {"a": 1, "b": {"x": 10}})

        audit_trail = merger.get_audit_trail()
        assert audit_trail["b.y"] == "left"
        assert audit_trail["c"] == "left"
        assert audit_trail["a"] == "right"
        assert audit_trail["b.x"] == "right"

    def test_get_audit_trail_when_disabled(self) -> None:
        """Test getting audit trail when tracking is disabled."""
        merger = ConfigMerger(track_sources=False)
        _ = merger.merge({"a": 1}, {"b": 2})
        assert merger.get_audit_trail() == {}

    def test_clear_audit_trail(self) -> None:
        """Test clearing audit trail."""
        merger = ConfigMerger(track_sources=True)
        _ = merger.merge({"a": 1}, {"b": 2})
        assert merger.get_audit_trail() != {}

        merger.clear_audit_trail()
        assert merger.get_audit_trail() == {}


class TestMergeFragments:
    """Test folding ordered fragments."""

    def test_later_fragments_win(self) -> None:
        """Test more specific fragments override less specific ones."""
        merger = ConfigMerger()
        result = merger.merge_fragments([
            fragment("default", {"this": "that", "what": "yes", "bar": "no"}, FragmentKind.DEFAULT),
            fragment("foo.foo.foo", {"bar": "yes"}),
        ])
        assert result == {"this": "that", "what": "yes", "bar": "yes"}

    def test_right_precedent_earlier_fragments_win(self) -> None:
        """Test RIGHT_PRECEDENT reverses fold precedence."""
        merger = ConfigMerger(behavior=MergeBehavior.RIGHT_PRECEDENT)
        result = merger.merge_fragments([
            fragment("default", {"bar": "no", "nested": {"a": 1}}, FragmentKind.DEFAULT),
            fragment("web", {"bar": "yes", "nested": {"a": 2, "b": 2}}),
        ])
        assert result == {"bar": "no", "nested": {"a": 1, "b": 2}}

    def test_fold_matches_pairwise_merge(self) -> None:
        """Test folding equals config = merge(fragment, config) step by step."""
        fragments = [
            fragment("default", {"a": 1, "n": {"x": 1, "y": [1]}}, FragmentKind.DEFAULT),
            fragment("all.qa", {"n": {"y": [2, 3]}, "b": 2}),
            fragment("db.qa", {"a": 3, "n": {"z": True}}),
            fragment("override", {"b": None}, FragmentKind.OVERRIDE),
        ]
        for behavior in MergeBehavior:
            merger = ConfigMerger(behavior=behavior)
            expected: dict[str, object] = {}
            for f in fragments:
                expected = merger.merge(f.data, expected)
            assert merger.merge_fragments(fragments) == expected

    def test_empty_sequence(self) -> None:
        """Test no fragments merge to an empty configuration."""
        assert ConfigMerger().merge_fragments([]) == {}

    def test_audit_trail_records_sources(self) -> None:
        """Test the audit trail names the file that supplied each value."""
        merger = ConfigMerger(track_sources=True)
        _ = merger.merge_fragments([
            fragment("default", {"a": 1, "n": {"x": 1}}, FragmentKind.DEFAULT),
            fragment("web", {"n": {"x": 2}}),
        ])
        assert merger.get_audit_trail() == {"a": "default.yaml", "n": "default.yaml", "n.x": "web.yaml"}

    def test_non_dict_fragment_rejected(self) -> None:
        """Test fragments from custom loaders must hold mappings."""
        bad = Fragment(stem=Path("x"), source=Path("x.yaml"), data=["not", "a", "dict"])  # pyright: ignore[reportArgumentType]
        with pytest.raises(ConfigMergeError, match="must be a dictionary"):
            _ = ConfigMerger().merge_fragments([bad])


class TestRequireDefaults:
    """Test strict-defaults validation during the fold."""

    def test_unknown_key_rejected(self) -> None:
        """Test a key missing from the defaults names the key and file."""
        merger = ConfigMerger()
        fragments = [
            fragment("default", {"bar": "no"}, FragmentKind.DEFAULT),
            fragment("foo.foo.foo", {"bar": "yes", "surprise": 1}),
        ]

        with pytest.raises(ConfigValidationError) as exc_info:
            _ = merger.merge_fragments(fragments, require_defaults=True)

        assert exc_info.value.key == "surprise"
        assert exc_info.value.file_path == "foo.foo.foo.yaml"
        assert "surprise" in str(exc_info.value)
        assert "foo.foo.foo.yaml" in str(exc_info.value)

    def test_unknown_key_allowed_when_disabled(self) -> None:
        """Test the same fragments merge without strict mode."""
        result = ConfigMerger().merge_fragments([
            fragment("default", {"bar": "no"}, FragmentKind.DEFAULT),
            fragment("foo.foo.foo", {"bar": "yes", "surprise": 1}),
        ])
        assert result == {"bar": "yes", "surprise": 1}

    def test_earlier_locale_fragment_does_not_declare_keys(self) -> None:
        """Test only default fragments declare keys, not earlier locale files."""
        fragments = [
            fragment("default", {"bar": "no"}, FragmentKind.DEFAULT),
            fragment("all.qa", {"bar": "yes"}),
            fragment("db.qa", {"extra": True}),
        ]
        with pytest.raises(ConfigValidationError, match="extra"):
            _ = ConfigMerger().merge_fragments(fragments, require_defaults=True)

    def test_override_is_validated(self) -> None:
        """Test the override fragment is held to the defaults too."""
        fragments = [
            fragment("default", {"bar": "no"}, FragmentKind.DEFAULT),
            fragment("override", {"rogue": 1}, FragmentKind.OVERRIDE),
        ]
        with pytest.raises(ConfigValidationError, match="rogue"):
            _ = ConfigMerger().merge_fragments(fragments, require_defaults=True)

    def test_missing_default_rejects_every_key(self) -> None:
        """Test strict mode with no default file rejects any locale key."""
        with pytest.raises(ConfigValidationError):
            _ = ConfigMerger().merge_fragments([fragment("web", {"a": 1})], require_defaults=True)


class TestOverrideMode:
    """Test how the override fragment is applied."""

    fragments: list[Fragment] = [
        fragment("default", {"db": {"host": "localhost", "port": 5432}}, FragmentKind.DEFAULT),
        fragment("override", {"db": {"host": "emergency"}}, FragmentKind.OVERRIDE),
    ]

    def test_merge_mode_deep_merges(self) -> None:
        """Test MERGE keeps nested keys the override does not mention."""
        result = ConfigMerger().merge_fragments(self.fragments, override_mode=OverrideMode.MERGE)
        assert result == {"db": {"host": "emergency", "port": 5432}}

    def test_replace_mode_replaces_top_level_keys(self) -> None:
        """Test REPLACE swaps whole top-level values."""
        result = ConfigMerger().merge_fragments(self.fragments, override_mode=OverrideMode.REPLACE)
        assert result == {"db": {"host": "emergency"}}

    def test_merge_mode_loses_under_right_precedent(self) -> None:
        """Test MERGE folds the override like any fragment, so earlier values win."""
        merger = ConfigMerger(behavior=MergeBehavior.RIGHT_PRECEDENT)
        result = merger.merge_fragments(self.fragments, override_mode=OverrideMode.MERGE)
        assert result == {"db": {"host": "localhost", "port": 5432}}

    def test_replace_mode_wins_under_right_precedent(self) -> None:
        """Test REPLACE applies regardless of merge behavior."""
        merger = ConfigMerger(behavior=MergeBehavior.RIGHT_PRECEDENT)
        result = merger.merge_fragments(self.fragments, override_mode=OverrideMode.REPLACE)
        assert result == {"db": {"host": "emergency"}}

    def test_replace_mode_audit_trail(self) -> None:
        """Test replaced keys drop audit entries from earlier sources."""
        merger = ConfigMerger(track_sources=True)
        _ = merger.merge_fragments(self.fragments, override_mode=OverrideMode.REPLACE)
        assert merger.get_audit_trail() == {"db": "override.yaml", "db.host": "override.yaml"}
