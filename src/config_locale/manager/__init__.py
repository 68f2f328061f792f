"""Configuration merging for locale fragments."""

from __future__ import annotations

from .config_merger import ConfigMerger, MergeBehavior, OverrideMode

__all__ = ["ConfigMerger", "MergeBehavior", "OverrideMode"]
