"""Command-line application for config-locale."""

from __future__ import annotations

from .cli import cli

__all__ = ["cli"]
