"""Utility helpers for config-locale."""
