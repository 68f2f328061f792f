"""Entry point for ``python -m config_locale``."""

from __future__ import annotations

from config_locale.app.cli import cli


def main() -> None:
    """Run the config-locale command-line interface."""
    cli(prog_name="config-locale")


if __name__ == "__main__":
    main()
