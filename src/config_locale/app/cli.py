"""Command-line interface for config-locale."""

from __future__ import annotations

import json
import logging
import socket
from pathlib import Path

import click
import yaml

from config_locale.combinations import DEFAULT_WILDCARD, Algorithm
from config_locale.exceptions import LocaleConfigError, log_config_error, suggest_config_fix
from config_locale.locale_config import LocaleConfig, identity_from_hostname
from config_locale.manager.config_merger import MergeBehavior, OverrideMode
from config_locale.stems import DEFAULT_SEPARATOR, DEFAULT_STEM_NAME, OVERRIDE_STEM_NAME
from config_locale.utils.logging import DEFAULT_SYSLOG_ADDRESS, configure_logging, get_logger

logger = get_logger(__name__)

SHOW_CHOICES = ('config', 'combinations', 'stems', 'sources', 'audit')
FORMAT_CHOICES = ('yaml', 'json')


def validate_log_level(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: str,
) -> str:
    """Validate and normalize log level.

    Args:
        ctx: Click context (required by Click callback signature)
        param: Click parameter (required by Click callback signature)
        value: Log level value to validate

    Returns:
        Normalized log level (uppercase)

    Raises:
        click.BadParameter: If validation fails
    """
    normalized_value = value.upper().strip()

    valid_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR'}
    if normalized_value not in valid_levels:
        raise click.BadParameter(
            f'Invalid log level "{value}". Valid options: {", ".join(sorted(valid_levels))}'
        )

    return normalized_value


def validate_separator(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: str,
) -> str:
    """Reject separators that are not a single character."""
    if len(value) != 1:
        raise click.BadParameter('The separator must be a single character')
    return value


def optional_stem(value: str) -> str | None:
    """Map an empty stem option to None, which disables that stem."""
    return value if value else None


def render(data: object, output_format: str) -> str:
    """Serialize data for output.

    Args:
        data: Value to serialize
        output_format: Either 'yaml' or 'json'

    Returns:
        Serialized text without a trailing newline
    """
    if output_format == 'json':
        return json.dumps(data, indent=2, default=str)
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False).rstrip('\n')


def describe(locale: LocaleConfig, show: str) -> object:
    """Select the part of a resolved LocaleConfig to print.

    Args:
        locale: Configured LocaleConfig
        show: One of SHOW_CHOICES

    Returns:
        A JSON and YAML serializable value
    """
    if show == 'combinations':
        return [list(combination) for combination in locale.combinations]
    if show == 'stems':
        return [str(stem) for stem in locale.stems]
    if show == 'sources':
        return [
            {'kind': str(fragment.kind), 'source': fragment.label}
            for fragment in locale.fragments
        ]
    if show == 'audit':
        return locale.audit_trail
    return locale.config


# Import version from package
try:
    from importlib.metadata import PackageNotFoundError, version
    __version__ = version("config-locale")
except PackageNotFoundError:
    __version__ = "unknown"


@click.command()
@click.argument('identity', nargs=-1)
@click.option(
    '--hostname',
    is_flag=False,
    flag_value='',
    default=None,
    help='Derive the identity from a hostname (the local hostname when given without a value).'
)
@click.option(
    '--directory', '-d',
    type=click.Path(path_type=Path, file_okay=False),
    default=Path('.'),
    show_default=True,
    help='Directory to load configuration files from.'
)
@click.option(
    '--wildcard', '-w',
    default=DEFAULT_WILDCARD,
    show_default=True,
    help='Wildcard used in place of omitted identity values.'
)
@click.option(
    '--no-wildcard',
    is_flag=True,
    help='Omit identity values instead of substituting the wildcard.'
)
@click.option(
    '--default-stem',
    default=DEFAULT_STEM_NAME,
    show_default=True,
    help='Stem loaded before all others. Pass an empty string to disable.'
)
@click.option(
    '--override-stem',
    default=OVERRIDE_STEM_NAME,
    show_default=True,
    help='Stem loaded after all others. Pass an empty string to disable.'
)
@click.option(
    '--separator', '-s',
    default=DEFAULT_SEPARATOR,
    show_default=True,
    callback=validate_separator,
    help='Single character separating identity values in file names.'
)
@click.option('--prefix', default='', help='Prefix of combination file names.')
@click.option('--suffix', default='', help='Suffix of combination file names.')
@click.option(
    '--algorithm', '-a',
    type=click.Choice([a.value for a in Algorithm], case_sensitive=False),
    default=Algorithm.NESTED.value,
    show_default=True,
    help='NESTED keeps identity order, PERMUTE tries every ordering of every subset.'
)
@click.option(
    '--merge-behavior',
    type=click.Choice([b.value for b in MergeBehavior], case_sensitive=False),
    default=MergeBehavior.LEFT_PRECEDENT.value,
    show_default=True,
    help='LEFT_PRECEDENT lets more specific files win, RIGHT_PRECEDENT the reverse.'
)
@click.option(
    '--override-mode',
    type=click.Choice([m.value for m in OverrideMode], case_sensitive=False),
    default=OverrideMode.MERGE.value,
    show_default=True,
    help='Deep merge the override file or replace its top-level keys wholesale.'
)
@click.option(
    '--require-defaults',
    is_flag=True,
    help='Fail when a file declares a key missing from the default file.'
)
@click.option(
    '--show',
    type=click.Choice(SHOW_CHOICES),
    default='config',
    show_default=True,
    help='What to print.'
)
@click.option(
    '--format', '-f', 'output_format',
    type=click.Choice(FORMAT_CHOICES),
    default='yaml',
    show_default=True,
    help='Output format.'
)
@click.option(
    '--log-level', '-l',
    type=str,
    default='WARNING',
    callback=validate_log_level,
    help='Logging verbosity level (DEBUG, INFO, WARNING, ERROR)'
)
@click.option(
    '--syslog',
    is_flag=True,
    help='Also send log records to syslog.'
)
@click.option(
    '--syslog-address',
    default=DEFAULT_SYSLOG_ADDRESS,
    show_default=True,
    help='Syslog socket used with --syslog.'
)
@click.version_option(version=__version__, prog_name='config-locale')
def cli(
    identity: tuple[str, ...],
    hostname: str | None,
    directory: Path,
    wildcard: str,
    no_wildcard: bool,
    default_stem: str,
    override_stem: str,
    separator: str,
    prefix: str,
    suffix: str,
    algorithm: str,
    merge_behavior: str,
    override_mode: str,
    require_defaults: bool,
    show: str,
    output_format: str,
    log_level: str,
    syslog: bool,
    syslog_address: str,
) -> None:
    """Load and merge the configuration files matching IDENTITY.

    Examples:

        # Merge default, all.all.qa, ..., db.1.qa and override from ./etc
        config-locale -d etc db 1 qa

        # Derive the identity from this machine's hostname
        config-locale --hostname -d /etc/myapp

        # List the stems that would be probed
        config-locale --show stems db 1 qa

        # Also log the resolution to the local syslog
        config-locale --syslog -l INFO -d /etc/myapp db 1 qa
    """
    configure_logging(log_level=log_level, enable_syslog=syslog, syslog_address=syslog_address)

    if hostname is not None:
        if identity:
            raise click.UsageError('Pass either IDENTITY values or --hostname, not both')
        identity = identity_from_hostname(hostname or socket.gethostname())
        logger.info("Identity %s derived from hostname", list(identity))

    try:
        locale = LocaleConfig(
            identity,
            directory=directory,
            wildcard=None if no_wildcard else wildcard,
            default_stem=optional_stem(default_stem),
            override_stem=optional_stem(override_stem),
            separator=separator,
            prefix=prefix,
            suffix=suffix,
            algorithm=algorithm,
            merge_behavior=merge_behavior,
            override_mode=override_mode,
            require_defaults=require_defaults,
        )
        output = describe(locale, show)
    except LocaleConfigError as e:
        log_config_error(e, level=logging.DEBUG)
        message = str(e)
        suggestion = suggest_config_fix(e)
        if suggestion:
            message = f"{message}\nHint: {suggestion}"
        raise click.ClickException(message) from e

    click.echo(render(output, output_format))


if __name__ == '__main__':
    cli()
