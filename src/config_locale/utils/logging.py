"""Logging infrastructure with resolution context tracking.

Every record emitted while a LocaleConfig resolves its configuration is
stamped with the identity being resolved, so interleaved resolutions (for
example one per host in a deployment run) stay distinguishable in the log.
"""

import contextvars
import logging
import logging.handlers
import sys
from collections.abc import Generator, Sequence
from contextlib import contextmanager
from typing import Final, override

# Identity currently being resolved, e.g. "db.1.qa"
resolution_identity_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "resolution_identity",
    default=None,
)

DEFAULT_LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - [%(identity)s] - %(message)s"

SYSLOG_LOG_FORMAT: Final[str] = "config-locale[%(process)d]: %(levelname)s - [%(identity)s] - %(name)s - %(message)s"

DEFAULT_SYSLOG_ADDRESS: Final[str] = "/dev/log"


class LocaleContextFilter(logging.Filter):
    """Logging filter that adds the resolution identity to log records."""

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        """Add the identity from the ContextVar to the log record.

        Args:
            record: Log record to enhance

        Returns:
            True to allow the record to be logged
        """
        identity = resolution_identity_var.get()
        record.identity = identity if identity is not None else "-"
        return True


@contextmanager
def resolution_context(identity: Sequence[str]) -> Generator[None, None, None]:
    """Mark log records emitted inside the block with an identity.

    Args:
        identity: Identity being resolved

    Example:
        >>> with resolution_context(("db", "1", "qa")):
        ...     logger.info("Loading stems")
    """
    token = resolution_identity_var.set(".".join(identity) or "<empty>")
    try:
        yield
    finally:
        resolution_identity_var.reset(token)


def configure_logging(
    *,
    log_level: str = "INFO",
    enable_console: bool = True,
    enable_syslog: bool = False,
    syslog_address: str = DEFAULT_SYSLOG_ADDRESS,
) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        enable_console: Enable the stderr handler
        enable_syslog: Enable the syslog handler
        syslog_address: Syslog socket address
    """
    root_logger = logging.getLogger()

    level = getattr(logging, log_level.upper(), logging.INFO)  # pyright: ignore[reportAny]
    root_logger.setLevel(level)  # pyright: ignore[reportAny]

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    context_filter = LocaleContextFilter()

    if enable_syslog:
        try:
            syslog_handler = logging.handlers.SysLogHandler(
                address=syslog_address,
                facility=logging.handlers.SysLogHandler.LOG_USER,
            )
            syslog_handler.setFormatter(logging.Formatter(SYSLOG_LOG_FORMAT))
            syslog_handler.addFilter(context_filter)
            root_logger.addHandler(syslog_handler)
        except OSError as exc:
            # Syslog not available (e.g., development environment)
            print(
                f"Warning: Could not connect to syslog at {syslog_address}: {exc}",
                file=sys.stderr,
            )

    if enable_console:
        # stdout carries the resolved configuration, so logs go to stderr
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
        console_handler.addFilter(context_filter)
        root_logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the specified module.

    Args:
        name: Logger name (typically __name__ from calling module)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
