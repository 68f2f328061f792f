"""Errors raised while resolving a locale configuration.

Every error carries a ``context`` mapping with the details a user needs to
find the offending file or parameter. The CLI prints the message plus the
hint from :func:`suggest_config_fix`; library callers can inspect the typed
attributes (``file_path``, ``key`` and so on) directly.

A missing configuration file is never an error.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

logger = logging.getLogger(__name__)

type ErrorContext = dict[str, Any]  # pyright: ignore[reportExplicitAny] # Free-form diagnostic values


class LocaleConfigError(Exception):
    """Base exception for all locale configuration errors."""

    def __init__(self, message: str, context: ErrorContext | None = None) -> None:
        """Initialize LocaleConfigError.

        Args:
            message: Error message
            context: Additional context information for debugging
        """
        super().__init__(message)
        self.context: ErrorContext = dict(context) if context else {}

    def describe(self) -> str:
        """Return the message followed by its context, for log output."""
        if not self.context:
            return str(self)
        details = ", ".join(f"{k}={v}" for k, v in self.context.items())  # pyright: ignore[reportAny]
        return f"{self} (context: {details})"


class ConfigurationError(LocaleConfigError):
    """LocaleConfig was constructed with invalid parameters."""

    def __init__(
        self,
        message: str,
        pydantic_error: ValidationError | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        merged = dict(context or {})
        if pydantic_error is not None:
            merged["validation_errors"] = format_validation_errors(pydantic_error)
        super().__init__(message, merged)
        self.pydantic_error: ValidationError | None = pydantic_error


class ConfigLoadError(LocaleConfigError):
    """A configuration file exists but could not be read or parsed."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message, {**(context or {}), **get_error_context(file_path=file_path)})
        self.file_path: str | None = file_path


class ConfigMergeError(LocaleConfigError):
    """A value handed to the merger was not a mapping."""

    def __init__(
        self,
        message: str,
        config_path: str = "",
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message, {**(context or {}), **get_error_context(config_path=config_path or None)})
        self.config_path: str = config_path


class ConfigValidationError(LocaleConfigError):
    """A fragment declares a top-level key that no default fragment declares."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        file_path: str | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        extra = get_error_context(file_path=file_path)
        if key is not None:
            extra = {"key": key, **extra}
        super().__init__(message, {**(context or {}), **extra})
        self.key: str | None = key
        self.file_path: str | None = file_path


def format_validation_errors(error: ValidationError) -> list[ErrorContext]:
    """Flatten a pydantic ValidationError into one dictionary per failed field.

    Args:
        error: Pydantic ValidationError

    Returns:
        Dictionaries with ``field``, ``message``, ``type`` and ``input`` keys
    """
    return [
        {
            "field": ".".join(str(loc) for loc in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
            "input": err.get("input"),
        }
        for err in error.errors()
    ]


def get_error_context(
    file_path: str | None = None,
    config_path: str | None = None,
    **additional_info: Any,  # pyright: ignore[reportAny, reportExplicitAny] # Free-form diagnostic values
) -> ErrorContext:
    """Build an error context, leaving out the locations that are unknown.

    Args:
        file_path: Configuration file involved
        config_path: Dotted key path involved
        **additional_info: Any other diagnostic values

    Returns:
        Dictionary containing error context
    """
    context: ErrorContext = {}
    if file_path is not None:
        context["file_path"] = file_path
    if config_path is not None:
        context["config_path"] = config_path
    context.update(additional_info)
    return context


def handle_config_error(error: Exception, operation: str) -> LocaleConfigError:
    """Translate an exception into the LocaleConfigError hierarchy.

    LocaleConfigError instances are returned unchanged. The cause of every
    wrapped error is set to the original exception.

    Args:
        error: Original exception
        operation: What was being done, used in the message

    Returns:
        Error to raise in place of ``error``
    """
    logger.debug("Error during %s: %s", operation, error, exc_info=True)

    if isinstance(error, LocaleConfigError):
        return error

    wrapped: LocaleConfigError
    if isinstance(error, ValidationError):
        wrapped = ConfigurationError(
            f"Invalid locale configuration parameters during {operation}",
            pydantic_error=error,
        )
    else:
        wrapped = LocaleConfigError(
            f"Configuration error during {operation}: {error}",
            context=get_error_context(operation=operation, original_error_type=type(error).__name__),
        )
    wrapped.__cause__ = error
    return wrapped


def log_config_error(error: LocaleConfigError, level: int = logging.WARNING) -> None:
    """Log an error together with its context and traceback.

    Args:
        error: Configuration error to log
        level: Logging level (default: WARNING)
    """
    logger.log(level, error.describe(), exc_info=error)


def suggest_config_fix(error: LocaleConfigError) -> str | None:
    """Suggest how to fix an error.

    Args:
        error: Configuration error

    Returns:
        One-line hint, or None for errors without a known remedy
    """
    if isinstance(error, ConfigLoadError):
        target = error.file_path or "the configuration files"
        return f"Check the syntax of {target}; it must hold a mapping at the top level"

    if isinstance(error, ConfigValidationError):
        if error.key is None:
            return "Declare every key in the default configuration file"
        return f"Declare '{error.key}' in the default configuration file or remove it from {error.file_path}"

    if isinstance(error, ConfigurationError) and error.pydantic_error is not None:
        problems: list[ErrorContext] = error.context["validation_errors"]  # pyright: ignore[reportAny]
        if len(problems) > 1:
            return "Fix the invalid parameters: " + ", ".join(str(p["field"]) for p in problems)  # pyright: ignore[reportAny]
        return f"Fix parameter '{problems[0]['field']}': {problems[0]['message']}"

    if isinstance(error, ConfigMergeError):
        return "Make sure every configuration source yields a mapping"

    return None
