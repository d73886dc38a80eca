"""
Exception types and standard error logging for metatags.

Resolution errors (an explicit override naming no provider, or an override that
is not a provider class) are raised to the caller. Catalog and interpolation
problems only degrade the rendered strings, so they are logged through the
``handle_*`` helpers and the caller carries on with a fallback value.
"""
from typing import Any

from metatags.util.log import logger


class MetatagsError(Exception):
    """Base class for all metatags errors."""


class UnknownMetatagsError(MetatagsError, LookupError):
    """An explicit override named a provider that is not registered."""

    def __init__(self, key: str, known: list[str] | None = None):
        self.key = key
        self.known = sorted(known or [])
        super().__init__(f"No metatags provider registered as {key!r}")


class InvalidMetatagsClassError(MetatagsError, TypeError):
    """An override or registration was not a BaseMetatags subclass."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            f"Expected a BaseMetatags subclass or a provider key, got {value!r}"
        )


def handle_catalog_error(
    error: Exception,
    path: str,
    **context: Any,
) -> None:
    """
    Standard logging for locale catalog load failures.

    Args:
        error: The caught exception
        path: The catalog file that failed to load
        **context: Additional context to log (e.g., locale=...)

    Example:
        try:
            data = json.loads(path.read_text())
        except (OSError, ValueError) as e:
            handle_catalog_error(e, str(path), locale=locale)
            continue
    """
    logger.error(
        "Locale catalog load failed",
        error=str(error),
        error_type=type(error).__name__,
        path=path,
        **context,
    )


def handle_interpolation_error(
    error: Exception,
    key: str,
    **context: Any,
) -> None:
    """
    Standard logging for translation interpolation failures.

    Args:
        error: The caught exception
        key: The full dotted translation key
        **context: Additional context to log
    """
    logger.warning(
        "Translation interpolation failed",
        error=str(error),
        error_type=type(error).__name__,
        key=key,
        **context,
    )
