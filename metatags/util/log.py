"""
structlog setup for applications serving meta tags.

Every module logs through the shared ``logger``. Call ``setup_logging`` (or
``setup_logging_from_settings``) once at startup to choose the level, the
renderer and an optional rotating log file.
"""
import logging
import logging.handlers
import pathlib
from typing import Any

import structlog

from metatags.internal.env_settings import get_settings

_SHARED_PROCESSORS: list[Any] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.StackInfoRenderer(),
    structlog.dev.set_exc_info,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]


def _renderer(log_format: str) -> Any:
    if log_format.lower() == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def _rotating_handler(
    log_dir: pathlib.Path, log_file: str, max_mb: int, backups: int
) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    return logging.handlers.RotatingFileHandler(
        filename=log_dir / log_file,
        maxBytes=max_mb * 1024 * 1024,
        backupCount=backups,
    )


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "text",
    log_file: str | None = None,
    config_dir: str = ".",
    log_file_max_mb: int = 5,
    log_file_backups: int = 2,
) -> None:
    """
    Route structlog and the standard library's loggers to the console.

    Args:
        log_level: Level name; unknown names fall back to INFO
        log_format: "json" for one JSON object per line, anything else for
            the colored console renderer
        log_file: Also write to ``<config_dir>/logs/<log_file>``, rotated
            every ``log_file_max_mb`` megabytes
        config_dir: Directory holding the ``logs/`` folder
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[*_SHARED_PROCESSORS, _renderer(log_format)],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(
            _rotating_handler(
                pathlib.Path(config_dir) / "logs",
                log_file,
                log_file_max_mb,
                log_file_backups,
            )
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = handlers
    for handler in handlers:
        handler.setLevel(level)


def setup_logging_from_settings() -> None:
    """Configure logging from the ``METATAGS_APP__LOG_*`` settings.

    ``METATAGS_APP__DEBUG`` forces the DEBUG level, which also logs every
    provider resolution.
    """
    settings = get_settings()
    app = settings.app
    setup_logging(
        log_level="DEBUG" if app.debug else app.log_level,
        log_format=app.log_format,
        log_file=app.log_file,
        config_dir=app.config_dir,
        log_file_max_mb=app.log_file_max_mb,
        log_file_backups=app.log_file_backups,
    )
    logger.info(
        "Metatags logging configured",
        log_format=app.log_format,
        log_file=app.log_file,
        resolver_cache_size=settings.resolver.cache_size,
        locales_dir=settings.get_locales_dir(),
    )


def get_logger() -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.stdlib.get_logger()


logger = get_logger()
