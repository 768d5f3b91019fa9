"""Logging configuration shared by the identity, catalogue and ordering contexts.

stdlib logging owns the handlers (console plus rotating files); structlog
renders on top of it. Every ``domain.py`` calls ``configure_logging()`` on
import and only the first call takes effect.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

LOG_FILE_PREFIX = "ordnery"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

# Libraries that are chatty at DEBUG
_QUIET_LOGGERS = ("urllib3", "asyncio", "httpx", "protean", "multipart")

_configured = False


def _environment() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """``LOG_LEVEL`` if set, otherwise a level derived from the environment name."""
    return os.getenv("LOG_LEVEL", _LEVELS.get(_environment(), "INFO")).upper()


def _rotating_handler(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(log_dir: str | None = None, log_file_prefix: str = LOG_FILE_PREFIX) -> None:
    log_level = get_log_level()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    log_path = Path(log_dir or os.getenv("LOG_DIR", "logs"))
    log_path.mkdir(parents=True, exist_ok=True)
    root_logger.addHandler(_rotating_handler(log_path / f"{log_file_prefix}.log", log_level))
    root_logger.addHandler(_rotating_handler(log_path / f"{log_file_prefix}_error.log", logging.ERROR))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _renderer():
    if _environment() in ("production", "staging"):
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=2),
    )


def setup_structlog() -> None:
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            ),
            _renderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(log_dir: str | None = None, log_file_prefix: str = LOG_FILE_PREFIX) -> None:
    global _configured
    if _configured:
        return

    setup_stdlib_logging(log_dir=log_dir, log_file_prefix=log_file_prefix)
    setup_structlog()
    _configured = True


def add_context(**kwargs: Any) -> None:
    """Bind values (request ID, path) to every log line emitted by this request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
