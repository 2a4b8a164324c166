"""Logging setup for feedmail.

stdlib handlers own the output (console, rolling file). structlog events
from the extraction pipeline are handed to the same handlers and rendered
by ``structlog.stdlib.ProcessorFormatter``, so plain ``logging`` records and
structlog events end up in one consistent stream.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import structlog

LOGGER_NAME = "feedmail"
DEFAULT_LOG_DIR = Path("logs")
DEFAULT_LOG_FILE = "feedmail.log"
DEFAULT_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
DEFAULT_BACKUP_COUNT = 5

# Run on structlog events and on foreign stdlib records alike
SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
]


def build_formatter(json_format: bool = False) -> logging.Formatter:
    """Create the formatter shared by every feedmail handler.

    Args:
        json_format: Render one JSON object per line instead of console text.

    Returns:
        A ProcessorFormatter rendering both structlog and stdlib records.
    """
    renderers: list[structlog.types.Processor]
    if json_format:
        renderers = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        renderers = [structlog.dev.ConsoleRenderer(colors=False)]

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=SHARED_PROCESSORS,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderers],
    )


def _rotating_file_handler(
    log_dir: Path | None, log_file: str, max_bytes: int, backup_count: int
) -> RotatingFileHandler:
    log_path = (log_dir or DEFAULT_LOG_DIR) / log_file
    log_path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        filename=str(log_path),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )


def setup_logging(
    level: int = logging.INFO,
    log_dir: Path | None = None,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    console: bool = True,
    file_logging: bool = True,
    json_format: bool = False,
) -> logging.Logger:
    """Attach console and rolling file handlers to the feedmail logger.

    Console output goes to stderr; stdout is reserved for extracted records.

    Args:
        level: Logging level (default: INFO).
        log_dir: Directory for log files (default: ./logs).
        log_file: Name of log file (default: feedmail.log).
        max_bytes: Max bytes per log file before rotation (default: 5MB).
        backup_count: Number of backup files to keep (default: 5).
        console: Enable console output (default: True).
        file_logging: Enable file logging (default: True).
        json_format: Render records as JSON lines (default: False).

    Returns:
        Root logger for the feedmail package.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Repeated setup replaces handlers instead of stacking them
    logger.handlers.clear()

    handlers: list[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler(sys.stderr))
    if file_logging:
        handlers.append(_rotating_file_handler(log_dir, log_file, max_bytes, backup_count))

    formatter = build_formatter(json_format)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a stdlib logger below the feedmail namespace.

    Args:
        name: Module name (will be prefixed with feedmail).

    Returns:
        Logger instance.
    """
    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def configure_structlog(log_level: str = "INFO") -> None:
    """Route structlog events into the handlers installed by ``setup_logging``.

    Args:
        log_level: Events below this level are dropped before processing.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[*SHARED_PROCESSORS, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
