"""
Structured logging for Brevit.

Log events go to stderr so stdout only ever carries optimized output. A
configured log file additionally receives one JSON object per event.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import structlog

from ..core.config import BrevitConfig, get_config
from ..models.enums import LogLevel


def setup_file_logging(
    log_file: Path, max_bytes: int = 10 * 1024 * 1024, backup_count: int = 5
) -> RotatingFileHandler:
    """
    Create a rotating handler that writes JSON lines.

    Args:
        log_file: Path to the log file (its directory must exist)
        max_bytes: Size before rotation (default: 10MB)
        backup_count: Rotated files to keep

    Returns:
        Handler ready to attach to the root logger
    """
    handler = RotatingFileHandler(
        log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(),
            ],
        )
    )
    return handler


def _console_renderer(config: BrevitConfig):
    if config.log_level == LogLevel.DEBUG:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def setup_logging(config: BrevitConfig | None = None) -> None:
    """
    Configure structlog from the log level and optional log file.

    Without a log file events are rendered straight to stderr. With one,
    structlog hands events to the stdlib root logger, which fans them out to
    the file and to stderr.

    Args:
        config: Configuration to read logging settings from (defaults to global config)
    """
    config = config or get_config()
    level = getattr(logging, config.log_level.value, logging.WARNING)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if config.log_file is None:
        logger_factory = structlog.PrintLoggerFactory(file=sys.stderr)
        processors.append(_console_renderer(config))
    else:
        config.ensure_log_directory()

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    _console_renderer(config),
                ],
            )
        )

        root_logger = logging.getLogger()
        root_logger.addHandler(
            setup_file_logging(
                config.log_file,
                max_bytes=config.log_max_bytes,
                backup_count=config.log_backup_count,
            )
        )
        root_logger.addHandler(console_handler)
        root_logger.setLevel(level)

        logger_factory = structlog.stdlib.LoggerFactory()
        processors.append(structlog.stdlib.ProcessorFormatter.wrap_for_formatter)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=logger_factory,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger for a module."""
    return structlog.get_logger(name)
