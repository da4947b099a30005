"""Structured logging configuration for eventemitter.

Uses structlog for structured, context-rich logging with
support for both console and JSON output formats. The library never
configures logging on import; host applications call
:func:`configure_logging` (or :func:`configure_from_settings`) once.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog

from eventemitter.config import EmitterSettings


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Path | None = None,
    colors: bool = True,
    cache_loggers: bool = True,
) -> None:
    """Configure structured logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Whether to output JSON format
        log_file: Optional file to log to
        colors: Whether to use colors in console output
        cache_loggers: Freeze each logger on first use; disable when
            logging is reconfigured at runtime (tests)
    """
    handler: logging.Handler
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)

    shared_processors: list[structlog.types.Processor] = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderers: list[structlog.types.Processor]
    if json_output:
        renderers = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        renderers = [structlog.dev.ConsoleRenderer(colors=colors)]

    # Exceptions are rendered by structlog only; the formatter drops the
    # record's exc_info so stdlib never appends a plain traceback.
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderers],
        )
    )

    # force=True closes the handlers of a previous configuration, log files included
    logging.basicConfig(
        handlers=[handler],
        level=getattr(logging, level.upper()),
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=cache_loggers,
    )


def configure_from_settings(
    settings: EmitterSettings,
    log_file: Path | None = None,
) -> None:
    """Configure logging from emitter settings.

    Args:
        settings: Settings carrying log level and output format
        log_file: Optional file to log to
    """
    configure_logging(
        level=settings.log_level,
        json_output=settings.json_logs,
        log_file=log_file,
        colors=not settings.json_logs,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)
