"""Logging setup: structlog rendered through the standard logging module."""

import logging
import logging.config
from typing import Any

import structlog


def configure_logging(
    log_level: str = "INFO",
    rich_tracebacks: bool = False,
    colored_logs: bool = True,
) -> dict[str, Any]:
    """
    Configure structlog and stdlib logging to write to stderr.

    stdout is left alone so compressed output can be piped.

    Args:
        log_level: Root log level name
        rich_tracebacks: Render exceptions with rich
        colored_logs: Colorize console output

    Returns:
        The ``logging.config`` dictionary that was applied
    """
    timestamper = structlog.processors.TimeStamper(fmt="iso")
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        timestamper,
    ]

    if rich_tracebacks:
        exception_formatter: Any = structlog.dev.RichTracebackFormatter()
    else:
        exception_formatter = structlog.dev.plain_traceback

    logging_dict: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.dev.ConsoleRenderer(
                        colors=colored_logs,
                        exception_formatter=exception_formatter,
                    ),
                ],
                "foreign_pre_chain": shared_processors,
            },
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "console",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {"handlers": ["default"], "level": log_level},
    }
    logging.config.dictConfig(logging_dict)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    return logging_dict
