# src/storage_writer/core/logging.py
"""Logging setup for sinks, the factory and the CLI.

structlog and stdlib logging share one stderr handler. SQLAlchemy logs
through stdlib, so a ProcessorFormatter runs those records through the
same processors as sink events, and a database sink's engine messages
come out in the sink's format.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import ProcessorFormatter

# Parent of sqlalchemy.engine and sqlalchemy.pool
_SQLALCHEMY_LOGGER = "sqlalchemy"


def _remove_internal_fields(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Drop the bookkeeping keys ProcessorFormatter adds to every record."""
    del event_dict["_record"]
    del event_dict["_from_structlog"]
    return event_dict


def _renderer_chain(json_output: bool) -> list[Any]:
    if json_output:
        return [
            _remove_internal_fields,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [_remove_internal_fields, structlog.dev.ConsoleRenderer(colors=False)]


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
) -> None:
    """Send storage writer and SQLAlchemy logs to stderr.

    Safe to call again; the previous handler is replaced.

    Args:
        json_output: One JSON object per line instead of console text.
        level: Root level name (DEBUG, INFO, WARNING, ERROR).
    """
    log_level = getattr(logging, level.upper())

    pre_chain: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]

    structlog.configure(
        processors=[*pre_chain, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Tests reconfigure between cases
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ProcessorFormatter(processors=_renderer_chain(json_output), foreign_pre_chain=pre_chain))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    # --verbose is for sink events; per-statement engine logs stay at WARNING
    logging.getLogger(_SQLALCHEMY_LOGGER).setLevel(max(log_level, logging.WARNING))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger named after the calling module."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
