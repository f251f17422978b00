"""Structured logging configuration using structlog."""

import logging
import re
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

from workload_import.schemas.entities import EntityKind

_EMAIL = re.compile(r"([^\s@\"',;:]{1,2})[^\s@\"',;:]*@([^\s@\"',;:]+\.[^\s@\"',;:]+)")


def mask_email(text: str) -> str:
    """Shorten the local part of every email address in ``text``."""
    return _EMAIL.sub(r"\1***@\2", text)


def mask_emails(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """
    Processor that masks email addresses in string values.

    Lecturer uploads carry staff email addresses, which can reach an event
    through notification text, writer errors or file names.
    """
    for key, value in event_dict.items():
        if isinstance(value, str) and "@" in value:
            event_dict[key] = mask_email(value)
    return event_dict


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: If True, output logs as JSON (useful for production).
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        mask_emails,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors: list[structlog.types.Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Console output goes to stderr so CLI tables on stdout stay clean
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a logger instance.

    Args:
        name: Logger name (typically __name__ of the module).

    Returns:
        Configured structlog logger.
    """
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> structlog.contextvars.bound_contextvars:
    """
    Context manager for adding context to all logs within the block.

    Args:
        **kwargs: Key-value pairs to add to log context.

    Returns:
        Context manager that binds the values.
    """
    return structlog.contextvars.bound_contextvars(**kwargs)


def import_scope(
    entity: EntityKind | str, file: str | None = None
) -> structlog.contextvars.bound_contextvars:
    """
    Bind the entity and upload file for every event in one import step.

    Example:
        with import_scope(EntityKind.MODULES, "modules.csv"):
            log.info("Upload parsed")  # Will include entity and file
    """
    context: dict[str, Any] = {"entity": EntityKind(entity).value}
    if file is not None:
        context["file"] = file
    return log_context(**context)
