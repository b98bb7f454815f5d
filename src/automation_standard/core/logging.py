"""
Structured logging for automation-standard.

Configures structlog once per process and hands out loggers to every module.
Log lines go to stderr so they never interleave with manifests or pass/fail
reports written to stdout. Importing the package installs a quiet default
(WARNING and up, stderr) unless structlog was already configured by the host
application; configure_logging() replaces it.

Manifesto:
    - **Structures:** Event names plus keyword fields, never formatted prose
    - **Flexes:** Console output for development, JSON for automation
    - **Stays quiet:** Default level is WARNING so a validation report is
      the only thing a user sees unless they ask for more

Architecture:
    ::

        configure_logging(level="INFO", json_format=None, service="standard-validate")
            │
            ▼
        structlog processor chain:
          1. TimeStamper (iso)
          2. merge_contextvars
          3. add_log_level
          4. add_service_metadata
          5. ecs_compatible (JSON only)
          6. JSONRenderer or ConsoleRenderer

Examples:
    >>> from automation_standard.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=True, service="standard-validate")
    >>> logger = get_logger(__name__)
    >>> logger.debug("engine.resolve.ok", parameter="count")

Tags:
    logging, structlog, observability, json-logging, automation-standard

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger


# Store service name for metadata
_SERVICE_NAME = "automation-standard"


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def _ecs_compatible(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Rename timestamp/level to their ECS field names."""
    if "timestamp" in event_dict:
        event_dict["@timestamp"] = event_dict.pop("timestamp")

    if "level" in event_dict:
        event_dict["log.level"] = event_dict.pop("level")

    return event_dict


def _stderr_logger_factory(*args: Any) -> structlog.PrintLogger:
    # Looked up per logger so a swapped sys.stderr (test runners) is honored.
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(
    level: str = "WARNING",
    json_format: bool | None = None,
    service: str = "automation-standard",
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging for the process.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON, False for console, None for auto (JSON if stderr is not a tty)
        service: Service name to include in logs
        add_timestamp: Include ISO timestamp in logs
    """
    global _SERVICE_NAME
    _SERVICE_NAME = service

    numeric_level = getattr(logging, level.upper())

    if json_format is None:
        json_format = not sys.stderr.isatty()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
    ]

    if add_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        shared_processors.append(structlog.processors.format_exc_info)
        shared_processors.append(_ecs_compatible)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (usually ``get_logger(__name__)``).

    The name is bound as the ``logger_name`` field of every event. The
    returned proxy picks up the configuration in force when it logs.
    """
    if name is None:
        return structlog.get_logger()
    return structlog.get_logger(name, logger_name=name)


def bind_context(**kwargs: Any) -> None:
    """Bind context to include in all subsequent logs.

    Example:
        bind_context(action="create")
        logger.info("engine.validate.started")  # Includes action
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific keys from logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound context."""
    structlog.contextvars.clear_contextvars()


class LogContext:
    """Context manager for scoped logging context.

    Example:
        with LogContext(action="destroy", manifest="manifest.json"):
            logger.info("cli.validate.started")
        # Context cleared here
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs

    def __enter__(self) -> "LogContext":
        bind_context(**self._context)
        return self

    def __exit__(self, *args) -> None:
        unbind_context(*self._context.keys())


def _install_quiet_default() -> None:
    # Library use without configure_logging(): WARNING and up, on stderr.
    if structlog.is_configured():
        return
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )


_install_quiet_default()


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
]
