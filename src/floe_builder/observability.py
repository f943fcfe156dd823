"""Structured logging and OpenTelemetry spans for floe-builder.

This module provides:
- A structlog logger bound to the stdlib ``floe.builder`` logger
- OpenTelemetry span helpers for builder creation and build calls

Events go through stdlib logging, so they follow the host application's
handlers and levels. Without any configuration nothing is emitted.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from opentelemetry import trace
from opentelemetry.trace import SpanKind, Status, StatusCode

if TYPE_CHECKING:
    from opentelemetry.trace import Span, Tracer
    from structlog.stdlib import BoundLogger

LOGGER_NAME = "floe.builder"
TRACER_NAME = LOGGER_NAME

# Library default: stay silent until the application configures logging
logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())

_logger: BoundLogger | None = None
_tracer: Tracer | None = None


def get_logger() -> BoundLogger:
    """Get the module logger, creating it if necessary.

    The logger wraps ``logging.getLogger("floe.builder")``; processors come
    from the current structlog configuration, levels and handlers from stdlib
    logging.

    Returns:
        structlog BoundLogger instance.

    Example:
        >>> logging.getLogger("floe.builder").setLevel(logging.DEBUG)
        >>> get_logger().debug("builder.build_started")
    """
    global _logger
    if _logger is None:
        _logger = structlog.wrap_logger(
            logging.getLogger(LOGGER_NAME),
            wrapper_class=structlog.stdlib.BoundLogger,
        )
    assert _logger is not None  # Type narrowing for mypy
    return _logger


def get_tracer() -> Tracer:
    """Get the OpenTelemetry tracer for floe-builder."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(TRACER_NAME)
    return _tracer


@contextmanager
def span(
    name: str,
    *,
    attributes: dict[str, Any] | None = None,
    log_start: bool = True,
    log_end: bool = True,
) -> Iterator[Span]:
    """Create an OpenTelemetry span with structured logging.

    Start and completion events are logged at debug level; failures are
    logged at error level, recorded on the span and re-raised.

    Args:
        name: Span name (e.g., "builder.create", "builder.build").
        attributes: Optional span attributes.
        log_start: If True, log span start.
        log_end: If True, log span end.

    Yields:
        OpenTelemetry Span instance.
    """
    tracer = get_tracer()
    logger = get_logger()
    attrs = attributes or {}

    with tracer.start_as_current_span(
        name,
        kind=SpanKind.INTERNAL,
        attributes=attrs,
        record_exception=False,
        set_status_on_exception=False,
    ) as s:
        if log_start:
            logger.debug(f"{name}_started", **attrs)
        try:
            yield s
            s.set_status(Status(StatusCode.OK))
            if log_end:
                logger.debug(f"{name}_completed", **attrs)
        except Exception as exc:
            s.set_status(Status(StatusCode.ERROR, str(exc)))
            s.record_exception(exc)
            logger.error(f"{name}_failed", error=str(exc), error_type=type(exc).__name__, **attrs)
            raise


@contextmanager
def builder_operation(
    operation: str,
    *,
    target: str | None = None,
    param_count: int | None = None,
    log_start: bool = True,
    log_end: bool = True,
) -> Iterator[Span]:
    """Create a span for builder operations with standard attributes.

    Convenience wrapper around span() with builder-specific attributes.

    Args:
        operation: Operation name ("create" or "build").
        target: Qualified name of the target constructor.
        param_count: Number of parameter specifications.
        log_start: If True, log span start.
        log_end: If True, log span end.

    Yields:
        OpenTelemetry Span instance.

    Example:
        >>> with builder_operation("build", target="Point"):
        ...     point = Point(1, 2)
    """
    attrs: dict[str, Any] = {"builder.operation": operation}
    if target:
        attrs["builder.target"] = target
    if param_count is not None:
        attrs["builder.param_count"] = param_count

    with span(
        f"builder.{operation}",
        attributes=attrs,
        log_start=log_start,
        log_end=log_end,
    ) as s:
        yield s
