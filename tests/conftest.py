"""Shared test fixtures for floe-builder tests.

This module provides a recording target constructor and an in-memory
OpenTelemetry exporter wired into the floe-builder tracer.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest
import structlog

from floe_builder import observability

CONSTRUCTOR_MSG = "This object was constructed with Recorder"
CLASS_MSG = "This attribute lives on the Recorder class"


class Recorder:
    """Target constructor that keeps the positional arguments it received."""

    class_attr = CLASS_MSG

    def __init__(self, *args: Any) -> None:
        self.args = list(args)
        self.instance_attr = CONSTRUCTOR_MSG


@pytest.fixture
def recorder() -> type[Recorder]:
    """Target constructor recording its arguments."""
    return Recorder


@pytest.fixture(autouse=True)
def reset_observability() -> Iterator[None]:
    """Drop cached loggers, tracers and structlog configuration after each test."""
    yield
    structlog.reset_defaults()
    observability._logger = None
    observability._tracer = None


@pytest.fixture
def span_exporter() -> Iterator[Any]:
    """In-memory span exporter receiving every floe-builder span.

    Example:
        def test_spans(span_exporter):
            create_builder([], Recorder)
            assert span_exporter.get_finished_spans()[0].name == "builder.create"
    """
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import SimpleSpanProcessor
    from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    observability._tracer = provider.get_tracer(observability.TRACER_NAME)

    yield exporter

    exporter.shutdown()
    provider.shutdown()
