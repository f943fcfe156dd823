"""Unit tests for logging and tracing of builder operations."""

from __future__ import annotations

import logging
from typing import Any

import pytest
from opentelemetry.trace import StatusCode
from structlog.testing import capture_logs

from floe_builder import MissingArgumentError, ParamSpecError, create_builder
from floe_builder.observability import LOGGER_NAME, builder_operation, get_logger, get_tracer


class TestSpans:
    """Tests for OpenTelemetry spans around builder operations."""

    def test_create_span(self, span_exporter: Any, recorder: type) -> None:
        """Test create_builder emits a builder.create span."""
        create_builder([{"name": "a"}, {"name": "b"}], recorder)

        spans = span_exporter.get_finished_spans()
        assert [s.name for s in spans] == ["builder.create"]
        assert spans[0].attributes["builder.operation"] == "create"
        assert spans[0].attributes["builder.target"] == "Recorder"
        assert spans[0].attributes["builder.param_count"] == 2
        assert spans[0].status.status_code == StatusCode.OK

    def test_build_span(self, span_exporter: Any, recorder: type) -> None:
        """Test build() emits a builder.build span."""
        builder_cls = create_builder([{"name": "a"}], recorder)
        span_exporter.clear()

        builder_cls().setA(1).build()

        spans = span_exporter.get_finished_spans()
        assert [s.name for s in spans] == ["builder.build"]
        assert spans[0].attributes["builder.param_count"] == 1

    def test_failed_create_recorded(self, span_exporter: Any, recorder: type) -> None:
        """Test validation failures mark the span as errored."""
        with pytest.raises(ParamSpecError):
            create_builder([{"isList": True}], recorder)

        span = span_exporter.get_finished_spans()[0]
        assert span.status.status_code == StatusCode.ERROR
        assert span.events[0].name == "exception"

    def test_failed_build_recorded(self, span_exporter: Any, recorder: type) -> None:
        """Test build failures are recorded once on the build span."""
        builder_cls = create_builder([{"name": "a", "isRequired": True}], recorder)
        span_exporter.clear()

        with pytest.raises(MissingArgumentError):
            builder_cls().build()

        span = span_exporter.get_finished_spans()[0]
        assert span.status.status_code == StatusCode.ERROR
        assert len(span.events) == 1


class TestLogEvents:
    """Tests for structured log events."""

    def test_builder_created_event(self, recorder: type) -> None:
        """Test create_builder logs the generated methods."""
        with capture_logs() as logs:
            create_builder([{"name": "tags", "isList": True, "itemName": "tag"}], recorder)

        created = [log for log in logs if log["event"] == "builder_created"]
        assert created == [
            {
                "event": "builder_created",
                "log_level": "info",
                "builder": "RecorderBuilder",
                "target": "Recorder",
                "methods": ["addTag", "setTags"],
            }
        ]

    def test_build_events_at_debug(self, recorder: type) -> None:
        """Test build start and completion are logged at debug level."""
        builder_cls = create_builder([], recorder)

        with capture_logs() as logs:
            builder_cls().build()

        assert [(log["event"], log["log_level"]) for log in logs] == [
            ("builder.build_started", "debug"),
            ("builder.build_completed", "debug"),
        ]

    def test_failure_logged_as_error(self, recorder: type) -> None:
        """Test failures are logged with the error type."""
        with capture_logs() as logs:
            with pytest.raises(ParamSpecError):
                create_builder([None], recorder)

        failed = [log for log in logs if log["event"] == "builder.create_failed"]
        assert failed[0]["log_level"] == "error"
        assert failed[0]["error_type"] == "ParamSpecError"

    def test_builder_operation_without_optional_attributes(self) -> None:
        """Test builder_operation only sets the attributes given."""
        with capture_logs() as logs:
            with builder_operation("build", log_end=False):
                pass

        assert logs == [
            {"event": "builder.build_started", "log_level": "debug", "builder.operation": "build"}
        ]


class TestStdlibRouting:
    """Tests for routing log events through the stdlib floe.builder logger."""

    def test_silent_without_logging_configuration(
        self, recorder: type, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test creating and building writes nothing to stdout or stderr by default."""
        builder_cls = create_builder([{"name": "a", "isRequired": True}], recorder)
        builder_cls().setA(1).build()
        with pytest.raises(MissingArgumentError):
            builder_cls().build()

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_debug_events_follow_stdlib_level(
        self, recorder: type, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test build events reach stdlib handlers once floe.builder allows debug."""
        builder_cls = create_builder([], recorder)

        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            builder_cls().build()

        records = [r for r in caplog.records if r.name == LOGGER_NAME]
        assert any("builder.build_started" in r.getMessage() for r in records)
        assert all(r.levelno == logging.DEBUG for r in records)

    def test_debug_events_filtered_at_info(
        self, recorder: type, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test debug build events are dropped when floe.builder is at INFO."""
        builder_cls = create_builder([], recorder)

        with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
            builder_cls().build()

        assert [r for r in caplog.records if r.name == LOGGER_NAME] == []


class TestSetup:
    """Tests for the cached logger and tracer."""

    def test_logger_cached(self) -> None:
        """Test get_logger returns the same logger on every call."""
        assert get_logger() is get_logger()

    def test_tracer_cached(self) -> None:
        """Test get_tracer returns the same tracer on every call."""
        assert get_tracer() is get_tracer()
