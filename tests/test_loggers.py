# ============================================================================
# JOB LOGGER TESTS
# ============================================================================
# EPOCH: 1 - JOB STATUS REPORTING
# STATUS: Tests - Job loggers and structured logging
# PURPOSE: Verify trace/feed/composite loggers and log context handling
# CREATED: 19 OCT 2026
# ============================================================================
"""
Job Logger Tests

Covers:
1. TraceJobLogger levels and event data
2. PlanFeedLogger line format and plan-not-found propagation
3. CompositeJobLogger ordering and first-failure propagation
4. log_context nesting and JSON formatting

Run with:
    pytest tests/test_loggers.py -v
"""

import asyncio
import json
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from unittest.mock import AsyncMock, call

import pytest

from core.errors import PlanNotFoundError
from core.logging import (
    HumanFormatter,
    StructuredFormatter,
    configure_logging,
    get_current_context,
    get_logger,
    log_context,
)
from reporting.interfaces import JobLogger, TaskClient
from reporting.loggers import CompositeJobLogger, PlanFeedLogger, TraceJobLogger


EVENT_TIME = datetime(2026, 10, 19, 12, 0, 5, tzinfo=timezone.utc)
PROPS = {"JobId": "9b2e"}


# ============================================================================
# TRACE LOGGER
# ============================================================================

class TestTraceJobLogger:

    def test_info_record(self, caplog):
        job_logger = TraceJobLogger(logging.getLogger("test.job_events"))

        with caplog.at_level(logging.INFO, logger="test.job_events"):
            asyncio.run(job_logger.log_info("JobStarted", "hello", PROPS, EVENT_TIME))

        record = caplog.records[-1]
        assert record.levelno == logging.INFO
        assert record.getMessage() == "JobStarted: hello"
        assert record.extra["event"] == "JobStarted"
        assert record.extra["event_time"] == "2026-10-19T12:00:05.000Z"
        assert record.extra["properties"] == PROPS

    def test_error_record(self, caplog):
        job_logger = TraceJobLogger(logging.getLogger("test.job_events"))

        with caplog.at_level(logging.INFO, logger="test.job_events"):
            asyncio.run(job_logger.log_error("JobFailed", "broke", PROPS))

        assert caplog.records[-1].levelno == logging.ERROR

    def test_context_attached(self, caplog):
        job_logger = TraceJobLogger(logging.getLogger("test.job_events"))

        with caplog.at_level(logging.INFO, logger="test.job_events"):
            with log_context(job_id="9b2e", operation="report_job_started"):
                asyncio.run(job_logger.log_info("JobStarted", "hello", PROPS))

        assert caplog.records[-1].extra["operation"] == "report_job_started"


# ============================================================================
# PLAN FEED LOGGER
# ============================================================================

class TestPlanFeedLogger:

    def test_info_lines(self, build_context):
        task_client = AsyncMock(spec=TaskClient)
        job_logger = PlanFeedLogger(task_client, build_context)

        asyncio.run(job_logger.log_info("JobStarted", "hello\nworld", PROPS, EVENT_TIME))

        task_client.append_log_lines.assert_awaited_once_with(
            build_context.project_id,
            "Build",
            build_context.plan_id,
            build_context.timeline_id,
            build_context.job_id,
            [
                "2026-10-19T12:00:05Z [JobStarted] hello",
                "2026-10-19T12:00:05Z [JobStarted] world",
            ],
        )

    def test_error_lines_marked(self, build_context):
        task_client = AsyncMock(spec=TaskClient)
        job_logger = PlanFeedLogger(task_client, build_context)

        asyncio.run(job_logger.log_error("JobFailed", "broke", PROPS, EVENT_TIME))

        lines = task_client.append_log_lines.await_args.args[5]
        assert lines == ["2026-10-19T12:00:05Z ##[error][JobFailed] broke"]

    def test_plan_not_found_propagates(self, build_context):
        task_client = AsyncMock(spec=TaskClient)
        task_client.append_log_lines.side_effect = PlanNotFoundError("gone", status=404)
        job_logger = PlanFeedLogger(task_client, build_context)

        with pytest.raises(PlanNotFoundError):
            asyncio.run(job_logger.log_info("JobRunning", "tick", PROPS))


# ============================================================================
# COMPOSITE LOGGER
# ============================================================================

class TestCompositeJobLogger:

    def test_fans_out_in_order(self):
        first, second = AsyncMock(spec=JobLogger), AsyncMock(spec=JobLogger)
        job_logger = CompositeJobLogger([first, second])

        asyncio.run(job_logger.log_error("JobFailed", "broke", PROPS, EVENT_TIME))

        expected = call("JobFailed", "broke", PROPS, EVENT_TIME)
        assert first.log_error.await_args == expected
        assert second.log_error.await_args == expected

    def test_first_failure_stops(self):
        first, second = AsyncMock(spec=JobLogger), AsyncMock(spec=JobLogger)
        first.log_info.side_effect = PlanNotFoundError("gone", status=404)
        job_logger = CompositeJobLogger([first, second])

        with pytest.raises(PlanNotFoundError):
            asyncio.run(job_logger.log_info("JobRunning", "tick", PROPS))

        second.log_info.assert_not_awaited()


# ============================================================================
# STRUCTURED LOGGING
# ============================================================================

class TestLogContext:

    def test_nesting_and_reset(self):
        with log_context(plan_id="p1", job_id="j1"):
            with log_context(operation="report_job_progress"):
                inner = get_current_context()
                assert (inner.plan_id, inner.job_id, inner.operation) == (
                    "p1", "j1", "report_job_progress"
                )
            assert get_current_context().operation is None
        assert get_current_context().job_id is None

    def test_structured_formatter(self):
        formatter = StructuredFormatter()
        record = logging.LogRecord("reporting", logging.INFO, __file__, 1, "hello", None, None)
        record.extra = {"event": "JobStarted"}

        with log_context(job_id="j1"):
            data = json.loads(formatter.format(record))

        assert data["message"] == "hello"
        assert data["level"] == "INFO"
        assert data["context"] == {"job_id": "j1"}
        assert data["data"] == {"event": "JobStarted"}


@contextmanager
def _preserved_root():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    try:
        yield root
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)


class TestConfigureLogging:

    def test_json_output(self):
        with _preserved_root() as root:
            configure_logging("DEBUG", json_output=True)

            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, StructuredFormatter)

    def test_settings_from_environment(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        monkeypatch.setenv("LOG_FORMAT", "json")

        with _preserved_root() as root:
            configure_logging()

            assert root.level == logging.ERROR
            assert isinstance(root.handlers[0].formatter, StructuredFormatter)

    def test_human_output(self, monkeypatch):
        monkeypatch.setenv("LOG_FORMAT", "json")

        with _preserved_root() as root:
            configure_logging("warning", json_output=False)
            formatter = root.handlers[0].formatter

        assert isinstance(formatter, HumanFormatter)
        record = logging.LogRecord("reporting", logging.WARNING, __file__, 1, "careful", None, None)
        with log_context(plan_id="p1", job_id="j1"):
            line = formatter.format(record)
        assert "[plan=p1, job=j1]" in line
        assert line.endswith("careful")

    def test_context_logger_merges_context(self, caplog):
        context_logger = get_logger("test.reporting")

        with caplog.at_level(logging.INFO, logger="test.reporting"):
            with log_context(job_id="j1"):
                context_logger.info("selected", extra={"count": 2})

        assert caplog.records[-1].extra == {"count": 2, "job_id": "j1"}
