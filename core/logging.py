# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# EPOCH: 1 - JOB STATUS REPORTING
# STATUS: Core - Structured logging with context
# PURPOSE: Consistent, queryable logging for job status reporting
# CREATED: 19 OCT 2026
# ============================================================================
"""
Structured Logging

Provides structured, JSON-formatted logging for status reporting.

Features:
- Contextual fields (plan_id, job_id, timeline_id, hub)
- JSON output for log aggregation
- Named job events ("JobStarted", "JobFailed", ...) with properties

Usage:
    from core.logging import get_logger, log_context

    logger = get_logger("reporting.status")

    with log_context(plan_id="5c1d...", job_id="9b2e..."):
        logger.info("Reporting job started", extra={"hub": "Build"})

Context is stored in a ContextVar so concurrent reporting coroutines
each see their own stack.
"""

import json
import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple, Union

from core.config import get_defaults


@dataclass
class LogContext:
    """Context for structured logging."""
    plan_id: Optional[str] = None
    project_id: Optional[str] = None
    job_id: Optional[str] = None
    timeline_id: Optional[str] = None
    hub_name: Optional[str] = None
    operation: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict, excluding None values."""
        result = {}
        for key, value in asdict(self).items():
            if value is not None and key != "extra":
                result[key] = value
        if self.extra:
            result.update(self.extra)
        return result


_context_stack: ContextVar[Tuple[LogContext, ...]] = ContextVar(
    "status_log_context", default=()
)


def get_current_context() -> LogContext:
    """Get current logging context."""
    stack = _context_stack.get()
    if stack:
        return stack[-1]
    return LogContext()


@contextmanager
def log_context(**kwargs):
    """
    Context manager for adding logging context.

    Args:
        **kwargs: Context fields to add

    Example:
        with log_context(job_id="9b2e...", operation="report_job_started"):
            logger.info("Checking session")
    """
    parent = get_current_context()
    new_context = LogContext(
        plan_id=kwargs.get("plan_id", parent.plan_id),
        project_id=kwargs.get("project_id", parent.project_id),
        job_id=kwargs.get("job_id", parent.job_id),
        timeline_id=kwargs.get("timeline_id", parent.timeline_id),
        hub_name=kwargs.get("hub_name", parent.hub_name),
        operation=kwargs.get("operation", parent.operation),
        extra={**parent.extra, **kwargs.get("extra", {})},
    )

    token = _context_stack.set(_context_stack.get() + (new_context,))
    try:
        yield new_context
    finally:
        _context_stack.reset(token)


def _utc_iso(value: Optional[datetime] = None) -> str:
    value = value or datetime.now(timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs log records as JSON for easy parsing by log aggregators.
    """

    def __init__(self, include_context: bool = True, include_source: bool = True):
        super().__init__()
        self.include_context = include_context
        self.include_source = include_source

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": _utc_iso(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_context:
            context_dict = get_current_context().to_dict()
            if context_dict:
                log_data["context"] = context_dict

        if hasattr(record, "extra") and record.extra:
            log_data["data"] = record.extra

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if self.include_source:
            log_data["source"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        return json.dumps(log_data, default=str)


class HumanFormatter(logging.Formatter):
    """
    Human-readable formatter for development.

    Includes context fields inline for easy reading.
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)

        context = get_current_context()
        context_parts = []
        if context.plan_id:
            context_parts.append(f"plan={context.plan_id}")
        if context.job_id:
            context_parts.append(f"job={context.job_id}")
        if context.operation:
            context_parts.append(f"op={context.operation}")

        context_str = f" [{', '.join(context_parts)}]" if context_parts else ""

        extra_str = ""
        if hasattr(record, "extra") and record.extra:
            extra_str = f" {record.extra}"

        result = f"{timestamp} {level} {record.name}{context_str}: {record.getMessage()}{extra_str}"

        if record.exc_info:
            result += f"\n{self.formatException(record.exc_info)}"

        return result


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter that includes context in log records.

    Extra fields are nested under record.extra so formatters can
    render them without clashing with LogRecord attributes.
    """

    def process(self, msg, kwargs):
        extra = dict(kwargs.get("extra") or {})
        extra.update(get_current_context().to_dict())
        kwargs["extra"] = {"extra": extra}
        return msg, kwargs


def get_logger(name: str) -> ContextLogger:
    """
    Get a context-aware logger.

    Args:
        name: Logger name (e.g., "reporting.status")

    Returns:
        ContextLogger instance
    """
    return ContextLogger(logging.getLogger(name), {})


def configure_logging(
    level: Optional[Union[str, int]] = None,
    json_output: Optional[bool] = None,
) -> None:
    """
    Configure logging for the host process.

    Unset arguments fall back to get_defaults().reporting
    (LOG_LEVEL / LOG_FORMAT).

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: Use JSON format
    """
    reporting_defaults = get_defaults().reporting
    if level is None:
        level = reporting_defaults.log_level
    if json_output is None:
        json_output = reporting_defaults.log_format.lower() == "json"

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if json_output:
        formatter: logging.Formatter = StructuredFormatter(include_context=True)
    else:
        formatter = HumanFormatter()

    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root.addHandler(handler)


# ============================================================================
# JOB EVENT LOGGING
# ============================================================================

def log_job_event(
    code: str,
    message: str,
    properties: Optional[Dict[str, Any]] = None,
    event_time: Optional[datetime] = None,
    level: int = logging.INFO,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log a named job event.

    Event codes are stable markers ("JobStarted", "JobRunning",
    "JobCompleted", "JobFailed", "SessionAlreadyCancelled") that can be
    queried to reconstruct a job's reporting history.

    Args:
        code: Event code
        message: Free-form message
        properties: Annotation properties for the job
        event_time: When the event happened (defaults to now, UTC)
        level: Logging level
        logger: Optional specific logger to use
    """
    if logger is None:
        logger = logging.getLogger("job_events")

    event_data: Dict[str, Any] = {
        "event": code,
        "event_time": _utc_iso(event_time),
    }
    event_data.update(get_current_context().to_dict())
    if properties:
        event_data["properties"] = dict(properties)

    logger.log(level, f"{code}: {message}", extra={"extra": event_data})


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "LogContext",
    "StructuredFormatter",
    "HumanFormatter",
    "ContextLogger",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_current_context",
    "log_job_event",
]
