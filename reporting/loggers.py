# ============================================================================
# JOB LOGGERS
# ============================================================================
# EPOCH: 1 - JOB STATUS REPORTING
# STATUS: Core - JobLogger implementations
# PURPOSE: Write coded job records to traces and to the plan's log feed
# CREATED: 19 OCT 2026
# ============================================================================
"""
Job Loggers

- TraceJobLogger: structured process log via core.logging
- PlanFeedLogger: appends lines to the job record's live console feed
- CompositeJobLogger: fans out to several loggers in order

PlanFeedLogger lets PlanNotFoundError propagate; the reporter decides
where a deleted plan is benign.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from core.logging import log_job_event
from core.models import ExecutionContext
from reporting.interfaces import JobLogger, TaskClient


class TraceJobLogger(JobLogger):
    """Writes job records through the structured logger."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger("reporting.job_events")

    async def log_info(
        self,
        code: str,
        message: str,
        properties: Dict[str, str],
        event_time: Optional[datetime] = None,
    ) -> None:
        log_job_event(code, message, properties, event_time, logging.INFO, self._logger)

    async def log_error(
        self,
        code: str,
        message: str,
        properties: Dict[str, str],
        event_time: Optional[datetime] = None,
    ) -> None:
        log_job_event(code, message, properties, event_time, logging.ERROR, self._logger)


class PlanFeedLogger(JobLogger):
    """
    Appends job records to the job's console feed on the plan.

    Line format: "2026-10-19T12:00:00Z [JobStarted] message"
    """

    def __init__(self, task_client: TaskClient, context: ExecutionContext):
        self._task_client = task_client
        self._context = context

    def _format(self, level: str, code: str, message: str, event_time: Optional[datetime]) -> List[str]:
        timestamp = (event_time or datetime.now(timezone.utc)).astimezone(timezone.utc)
        stamp = timestamp.strftime("%Y-%m-%dT%H:%M:%SZ")
        prefix = "##[error]" if level == "error" else ""
        return [f"{stamp} {prefix}[{code}] {line}" for line in (message or "").splitlines() or [""]]

    async def _append(self, lines: List[str]) -> None:
        ctx = self._context
        await self._task_client.append_log_lines(
            ctx.project_id, ctx.hub_name, ctx.plan_id, ctx.timeline_id, ctx.job_id, lines
        )

    async def log_info(
        self,
        code: str,
        message: str,
        properties: Dict[str, str],
        event_time: Optional[datetime] = None,
    ) -> None:
        await self._append(self._format("info", code, message, event_time))

    async def log_error(
        self,
        code: str,
        message: str,
        properties: Dict[str, str],
        event_time: Optional[datetime] = None,
    ) -> None:
        await self._append(self._format("error", code, message, event_time))


class CompositeJobLogger(JobLogger):
    """Logs to each wrapped logger in order; the first failure propagates."""

    def __init__(self, loggers: Sequence[JobLogger]):
        self._loggers = list(loggers)

    async def log_info(
        self,
        code: str,
        message: str,
        properties: Dict[str, str],
        event_time: Optional[datetime] = None,
    ) -> None:
        for job_logger in self._loggers:
            await job_logger.log_info(code, message, properties, event_time)

    async def log_error(
        self,
        code: str,
        message: str,
        properties: Dict[str, str],
        event_time: Optional[datetime] = None,
    ) -> None:
        for job_logger in self._loggers:
            await job_logger.log_error(code, message, properties, event_time)


__all__ = [
    "TraceJobLogger",
    "PlanFeedLogger",
    "CompositeJobLogger",
]
