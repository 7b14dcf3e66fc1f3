# ============================================================================
# JOB STATUS REPORTER
# ============================================================================
# EPOCH: 1 - JOB STATUS REPORTING
# STATUS: Core - Job lifecycle reporting
# PURPOSE: Report job started / progress / completed to the plan
# CREATED: 19 OCT 2026
# ============================================================================
"""
Job Status Reporter

Reports the lifecycle of one job running under an orchestration plan
and keeps the job's timeline records in step with it.

    report_job_started    session check -> JobStarted event -> log
    report_job_progress   log (plan-not-found tolerated) -> records InProgress
    report_job_completed  session check -> JobCompleted event -> log -> records closed

Start and completion are skipped entirely (one "SessionAlreadyCancelled"
info record) when the parent build/release has been cancelled or
deleted; if the plan is gone too, that record is dropped. Progress
does not check the session; a deleted plan only suppresses its log
record, timeline errors still propagate.

Each call is independent: records are fetched fresh, mutated and
written back once. Concurrent calls for the same job are last-write-
wins at the backend; callers serialize them if ordering matters.
Cancelling the calling task before the final write persists nothing.

Usage:
    context = ExecutionContext.from_message(message)
    async with JobStatusReporter.create(context) as reporter:
        await reporter.report_job_started(datetime.now(timezone.utc), "Started")
        ...
        await reporter.report_job_completed(datetime.now(timezone.utc), "Done", is_passed=True)
"""

from datetime import datetime, timezone
from typing import List, Optional, Union

from core.config import Defaults, get_defaults
from core.contracts import TaskResult
from core.errors import PlanNotFoundError
from core.logging import get_logger, log_context
from core.models import ExecutionContext, JobCompletedEvent, JobStartedEvent, TimelineRecord
from reporting.clients import create_status_client, create_task_client
from reporting.interfaces import BuildStatusClient, JobLogger, ReleaseStatusClient, TaskClient
from reporting.loggers import CompositeJobLogger, PlanFeedLogger, TraceJobLogger
from reporting.session import is_session_valid
from reporting.timeline import mark_completed, mark_in_progress, select_timeline_records

logger = get_logger(__name__)


# Job log event codes
JOB_STARTED = "JobStarted"
JOB_RUNNING = "JobRunning"
JOB_COMPLETED = "JobCompleted"
JOB_FAILED = "JobFailed"
SESSION_ALREADY_CANCELLED = "SessionAlreadyCancelled"


def _as_utc(value: datetime) -> datetime:
    """Normalize an event time to UTC; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class JobStatusReporter:
    """
    Reports one job's lifecycle to its plan.

    All collaborators are injected at construction; nothing is
    reconfigurable afterwards.
    """

    def __init__(
        self,
        context: ExecutionContext,
        task_client: TaskClient,
        job_logger: JobLogger,
        status_client: Union[BuildStatusClient, ReleaseStatusClient],
        timeline_record_name: Optional[str] = None,
    ):
        """
        Initialize reporter.

        Args:
            context: Job execution context
            task_client: Plan event sink and timeline store
            job_logger: Coded job log records
            status_client: Build or release client matching context.hub
            timeline_record_name: If set, only records with this name
                (case-insensitive, anywhere in the timeline) are updated
                instead of the job's record and its children
        """
        self._context = context
        self._task_client = task_client
        self._job_logger = job_logger
        self._status_client = status_client
        self._timeline_record_name = timeline_record_name or None
        self._event_properties = context.event_properties()

    @classmethod
    def create(
        cls,
        context: ExecutionContext,
        job_logger: Optional[JobLogger] = None,
        timeline_record_name: Optional[str] = None,
        defaults: Optional[Defaults] = None,
    ) -> "JobStatusReporter":
        """
        Create a reporter wired to the HTTP clients.

        The default job logger writes to both the process log and the
        job's console feed on the plan.

        Raises:
            UnsupportedHubError: context hub is neither Build nor Release
        """
        defaults = defaults or get_defaults()
        task_client = create_task_client(context, defaults.client)
        status_client = create_status_client(context, defaults.client)

        if job_logger is None:
            job_logger = CompositeJobLogger([
                TraceJobLogger(),
                PlanFeedLogger(task_client, context),
            ])

        return cls(
            context=context,
            task_client=task_client,
            job_logger=job_logger,
            status_client=status_client,
            timeline_record_name=timeline_record_name or defaults.reporting.timeline_record_name,
        )

    @property
    def context(self) -> ExecutionContext:
        return self._context

    @property
    def timeline_record_name(self) -> Optional[str]:
        return self._timeline_record_name

    def _log_scope(self, operation: str):
        ctx = self._context
        return log_context(
            plan_id=str(ctx.plan_id),
            project_id=str(ctx.project_id),
            job_id=str(ctx.job_id),
            timeline_id=str(ctx.timeline_id),
            hub_name=ctx.hub_name,
            operation=operation,
        )

    # ------------------------------------------------------------------
    # LIFECYCLE
    # ------------------------------------------------------------------

    async def report_job_started(self, event_time: datetime, message: str) -> None:
        """
        Report that the job has started.

        Skipped (one info record) if the parent build/release is gone.
        """
        ctx = self._context
        with self._log_scope("report_job_started"):
            if not await is_session_valid(ctx, self._status_client):
                await self._log_session_cancelled("report_job_started")
                return

            await self._task_client.raise_plan_event(
                ctx.project_id, ctx.hub_name, ctx.plan_id, JobStartedEvent(job_id=ctx.job_id)
            )
            await self._job_logger.log_info(
                JOB_STARTED, message, self._event_properties, _as_utc(event_time)
            )

    async def report_job_progress(self, event_time: datetime, message: str) -> None:
        """
        Report that the job is still running.

        A deleted plan only suppresses the log record; the timeline
        fetch and update still run and their errors propagate.
        """
        with self._log_scope("report_job_progress"):
            try:
                await self._job_logger.log_info(
                    JOB_RUNNING, message, self._event_properties, _as_utc(event_time)
                )
            except PlanNotFoundError:
                logger.debug(f"Plan {self._context.plan_id} not found, progress log skipped")

            records = await self._fetch_selected_records()
            await self._write_records(mark_in_progress(records))

    async def report_job_completed(
        self,
        event_time: datetime,
        message: str,
        is_passed: bool,
    ) -> None:
        """
        Report that the job has finished and close its timeline records.

        Skipped (one info record) if the parent build/release is gone.
        """
        ctx = self._context
        with self._log_scope("report_job_completed"):
            if not await is_session_valid(ctx, self._status_client):
                await self._log_session_cancelled("report_job_completed")
                return

            event = JobCompletedEvent.from_passed(ctx.job_id, is_passed)
            await self._task_client.raise_plan_event(
                ctx.project_id, ctx.hub_name, ctx.plan_id, event
            )

            if is_passed:
                await self._job_logger.log_info(
                    JOB_COMPLETED, message, self._event_properties, _as_utc(event_time)
                )
            else:
                await self._job_logger.log_error(
                    JOB_FAILED, message, self._event_properties, _as_utc(event_time)
                )

            await self.complete_timeline_records(event.result)

    async def _log_session_cancelled(self, operation: str) -> None:
        # A deleted build/release usually takes its plan with it
        try:
            await self._job_logger.log_info(
                SESSION_ALREADY_CANCELLED,
                f"Skipping {operation} for cancelled or deleted build/release",
                self._event_properties,
            )
        except PlanNotFoundError:
            logger.debug(f"Plan {self._context.plan_id} not found, {operation} skip not logged")

    # ------------------------------------------------------------------
    # TIMELINE
    # ------------------------------------------------------------------

    def select_records(self, records: List[TimelineRecord]) -> List[TimelineRecord]:
        """Select this job's records using the reporter's addressing mode."""
        return select_timeline_records(records, self._context.job_id, self._timeline_record_name)

    async def complete_timeline_records(self, result: TaskResult) -> List[TimelineRecord]:
        """
        Close this job's timeline records with the given result.

        Returns:
            The records written
        """
        records = await self._fetch_selected_records()
        return await self._write_records(mark_completed(records, result))

    async def _fetch_selected_records(self) -> List[TimelineRecord]:
        ctx = self._context
        records = await self._task_client.get_records(
            ctx.project_id, ctx.hub_name, ctx.plan_id, ctx.timeline_id
        )
        selected = self.select_records(records)
        logger.debug(f"Selected {len(selected)} of {len(records)} timeline records")
        return selected

    async def _write_records(self, records: List[TimelineRecord]) -> List[TimelineRecord]:
        ctx = self._context
        await self._task_client.update_records(
            ctx.project_id, ctx.hub_name, ctx.plan_id, ctx.timeline_id, records
        )
        return records

    # ------------------------------------------------------------------
    # RESOURCES
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """Close the injected clients."""
        await self._task_client.close()
        await self._status_client.close()

    async def __aenter__(self) -> "JobStatusReporter":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


__all__ = [
    "JobStatusReporter",
    "JOB_STARTED",
    "JOB_RUNNING",
    "JOB_COMPLETED",
    "JOB_FAILED",
    "SESSION_ALREADY_CANCELLED",
]
