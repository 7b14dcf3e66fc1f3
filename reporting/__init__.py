# ============================================================================
# REPORTING MODULE
# ============================================================================
# EPOCH: 1 - JOB STATUS REPORTING
# STATUS: Core - Job status reporting components
# PURPOSE: Lifecycle reporting, session validation, timeline updates
# CREATED: 19 OCT 2026
# ============================================================================
"""
Reporting Module

Components for reporting a job's lifecycle to its plan:
- interfaces: Abstract task/status clients and job logger
- clients: aiohttp implementations against the REST backend
- loggers: Trace, plan feed and composite job loggers
- session: Parent build/release liveness checks
- timeline: Timeline record selection and mutation
- status: JobStatusReporter
"""

from reporting.interfaces import (
    TaskClient,
    BuildStatusClient,
    ReleaseStatusClient,
    JobLogger,
)
from reporting.clients import (
    HTTPTaskClient,
    HTTPBuildClient,
    HTTPReleaseClient,
    create_status_client,
    create_task_client,
)
from reporting.loggers import (
    TraceJobLogger,
    PlanFeedLogger,
    CompositeJobLogger,
)
from reporting.session import (
    is_build_valid,
    is_release_valid,
    is_session_valid,
)
from reporting.timeline import (
    select_timeline_records,
    mark_in_progress,
    mark_completed,
)
from reporting.status import JobStatusReporter

__all__ = [
    # Interfaces
    "TaskClient",
    "BuildStatusClient",
    "ReleaseStatusClient",
    "JobLogger",
    # Clients
    "HTTPTaskClient",
    "HTTPBuildClient",
    "HTTPReleaseClient",
    "create_status_client",
    "create_task_client",
    # Loggers
    "TraceJobLogger",
    "PlanFeedLogger",
    "CompositeJobLogger",
    # Session
    "is_build_valid",
    "is_release_valid",
    "is_session_valid",
    # Timeline
    "select_timeline_records",
    "mark_in_progress",
    "mark_completed",
    # Reporter
    "JobStatusReporter",
]
