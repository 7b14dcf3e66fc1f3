# ============================================================================
# CORE MODULE
# ============================================================================
# EPOCH: 1 - JOB STATUS REPORTING
# STATUS: Core module initialization
# PURPOSE: Export core contracts, errors and models
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================

from core.contracts import HubType, TaskResult, TimelineRecordState
from core.errors import (
    StatusReportingError,
    UnsupportedHubError,
    TransportError,
    PlanNotFoundError,
)
from core.models import (
    ExecutionContext,
    BuildHub,
    ReleaseHub,
    TimelineRecord,
    JobStartedEvent,
    JobCompletedEvent,
)

__all__ = [
    # Enums
    "HubType",
    "TaskResult",
    "TimelineRecordState",
    # Errors
    "StatusReportingError",
    "UnsupportedHubError",
    "TransportError",
    "PlanNotFoundError",
    # Models
    "ExecutionContext",
    "BuildHub",
    "ReleaseHub",
    "TimelineRecord",
    "JobStartedEvent",
    "JobCompletedEvent",
]
