# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# EPOCH: 1 - JOB STATUS REPORTING
# STATUS: Foundation - Core enums shared by models and reporters
# PURPOSE: Hub types, timeline record states and task results
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: HubType, TimelineRecordState, TaskResult
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for job status reporting.

These values cross the boundary to the orchestration backend, so the
enum values match the backend's wire strings exactly.
"""

from enum import Enum


# ============================================================================
# HUB
# ============================================================================

class HubType(str, Enum):
    """
    Category of parent execution that owns a job.

    The value is used verbatim as the {hubName} path segment of
    plan and timeline URLs.
    """
    BUILD = "Build"
    RELEASE = "Release"

    @classmethod
    def parse(cls, value: str) -> "HubType":
        """Case-insensitive lookup, raises ValueError for unknown hubs."""
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        raise ValueError(f"Unknown hub: {value!r}")


# ============================================================================
# TIMELINE
# ============================================================================

class TimelineRecordState(str, Enum):
    """
    Timeline record lifecycle.

    State transitions:
        PENDING -> IN_PROGRESS -> COMPLETED
    """
    PENDING = "pending"
    IN_PROGRESS = "inProgress"
    COMPLETED = "completed"


class TaskResult(str, Enum):
    """Outcome of a job or timeline record."""
    SUCCEEDED = "succeeded"
    SUCCEEDED_WITH_ISSUES = "succeededWithIssues"
    FAILED = "failed"
    CANCELED = "canceled"
    SKIPPED = "skipped"
    ABANDONED = "abandoned"

    @classmethod
    def from_passed(cls, is_passed: bool) -> "TaskResult":
        return cls.SUCCEEDED if is_passed else cls.FAILED


__all__ = [
    "HubType",
    "TimelineRecordState",
    "TaskResult",
]
