# ============================================================================
# MODELS MODULE
# ============================================================================
# EPOCH: 1 - JOB STATUS REPORTING
# STATUS: Model exports
# PURPOSE: Central export point for all Pydantic models
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Pydantic models exchanged with the orchestration backend:
    - ExecutionContext: identifiers for one job invocation
    - TimelineRecord: one step of a job's timeline
    - JobStartedEvent / JobCompletedEvent: plan events
"""

from core.models.context import ExecutionContext, BuildHub, ReleaseHub, Hub
from core.models.timeline import TimelineRecord
from core.models.events import JobEvent, JobStartedEvent, JobCompletedEvent

__all__ = [
    # Context
    "ExecutionContext",
    "BuildHub",
    "ReleaseHub",
    "Hub",
    # Timeline
    "TimelineRecord",
    # Events
    "JobEvent",
    "JobStartedEvent",
    "JobCompletedEvent",
]
