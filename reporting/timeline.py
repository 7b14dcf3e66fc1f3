# ============================================================================
# TIMELINE RECORD SELECTION
# ============================================================================
# EPOCH: 1 - JOB STATUS REPORTING
# STATUS: Core - Select and mutate a job's timeline records
# PURPOSE: Keep timeline records in step with the job lifecycle
# CREATED: 19 OCT 2026
# ============================================================================
"""
Timeline Record Selection

Two mutually exclusive addressing modes, fixed per reporter:

1. No record name: the job's own record (id == job_id) plus its
   direct children (parent_id == job_id).
2. Record name: every record anywhere in the timeline whose name
   matches, case-insensitively. Ids and parents are ignored.
"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional
from uuid import UUID

from core.contracts import TaskResult, TimelineRecordState
from core.models import TimelineRecord


def select_timeline_records(
    records: Iterable[TimelineRecord],
    job_id: UUID,
    record_name: Optional[str] = None,
) -> List[TimelineRecord]:
    """
    Select the records belonging to a job.

    Args:
        records: Every record of the timeline
        job_id: Job being reported
        record_name: Optional name filter (None or "" means no filter)

    Returns:
        Matching records, in input order
    """
    if not record_name:
        return [record for record in records if record.belongs_to(job_id)]

    return [record for record in records if record.has_name(record_name)]


def mark_in_progress(records: List[TimelineRecord]) -> List[TimelineRecord]:
    """Set every record to InProgress."""
    for record in records:
        record.state = TimelineRecordState.IN_PROGRESS
    return records


def mark_completed(
    records: List[TimelineRecord],
    result: TaskResult,
    finish_time: Optional[datetime] = None,
) -> List[TimelineRecord]:
    """Close every record with the given result."""
    finish_time = finish_time or datetime.now(timezone.utc)
    for record in records:
        record.state = TimelineRecordState.COMPLETED
        record.percent_complete = 100
        record.result = result
        record.finish_time = finish_time
    return records


__all__ = [
    "select_timeline_records",
    "mark_in_progress",
    "mark_completed",
]
