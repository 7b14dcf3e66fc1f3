# ============================================================================
# TIMELINE RECORD MODEL
# ============================================================================
# EPOCH: 1 - JOB STATUS REPORTING
# STATUS: Core model - Timeline record (one step of a job)
# PURPOSE: Round-trip timeline records fetched from and written to a plan
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: TimelineRecord
# DEPENDENCIES: pydantic
# ============================================================================
"""
Timeline Record Model

A TimelineRecord is one node in the tree of steps describing a job's
execution within a plan. Records are fetched fresh on every progress
or completion report and written back as a batch; they are never
cached.

The backend speaks camelCase JSON. Only the fields the reporter reads
or mutates are typed here; everything else (type, order, log, issues,
...) is kept as extra data and written back untouched.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from core.contracts import TaskResult, TimelineRecordState


class TimelineRecord(BaseModel):
    """
    A single timeline record.

    Maps to: distributedtask timeline record (REST)

    Tree shape:
        job record (id == job_id)
          +- child step (parent_id == job_id)
          +- child step (parent_id == job_id)
    """

    id: UUID
    parent_id: Optional[UUID] = None
    name: Optional[str] = None

    state: Optional[TimelineRecordState] = None
    percent_complete: Optional[int] = Field(default=None, ge=0, le=100)
    result: Optional[TaskResult] = None
    start_time: Optional[datetime] = None
    finish_time: Optional[datetime] = None

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "allow",
    }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TimelineRecord":
        """Parse a record from backend JSON."""
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to backend JSON (camelCase, unset fields omitted)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def belongs_to(self, job_id: UUID) -> bool:
        """True for the job's own record or one of its direct children."""
        return self.id == job_id or self.parent_id == job_id

    def has_name(self, name: str) -> bool:
        """Case-insensitive name match; unnamed records never match."""
        return self.name is not None and self.name.casefold() == name.casefold()


__all__ = ["TimelineRecord"]
