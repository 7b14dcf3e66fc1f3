# ============================================================================
# PLAN EVENT MODEL
# ============================================================================
# EPOCH: 1 - JOB STATUS REPORTING
# STATUS: Core model - Job lifecycle events raised on a plan
# PURPOSE: JobStarted / JobCompleted event payloads
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: JobEvent, JobStartedEvent, JobCompletedEvent
# DEPENDENCIES: pydantic
# ============================================================================
"""
Plan Event Model

Events raised to the plan's event stream so the orchestrator knows a
server-side job has started or finished.

Wire format:
    {"name": "JobStarted", "jobId": "9b2e..."}
    {"name": "JobCompleted", "jobId": "9b2e...", "result": "succeeded"}
"""

from typing import Any, ClassVar, Dict
from uuid import UUID

from pydantic import BaseModel, Field

from core.contracts import TaskResult


class JobEvent(BaseModel):
    """Base for plan events about a job."""

    event_name: ClassVar[str] = ""

    job_id: UUID = Field(..., description="Job the event is about")

    model_config = {"frozen": True}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the plan-event wire body."""
        return {"name": self.event_name, "jobId": str(self.job_id)}


class JobStartedEvent(JobEvent):
    """Raised once the job has been accepted and is running."""

    event_name: ClassVar[str] = "JobStarted"


class JobCompletedEvent(JobEvent):
    """Raised once the job has finished, carrying its result."""

    event_name: ClassVar[str] = "JobCompleted"

    result: TaskResult = Field(..., description="Succeeded or Failed")

    @classmethod
    def from_passed(cls, job_id: UUID, is_passed: bool) -> "JobCompletedEvent":
        return cls(job_id=job_id, result=TaskResult.from_passed(is_passed))

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["result"] = self.result.value
        return body


__all__ = ["JobEvent", "JobStartedEvent", "JobCompletedEvent"]
