# ============================================================================
# COLLABORATOR INTERFACES
# ============================================================================
# EPOCH: 1 - JOB STATUS REPORTING
# STATUS: Core - Abstract clients consumed by the status reporter
# PURPOSE: Narrow seams to the orchestration backend and job logging
# CREATED: 19 OCT 2026
# ============================================================================
"""
Collaborator Interfaces

The status reporter only talks to the outside world through these:

- TaskClient: plan events + timeline records (+ plan log feed)
- BuildStatusClient / ReleaseStatusClient: hub-specific status lookups
- JobLogger: coded info/error records with annotation properties

Concrete HTTP implementations live in reporting.clients, loggers in
reporting.loggers. Tests substitute AsyncMocks.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from core.models import JobEvent, TimelineRecord


# ============================================================================
# PLAN / TIMELINE
# ============================================================================

class TaskClient(ABC):
    """Plan event sink and timeline record store."""

    @abstractmethod
    async def raise_plan_event(
        self,
        project_id: UUID,
        hub_name: str,
        plan_id: UUID,
        event: JobEvent,
    ) -> None:
        """
        Raise an event on the plan's event stream.

        Raises:
            PlanNotFoundError: plan no longer exists
            TransportError: any other backend failure
        """
        pass

    @abstractmethod
    async def get_records(
        self,
        project_id: UUID,
        hub_name: str,
        plan_id: UUID,
        timeline_id: UUID,
    ) -> List[TimelineRecord]:
        """Fetch every record of a timeline."""
        pass

    @abstractmethod
    async def update_records(
        self,
        project_id: UUID,
        hub_name: str,
        plan_id: UUID,
        timeline_id: UUID,
        records: List[TimelineRecord],
    ) -> List[TimelineRecord]:
        """Write a batch of records back; returns the backend's view of them."""
        pass

    @abstractmethod
    async def append_log_lines(
        self,
        project_id: UUID,
        hub_name: str,
        plan_id: UUID,
        timeline_id: UUID,
        record_id: UUID,
        lines: List[str],
    ) -> None:
        """Append lines to a record's live console feed."""
        pass

    async def close(self) -> None:
        """Clean up resources."""
        pass


# ============================================================================
# HUB STATUS
# ============================================================================

class BuildStatusClient(ABC):
    """Build lookups used for session validation."""

    @abstractmethod
    async def get_build(self, project_id: UUID, build_id: int) -> Optional[Dict[str, Any]]:
        """
        Get a build.

        Returns:
            Build JSON, or None if the build does not exist
        """
        pass

    async def close(self) -> None:
        """Clean up resources."""
        pass


class ReleaseStatusClient(ABC):
    """Release lookups used for session validation."""

    @abstractmethod
    async def get_release(self, project_id: UUID, release_id: int) -> Optional[Dict[str, Any]]:
        """
        Get a release.

        Returns:
            Release JSON, or None if the release does not exist
        """
        pass

    async def close(self) -> None:
        """Clean up resources."""
        pass


# ============================================================================
# LOGGING
# ============================================================================

class JobLogger(ABC):
    """Coded job log records."""

    @abstractmethod
    async def log_info(
        self,
        code: str,
        message: str,
        properties: Dict[str, str],
        event_time: Optional[datetime] = None,
    ) -> None:
        pass

    @abstractmethod
    async def log_error(
        self,
        code: str,
        message: str,
        properties: Dict[str, str],
        event_time: Optional[datetime] = None,
    ) -> None:
        pass


__all__ = [
    "TaskClient",
    "BuildStatusClient",
    "ReleaseStatusClient",
    "JobLogger",
]
