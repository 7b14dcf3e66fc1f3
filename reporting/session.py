# ============================================================================
# SESSION VALIDATION
# ============================================================================
# EPOCH: 1 - JOB STATUS REPORTING
# STATUS: Core - Parent build/release liveness checks
# PURPOSE: Decide whether start/completion may still be reported
# CREATED: 19 OCT 2026
# ============================================================================
"""
Session Validation

Before a job reports start or completion, the reporter checks that the
job's parent build or release still exists and has not been cancelled.
Reporting into a torn-down parent would race the orchestrator.

Dispatch is on the context's hub variant:
    BuildHub   -> is_build_valid(build client, project, build id)
    ReleaseHub -> is_release_valid(release client, project, release id)
    otherwise  -> UnsupportedHubError, before any network call

Results are strictly True/False. Transport failures raise; they are
never reported as "invalid".
"""

import logging
from typing import Union
from uuid import UUID

from core.errors import UnsupportedHubError
from core.models import BuildHub, ExecutionContext, ReleaseHub
from reporting.interfaces import BuildStatusClient, ReleaseStatusClient

logger = logging.getLogger(__name__)

# Backend status strings (compared case-insensitively)
BUILD_STATUS_CANCELLING = "cancelling"
BUILD_STATUS_COMPLETED = "completed"
BUILD_RESULT_CANCELED = "canceled"
RELEASE_STATUS_ABANDONED = "abandoned"


def _lower(value) -> str:
    return str(value or "").lower()


async def is_build_valid(
    build_client: BuildStatusClient,
    project_id: UUID,
    build_id: int,
) -> bool:
    """
    Check that a build can still receive status.

    Invalid when the build is gone, flagged deleted, cancelling, or
    completed as canceled.
    """
    build = await build_client.get_build(project_id, build_id)
    if build is None:
        logger.info(f"Build {build_id} not found in project {project_id}")
        return False

    if build.get("deleted"):
        logger.info(f"Build {build_id} is deleted")
        return False

    status = _lower(build.get("status"))
    if status == BUILD_STATUS_CANCELLING:
        logger.info(f"Build {build_id} is cancelling")
        return False
    if status == BUILD_STATUS_COMPLETED and _lower(build.get("result")) == BUILD_RESULT_CANCELED:
        logger.info(f"Build {build_id} was canceled")
        return False

    return True


async def is_release_valid(
    release_client: ReleaseStatusClient,
    project_id: UUID,
    release_id: int,
) -> bool:
    """Check that a release exists and has not been abandoned."""
    release = await release_client.get_release(project_id, release_id)
    if release is None:
        logger.info(f"Release {release_id} not found in project {project_id}")
        return False

    if _lower(release.get("status")) == RELEASE_STATUS_ABANDONED:
        logger.info(f"Release {release_id} is abandoned")
        return False

    return True


async def is_session_valid(
    context: ExecutionContext,
    status_client: Union[BuildStatusClient, ReleaseStatusClient],
) -> bool:
    """
    Check whether the job's parent build/release is still live.

    Args:
        context: Job execution context
        status_client: Client for the context's hub

    Raises:
        UnsupportedHubError: hub is neither Build nor Release
        TypeError: status_client does not match the hub
        TransportError: status lookup failed
    """
    hub = context.hub

    if isinstance(hub, BuildHub):
        if not isinstance(status_client, BuildStatusClient):
            raise TypeError(f"Build hub needs a BuildStatusClient, got {type(status_client).__name__}")
        return await is_build_valid(status_client, context.project_id, hub.build_id)

    if isinstance(hub, ReleaseHub):
        if not isinstance(status_client, ReleaseStatusClient):
            raise TypeError(f"Release hub needs a ReleaseStatusClient, got {type(status_client).__name__}")
        return await is_release_valid(status_client, context.project_id, hub.release_id)

    raise UnsupportedHubError(getattr(hub, "hub_type", hub))


__all__ = [
    "is_build_valid",
    "is_release_valid",
    "is_session_valid",
]
