# ============================================================================
# BACKEND HTTP CLIENTS
# ============================================================================
# EPOCH: 1 - JOB STATUS REPORTING
# STATUS: Core - Async REST clients for the orchestration backend
# PURPOSE: Plan events, timeline records, build/release status lookups
# CREATED: 19 OCT 2026
# ============================================================================
"""
Backend HTTP Clients

aiohttp implementations of the reporting.interfaces seams against the
Azure DevOps REST surface:

    Plan events     POST  {plan}/{project}/_apis/distributedtask/hubs/{hub}/plans/{planId}/events
    Timeline        GET   .../plans/{planId}/timelines/{timelineId}/records
                    PATCH .../plans/{planId}/timelines/{timelineId}/records
    Log feed        POST  .../timelines/{timelineId}/records/{recordId}/feed
    Build           GET   {server}/{project}/_apis/build/builds/{buildId}
    Release         GET   {plan}/{project}/_apis/release/releases/{releaseId}

Auth is HTTP basic with an empty user name and the job's token.

Error mapping:
    404 on plan endpoints      -> PlanNotFoundError
    404 on build/release       -> None (deleted)
    other non-2xx, network, timeout -> TransportError

These clients do not retry.
"""

import asyncio
import base64
import json
import logging
from typing import Any, Dict, List, Optional, Tuple, Union
from uuid import UUID

import aiohttp

from core.config import ClientDefaults, get_defaults
from core.errors import PlanNotFoundError, TransportError, UnsupportedHubError
from core.models import BuildHub, ExecutionContext, JobEvent, ReleaseHub, TimelineRecord
from reporting.interfaces import BuildStatusClient, ReleaseStatusClient, TaskClient

logger = logging.getLogger(__name__)


# ============================================================================
# BASE CLIENT
# ============================================================================

def _basic_auth_header(auth_token: str) -> str:
    """Basic auth with an empty user name and the token as password."""
    credentials = base64.b64encode(f":{auth_token}".encode("utf-8")).decode("ascii")
    return f"Basic {credentials}"


class _HTTPClient:
    """Shared session handling, auth and error mapping."""

    def __init__(
        self,
        base_uri: str,
        auth_token: str,
        defaults: Optional[ClientDefaults] = None,
    ):
        self._base_uri = base_uri.rstrip("/")
        self._headers = {"Authorization": _basic_auth_header(auth_token)}
        self._defaults = defaults or get_defaults().client
        self._timeout = aiohttp.ClientTimeout(total=self._defaults.timeout_seconds)
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout, headers=self._headers)
        return self._session

    async def _request(
        self,
        method: str,
        path: str,
        api_version: str,
        json_body: Optional[Any] = None,
    ) -> Tuple[int, Any]:
        """
        Make a request to the backend.

        Returns:
            (status, parsed JSON body or None) for 2xx and 404

        Raises:
            TransportError: any other status, connection error or timeout
        """
        url = f"{self._base_uri}/{path}"

        try:
            session = await self._get_session()
            async with session.request(
                method,
                url,
                params={"api-version": api_version},
                json=json_body,
            ) as response:
                text = await response.text()
                status = response.status

        except asyncio.TimeoutError as e:
            raise TransportError(f"{method} {url} timed out", url=url) from e
        except aiohttp.ClientError as e:
            raise TransportError(f"{method} {url} failed: {e}", url=url) from e

        if status == 404 or 200 <= status < 300:
            try:
                body = json.loads(text) if text else None
            except ValueError:
                body = None
            logger.debug(f"{method} {url} -> {status}")
            return status, body

        logger.warning(f"{method} {url} -> {status}: {text[:500]}")
        raise TransportError(f"{method} {url} returned {status}", status=status, url=url)

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


# ============================================================================
# TASK CLIENT
# ============================================================================

class HTTPTaskClient(_HTTPClient, TaskClient):
    """Plan events, timeline records and log feed over REST."""

    @staticmethod
    def _plan_path(project_id: UUID, hub_name: str, plan_id: UUID) -> str:
        return f"{project_id}/_apis/distributedtask/hubs/{hub_name}/plans/{plan_id}"

    async def _plan_request(
        self,
        method: str,
        path: str,
        json_body: Optional[Any] = None,
    ) -> Any:
        status, body = await self._request(
            method, path, self._defaults.plan_api_version, json_body=json_body
        )
        if status == 404:
            url = f"{self._base_uri}/{path}"
            raise PlanNotFoundError(f"Plan not found: {url}", status=status, url=url)
        return body

    async def raise_plan_event(
        self,
        project_id: UUID,
        hub_name: str,
        plan_id: UUID,
        event: JobEvent,
    ) -> None:
        path = f"{self._plan_path(project_id, hub_name, plan_id)}/events"
        await self._plan_request("POST", path, json_body=event.to_dict())
        logger.debug(f"Raised {event.event_name} for job {event.job_id}")

    async def get_records(
        self,
        project_id: UUID,
        hub_name: str,
        plan_id: UUID,
        timeline_id: UUID,
    ) -> List[TimelineRecord]:
        path = f"{self._plan_path(project_id, hub_name, plan_id)}/timelines/{timeline_id}/records"
        body = await self._plan_request("GET", path)
        return [TimelineRecord.from_dict(item) for item in _unwrap(body)]

    async def update_records(
        self,
        project_id: UUID,
        hub_name: str,
        plan_id: UUID,
        timeline_id: UUID,
        records: List[TimelineRecord],
    ) -> List[TimelineRecord]:
        path = f"{self._plan_path(project_id, hub_name, plan_id)}/timelines/{timeline_id}/records"
        payload = {"count": len(records), "value": [r.to_dict() for r in records]}
        body = await self._plan_request("PATCH", path, json_body=payload)
        return [TimelineRecord.from_dict(item) for item in _unwrap(body)]

    async def append_log_lines(
        self,
        project_id: UUID,
        hub_name: str,
        plan_id: UUID,
        timeline_id: UUID,
        record_id: UUID,
        lines: List[str],
    ) -> None:
        path = (
            f"{self._plan_path(project_id, hub_name, plan_id)}"
            f"/timelines/{timeline_id}/records/{record_id}/feed"
        )
        await self._plan_request("POST", path, json_body={"count": len(lines), "value": lines})


def _unwrap(body: Any) -> List[Dict[str, Any]]:
    """Records come back either bare or in a {"count", "value"} envelope."""
    if body is None:
        return []
    if isinstance(body, dict):
        return list(body.get("value") or [])
    return list(body)


# ============================================================================
# HUB STATUS CLIENTS
# ============================================================================

class HTTPBuildClient(_HTTPClient, BuildStatusClient):
    """Build lookups against the collection URI."""

    async def get_build(self, project_id: UUID, build_id: int) -> Optional[Dict[str, Any]]:
        status, body = await self._request(
            "GET",
            f"{project_id}/_apis/build/builds/{build_id}",
            self._defaults.build_api_version,
        )
        if status == 404:
            return None
        return body


class HTTPReleaseClient(_HTTPClient, ReleaseStatusClient):
    """Release lookups against the plan (release management) URI."""

    async def get_release(self, project_id: UUID, release_id: int) -> Optional[Dict[str, Any]]:
        status, body = await self._request(
            "GET",
            f"{project_id}/_apis/release/releases/{release_id}",
            self._defaults.release_api_version,
        )
        if status == 404:
            return None
        return body


# ============================================================================
# FACTORIES
# ============================================================================

def create_status_client(
    context: ExecutionContext,
    defaults: Optional[ClientDefaults] = None,
) -> Union[HTTPBuildClient, HTTPReleaseClient]:
    """
    Create the status client for the context's hub.

    Only the client for the owning hub is built.

    Raises:
        UnsupportedHubError: hub is neither Build nor Release
    """
    hub = context.hub
    if isinstance(hub, BuildHub):
        return HTTPBuildClient(context.server_uri, context.auth_token, defaults)
    if isinstance(hub, ReleaseHub):
        return HTTPReleaseClient(context.plan_uri, context.auth_token, defaults)
    raise UnsupportedHubError(getattr(hub, "hub_type", hub))


def create_task_client(
    context: ExecutionContext,
    defaults: Optional[ClientDefaults] = None,
) -> HTTPTaskClient:
    """Create the plan/timeline client for a context."""
    return HTTPTaskClient(context.plan_uri, context.auth_token, defaults)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "HTTPTaskClient",
    "HTTPBuildClient",
    "HTTPReleaseClient",
    "create_status_client",
    "create_task_client",
]
