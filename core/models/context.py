# ============================================================================
# EXECUTION CONTEXT MODEL
# ============================================================================
# EPOCH: 1 - JOB STATUS REPORTING
# STATUS: Core model - Job execution context
# PURPOSE: Identifiers and endpoints for one job invocation
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: ExecutionContext, BuildHub, ReleaseHub, Hub
# DEPENDENCIES: pydantic
# ============================================================================
"""
Execution Context Model

Carries everything a reporter needs to address the orchestration
backend for one job: plan/project/job/timeline identifiers, the
auth token, backend base URIs and the owning hub.

The hub is a closed tagged union. BuildHub carries only a build id,
ReleaseHub carries only a release id, so "which id is meaningful" is
decided once when the context is built.

Message format (as delivered by the orchestrator):
{
    "PlanId": "5c1d...",
    "ProjectId": "0f7a...",
    "JobId": "9b2e...",
    "TimelineId": "77aa...",
    "HubName": "Build",
    "BuildId": 1234,
    "AuthToken": "...",
    "VstsUri": "https://dev.azure.com/org/",
    "VstsPlanUri": "https://dev.azure.com/org/",
    "RequestType": "Execute"
}
"""

from typing import Annotated, Any, Dict, Literal, Union
from uuid import UUID

from pydantic import BaseModel, Field

from core.contracts import HubType
from core.errors import UnsupportedHubError


# ============================================================================
# HUB VARIANTS
# ============================================================================

class BuildHub(BaseModel):
    """Job owned by a build."""
    hub_type: Literal[HubType.BUILD] = HubType.BUILD
    build_id: int = Field(..., ge=1, description="Build being executed")

    model_config = {"frozen": True}


class ReleaseHub(BaseModel):
    """Job owned by a release."""
    hub_type: Literal[HubType.RELEASE] = HubType.RELEASE
    release_id: int = Field(..., ge=1, description="Release being deployed")

    model_config = {"frozen": True}


Hub = Annotated[Union[BuildHub, ReleaseHub], Field(discriminator="hub_type")]


# Message keys consumed into typed fields (normalized: lower-case, no "_")
_FIELD_KEYS = {
    "planid": "plan_id",
    "projectid": "project_id",
    "jobid": "job_id",
    "timelineid": "timeline_id",
    "authtoken": "auth_token",
    "vstsuri": "server_uri",
    "serveruri": "server_uri",
    "vstsplanuri": "plan_uri",
    "planuri": "plan_uri",
}
_HUB_KEYS = {"hubname", "vstshub", "hub", "buildid", "releaseid", "properties"}


def _normalize_key(key: str) -> str:
    return key.replace("_", "").replace("-", "").lower()


# ============================================================================
# EXECUTION CONTEXT
# ============================================================================

class ExecutionContext(BaseModel):
    """
    Read-only context for one job invocation.

    Built once by the host and handed to the reporter; never mutated.
    """

    # Identity
    plan_id: UUID = Field(..., description="Orchestration plan")
    project_id: UUID = Field(..., description="Project owning the plan")
    job_id: UUID = Field(..., description="Job being reported; also its timeline record id")
    timeline_id: UUID = Field(..., description="Timeline holding the job's records")

    # Hub (tagged union)
    hub: Hub

    # Backend access
    auth_token: str = Field(..., repr=False, description="Job access token")
    server_uri: str = Field(..., description="Collection URI, used for build queries")
    plan_uri: str = Field(..., description="Plan URI, used for plan/timeline/release calls")

    # Free-form annotations attached to every log record
    properties: Dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @property
    def hub_type(self) -> HubType:
        return self.hub.hub_type

    @property
    def hub_name(self) -> str:
        """Hub path segment for plan/timeline URLs."""
        return self.hub.hub_type.value

    @classmethod
    def from_message(cls, data: Dict[str, Any]) -> "ExecutionContext":
        """
        Parse an orchestrator job message.

        Keys are matched case-insensitively and with or without
        underscores, so "PlanId", "planId" and "plan_id" are equivalent.
        Keys that do not map to a field become event properties.

        Raises:
            UnsupportedHubError: HubName is neither Build nor Release
            pydantic.ValidationError: missing or malformed fields
        """
        normalized = {_normalize_key(k): v for k, v in data.items()}

        hub_value = normalized.get("hubname", normalized.get("vstshub", normalized.get("hub")))
        try:
            hub_type = HubType.parse(hub_value)
        except ValueError:
            raise UnsupportedHubError(hub_value) from None

        if hub_type is HubType.BUILD:
            hub: Dict[str, Any] = {"hub_type": hub_type, "build_id": normalized.get("buildid")}
        else:
            hub = {"hub_type": hub_type, "release_id": normalized.get("releaseid")}

        fields: Dict[str, Any] = {"hub": hub}
        properties: Dict[str, str] = {}
        for key, value in data.items():
            norm = _normalize_key(key)
            if norm in _FIELD_KEYS:
                fields[_FIELD_KEYS[norm]] = value
            elif norm not in _HUB_KEYS and value is not None:
                properties[key] = str(value)

        # Explicit properties bag wins over loose message keys
        for key, value in (normalized.get("properties") or {}).items():
            properties[key] = str(value)
        fields["properties"] = properties

        return cls(**fields)

    def event_properties(self) -> Dict[str, str]:
        """
        Annotation properties for log records.

        Identifiers override caller-supplied properties of the same
        name. The auth token is never included.
        """
        props = dict(self.properties)
        props.update({
            "PlanId": str(self.plan_id),
            "ProjectId": str(self.project_id),
            "JobId": str(self.job_id),
            "TimelineId": str(self.timeline_id),
            "HubName": self.hub_name,
        })
        if isinstance(self.hub, BuildHub):
            props["BuildId"] = str(self.hub.build_id)
        elif isinstance(self.hub, ReleaseHub):
            props["ReleaseId"] = str(self.hub.release_id)
        return props


__all__ = ["ExecutionContext", "BuildHub", "ReleaseHub", "Hub"]
