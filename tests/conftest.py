# ============================================================================
# SHARED TEST FIXTURES
# ============================================================================
# EPOCH: 1 - JOB STATUS REPORTING
# STATUS: Tests - Shared contexts and record factories
# PURPOSE: Common identifiers, execution contexts and timeline records
# CREATED: 19 OCT 2026
# ============================================================================

from typing import Optional
from uuid import UUID, uuid4

import pytest

from core.config import reset_defaults
from core.models import BuildHub, ExecutionContext, ReleaseHub, TimelineRecord


PLAN_ID = UUID("5c1d0f4e-0000-4000-8000-000000000001")
PROJECT_ID = UUID("0f7a2b3c-0000-4000-8000-000000000002")
JOB_ID = UUID("9b2e4d5f-0000-4000-8000-000000000003")
TIMELINE_ID = UUID("77aa88bb-0000-4000-8000-000000000004")

SERVER_URI = "https://dev.azure.com/contoso/"
PLAN_URI = "https://vsrm.dev.azure.com/contoso/"


@pytest.fixture
def make_context():
    """Factory for ExecutionContext instances (Build hub by default)."""
    def _make(hub=None, **overrides) -> ExecutionContext:
        fields = dict(
            plan_id=PLAN_ID,
            project_id=PROJECT_ID,
            job_id=JOB_ID,
            timeline_id=TIMELINE_ID,
            hub=hub or BuildHub(build_id=42),
            auth_token="secret-token",
            server_uri=SERVER_URI,
            plan_uri=PLAN_URI,
            properties={"RequestType": "Execute"},
        )
        fields.update(overrides)
        return ExecutionContext(**fields)
    return _make


@pytest.fixture
def build_context(make_context) -> ExecutionContext:
    return make_context(BuildHub(build_id=42))


@pytest.fixture
def release_context(make_context) -> ExecutionContext:
    return make_context(ReleaseHub(release_id=7))


@pytest.fixture
def make_record():
    """Factory for TimelineRecord instances."""
    def _make(
        record_id: Optional[UUID] = None,
        parent_id: Optional[UUID] = None,
        name: Optional[str] = None,
    ) -> TimelineRecord:
        return TimelineRecord(id=record_id or uuid4(), parent_id=parent_id, name=name)
    return _make


@pytest.fixture(autouse=True)
def _fresh_defaults():
    """Defaults are cached per process; tests start clean."""
    reset_defaults()
    yield
    reset_defaults()
