# ============================================================================
# TIMELINE RECORD TESTS
# ============================================================================
# EPOCH: 1 - JOB STATUS REPORTING
# STATUS: Tests - Record selection and mutation
# PURPOSE: Verify both addressing modes and the record state helpers
# CREATED: 19 OCT 2026
# ============================================================================
"""
Timeline Record Tests

Covers:
1. Selection by job id (job record + direct children)
2. Selection by record name (case-insensitive, anywhere in the tree)
3. InProgress / Completed mutations
4. TimelineRecord JSON round trip keeps unmodelled fields

Run with:
    pytest tests/test_timeline.py -v
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from core.contracts import TaskResult, TimelineRecordState
from core.models import TimelineRecord
from reporting.timeline import mark_completed, mark_in_progress, select_timeline_records


# ============================================================================
# SELECTION BY JOB
# ============================================================================

class TestSelectByJob:
    """No record name: the job's record and its immediate children."""

    def test_job_record_and_children(self, make_record):
        job_id = uuid4()
        job = make_record(record_id=job_id)
        child = make_record(parent_id=job_id)
        stranger = make_record(parent_id=uuid4())

        selected = select_timeline_records([job, child, stranger], job_id)

        assert selected == [job, child]

    def test_grandchildren_not_selected(self, make_record):
        job_id = uuid4()
        child = make_record(parent_id=job_id)
        grandchild = make_record(parent_id=child.id)

        selected = select_timeline_records([child, grandchild], job_id)

        assert selected == [child]

    def test_empty_name_means_no_filter(self, make_record):
        job_id = uuid4()
        job = make_record(record_id=job_id, name="Other")

        assert select_timeline_records([job], job_id, record_name="") == [job]

    def test_no_records(self):
        assert select_timeline_records([], uuid4()) == []


# ============================================================================
# SELECTION BY NAME
# ============================================================================

class TestSelectByName:
    """Record name: every record with that name, ids ignored."""

    def test_case_insensitive_match(self, make_record):
        lower = make_record(name="deploy")
        build = make_record(name="Build")
        upper = make_record(name="DEPLOY")

        selected = select_timeline_records([lower, build, upper], uuid4(), record_name="Deploy")

        assert selected == [lower, upper]

    def test_ignores_job_relationship(self, make_record):
        job_id = uuid4()
        job = make_record(record_id=job_id, name="Job")
        child = make_record(parent_id=job_id, name="Compile")
        deep = make_record(parent_id=uuid4(), name="compile")

        selected = select_timeline_records([job, child, deep], job_id, record_name="Compile")

        assert selected == [child, deep]

    def test_unnamed_records_never_match(self, make_record):
        unnamed = make_record(name=None)

        assert select_timeline_records([unnamed], uuid4(), record_name="Deploy") == []


# ============================================================================
# MUTATIONS
# ============================================================================

class TestMutations:
    """State helpers mutate in place and return the same list."""

    def test_mark_in_progress(self, make_record):
        records = [make_record(), make_record()]

        result = mark_in_progress(records)

        assert result is records
        assert all(r.state == TimelineRecordState.IN_PROGRESS for r in records)

    @pytest.mark.parametrize("task_result", [TaskResult.SUCCEEDED, TaskResult.FAILED])
    def test_mark_completed(self, make_record, task_result):
        records = [make_record(), make_record()]
        finish = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

        mark_completed(records, task_result, finish_time=finish)

        for record in records:
            assert record.state == TimelineRecordState.COMPLETED
            assert record.percent_complete == 100
            assert record.result == task_result
            assert record.finish_time == finish

    def test_mark_completed_defaults_to_now_utc(self, make_record):
        record = make_record()
        before = datetime.now(timezone.utc)

        mark_completed([record], TaskResult.SUCCEEDED)

        assert record.finish_time.tzinfo is not None
        assert record.finish_time >= before


# ============================================================================
# RECORD MODEL
# ============================================================================

class TestTimelineRecordModel:
    """Backend JSON round trip."""

    def test_parses_camel_case(self):
        job_id = uuid4()
        record = TimelineRecord.from_dict({
            "id": str(uuid4()),
            "parentId": str(job_id),
            "name": "Deploy",
            "state": "inProgress",
            "percentComplete": 40,
            "type": "Task",
            "order": 3,
        })

        assert record.parent_id == job_id
        assert record.state == TimelineRecordState.IN_PROGRESS
        assert record.percent_complete == 40

    def test_unmodelled_fields_written_back(self):
        record = TimelineRecord.from_dict({
            "id": str(uuid4()),
            "type": "Task",
            "log": {"id": 12},
        })
        mark_completed([record], TaskResult.FAILED)

        body = record.to_dict()

        assert body["type"] == "Task"
        assert body["log"] == {"id": 12}
        assert body["state"] == "completed"
        assert body["result"] == "failed"
        assert body["percentComplete"] == 100
        assert "finishTime" in body
        assert "parentId" not in body
