"""Unit tests for the application status workflow."""

from datetime import datetime, timezone
import pytest

from intradesk.engine.workflow import (
    StatusChange,
    WorkflowState,
    apply_status_change,
)
from intradesk.errors import WorkflowError
from intradesk.schemas.application import ApplicationStatus

NOW = datetime(2025, 10, 15, 12, 0, tzinfo=timezone.utc)
EARLIER = datetime(2025, 10, 1, 8, 30, tzinfo=timezone.utc)


def test_processed_requires_processor():
    """No processor anywhere means 'processed' is rejected."""
    current = WorkflowState(status="unprocessed")
    with pytest.raises(WorkflowError):
        apply_status_change(current, StatusChange(status=ApplicationStatus.PROCESSED), NOW)
    assert current == WorkflowState(status="unprocessed")


def test_cancelled_requires_processor():
    """'cancelled' has the same precondition."""
    with pytest.raises(WorkflowError):
        apply_status_change(
            WorkflowState(status="unprocessed"),
            StatusChange(status=ApplicationStatus.CANCELLED),
            NOW,
        )


def test_processed_sets_timestamp():
    """Entering 'processed' stamps processed_at with the current time."""
    state = apply_status_change(
        WorkflowState(status="unprocessed", processed_by="Suzuki"),
        StatusChange(status=ApplicationStatus.PROCESSED),
        NOW,
    )
    assert state == WorkflowState(status="processed", processed_by="Suzuki", processed_at=NOW)


def test_processor_in_same_request():
    """A processor given with the status change satisfies the precondition."""
    state = apply_status_change(
        WorkflowState(status="unprocessed"),
        StatusChange(status=ApplicationStatus.PROCESSED, processed_by="Ito"),
        NOW,
    )
    assert state.processed_by == "Ito"
    assert state.processed_at == NOW


def test_unprocessed_clears_processor():
    """Back to 'unprocessed' always clears processor and timestamp."""
    state = apply_status_change(
        WorkflowState(status="processing", processed_by="Suzuki"),
        StatusChange(status=ApplicationStatus.UNPROCESSED, confirmed=True),
        NOW,
    )
    assert state == WorkflowState(status="unprocessed")


def test_other_status_clears_timestamp():
    """Leaving 'processed' for anything else drops processed_at."""
    state = apply_status_change(
        WorkflowState(status="processed", processed_by="Suzuki", processed_at=EARLIER),
        StatusChange(status=ApplicationStatus.RETURNED, confirmed=True),
        NOW,
    )
    assert state == WorkflowState(status="returned", processed_by="Suzuki")


def test_reprocessing_requires_confirmation():
    """Changing an already-decided application needs the confirmed flag."""
    current = WorkflowState(status="processing", processed_by="Suzuki")
    with pytest.raises(WorkflowError):
        apply_status_change(current, StatusChange(status=ApplicationStatus.PROCESSED), NOW)
    state = apply_status_change(
        current, StatusChange(status=ApplicationStatus.PROCESSED, confirmed=True), NOW
    )
    assert state.status == "processed"


def test_first_transition_needs_no_confirmation():
    """Moving out of 'unprocessed' is not a re-processing."""
    state = apply_status_change(
        WorkflowState(status="unprocessed"),
        StatusChange(status=ApplicationStatus.PROCESSING),
        NOW,
    )
    assert state == WorkflowState(status="processing")


def test_same_status_keeps_processed_at():
    """Re-saving 'processed' keeps the original timestamp."""
    state = apply_status_change(
        WorkflowState(status="processed", processed_by="Suzuki", processed_at=EARLIER),
        StatusChange(status=ApplicationStatus.PROCESSED),
        NOW,
    )
    assert state.processed_at == EARLIER


def test_processor_only_update():
    """Changing processed_by alone is always allowed and keeps status."""
    current = WorkflowState(status="processed", processed_by="Suzuki", processed_at=EARLIER)
    state = apply_status_change(current, StatusChange(processed_by="Ito"), NOW)
    assert state == WorkflowState(status="processed", processed_by="Ito", processed_at=EARLIER)


def test_empty_change_rejected():
    """A request with neither status nor processor is invalid."""
    with pytest.raises(WorkflowError):
        apply_status_change(WorkflowState(status="unprocessed"), StatusChange(), NOW)
