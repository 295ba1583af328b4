"""Application status workflow - validates transitions and derives processed_at."""

from dataclasses import dataclass
from datetime import datetime
from intradesk.errors import WorkflowError
from intradesk.schemas.application import ApplicationStatus, ApplicationType

REQUIRES_PROCESSOR = {ApplicationStatus.PROCESSED, ApplicationStatus.CANCELLED}

# Evaluations and proposals live in their own tables and never count as pending
PENDING_BADGE_TYPES = (
    ApplicationType.CUSTOMER_REGISTRATION.value,
    ApplicationType.CUSTOMER_CHANGE.value,
    ApplicationType.FACILITY_RESERVATION.value,
)


@dataclass(frozen=True)
class WorkflowState:
    status: str
    processed_by: str | None = None
    processed_at: datetime | None = None


@dataclass(frozen=True)
class StatusChange:
    status: ApplicationStatus | None = None
    processed_by: str | None = None
    confirmed: bool = False


def apply_status_change(
    current: WorkflowState, change: StatusChange, now: datetime
) -> WorkflowState:
    """
    Return the state after `change`, or raise WorkflowError.
    Never mutates `current`; callers persist the result only on success.
    """
    if change.status is None:
        if not change.processed_by:
            raise WorkflowError("Either status or processed_by must be provided.")
        return WorkflowState(
            status=current.status,
            processed_by=change.processed_by,
            processed_at=current.processed_at,
        )

    target = ApplicationStatus(change.status)
    status_changes = target.value != current.status

    if (
        status_changes
        and current.status != ApplicationStatus.UNPROCESSED.value
        and not change.confirmed
    ):
        raise WorkflowError(
            f"Application is already '{current.status}'; "
            "changing it again must be confirmed."
        )

    if target is ApplicationStatus.UNPROCESSED:
        return WorkflowState(status=target.value)

    processor = change.processed_by or current.processed_by
    if target in REQUIRES_PROCESSOR and not processor:
        raise WorkflowError(
            f"A processor must be assigned before setting status to '{target.value}'."
        )

    if target is ApplicationStatus.PROCESSED:
        processed_at = current.processed_at if not status_changes and current.processed_at else now
    else:
        processed_at = None

    return WorkflowState(status=target.value, processed_by=processor, processed_at=processed_at)
