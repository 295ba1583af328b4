"""Application endpoints - submission, listing and the processing workflow."""

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from intradesk.database import get_db
from intradesk.engine.workflow import (
    StatusChange,
    WorkflowState,
    apply_status_change,
)
from intradesk.errors import NotFound
from intradesk.schemas.application import (
    ApplicationCreate,
    ApplicationCreated,
    ApplicationOut,
    ApplicationStatus,
    ApplicationType,
    PendingCount,
    StatusChangeRequest,
)
from intradesk.schemas.settings import AppSettings
from intradesk.services.mailer import Mailer, application_mail_body, get_mailer
from intradesk.services.settings_service import SettingsService, get_settings_service
from intradesk.storage import repositories

logger = logging.getLogger(__name__)

router = APIRouter()


def _recipients(application_type: str, app_settings: AppSettings) -> list[str]:
    if application_type in (
        ApplicationType.CUSTOMER_REGISTRATION.value,
        ApplicationType.CUSTOMER_CHANGE.value,
    ):
        return app_settings.customer_emails
    if application_type == ApplicationType.FACILITY_RESERVATION.value:
        return app_settings.reservation_emails
    return app_settings.proposal_emails


@router.get("/applications", response_model=list[ApplicationOut])
async def list_applications(
    db: Annotated[AsyncSession, Depends(get_db)],
    type: Annotated[list[str] | None, Query()] = None,
    year: str | None = None,
    status: ApplicationStatus | None = None,
):
    """
    Applications newest first.
    `type` may repeat or be comma separated; `year` filters proposals by proposal_year.
    """
    types = [t for value in type or [] for t in value.split(",") if t]
    rows = await repositories.list_applications(
        db, types=types, year=year, status=status.value if status else None
    )
    return [ApplicationOut.from_row(row) for row in rows]


@router.get("/applications/pending-count", response_model=PendingCount)
async def pending_count(db: Annotated[AsyncSession, Depends(get_db)]):
    """Unprocessed customer and reservation applications, for the sidebar badge."""
    return PendingCount(count=await repositories.count_pending_applications(db))


@router.get("/applications/{application_id}", response_model=ApplicationOut)
async def get_application(application_id: int, db: Annotated[AsyncSession, Depends(get_db)]):
    app = await repositories.get_application(db, application_id)
    if not app:
        raise NotFound("Application not found")
    return ApplicationOut.from_row(app)


@router.post("/applications", response_model=ApplicationCreated, status_code=status.HTTP_201_CREATED)
async def submit_application(
    body: Annotated[ApplicationCreate, Body(discriminator="application_type")],
    db: Annotated[AsyncSession, Depends(get_db)],
    service: Annotated[SettingsService, Depends(get_settings_service)],
    mailer: Annotated[Mailer, Depends(get_mailer)],
):
    """
    Store the application, commit, then mail the type's notification list.
    A failed mail is reported as a warning; the stored application stays.
    """
    details = body.details.model_dump(exclude_none=True)
    app = await repositories.create_application(
        db,
        application_type=body.application_type,
        applicant_name=body.applicant_name,
        title=body.title,
        details=details,
    )
    await db.commit()
    logger.info("Application %s (%s) stored for %s", app.id, app.application_type, app.applicant_name)

    app_settings = await service.get(db)
    result = await mailer.notify(
        _recipients(body.application_type, app_settings),
        body.title,
        application_mail_body(body.application_type, body.applicant_name, details),
    )
    return ApplicationCreated(
        id=app.id,
        message="Application submitted successfully",
        notification_sent=result.sent,
        warnings=[result.warning] if result.warning else [],
    )


@router.put("/applications/{application_id}", response_model=ApplicationOut)
async def update_application_status(
    application_id: int,
    body: StatusChangeRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """
    Change status and/or processor. Rejected transitions leave the row untouched.
    """
    app = await repositories.get_application(db, application_id)
    if not app:
        raise NotFound("Application not found")

    new_state = apply_status_change(
        WorkflowState(status=app.status, processed_by=app.processed_by, processed_at=app.processed_at),
        StatusChange(status=body.status, processed_by=body.processed_by, confirmed=body.confirmed),
        now=repositories.utcnow(),
    )
    previous = app.status
    app.status = new_state.status
    app.processed_by = new_state.processed_by
    app.processed_at = new_state.processed_at
    await db.flush()
    if previous != app.status:
        logger.info("Application %s: %s -> %s (%s)", app.id, previous, app.status, app.processed_by)
    return ApplicationOut.from_row(app)
