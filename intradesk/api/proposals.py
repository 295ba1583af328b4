"""Event proposal and submission-history endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from intradesk.database import get_db
from intradesk.errors import ValidationFailed
from intradesk.schemas.proposal import (
    EvaluationSubmission,
    ProposalOut,
    ProposalsCreated,
    ProposalSubmission,
    ProposalSubmissionSummary,
)
from intradesk.services.mailer import Mailer, get_mailer, proposal_mail_body
from intradesk.services.settings_service import SettingsService, get_settings_service
from intradesk.storage import repositories

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/proposals", response_model=ProposalsCreated, status_code=status.HTTP_201_CREATED)
async def submit_proposals(
    body: ProposalSubmission,
    db: Annotated[AsyncSession, Depends(get_db)],
    service: Annotated[SettingsService, Depends(get_settings_service)],
    mailer: Annotated[Mailer, Depends(get_mailer)],
):
    """Store every proposed event, then notify the proposal mailing list."""
    app_settings = await service.get(db)
    if not app_settings.is_proposal_open:
        raise ValidationFailed("Proposals are not being accepted at the moment")

    items = [item.model_dump() for item in body.proposals]
    rows = await repositories.create_proposals(db, body.proposer_name, body.proposal_year, items)
    await db.commit()
    logger.info("Stored %d proposal(s) from %s for %s", len(rows), body.proposer_name, body.proposal_year)

    result = await mailer.notify(
        app_settings.proposal_emails,
        f"Event proposals {body.proposal_year} ({body.proposer_name})",
        proposal_mail_body(body.proposer_name, body.proposal_year, items),
    )
    return ProposalsCreated(
        ids=[row.id for row in rows],
        message="Proposals submitted successfully",
        notification_sent=result.sent,
        warnings=[result.warning] if result.warning else [],
    )


@router.get("/proposals", response_model=list[ProposalOut])
async def list_proposals(
    db: Annotated[AsyncSession, Depends(get_db)],
    year: str | None = None,
):
    return await repositories.list_proposals(db, year)


@router.get("/submissions")
async def list_submissions(
    db: Annotated[AsyncSession, Depends(get_db)],
    type: Annotated[str, Query()],
    year: str | None = None,
):
    """Submission history for the admin console: `type` is evaluations or proposals."""
    if type == "evaluations":
        rows = await repositories.list_evaluations(db)
        return [EvaluationSubmission.model_validate(r) for r in rows]
    if type == "proposals":
        rows = await repositories.list_proposals(db, year)
        return [ProposalSubmissionSummary.model_validate(r) for r in rows]
    raise ValidationFailed("Invalid type")
