"""Evaluation endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from intradesk.database import get_db
from intradesk.errors import ValidationFailed
from intradesk.schemas.evaluation import EvaluationCreate, EvaluationOut
from intradesk.services.settings_service import SettingsService, get_settings_service
from intradesk.storage import repositories

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/evaluations", response_model=EvaluationOut, status_code=status.HTTP_201_CREATED)
async def submit_evaluation(
    body: EvaluationCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    service: Annotated[SettingsService, Depends(get_settings_service)],
):
    """
    Store one evaluator's score sheet for a target employee.
    Scores are validated per item and must add up to total_score.
    """
    app_settings = await service.get(db)
    if not app_settings.is_evaluation_open:
        raise ValidationFailed("Evaluations are not being accepted at the moment")

    ev = await repositories.create_evaluation(
        db,
        evaluator_name=body.evaluator_name,
        target_employee_name=body.target_employee_name,
        evaluation_month=body.evaluation_month,
        scores=body.scores,
        total_score=body.total_score,
        comment=body.comment or None,
    )
    logger.info(
        "Evaluation %s stored: %s -> %s (%s)",
        ev.id, body.evaluator_name, body.target_employee_name, body.evaluation_month,
    )
    return ev


@router.get("/evaluations", response_model=list[EvaluationOut])
async def list_evaluations(
    db: Annotated[AsyncSession, Depends(get_db)],
    target: str | None = None,
):
    """Evaluations newest first, optionally for one target employee."""
    return await repositories.list_evaluations(db, target)
