"""Evaluation analytics endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from intradesk.database import get_db
from intradesk.engine.analytics import build_report
from intradesk.engine.roles import Feature, eligible_users
from intradesk.schemas.analytics import AnalyticsReport, EvaluationRecord
from intradesk.services.settings_service import SettingsService, get_settings_service
from intradesk.storage import repositories

router = APIRouter()


@router.get("/analytics/evaluations", response_model=AnalyticsReport)
async def evaluation_analytics(
    db: Annotated[AsyncSession, Depends(get_db)],
    service: Annotated[SettingsService, Depends(get_settings_service)],
    target: str | None = None,
    month: Annotated[str | None, Query(pattern=r"^\d{4}-\d{2}$")] = None,
    month_index: Annotated[int, Query(ge=0)] = 0,
    comment_page: Annotated[int, Query(ge=0)] = 0,
    comments_per_page: Annotated[int, Query(ge=1, le=100)] = 1,
):
    """
    Cross-tabulation, comments, monthly trend and radar data for one target.
    Defaults to the first target alphabetically and its most recent month.
    """
    targets = await repositories.list_evaluation_targets(db)
    selected_target = target or (targets[0] if targets else None)

    records = []
    if selected_target:
        rows = await repositories.list_evaluations(db, selected_target)
        records = [EvaluationRecord.model_validate(row) for row in rows]

    app_settings = await service.get(db)
    users = await repositories.list_users(db, active_only=True)
    evaluators = [u.name for u in eligible_users(users, Feature.EVALUATION, app_settings)]

    return build_report(
        records,
        evaluators,
        targets,
        selected_target,
        month=month,
        month_index=month_index,
        comment_page=comment_page,
        comments_per_page=comments_per_page,
    )
