"""Repository functions for users, evaluations, proposals, applications, settings."""

from datetime import datetime, timezone
from typing import Any, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from intradesk.engine.workflow import PENDING_BADGE_TYPES
from intradesk.models import AppSetting, Application, Evaluation, Proposal, User
from intradesk.models.app_setting import DEFAULT_SETTINGS_KEY
from intradesk.schemas.application import ApplicationStatus


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# --- users -----------------------------------------------------------------


async def list_users(db: AsyncSession, active_only: bool = False) -> Sequence[User]:
    """All users in ascending id order."""
    stmt = select(User).order_by(User.id)
    if active_only:
        stmt = stmt.where(User.is_active.is_(True))
    result = await db.execute(stmt)
    return result.scalars().all()


async def get_user(db: AsyncSession, user_id: int) -> User | None:
    return await db.get(User, user_id)


async def create_user(
    db: AsyncSession,
    user_id: int,
    name: str,
    role: str,
    is_trainee: bool = False,
    is_active: bool = True,
) -> User:
    user = User(id=user_id, name=name, role=role, is_trainee=is_trainee, is_active=is_active)
    db.add(user)
    await db.flush()
    return user


async def delete_user(db: AsyncSession, user_id: int) -> bool:
    """Hard delete. Returns False when no row matched."""
    result = await db.execute(delete(User).where(User.id == user_id))
    return result.rowcount > 0


# --- evaluations -----------------------------------------------------------


async def create_evaluation(
    db: AsyncSession,
    evaluator_name: str,
    target_employee_name: str,
    evaluation_month: str,
    scores: dict[str, int],
    total_score: int,
    comment: str | None = None,
) -> Evaluation:
    """Create an evaluation record."""
    ev = Evaluation(
        evaluator_name=evaluator_name,
        target_employee_name=target_employee_name,
        evaluation_month=evaluation_month,
        scores_json=scores,
        total_score=total_score,
        comment=comment,
        submitted_at=utcnow(),
    )
    db.add(ev)
    await db.flush()
    return ev


async def list_evaluations(db: AsyncSession, target: str | None = None) -> Sequence[Evaluation]:
    """Evaluations newest first, optionally for one target employee."""
    stmt = select(Evaluation).order_by(Evaluation.submitted_at.desc(), Evaluation.id.desc())
    if target:
        stmt = stmt.where(Evaluation.target_employee_name == target)
    result = await db.execute(stmt)
    return result.scalars().all()


async def list_evaluation_targets(db: AsyncSession) -> list[str]:
    """Distinct target employee names, sorted."""
    result = await db.execute(
        select(Evaluation.target_employee_name)
        .distinct()
        .order_by(Evaluation.target_employee_name)
    )
    return list(result.scalars().all())


# --- proposals -------------------------------------------------------------


async def create_proposals(
    db: AsyncSession,
    proposer_name: str,
    proposal_year: str,
    items: Sequence[dict[str, str]],
) -> list[Proposal]:
    """Insert one row per proposed event in a single flush."""
    now = utcnow()
    rows = [
        Proposal(
            proposer_name=proposer_name,
            proposal_year=proposal_year,
            event_name=item["event_name"],
            timing=item["timing"],
            type=item["type"],
            content=item["content"],
            submitted_at=now,
        )
        for item in items
    ]
    db.add_all(rows)
    await db.flush()
    return rows


async def list_proposals(db: AsyncSession, year: str | None = None) -> Sequence[Proposal]:
    stmt = select(Proposal).order_by(Proposal.submitted_at.desc(), Proposal.id.desc())
    if year:
        stmt = stmt.where(Proposal.proposal_year == year)
    result = await db.execute(stmt)
    return result.scalars().all()


# --- applications ----------------------------------------------------------


async def create_application(
    db: AsyncSession,
    application_type: str,
    applicant_name: str,
    title: str,
    details: dict[str, Any],
) -> Application:
    app = Application(
        application_type=application_type,
        applicant_name=applicant_name,
        title=title,
        details=details,
        submitted_at=utcnow(),
        status="unprocessed",
    )
    db.add(app)
    await db.flush()
    return app


async def get_application(db: AsyncSession, application_id: int) -> Application | None:
    return await db.get(Application, application_id)


async def list_applications(
    db: AsyncSession,
    types: Sequence[str] = (),
    year: str | None = None,
    status: str | None = None,
) -> Sequence[Application]:
    """Applications newest first, filtered by type(s), proposal year and status."""
    stmt = select(Application)
    if types:
        stmt = stmt.where(Application.application_type.in_(types))
    if year:
        stmt = stmt.where(Application.details["proposal_year"].as_string() == year)
    if status:
        stmt = stmt.where(Application.status == status)
    stmt = stmt.order_by(Application.submitted_at.desc(), Application.id.desc())
    result = await db.execute(stmt)
    return result.scalars().all()


async def count_pending_applications(db: AsyncSession) -> int:
    """Unprocessed applications of the types shown on the pending badge."""
    result = await db.execute(
        select(func.count())
        .select_from(Application)
        .where(
            Application.application_type.in_(PENDING_BADGE_TYPES),
            Application.status == ApplicationStatus.UNPROCESSED.value,
        )
    )
    return result.scalar_one()


# --- settings --------------------------------------------------------------


async def get_settings_document(db: AsyncSession) -> dict | None:
    row = await db.get(AppSetting, DEFAULT_SETTINGS_KEY)
    return row.value if row else None


async def upsert_settings_document(db: AsyncSession, document: dict) -> None:
    """Overwrite the settings document wholesale - last writer wins."""
    row = await db.get(AppSetting, DEFAULT_SETTINGS_KEY)
    if row:
        row.value = document
    else:
        db.add(AppSetting(key=DEFAULT_SETTINGS_KEY, value=document))
    await db.flush()
