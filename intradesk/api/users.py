"""User directory endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from intradesk.database import get_db
from intradesk.engine.roles import Feature, eligible_users, sort_users, visible_menu
from intradesk.errors import Conflict, NotFound
from intradesk.schemas.user import MenuOut, UserCreate, UserOut, UserUpdate
from intradesk.services.settings_service import SettingsService, get_settings_service
from intradesk.storage import repositories

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/users", response_model=list[UserOut])
async def list_users(db: Annotated[AsyncSession, Depends(get_db)]):
    """All users, president first, trainees after regular staff."""
    return sort_users(await repositories.list_users(db))


@router.get("/users/eligible", response_model=list[UserOut])
async def list_eligible_users(
    feature: Feature,
    db: Annotated[AsyncSession, Depends(get_db)],
    service: Annotated[SettingsService, Depends(get_settings_service)],
):
    """Users allowed to fill in the form for `feature`, by ascending id."""
    app_settings = await service.get(db)
    return eligible_users(await repositories.list_users(db), feature, app_settings)


@router.post("/users", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def create_user(body: UserCreate, db: Annotated[AsyncSession, Depends(get_db)]):
    """Create a user with an admin-assigned id."""
    if await repositories.get_user(db, body.id):
        raise Conflict(f"User id {body.id} already exists")
    try:
        user = await repositories.create_user(
            db,
            user_id=body.id,
            name=body.name,
            role=body.role.value,
            is_trainee=body.is_trainee,
            is_active=body.is_active,
        )
    except IntegrityError as exc:
        raise Conflict(f"User id {body.id} already exists") from exc
    logger.info("Created user %s (%s)", user.id, user.role)
    return user


@router.patch("/users/{user_id}", response_model=UserOut)
async def update_user(
    user_id: int, body: UserUpdate, db: Annotated[AsyncSession, Depends(get_db)]
):
    """Rename, change role, or toggle trainee/active flags."""
    user = await repositories.get_user(db, user_id)
    if not user:
        raise NotFound("User not found")
    for field, value in body.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        setattr(user, field, value.value if field == "role" else value)
    await db.flush()
    return user


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, db: Annotated[AsyncSession, Depends(get_db)]):
    """Hard delete. Historical evaluations keep the name as plain text."""
    if not await repositories.delete_user(db, user_id):
        raise NotFound("User not found")
    logger.info("Deleted user %s", user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/users/{user_id}/menu", response_model=MenuOut)
async def user_menu(
    user_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    service: Annotated[SettingsService, Depends(get_settings_service)],
):
    """Sidebar state for a user: visible forms plus the pending badge."""
    user = await repositories.get_user(db, user_id)
    if not user:
        raise NotFound("User not found")
    app_settings = await service.get(db)
    pending = await repositories.count_pending_applications(db)
    return MenuOut(user_id=user.id, pending_count=pending, **visible_menu(user, app_settings))
