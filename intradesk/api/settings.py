"""Settings document endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from intradesk.database import get_db
from intradesk.schemas.settings import SettingsSaved
from intradesk.services.settings_service import SettingsService, get_settings_service

router = APIRouter()


@router.get("/settings")
async def read_settings(
    db: Annotated[AsyncSession, Depends(get_db)],
    service: Annotated[SettingsService, Depends(get_settings_service)],
):
    """The stored document exactly as saved; 404 with an empty object if never saved."""
    document = await service.load(db)
    if document is None:
        return JSONResponse(content={}, status_code=status.HTTP_404_NOT_FOUND)
    return document


@router.post("/settings", response_model=SettingsSaved)
async def save_settings(
    document: Annotated[dict[str, Any], Body()],
    db: Annotated[AsyncSession, Depends(get_db)],
    service: Annotated[SettingsService, Depends(get_settings_service)],
):
    """Overwrite the whole document (last writer wins)."""
    await service.save(db, document)
    return SettingsSaved(message="Settings saved successfully")


@router.delete("/settings/cache", status_code=status.HTTP_204_NO_CONTENT)
async def refresh_settings(service: Annotated[SettingsService, Depends(get_settings_service)]):
    """Drop the cached document so the next read goes to the database."""
    service.invalidate()
