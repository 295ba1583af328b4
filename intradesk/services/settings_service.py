"""Settings document access with an explicit cache."""

import copy
import logging

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from intradesk.errors import ValidationFailed
from intradesk.schemas.settings import AppSettings
from intradesk.storage import repositories

logger = logging.getLogger(__name__)


class SettingsService:
    """Reads and writes the singleton settings document.

    The document is cached after the first read and only reloaded after
    `invalidate()`. `save` commits before invalidating so the next read
    sees the new document.
    """

    def __init__(self) -> None:
        self._document: dict | None = None
        self._loaded = False
        self._generation = 0

    def invalidate(self) -> None:
        self._document = None
        self._loaded = False
        self._generation += 1

    async def load(self, db: AsyncSession) -> dict | None:
        """Raw stored document, or None if settings were never saved."""
        if self._loaded:
            return copy.deepcopy(self._document)
        generation = self._generation
        document = await repositories.get_settings_document(db)
        # an invalidate() during the read means this document may be stale
        if generation == self._generation:
            self._document = document
            self._loaded = True
        return copy.deepcopy(document)

    async def get(self, db: AsyncSession) -> AppSettings:
        """Typed settings, defaults filled in for missing keys."""
        return AppSettings.model_validate(await self.load(db) or {})

    async def save(self, db: AsyncSession, document: dict) -> None:
        """Store `document` verbatim after checking known keys have sane types."""
        try:
            AppSettings.model_validate(document)
        except ValidationError as exc:
            raise ValidationFailed(f"Invalid settings document: {exc.errors()[0]['msg']}") from exc
        await repositories.upsert_settings_document(db, document)
        await db.commit()
        self.invalidate()
        logger.info("Settings document saved (%d keys)", len(document))


settings_service = SettingsService()


def get_settings_service() -> SettingsService:
    """Dependency returning the process-wide settings service."""
    return settings_service
