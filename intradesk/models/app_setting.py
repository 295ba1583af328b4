"""Settings document model."""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from intradesk.database import Base

DEFAULT_SETTINGS_KEY = "default"


class AppSetting(Base):
    """Key/value JSON documents. Only the `default` key is used."""

    __tablename__ = "app_settings"

    key: Mapped[str] = mapped_column(String(50), primary_key=True)
    # plain JSON, not JSONB, so the document keeps its key order
    value: Mapped[dict] = mapped_column(JSON, nullable=False)
