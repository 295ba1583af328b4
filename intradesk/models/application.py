"""Application (processing request) model."""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from intradesk.database import Base, JSONType


class Application(Base):
    """Submitted request awaiting admin processing."""

    __tablename__ = "applications"
    __table_args__ = (Index("ix_applications_type_status", "application_type", "status"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    application_type: Mapped[str] = mapped_column(String(50), nullable=False)
    applicant_name: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    details: Mapped[dict] = mapped_column(JSONType, nullable=False)
    submitted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="unprocessed"
    )  # unprocessed|processing|processed|returned|cancelled
    processed_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    processed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
