"""Event proposal model."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from intradesk.database import Base


class Proposal(Base):
    """One proposed event item. A single submission may produce several rows."""

    __tablename__ = "proposals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    proposer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    proposal_year: Mapped[str] = mapped_column(String(4), nullable=False, index=True)
    event_name: Mapped[str] = mapped_column(Text, nullable=False)
    timing: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    submitted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
