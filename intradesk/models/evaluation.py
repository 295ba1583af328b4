"""Evaluation model."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from intradesk.database import Base, JSONType


class Evaluation(Base):
    """Evaluation score sheets - append-only."""

    __tablename__ = "evaluations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    evaluator_name: Mapped[str] = mapped_column(String(255), nullable=False)
    target_employee_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    evaluation_month: Mapped[str] = mapped_column(String(7), nullable=False)  # YYYY-MM
    total_score: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    scores_json: Mapped[dict] = mapped_column(JSONType, nullable=False)
    submitted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
