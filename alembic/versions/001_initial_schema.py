"""Initial schema - users, evaluations, proposals, applications, app_settings.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_json = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("role", sa.String(50), nullable=False, server_default="clerical"),
        sa.Column("is_trainee", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
    )

    op.create_table(
        "evaluations",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("evaluator_name", sa.String(255), nullable=False),
        sa.Column("target_employee_name", sa.String(255), nullable=False),
        sa.Column("evaluation_month", sa.String(7), nullable=False),
        sa.Column("total_score", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("scores_json", _json, nullable=False),
        sa.Column("submitted_at", sa.TIMESTAMP(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_evaluations_target_employee_name", "evaluations", ["target_employee_name"]
    )

    op.create_table(
        "proposals",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("proposer_name", sa.String(255), nullable=False),
        sa.Column("proposal_year", sa.String(4), nullable=False),
        sa.Column("event_name", sa.Text(), nullable=False),
        sa.Column("timing", sa.Text(), nullable=False),
        sa.Column("type", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("submitted_at", sa.TIMESTAMP(timezone=True), nullable=False),
    )
    op.create_index("ix_proposals_proposal_year", "proposals", ["proposal_year"])

    op.create_table(
        "applications",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("application_type", sa.String(50), nullable=False),
        sa.Column("applicant_name", sa.String(255), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("details", _json, nullable=False),
        sa.Column("submitted_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="unprocessed"),
        sa.Column("processed_by", sa.String(255), nullable=True),
        sa.Column("processed_at", sa.TIMESTAMP(timezone=True), nullable=True),
    )
    op.create_index(
        "ix_applications_type_status", "applications", ["application_type", "status"]
    )

    # plain JSON keeps the settings document's key order
    op.create_table(
        "app_settings",
        sa.Column("key", sa.String(50), primary_key=True),
        sa.Column("value", sa.JSON(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("app_settings")
    op.drop_index("ix_applications_type_status", table_name="applications")
    op.drop_table("applications")
    op.drop_index("ix_proposals_proposal_year", table_name="proposals")
    op.drop_table("proposals")
    op.drop_index("ix_evaluations_target_employee_name", table_name="evaluations")
    op.drop_table("evaluations")
    op.drop_table("users")
