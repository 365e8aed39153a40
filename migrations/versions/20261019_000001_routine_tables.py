"""Routine and routine log tables.

Revision ID: 20261019_000001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
import sqlmodel

# revision identifiers, used by Alembic.
revision = "20261019_000001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "routine",
        sa.Column("id", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column("title", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("description", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=True),
        sa.Column("icon", sqlmodel.sql.sqltypes.AutoString(length=16), nullable=False),
        sa.Column("color", sqlmodel.sql.sqltypes.AutoString(length=16), nullable=False),
        sa.Column("category", sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column("time_slot", sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column("scheduled_time", sqlmodel.sql.sqltypes.AutoString(length=10), nullable=True),
        sa.Column("duration_minutes", sa.Integer(), nullable=True),
        sa.Column("repeat_type", sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column("repeat_interval_days", sa.Integer(), nullable=True),
        sa.Column("frequency_value", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column("reminder_enabled", sa.Boolean(), nullable=False),
        sa.Column("reminder_minutes_before", sa.Integer(), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("is_from_template", sa.Boolean(), nullable=False),
        sa.Column("template_id", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "routine_log",
        sa.Column("id", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column("routine_id", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("date_key", sqlmodel.sql.sqltypes.AutoString(length=10), nullable=False),
        sa.Column("duration_seconds", sa.Integer(), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["routine_id"], ["routine.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("routine_id", "date_key", name="uq_routine_log_routine_day"),
    )
    op.create_index(op.f("ix_routine_log_routine_id"), "routine_log", ["routine_id"], unique=False)
    op.create_index(op.f("ix_routine_log_date_key"), "routine_log", ["date_key"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_routine_log_date_key"), table_name="routine_log")
    op.drop_index(op.f("ix_routine_log_routine_id"), table_name="routine_log")
    op.drop_table("routine_log")
    op.drop_table("routine")
