"""Initial booking schema.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

ACTIVE_SLOT_PREDICATE = "status IN ('CONFIRMED', 'PENDING')"


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def _tenant_fk() -> sa.Column:
    return sa.Column(
        "tenant_id",
        sa.Uuid(as_uuid=True),
        sa.ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "tenants",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("slug", sa.String(length=120), nullable=False, unique=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255)),
        sa.Column("timezone", sa.String(length=64), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "tenant_settings",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "tenant_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("tenants.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("slot_minutes", sa.Integer(), nullable=False, server_default="30"),
        sa.Column("buffer_minutes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("work_days", sa.JSON()),
        sa.Column("hours", sa.JSON()),
        sa.Column("vacation_days", sa.JSON()),
        sa.Column("booking_notes", sa.Text()),
        *_timestamps(),
    )

    op.create_table(
        "holidays",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        _tenant_fk(),
        sa.Column("holiday_date", sa.Date(), nullable=False),
        sa.Column("reason", sa.String(length=255)),
        *_timestamps(),
        sa.UniqueConstraint(
            "tenant_id", "holiday_date", name="uq_holidays_tenant_date"
        ),
    )

    booking_status_enum = sa.Enum(
        "PENDING", "CONFIRMED", "DECLINED", "CANCELLED", name="bookingstatus"
    )
    op.create_table(
        "bookings",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        _tenant_fk(),
        sa.Column("booking_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(timezone=False), nullable=False),
        sa.Column("end_time", sa.Time(timezone=False), nullable=False),
        sa.Column(
            "status",
            booking_status_enum,
            nullable=False,
            server_default="PENDING",
        ),
        sa.Column("first_name", sa.String(length=120), nullable=False),
        sa.Column("last_name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=64)),
        sa.Column("notes", sa.Text()),
        *_timestamps(),
    )
    op.create_index(
        "ix_bookings_tenant_date", "bookings", ["tenant_id", "booking_date"]
    )
    op.create_index(
        "uq_bookings_active_slot",
        "bookings",
        ["tenant_id", "booking_date", "start_time"],
        unique=True,
        postgresql_where=sa.text(ACTIVE_SLOT_PREDICATE),
        sqlite_where=sa.text(ACTIVE_SLOT_PREDICATE),
    )

    op.create_table(
        "booking_day_locks",
        sa.Column(
            "tenant_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("tenants.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("booking_date", sa.Date(), primary_key=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
    )


def downgrade() -> None:
    op.drop_table("booking_day_locks")

    op.drop_index("uq_bookings_active_slot", table_name="bookings")
    op.drop_index("ix_bookings_tenant_date", table_name="bookings")
    op.drop_table("bookings")
    sa.Enum(name="bookingstatus").drop(op.get_bind(), checkfirst=True)

    op.drop_table("holidays")
    op.drop_table("tenant_settings")
    op.drop_table("tenants")
