"""Add shifts, appointments, appointment services and notifications.

Revision ID: 20261018_0002
Revises: 20261018_0001
Create Date: 2026-10-18 09:30:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "20261018_0002"
down_revision: Union[str, Sequence[str], None] = "20261018_0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    table_names = set(inspector.get_table_names())

    if "shifts" not in table_names:
        op.create_table(
            "shifts",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("user_id", sa.Integer(), nullable=False),
            sa.Column("date", sa.String(), nullable=False),
            sa.Column("start_time", sa.String(), nullable=False),
            sa.Column("end_time", sa.String(), nullable=False),
            sa.Column("status", sa.String(), nullable=False, server_default="scheduled"),
            sa.Column("earnings", sa.Float(), nullable=False, server_default="0"),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_shifts_id", "shifts", ["id"], unique=False)
        op.create_index("ix_shifts_user_id", "shifts", ["user_id"], unique=False)
        op.create_index("ix_shifts_date", "shifts", ["date"], unique=False)

    if "appointments" not in table_names:
        op.create_table(
            "appointments",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("client_id", sa.Integer(), nullable=False),
            sa.Column("vehicle_id", sa.Integer(), nullable=False),
            sa.Column("user_id", sa.Integer(), nullable=True),
            sa.Column("date", sa.String(), nullable=False),
            sa.Column("start_time", sa.String(), nullable=False),
            sa.Column("end_time", sa.String(), nullable=True),
            sa.Column("status", sa.String(), nullable=False, server_default="scheduled"),
            sa.Column("total_price", sa.Float(), nullable=False, server_default="0"),
            sa.Column("notes", sa.String(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_appointments_id", "appointments", ["id"], unique=False)
        op.create_index("ix_appointments_client_id", "appointments", ["client_id"], unique=False)
        op.create_index("ix_appointments_vehicle_id", "appointments", ["vehicle_id"], unique=False)
        op.create_index("ix_appointments_user_id", "appointments", ["user_id"], unique=False)
        op.create_index("ix_appointments_date", "appointments", ["date"], unique=False)

    if "appointment_services" not in table_names:
        op.create_table(
            "appointment_services",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("appointment_id", sa.Integer(), nullable=False),
            sa.Column("service_id", sa.Integer(), nullable=False),
            sa.Column("price", sa.Float(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_appointment_services_id", "appointment_services", ["id"], unique=False)
        op.create_index(
            "ix_appointment_services_appointment_id",
            "appointment_services",
            ["appointment_id"],
            unique=False,
        )
        op.create_index(
            "ix_appointment_services_service_id",
            "appointment_services",
            ["service_id"],
            unique=False,
        )

    if "notifications" not in table_names:
        op.create_table(
            "notifications",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("user_id", sa.Integer(), nullable=True),
            sa.Column("title", sa.String(), nullable=False),
            sa.Column("message", sa.String(), nullable=False),
            sa.Column("type", sa.String(), nullable=False, server_default="info"),
            sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_notifications_id", "notifications", ["id"], unique=False)
        op.create_index("ix_notifications_user_id", "notifications", ["user_id"], unique=False)
        op.create_index("ix_notifications_created_at", "notifications", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_table("notifications")
    op.drop_table("appointment_services")
    op.drop_table("appointments")
    op.drop_table("shifts")
