"""initial schema: members, gym_batches, enrollments, payments

Revision ID: 0001
Revises:
Create Date: 2026-10-17
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "members",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("phone", sa.String(length=15), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_members_email", "members", ["email"], unique=True)

    op.create_table(
        "gym_batches",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("batch_time", sa.Time(), nullable=False),
        sa.Column("current_capacity", sa.Integer(), nullable=False),
        sa.Column("max_capacity", sa.Integer(), nullable=False),
        sa.Column("monthly_fee", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.CheckConstraint(
            "current_capacity >= 0 AND current_capacity <= max_capacity",
            name="ck_gym_batches_capacity_range",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("batch_time"),
    )

    op.create_table(
        "enrollments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("member_id", sa.Integer(), nullable=False),
        sa.Column("batch_time", sa.Time(), nullable=False),
        sa.Column("month", sa.Date(), nullable=False),
        sa.Column("amount", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("payment_status", sa.String(length=10), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["member_id"], ["members.id"]),
        sa.ForeignKeyConstraint(["batch_time"], ["gym_batches.batch_time"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("member_id", "month", name="uq_enrollments_member_month"),
    )
    op.create_index("ix_enrollments_member_id", "enrollments", ["member_id"])
    op.create_index("ix_enrollments_month", "enrollments", ["month"])
    op.create_index("ix_enrollments_payment_status", "enrollments", ["payment_status"])

    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("enrollment_id", sa.Integer(), nullable=False),
        sa.Column("amount", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("payment_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("transaction_id", sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(["enrollment_id"], ["enrollments.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("transaction_id"),
    )
    op.create_index("ix_payments_enrollment_id", "payments", ["enrollment_id"])


def downgrade() -> None:
    op.drop_index("ix_payments_enrollment_id", table_name="payments")
    op.drop_table("payments")
    op.drop_index("ix_enrollments_payment_status", table_name="enrollments")
    op.drop_index("ix_enrollments_month", table_name="enrollments")
    op.drop_index("ix_enrollments_member_id", table_name="enrollments")
    op.drop_table("enrollments")
    op.drop_table("gym_batches")
    op.drop_index("ix_members_email", table_name="members")
    op.drop_table("members")
