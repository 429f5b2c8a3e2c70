"""Create duty plan and run tables.

Revision ID: 20250101_0001
Revises:
Create Date: 2025-01-01 09:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "20250101_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "dutyplan",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("inputs", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_index("ix_dutyplan_id", "dutyplan", ["id"])
    op.create_index("ix_dutyplan_month", "dutyplan", ["month"])
    op.create_index("ix_dutyplan_year", "dutyplan", ["year"])

    op.create_table(
        "dutyplanrun",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("plan_id", sa.Integer(), sa.ForeignKey("dutyplan.id", ondelete="CASCADE"), nullable=False),
        sa.Column("version_label", sa.String(length=32), nullable=False),
        sa.Column("seed", sa.Integer(), nullable=True),
        sa.Column("result", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_index("ix_dutyplanrun_plan_id", "dutyplanrun", ["plan_id"])


def downgrade() -> None:
    op.drop_index("ix_dutyplanrun_plan_id", table_name="dutyplanrun")
    op.drop_table("dutyplanrun")
    op.drop_index("ix_dutyplan_year", table_name="dutyplan")
    op.drop_index("ix_dutyplan_month", table_name="dutyplan")
    op.drop_index("ix_dutyplan_id", table_name="dutyplan")
    op.drop_table("dutyplan")
