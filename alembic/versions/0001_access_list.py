"""create access_list table

Revision ID: 0001_access_list
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


revision = "0001_access_list"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "access_list",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("start", sa.LargeBinary(length=16), nullable=False),
        sa.Column("end", sa.LargeBinary(length=16), nullable=False),
        sa.Column("level", sa.Integer(), nullable=False, server_default="5"),
        sa.Column("user", sa.Integer(), nullable=False, server_default="-1"),
        sa.Column("type", sa.String(length=64), nullable=False, server_default="stream"),
        sa.Column("enabled", sa.SmallInteger(), nullable=False, server_default="1"),
    )
    op.create_index(op.f("ix_access_list_id"), "access_list", ["id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_access_list_id"), table_name="access_list")
    op.drop_table("access_list")
