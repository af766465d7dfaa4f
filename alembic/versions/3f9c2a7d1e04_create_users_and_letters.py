"""create users and letters

Revision ID: 3f9c2a7d1e04
Revises:
Create Date: 2026-10-19 10:12:41.208113
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "3f9c2a7d1e04"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)

    op.create_table(
        "letters",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("letter_date", sa.Date(), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("details", sa.Text(), nullable=False),
        sa.Column("subject_no", sa.String(length=50), nullable=False),
        sa.Column("letter_type", sa.String(length=20), nullable=False),
        sa.Column("sent_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("letters")

    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")
