"""create primary_users and line_users tables

A primary user row is allocated for each person who messages the bot; the
line_users row binds their LINE user id to it. line_id is unique so that
concurrent first messages from the same sender create one user.

Revision ID: 3f1c2a7b9d04
Revises:
Create Date: 2026-10-12 09:41:07.318512

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3f1c2a7b9d04"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "primary_users",
        sa.Column("id", sa.String(length=26), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "line_users",
        sa.Column("primary_user_id", sa.String(length=26), nullable=False),
        sa.Column("line_id", sa.String(length=255), nullable=False),
        sa.Column("display_name", sa.String(length=255), nullable=False),
        sa.Column("picture_url", sa.String(length=2048), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["primary_user_id"], ["primary_users.id"], ondelete="RESTRICT"
        ),
        sa.PrimaryKeyConstraint("primary_user_id"),
    )
    # One user per LINE identity
    op.create_index(
        op.f("ix_line_users_line_id"), "line_users", ["line_id"], unique=True
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f("ix_line_users_line_id"), table_name="line_users")
    op.drop_table("line_users")
    op.drop_table("primary_users")
