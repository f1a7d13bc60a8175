"""create talk_rooms table

Reserves one talk room per primary user. The row is committed only after
the room's documents exist in Firestore, so its presence means the room is
readable.

Revision ID: 8b5e0d4c2f16
Revises: 3f1c2a7b9d04
Create Date: 2026-10-12 10:02:55.904117

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "8b5e0d4c2f16"
down_revision: Union[str, Sequence[str], None] = "3f1c2a7b9d04"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "talk_rooms",
        sa.Column("primary_user_id", sa.String(length=26), nullable=False),
        sa.Column("document_id", sa.String(length=26), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["primary_user_id"], ["primary_users.id"], ondelete="RESTRICT"
        ),
        # Name is matched when a concurrent creation loses the race
        sa.PrimaryKeyConstraint("primary_user_id", name="talk_rooms_pkey"),
        sa.UniqueConstraint("document_id", name="talk_rooms_document_id_key"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("talk_rooms")
