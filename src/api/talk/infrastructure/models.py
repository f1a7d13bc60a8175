"""SQLAlchemy ORM models for the Talk bounded context."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, CreatedAtMixin


class TalkRoomModel(Base, CreatedAtMixin):
    """ORM model for talk_rooms table.

    The primary key is the owning user's id, so a user has at most one talk
    room. The foreign key to primary_users is declared by the migration;
    this context does not map the identity tables.
    """

    __tablename__ = "talk_rooms"

    primary_user_id: Mapped[str] = mapped_column(String(26), primary_key=True)
    document_id: Mapped[str] = mapped_column(String(26), nullable=False, unique=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<TalkRoomModel(primary_user_id={self.primary_user_id}, "
            f"document_id={self.document_id})>"
        )
