"""SQLAlchemy ORM models for the Identity bounded context.

A primary user row is allocated once per person; provider-specific rows
(currently only LINE) point back to it.
"""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class PrimaryUserModel(Base, TimestampMixin):
    """ORM model for primary_users table.

    Holds only the system-generated id other tables key on.
    """

    __tablename__ = "primary_users"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<PrimaryUserModel(id={self.id})>"


class LineUserModel(Base, TimestampMixin):
    """ORM model for line_users table.

    line_id carries a unique index: exactly one user per LINE identity.
    """

    __tablename__ = "line_users"

    primary_user_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("primary_users.id", ondelete="RESTRICT"),
        primary_key=True,
    )
    line_id: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True
    )
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    picture_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<LineUserModel(primary_user_id={self.primary_user_id}, "
            f"line_id={self.line_id})>"
        )
