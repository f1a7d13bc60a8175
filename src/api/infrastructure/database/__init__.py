"""Database infrastructure - engine, session factory and ORM base."""

from infrastructure.database.dependencies import (
    close_database_connections,
    get_engine,
    get_session_factory,
)
from infrastructure.database.models import Base, CreatedAtMixin, TimestampMixin

__all__ = [
    "Base",
    "CreatedAtMixin",
    "TimestampMixin",
    "close_database_connections",
    "get_engine",
    "get_session_factory",
]
