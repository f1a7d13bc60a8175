"""Domain layer for the Identity bounded context."""

from identity.domain.aggregates import User
from identity.domain.value_objects import (
    AuthProvider,
    LineId,
    LineUserProfile,
    UserProfile,
)

__all__ = [
    "AuthProvider",
    "LineId",
    "LineUserProfile",
    "User",
    "UserProfile",
]
