"""User aggregate for the Identity context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from identity.domain.value_objects import LineId
from shared_kernel.value_objects import PrimaryUserId


@dataclass(frozen=True)
class User:
    """User aggregate representing a person talking to the bot.

    The primary id is allocated by this system the first time an auth
    identity is seen; the auth id ties the user back to the provider.
    """

    id: PrimaryUserId
    auth_id: LineId
    display_name: str
    picture_url: str | None
    created_at: datetime
    updated_at: datetime

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.display_name})"

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
