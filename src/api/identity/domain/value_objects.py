"""Value objects for the Identity domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar, TypeAlias


class AuthProvider(StrEnum):
    """Identity providers a user can arrive from."""

    LINE = "line"


@dataclass(frozen=True)
class LineId:
    """User identifier issued by the LINE platform.

    Unique per provider channel and stable for the lifetime of the
    friendship with the bot.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def from_string(cls, value: str) -> LineId:
        """Create LineId from a webhook or API payload value.

        Raises:
            ValueError: If value is blank
        """
        if not value or not value.strip():
            raise ValueError("LineId cannot be empty")
        return cls(value=value.strip())


@dataclass(frozen=True)
class LineUserProfile:
    """Profile returned by the LINE profile API."""

    provider: ClassVar[AuthProvider] = AuthProvider.LINE

    auth_id: LineId
    display_name: str
    picture_url: str | None = None


# Tagged union over provider-specific profiles; dispatch on the concrete
# type (or its ``provider`` tag). Extend with ``|`` as providers are added.
UserProfile: TypeAlias = LineUserProfile
