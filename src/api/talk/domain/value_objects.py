"""Value objects for the Talk domain."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ulid import ULID


@dataclass(frozen=True)
class TalkRoomId:
    """Document id shared by a talk room's identity row and its documents.

    Uses ULID for sortability and distribution-friendly generation.
    Immutable once the room is created.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> TalkRoomId:
        """Generate a new TalkRoomId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> TalkRoomId:
        """Create TalkRoomId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid TalkRoomId: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class EventId:
    """Identifier of a single event document within a talk room."""

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> EventId:
        """Generate a new EventId using ULID."""
        return cls(value=str(ULID()))


class AuthorKind(StrEnum):
    """Who wrote an event."""

    USER = "user"
    BOT = "bot"
    SYSTEM = "system"
