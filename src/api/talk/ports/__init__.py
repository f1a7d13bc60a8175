"""Ports for the Talk bounded context."""

from talk.ports.exceptions import (
    DuplicateTalkRoomError,
    TalkRoomNotFoundError,
    TalkRoomProjectionError,
)
from talk.ports.repositories import ITalkRoomRepository

__all__ = [
    "DuplicateTalkRoomError",
    "ITalkRoomRepository",
    "TalkRoomNotFoundError",
    "TalkRoomProjectionError",
]
