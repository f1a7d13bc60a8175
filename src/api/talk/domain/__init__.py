"""Domain layer for the Talk bounded context."""

from talk.domain.aggregates import Event, NewTalkRoom, TalkRoom
from talk.domain.value_objects import AuthorKind, EventId, TalkRoomId

__all__ = [
    "AuthorKind",
    "Event",
    "EventId",
    "NewTalkRoom",
    "TalkRoom",
    "TalkRoomId",
]
