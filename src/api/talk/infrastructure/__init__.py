"""Infrastructure layer for the Talk bounded context."""

from talk.infrastructure.models import TalkRoomModel
from talk.infrastructure.talk_room_creation import CreationState, TalkRoomCreationSaga
from talk.infrastructure.talk_room_repository import TalkRoomRepository

__all__ = [
    "CreationState",
    "TalkRoomCreationSaga",
    "TalkRoomModel",
    "TalkRoomRepository",
]
