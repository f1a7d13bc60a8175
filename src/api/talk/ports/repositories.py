"""Repository port for talk room persistence."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from shared_kernel.value_objects import PrimaryUserId
from talk.domain.aggregates import NewTalkRoom, TalkRoom


@runtime_checkable
class ITalkRoomRepository(Protocol):
    """Talk room storage spanning the relational and document stores."""

    async def get_talk_room(self, primary_user_id: PrimaryUserId) -> TalkRoom:
        """Read the user's talk room with its card and latest event.

        Raises:
            TalkRoomNotFoundError: If the user has no talk room yet
            TalkRoomProjectionError: If the card or latest event is missing
        """
        ...

    async def create_talk_room(self, new_talk_room: NewTalkRoom) -> TalkRoom:
        """Reserve the room's identity and write its documents atomically.

        Raises:
            DuplicateTalkRoomError: If the user already has a talk room
            CouldNotInsertError: If a document write failed or timed out
        """
        ...

    async def append_event(self, new_talk_room: NewTalkRoom) -> TalkRoom:
        """Record the room's latest event and point the card at it.

        Raises:
            CouldNotInsertError: If the event could not be written
            CouldNotUpdateError: If the card could not be updated
        """
        ...
