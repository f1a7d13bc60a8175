"""Document shapes stored for a talk room.

Layout in the document store:

    talkRooms/{document_id}                     TalkRoomDocument
    talkRooms/{document_id}/events/{event_id}   EventDocument
    talkRoomCards/{document_id}                 TalkRoomCardDocument
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from shared_kernel.document_store import DocumentPath
from shared_kernel.value_objects import PrimaryUserId
from talk.domain.aggregates import Event, NewTalkRoom, TalkRoom
from talk.domain.value_objects import AuthorKind, EventId, TalkRoomId

TALK_ROOM_COLLECTION = "talkRooms"
TALK_ROOM_CARD_COLLECTION = "talkRoomCards"
EVENT_COLLECTION = "events"


def talk_room_path(document_id: str) -> DocumentPath:
    return DocumentPath(TALK_ROOM_COLLECTION, document_id)


def talk_room_card_path(document_id: str) -> DocumentPath:
    return DocumentPath(TALK_ROOM_CARD_COLLECTION, document_id)


def event_path(document_id: str, event_id: str) -> DocumentPath:
    return talk_room_path(document_id).child(EVENT_COLLECTION, event_id)


class _Document(BaseModel):
    model_config = ConfigDict(extra="ignore", use_enum_values=True)

    def to_data(self) -> dict[str, Any]:
        """Return the field map written to the document store."""
        return self.model_dump()


class TalkRoomDocument(_Document):
    """Root document of a talk room; parent of its events."""

    primary_user_id: str
    created_at: datetime

    @classmethod
    def from_domain(cls, new_talk_room: NewTalkRoom) -> TalkRoomDocument:
        return cls(
            primary_user_id=new_talk_room.primary_user_id.value,
            created_at=new_talk_room.created_at,
        )


class TalkRoomCardDocument(_Document):
    """Summary card listing a talk room and pointing at its latest event."""

    display_name: str
    rsvp: bool
    pinned: bool
    follow: bool
    latest_message: str
    latest_messaged_at: datetime
    sort_time: datetime
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, new_talk_room: NewTalkRoom) -> TalkRoomCardDocument:
        return cls(
            display_name=new_talk_room.display_name,
            rsvp=new_talk_room.rsvp,
            pinned=new_talk_room.pinned,
            follow=new_talk_room.follow,
            latest_message=new_talk_room.latest_message.id.value,
            latest_messaged_at=new_talk_room.latest_messaged_at,
            sort_time=new_talk_room.sort_time,
            created_at=new_talk_room.created_at,
            updated_at=new_talk_room.updated_at,
        )

    def latest_message_update(self) -> dict[str, Any]:
        """Fields that change when a new event becomes the latest."""
        return self.model_dump(
            include={"latest_message", "latest_messaged_at", "sort_time", "updated_at"}
        )

    def to_talk_room(
        self,
        document_id: str,
        primary_user_id: str,
        latest_message: Event,
    ) -> TalkRoom:
        return TalkRoom(
            id=TalkRoomId(value=document_id),
            primary_user_id=PrimaryUserId(value=primary_user_id),
            display_name=self.display_name,
            rsvp=self.rsvp,
            pinned=self.pinned,
            follow=self.follow,
            latest_message=latest_message,
            latest_messaged_at=self.latest_messaged_at,
            sort_time=self.sort_time,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class EventDocument(_Document):
    """A single message in a talk room's events sub-collection."""

    message: str
    author: AuthorKind
    send_at: datetime
    created_at: datetime

    @classmethod
    def from_domain(cls, event: Event) -> EventDocument:
        return cls(
            message=event.message,
            author=event.author,
            send_at=event.send_at,
            created_at=event.created_at,
        )

    def to_domain(self, event_id: str) -> Event:
        return Event(
            id=EventId(value=event_id),
            message=self.message,
            author=AuthorKind(self.author),
            send_at=self.send_at,
            created_at=self.created_at,
        )
