"""Talk room read and write models.

TalkRoom is assembled on read from the identity row, the card and the
latest event. NewTalkRoom is the state about to be written: either a room
being opened with its first event, or an existing room advanced by a new
event.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from shared_kernel.value_objects import PrimaryUserId
from talk.domain.value_objects import AuthorKind, EventId, TalkRoomId

# Smallest step that keeps sort_time and latest_messaged_at strictly increasing
_ORDERING_STEP = timedelta(microseconds=1)


@dataclass(frozen=True)
class Event:
    """A message recorded in a talk room. Append-only."""

    id: EventId
    message: str
    author: AuthorKind
    send_at: datetime
    created_at: datetime

    @classmethod
    def new(
        cls,
        message: str,
        send_at: datetime,
        author: AuthorKind = AuthorKind.USER,
        now: datetime | None = None,
    ) -> Event:
        """Create an event with a freshly generated id."""
        return cls(
            id=EventId.generate(),
            message=message,
            author=author,
            send_at=send_at,
            created_at=now or datetime.now(UTC),
        )


@dataclass(frozen=True)
class TalkRoom:
    """Read model joining the identity row, the card and the latest event."""

    id: TalkRoomId
    primary_user_id: PrimaryUserId
    display_name: str
    rsvp: bool
    pinned: bool
    follow: bool
    latest_message: Event
    latest_messaged_at: datetime
    sort_time: datetime
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class NewTalkRoom:
    """Talk room state to be persisted, carrying the event being recorded."""

    id: TalkRoomId
    primary_user_id: PrimaryUserId
    display_name: str
    rsvp: bool
    pinned: bool
    follow: bool
    latest_message: Event
    latest_messaged_at: datetime
    sort_time: datetime
    created_at: datetime
    updated_at: datetime

    @classmethod
    def open(
        cls,
        primary_user_id: PrimaryUserId,
        display_name: str,
        first_event: Event,
        now: datetime | None = None,
    ) -> NewTalkRoom:
        """Describe a brand new room whose first event is first_event."""
        now = now or datetime.now(UTC)
        return cls(
            id=TalkRoomId.generate(),
            primary_user_id=primary_user_id,
            display_name=display_name,
            rsvp=False,
            pinned=False,
            follow=True,
            latest_message=first_event,
            latest_messaged_at=first_event.send_at,
            sort_time=now,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def advance(
        cls,
        talk_room: TalkRoom,
        event: Event,
        now: datetime | None = None,
    ) -> NewTalkRoom:
        """Describe an existing room after event becomes its latest message.

        sort_time and latest_messaged_at both strictly increase, even when
        the clock stalls or LINE delivers equal or earlier send times. The
        event itself keeps its own send_at.
        """
        now = now or datetime.now(UTC)
        return cls(
            id=talk_room.id,
            primary_user_id=talk_room.primary_user_id,
            display_name=talk_room.display_name,
            rsvp=talk_room.rsvp,
            pinned=talk_room.pinned,
            follow=talk_room.follow,
            latest_message=event,
            latest_messaged_at=max(
                event.send_at, talk_room.latest_messaged_at + _ORDERING_STEP
            ),
            sort_time=max(now, talk_room.sort_time + _ORDERING_STEP),
            created_at=talk_room.created_at,
            updated_at=now,
        )

    def to_talk_room(self) -> TalkRoom:
        """Return the read model this state produces once persisted."""
        return TalkRoom(
            id=self.id,
            primary_user_id=self.primary_user_id,
            display_name=self.display_name,
            rsvp=self.rsvp,
            pinned=self.pinned,
            follow=self.follow,
            latest_message=self.latest_message,
            latest_messaged_at=self.latest_messaged_at,
            sort_time=self.sort_time,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

