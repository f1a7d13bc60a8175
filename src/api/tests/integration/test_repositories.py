"""Integration tests for the repositories against real stores.

Verifies that constraint names matched by the repositories are the ones
PostgreSQL reports.
"""

import asyncio
from datetime import UTC, datetime

import pytest

from identity.domain.value_objects import LineId, LineUserProfile
from identity.infrastructure.user_repository import UserRepository
from identity.ports.exceptions import DuplicateAuthIdentityError
from talk.domain.aggregates import Event, NewTalkRoom
from talk.infrastructure.talk_room_repository import TalkRoomRepository
from talk.ports.exceptions import DuplicateTalkRoomError, TalkRoomNotFoundError

pytestmark = pytest.mark.integration


def _profile(auth_id: str) -> LineUserProfile:
    return LineUserProfile(auth_id=LineId(auth_id), display_name="Alice")


class TestUserRepository:
    """UserRepository over PostgreSQL."""

    @pytest.mark.asyncio
    async def test_create_then_get(self, session_factory):
        repository = UserRepository(session_factory)

        created = await repository.create_user(_profile("U100"))
        found = await repository.get_user(LineId("U100"))

        assert found == created

    @pytest.mark.asyncio
    async def test_concurrent_creation_has_one_winner(self, session_factory):
        repository = UserRepository(session_factory)

        results = await asyncio.gather(
            repository.create_user(_profile("U100")),
            repository.create_user(_profile("U100")),
            return_exceptions=True,
        )

        errors = [r for r in results if isinstance(r, Exception)]
        assert len(errors) == 1
        assert isinstance(errors[0], DuplicateAuthIdentityError)


class TestTalkRoomRepository:
    """TalkRoomRepository over PostgreSQL and the Firestore emulator."""

    @pytest.mark.asyncio
    async def test_create_get_append(self, session_factory, document_store):
        user = await UserRepository(session_factory).create_user(_profile("U200"))
        repository = TalkRoomRepository(session_factory, document_store)

        with pytest.raises(TalkRoomNotFoundError):
            await repository.get_talk_room(user.id)

        created = await repository.create_talk_room(
            NewTalkRoom.open(
                user.id,
                user.display_name,
                Event.new("hello", send_at=datetime.fromtimestamp(100, tz=UTC)),
            )
        )
        await repository.append_event(
            NewTalkRoom.advance(
                created,
                Event.new("world", send_at=datetime.fromtimestamp(200, tz=UTC)),
            )
        )
        room = await repository.get_talk_room(user.id)

        assert room.id == created.id
        assert room.latest_message.message == "world"

    @pytest.mark.asyncio
    async def test_second_room_is_duplicate(self, session_factory, document_store):
        user = await UserRepository(session_factory).create_user(_profile("U300"))
        repository = TalkRoomRepository(session_factory, document_store)
        first_event = Event.new("hi", send_at=datetime.now(UTC))
        await repository.create_talk_room(
            NewTalkRoom.open(user.id, "Alice", first_event)
        )

        with pytest.raises(DuplicateTalkRoomError):
            await repository.create_talk_room(
                NewTalkRoom.open(user.id, "Alice", first_event)
            )

