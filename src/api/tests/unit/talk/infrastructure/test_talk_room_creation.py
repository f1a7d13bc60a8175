"""Unit tests for TalkRoomCreationSaga.

A talk room's identity row must be committed only when all of its
documents were written; every failure path has to end ROLLED_BACK with no
row left behind.
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock, call

import pytest

from shared_kernel.exceptions import CouldNotInsertError
from shared_kernel.value_objects import PrimaryUserId
from talk.domain.aggregates import Event, NewTalkRoom
from talk.infrastructure.models import TalkRoomModel
from talk.infrastructure.talk_room_creation import CreationState, TalkRoomCreationSaga
from talk.ports.exceptions import DuplicateTalkRoomError

T0 = datetime(2026, 1, 1, tzinfo=UTC)


@pytest.fixture
def mock_probe():
    """Create mock repository probe."""
    return MagicMock()


@pytest.fixture
def new_talk_room():
    """A room opened by a first message."""
    event = Event.new("hello", send_at=T0 + timedelta(seconds=100))
    return NewTalkRoom.open(PrimaryUserId.generate(), "Alice", event, now=T0)


@pytest.fixture
def make_saga(session_factory, document_store, mock_probe):
    """Build a saga over the fakes with a short write timeout."""

    def _make(new_talk_room):
        return TalkRoomCreationSaga(
            new_talk_room,
            session_factory=session_factory,
            document_store=document_store,
            write_timeout=0.05,
            probe=mock_probe,
        )

    return _make


def _room_path(new_talk_room) -> str:
    return f"talkRooms/{new_talk_room.id.value}"


class TestSuccessfulCreation:
    """Tests for the happy path."""

    @pytest.mark.asyncio
    async def test_commits_row_after_all_documents(
        self, make_saga, new_talk_room, database, document_store
    ):
        """Row is committed and all three documents exist."""
        saga = make_saga(new_talk_room)

        await saga.run()

        assert saga.state is CreationState.COMMITTED
        assert database.commits == 1
        [row] = database.rows("talk_rooms")
        assert row.primary_user_id == new_talk_room.primary_user_id.value
        assert row.document_id == new_talk_room.id.value
        assert [path for _, path in document_store.calls] == [
            _room_path(new_talk_room),
            f"talkRoomCards/{new_talk_room.id.value}",
            f"{_room_path(new_talk_room)}/events/"
            f"{new_talk_room.latest_message.id.value}",
        ]

    @pytest.mark.asyncio
    async def test_records_state_transitions(self, make_saga, new_talk_room, mock_probe):
        """Each transition should be observable."""
        await make_saga(new_talk_room).run()

        room_id = new_talk_room.id.value
        assert mock_probe.creation_state_changed.call_args_list == [
            call(room_id, "absent", "identity_reserved"),
            call(room_id, "identity_reserved", "committed"),
        ]

    @pytest.mark.asyncio
    async def test_writes_card_defaults(self, make_saga, new_talk_room, document_store):
        """Card starts followed, unpinned and pointing at the first event."""
        await make_saga(new_talk_room).run()

        card = document_store.documents[f"talkRoomCards/{new_talk_room.id.value}"]
        assert card["display_name"] == "Alice"
        assert card["rsvp"] is False
        assert card["pinned"] is False
        assert card["follow"] is True
        assert card["latest_message"] == new_talk_room.latest_message.id.value

    @pytest.mark.asyncio
    async def test_cannot_run_twice(self, make_saga, new_talk_room):
        """A saga describes exactly one creation."""
        saga = make_saga(new_talk_room)
        await saga.run()

        with pytest.raises(RuntimeError):
            await saga.run()


class TestDocumentFailures:
    """Tests for failures after the identity row was reserved."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("collection", ["talkRooms", "talkRoomCards", "events"])
    async def test_failed_write_rolls_back_identity(
        self, make_saga, new_talk_room, database, document_store, collection
    ):
        """No identity row survives a failed document write."""
        document_store.fail("insert", collection)
        saga = make_saga(new_talk_room)

        with pytest.raises(CouldNotInsertError) as exc_info:
            await saga.run()

        assert exc_info.value.resource == collection
        assert saga.state is CreationState.ROLLED_BACK
        assert database.rows("talk_rooms") == []
        assert database.commits == 0
        assert database.rollbacks == 1

    @pytest.mark.asyncio
    async def test_timed_out_write_rolls_back_identity(
        self, make_saga, new_talk_room, database, document_store
    ):
        """A write that outlives the timeout counts as failed."""
        document_store.stall("insert", "talkRoomCards", seconds=1.0)
        saga = make_saga(new_talk_room)

        with pytest.raises(CouldNotInsertError) as exc_info:
            await saga.run()

        assert isinstance(exc_info.value.__cause__, TimeoutError)
        assert exc_info.value.key == new_talk_room.id.value
        assert saga.state is CreationState.ROLLED_BACK
        assert database.commits == 0

    @pytest.mark.asyncio
    async def test_reports_documents_left_behind(
        self, make_saga, new_talk_room, document_store, mock_probe
    ):
        """Documents written before the failure are reported as orphaned."""
        document_store.fail("insert", "events")

        with pytest.raises(CouldNotInsertError):
            await make_saga(new_talk_room).run()

        mock_probe.orphaned_documents.assert_called_once_with(
            new_talk_room.id.value,
            [_room_path(new_talk_room), f"talkRoomCards/{new_talk_room.id.value}"],
        )

    @pytest.mark.asyncio
    async def test_first_write_failure_orphans_nothing(
        self, make_saga, new_talk_room, document_store, mock_probe
    ):
        """Nothing is reported when no document was written."""
        document_store.fail("insert", "talkRooms")

        with pytest.raises(CouldNotInsertError):
            await make_saga(new_talk_room).run()

        mock_probe.orphaned_documents.assert_not_called()

    @pytest.mark.asyncio
    async def test_commit_failure_rolls_back(
        self, make_saga, new_talk_room, database, mock_probe
    ):
        """A failing commit leaves all three documents orphaned."""
        database.commit_error = RuntimeError("connection lost")
        saga = make_saga(new_talk_room)

        with pytest.raises(RuntimeError, match="connection lost"):
            await saga.run()

        assert saga.state is CreationState.ROLLED_BACK
        assert database.rows("talk_rooms") == []
        orphaned = mock_probe.orphaned_documents.call_args.args[1]
        assert len(orphaned) == 3


class TestDuplicateIdentity:
    """Tests for losing the reservation race."""

    @pytest.mark.asyncio
    async def test_existing_row_raises_duplicate(
        self, make_saga, new_talk_room, database, document_store
    ):
        """The loser writes no documents."""
        user_id = new_talk_room.primary_user_id.value
        database.tables["talk_rooms"][(user_id,)] = TalkRoomModel(
            primary_user_id=user_id, document_id="01WINNER", created_at=T0
        )
        saga = make_saga(new_talk_room)

        with pytest.raises(DuplicateTalkRoomError) as exc_info:
            await saga.run()

        assert exc_info.value.primary_user_id == user_id
        assert saga.state is CreationState.ROLLED_BACK
        assert document_store.calls == []
        assert database.rows("talk_rooms")[0].document_id == "01WINNER"
