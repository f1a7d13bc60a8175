"""Talk room repository over PostgreSQL and the document store.

The talk_rooms row is the source of truth for whether a user has a talk
room; the documents hold its state. Reads go row first, then card, then the
event the card points at.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from shared_kernel.document_store import DocumentPath, DocumentStore, DocumentStoreError
from shared_kernel.exceptions import (
    CouldNotInsertError,
    CouldNotUpdateError,
    UnexpectedRepositoryError,
)
from shared_kernel.value_objects import PrimaryUserId
from talk.domain.aggregates import NewTalkRoom, TalkRoom
from talk.infrastructure.documents import (
    EventDocument,
    TalkRoomCardDocument,
    event_path,
    talk_room_card_path,
)
from talk.infrastructure.models import TalkRoomModel
from talk.infrastructure.observability import (
    DefaultTalkRoomRepositoryProbe,
    TalkRoomRepositoryProbe,
)
from talk.infrastructure.talk_room_creation import TalkRoomCreationSaga
from talk.ports.exceptions import TalkRoomNotFoundError, TalkRoomProjectionError
from talk.ports.repositories import ITalkRoomRepository

_DocumentT = TypeVar("_DocumentT", EventDocument, TalkRoomCardDocument)


class TalkRoomRepository(ITalkRoomRepository):
    """Repository for talk rooms split across a relational and a document store.

    Args:
        session_factory: Factory producing AsyncSession instances
        document_store: Store holding the room, card and event documents
        write_timeout: Seconds allowed for each document write
        probe: Optional domain probe for observability
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        document_store: DocumentStore,
        write_timeout: float = 5.0,
        probe: TalkRoomRepositoryProbe | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._document_store = document_store
        self._write_timeout = write_timeout
        self._probe = probe or DefaultTalkRoomRepositoryProbe()

    async def get_talk_room(self, primary_user_id: PrimaryUserId) -> TalkRoom:
        """Read the user's talk room with its card and latest event.

        Raises:
            TalkRoomNotFoundError: If the user has no talk room yet
            TalkRoomProjectionError: If the card or latest event is missing
            UnexpectedRepositoryError: If a document could not be read or parsed
        """
        async with self._session_factory() as session:
            model = await session.get(TalkRoomModel, primary_user_id.value)

        if model is None:
            self._probe.talk_room_not_found(primary_user_id.value)
            raise TalkRoomNotFoundError(primary_user_id.value)

        document_id = model.document_id
        card_path = talk_room_card_path(document_id)
        card = await self._read_required(document_id, card_path, TalkRoomCardDocument)

        latest_path = event_path(document_id, card.latest_message)
        event_document = await self._read_required(
            document_id, latest_path, EventDocument
        )
        event = event_document.to_domain(card.latest_message)

        self._probe.talk_room_retrieved(primary_user_id.value, document_id)
        return card.to_talk_room(document_id, primary_user_id.value, event)

    async def create_talk_room(self, new_talk_room: NewTalkRoom) -> TalkRoom:
        """Create the room's identity row and documents as one unit.

        Raises:
            DuplicateTalkRoomError: If the user already has a talk room
            CouldNotInsertError: If a document write failed or timed out
        """
        saga = TalkRoomCreationSaga(
            new_talk_room,
            session_factory=self._session_factory,
            document_store=self._document_store,
            write_timeout=self._write_timeout,
            probe=self._probe,
        )
        await saga.run()

        self._probe.talk_room_created(
            new_talk_room.primary_user_id.value, new_talk_room.id.value
        )
        return new_talk_room.to_talk_room()

    async def append_event(self, new_talk_room: NewTalkRoom) -> TalkRoom:
        """Write the new event, then point the card at it.

        The card is only updated once the event exists, so a reader never
        sees a card referencing a missing event. If the card update fails
        the event stays behind unreferenced.

        Raises:
            CouldNotInsertError: If the event could not be written
            CouldNotUpdateError: If the card could not be updated
        """
        document_id = new_talk_room.id.value
        event = new_talk_room.latest_message
        path = event_path(document_id, event.id.value)
        try:
            await self._write(
                self._document_store.insert(
                    path, EventDocument.from_domain(event).to_data()
                )
            )
        except (DocumentStoreError, TimeoutError) as e:
            self._probe.document_write_failed(document_id, str(path), "insert", repr(e))
            raise CouldNotInsertError(path.collection, path.document_id) from e

        card_path = talk_room_card_path(document_id)
        card = TalkRoomCardDocument.from_domain(new_talk_room)
        try:
            await self._write(
                self._document_store.update(card_path, card.latest_message_update())
            )
        except (DocumentStoreError, TimeoutError) as e:
            self._probe.document_write_failed(
                document_id, str(card_path), "update", repr(e)
            )
            self._probe.orphaned_documents(document_id, [str(path)])
            raise CouldNotUpdateError(card_path.collection, card_path.document_id) from e

        self._probe.event_appended(document_id, event.id.value)
        return new_talk_room.to_talk_room()

    async def _write(self, operation: Awaitable[None]) -> None:
        async with asyncio.timeout(self._write_timeout):
            await operation

    async def _read_required(
        self, document_id: str, path: DocumentPath, document_type: type[_DocumentT]
    ) -> _DocumentT:
        try:
            data = await self._document_store.get(path)
        except DocumentStoreError as e:
            raise UnexpectedRepositoryError(f"Failed to read {path}: {e}") from e

        if data is None:
            self._probe.projection_missing(
                document_id, path.collection, path.document_id
            )
            raise TalkRoomProjectionError(path.collection, path.document_id)

        try:
            return document_type.model_validate(data)
        except ValidationError as e:
            raise UnexpectedRepositoryError(f"Malformed document at {path}: {e}") from e
