"""Two-phase creation of a talk room across both stores.

The relational row reserves the room for the user; the document-store writes
make it usable. No transaction spans both stores, so the saga holds the
relational transaction open while the documents are written and lets it
commit only when every write has succeeded:

    ABSENT -> IDENTITY_RESERVED -> COMMITTED
       |             |
       +-------------+--> ROLLED_BACK

A failed or timed-out document write rolls the reservation back, so a user
can never end up with an identity row that points at missing documents.
Documents written before the failure stay behind unreferenced and are
reported through the probe.
"""

from __future__ import annotations

import asyncio
from enum import StrEnum
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from shared_kernel.document_store import (
    DocumentPath,
    DocumentStore,
    DocumentStoreError,
)
from shared_kernel.exceptions import CouldNotInsertError
from talk.domain.aggregates import NewTalkRoom
from talk.infrastructure.documents import (
    EventDocument,
    TalkRoomCardDocument,
    TalkRoomDocument,
    event_path,
    talk_room_card_path,
    talk_room_path,
)
from talk.infrastructure.models import TalkRoomModel
from talk.infrastructure.observability import (
    DefaultTalkRoomRepositoryProbe,
    TalkRoomRepositoryProbe,
)
from talk.ports.exceptions import DuplicateTalkRoomError

_TALK_ROOM_PKEY = "talk_rooms_pkey"


class CreationState(StrEnum):
    """States of a talk room creation."""

    ABSENT = "absent"
    IDENTITY_RESERVED = "identity_reserved"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


_ALLOWED_TRANSITIONS: dict[CreationState, frozenset[CreationState]] = {
    CreationState.ABSENT: frozenset(
        {CreationState.IDENTITY_RESERVED, CreationState.ROLLED_BACK}
    ),
    CreationState.IDENTITY_RESERVED: frozenset(
        {CreationState.COMMITTED, CreationState.ROLLED_BACK}
    ),
    CreationState.COMMITTED: frozenset(),
    CreationState.ROLLED_BACK: frozenset(),
}


class TalkRoomCreationSaga:
    """Creates one talk room. Single use: run() may be awaited once."""

    def __init__(
        self,
        new_talk_room: NewTalkRoom,
        session_factory: async_sessionmaker[AsyncSession],
        document_store: DocumentStore,
        write_timeout: float,
        probe: TalkRoomRepositoryProbe | None = None,
    ) -> None:
        self._new_talk_room = new_talk_room
        self._session_factory = session_factory
        self._document_store = document_store
        self._write_timeout = write_timeout
        self._probe = probe or DefaultTalkRoomRepositoryProbe()
        self._written: list[DocumentPath] = []
        self.state = CreationState.ABSENT

    async def run(self) -> None:
        """Reserve the identity row, write the documents, then commit.

        Raises:
            DuplicateTalkRoomError: If the user already has a talk room
            CouldNotInsertError: If a document write failed or timed out
            RuntimeError: If the saga was already run
        """
        if self.state is not CreationState.ABSENT:
            raise RuntimeError(f"Creation already run (state={self.state})")

        try:
            async with self._session_factory() as session, session.begin():
                await self._reserve_identity(session)
                await self._write_documents()
        except BaseException:
            self._transition(CreationState.ROLLED_BACK)
            if self._written:
                self._probe.orphaned_documents(
                    self._new_talk_room.id.value,
                    [str(path) for path in self._written],
                )
            raise

        self._transition(CreationState.COMMITTED)

    async def _reserve_identity(self, session: AsyncSession) -> None:
        room = self._new_talk_room
        session.add(
            TalkRoomModel(
                primary_user_id=room.primary_user_id.value,
                document_id=room.id.value,
                created_at=room.created_at,
            )
        )
        try:
            await session.flush()
        except IntegrityError as e:
            if _TALK_ROOM_PKEY in str(e):
                self._probe.duplicate_talk_room(room.primary_user_id.value)
                raise DuplicateTalkRoomError(room.primary_user_id.value) from e
            raise

        self._transition(CreationState.IDENTITY_RESERVED)

    async def _write_documents(self) -> None:
        room = self._new_talk_room
        event = room.latest_message
        writes: list[tuple[DocumentPath, dict[str, Any]]] = [
            (talk_room_path(room.id.value), TalkRoomDocument.from_domain(room).to_data()),
            (
                talk_room_card_path(room.id.value),
                TalkRoomCardDocument.from_domain(room).to_data(),
            ),
            (
                event_path(room.id.value, event.id.value),
                EventDocument.from_domain(event).to_data(),
            ),
        ]
        for path, data in writes:
            await self._insert(path, data)

    async def _insert(self, path: DocumentPath, data: dict[str, Any]) -> None:
        try:
            async with asyncio.timeout(self._write_timeout):
                await self._document_store.insert(path, data)
        except (DocumentStoreError, TimeoutError) as e:
            self._probe.document_write_failed(
                self._new_talk_room.id.value, str(path), "insert", repr(e)
            )
            raise CouldNotInsertError(path.collection, path.document_id) from e
        self._written.append(path)

    def _transition(self, to_state: CreationState) -> None:
        if to_state not in _ALLOWED_TRANSITIONS[self.state]:
            raise RuntimeError(f"Invalid creation transition {self.state} -> {to_state}")
        self._probe.creation_state_changed(
            self._new_talk_room.id.value, self.state.value, to_state.value
        )
        self.state = to_state
