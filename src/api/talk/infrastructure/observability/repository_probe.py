"""Domain probe for talk room repository operations.

Covers both halves of a talk room's storage: the identity row and the
document projections, including the creation saga's state transitions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TalkRoomRepositoryProbe(Protocol):
    """Domain probe for talk room repository operations."""

    def talk_room_retrieved(self, primary_user_id: str, talk_room_id: str) -> None:
        """Record that a talk room was read."""
        ...

    def talk_room_not_found(self, primary_user_id: str) -> None:
        """Record that the user has no talk room identity row."""
        ...

    def projection_missing(
        self, talk_room_id: str, collection: str, document_id: str
    ) -> None:
        """Record that the identity row exists but a document is missing."""
        ...

    def creation_state_changed(
        self, talk_room_id: str, from_state: str, to_state: str
    ) -> None:
        """Record a creation saga state transition."""
        ...

    def duplicate_talk_room(self, primary_user_id: str) -> None:
        """Record that a concurrent creation already reserved the talk room."""
        ...

    def document_write_failed(
        self, talk_room_id: str, path: str, operation: str, error: str
    ) -> None:
        """Record that a document write failed or timed out."""
        ...

    def orphaned_documents(self, talk_room_id: str, paths: list[str]) -> None:
        """Record documents left behind without a committed identity row."""
        ...

    def talk_room_created(self, primary_user_id: str, talk_room_id: str) -> None:
        """Record that a talk room was created."""
        ...

    def event_appended(self, talk_room_id: str, event_id: str) -> None:
        """Record that an event became the talk room's latest message."""
        ...

    def with_context(self, context: ObservationContext) -> TalkRoomRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTalkRoomRepositoryProbe:
    """Default implementation of TalkRoomRepositoryProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultTalkRoomRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultTalkRoomRepositoryProbe(logger=self._logger, context=context)

    def talk_room_retrieved(self, primary_user_id: str, talk_room_id: str) -> None:
        self._logger.debug(
            "talk_room_retrieved",
            primary_user_id=primary_user_id,
            room_id=talk_room_id,
            **self._get_context_kwargs(),
        )

    def talk_room_not_found(self, primary_user_id: str) -> None:
        self._logger.debug(
            "talk_room_not_found",
            primary_user_id=primary_user_id,
            **self._get_context_kwargs(),
        )

    def projection_missing(
        self, talk_room_id: str, collection: str, document_id: str
    ) -> None:
        self._logger.error(
            "talk_room_projection_missing",
            room_id=talk_room_id,
            collection=collection,
            document_id=document_id,
            **self._get_context_kwargs(),
        )

    def creation_state_changed(
        self, talk_room_id: str, from_state: str, to_state: str
    ) -> None:
        self._logger.debug(
            "talk_room_creation_state_changed",
            room_id=talk_room_id,
            from_state=from_state,
            to_state=to_state,
            **self._get_context_kwargs(),
        )

    def duplicate_talk_room(self, primary_user_id: str) -> None:
        self._logger.warning(
            "duplicate_talk_room",
            primary_user_id=primary_user_id,
            **self._get_context_kwargs(),
        )

    def document_write_failed(
        self, talk_room_id: str, path: str, operation: str, error: str
    ) -> None:
        self._logger.error(
            "talk_room_document_write_failed",
            room_id=talk_room_id,
            path=path,
            operation=operation,
            error=error,
            **self._get_context_kwargs(),
        )

    def orphaned_documents(self, talk_room_id: str, paths: list[str]) -> None:
        self._logger.warning(
            "talk_room_documents_orphaned",
            room_id=talk_room_id,
            paths=paths,
            **self._get_context_kwargs(),
        )

    def talk_room_created(self, primary_user_id: str, talk_room_id: str) -> None:
        self._logger.info(
            "talk_room_created",
            primary_user_id=primary_user_id,
            room_id=talk_room_id,
            **self._get_context_kwargs(),
        )

    def event_appended(self, talk_room_id: str, event_id: str) -> None:
        self._logger.info(
            "talk_room_event_appended",
            room_id=talk_room_id,
            event_id=event_id,
            **self._get_context_kwargs(),
        )
