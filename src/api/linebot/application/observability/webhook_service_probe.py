"""Protocol for webhook service observability.

Defines the interface for domain probes that capture application-level
domain events while an inbound message is resolved to a talk room.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class WebhookServiceProbe(Protocol):
    """Domain probe for webhook service operations."""

    def user_resolved(self, user_id: str, was_created: bool) -> None:
        """Record that the sender was resolved to a user."""
        ...

    def user_creation_race_lost(self, auth_id: str) -> None:
        """Record that another request created the user first."""
        ...

    def talk_room_resolved(self, talk_room_id: str, was_created: bool) -> None:
        """Record that the sender's talk room was resolved."""
        ...

    def talk_room_creation_race_lost(self, user_id: str) -> None:
        """Record that another request created the talk room first."""
        ...

    def message_recorded(self, talk_room_id: str, event_id: str) -> None:
        """Record that the inbound message is the room's latest event."""
        ...

    def message_handling_failed(self, auth_id: str, error: str) -> None:
        """Record that handling an inbound message failed."""
        ...

    def with_context(self, context: ObservationContext) -> WebhookServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultWebhookServiceProbe:
    """Default implementation of WebhookServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultWebhookServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultWebhookServiceProbe(logger=self._logger, context=context)

    def user_resolved(self, user_id: str, was_created: bool) -> None:
        """Record that the sender was resolved to a user."""
        self._logger.info(
            "webhook_user_resolved",
            primary_user_id=user_id,
            was_created=was_created,
            **self._get_context_kwargs(),
        )

    def user_creation_race_lost(self, auth_id: str) -> None:
        """Record that another request created the user first."""
        self._logger.warning(
            "webhook_user_creation_race_lost",
            auth_id=auth_id,
            **self._get_context_kwargs(),
        )

    def talk_room_resolved(self, talk_room_id: str, was_created: bool) -> None:
        """Record that the sender's talk room was resolved."""
        self._logger.info(
            "webhook_talk_room_resolved",
            room_id=talk_room_id,
            was_created=was_created,
            **self._get_context_kwargs(),
        )

    def talk_room_creation_race_lost(self, user_id: str) -> None:
        """Record that another request created the talk room first."""
        self._logger.warning(
            "webhook_talk_room_creation_race_lost",
            primary_user_id=user_id,
            **self._get_context_kwargs(),
        )

    def message_recorded(self, talk_room_id: str, event_id: str) -> None:
        """Record that the inbound message is the room's latest event."""
        self._logger.info(
            "webhook_message_recorded",
            room_id=talk_room_id,
            event_id=event_id,
            **self._get_context_kwargs(),
        )

    def message_handling_failed(self, auth_id: str, error: str) -> None:
        """Record that handling an inbound message failed."""
        self._logger.error(
            "webhook_message_handling_failed",
            auth_id=auth_id,
            error=error,
            **self._get_context_kwargs(),
        )
