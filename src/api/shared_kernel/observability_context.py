"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures request-scoped and domain-relevant metadata that should be
    included with all instrumentation events. For webhook handling the
    request id is the platform's webhook event id, which lets redeliveries
    of the same event be correlated.

    Attributes:
        request_id: Unique identifier for the current request/operation.
        sender_id: LINE user id of the message sender.
        user_id: Primary user id, once resolved.
        talk_room_id: Talk room document id, once resolved.
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="01H...", sender_id="U100")
        probe = DefaultTalkRoomRepositoryProbe().with_context(context)
    """

    request_id: str | None = None
    sender_id: str | None = None
    user_id: str | None = None
    talk_room_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.sender_id is not None:
            result["sender_id"] = self.sender_id
        if self.user_id is not None:
            result["user_id"] = self.user_id
        if self.talk_room_id is not None:
            result["talk_room_id"] = self.talk_room_id
        result.update(self.extra)
        return result

    def with_user(self, user_id: str) -> ObservationContext:
        """Create a new context with the primary user id set."""
        return ObservationContext(
            request_id=self.request_id,
            sender_id=self.sender_id,
            user_id=user_id,
            talk_room_id=self.talk_room_id,
            extra=self.extra,
        )

    def with_talk_room(self, talk_room_id: str) -> ObservationContext:
        """Create a new context with the talk room id set."""
        return ObservationContext(
            request_id=self.request_id,
            sender_id=self.sender_id,
            user_id=self.user_id,
            talk_room_id=talk_room_id,
            extra=self.extra,
        )

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        return ObservationContext(
            request_id=self.request_id,
            sender_id=self.sender_id,
            user_id=self.user_id,
            talk_room_id=self.talk_room_id,
            extra={**self.extra, **kwargs},
        )
