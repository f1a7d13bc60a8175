"""Application-level value objects for LINE webhook handling."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True)
class InboundMessage:
    """A text message received from LINE.

    Attributes:
        text: Message text
        sent_at: When the user sent the message
        webhook_event_id: LINE's id for the webhook event, stable across
            redeliveries
    """

    text: str
    sent_at: datetime
    webhook_event_id: str | None = None

    @classmethod
    def from_webhook_event(cls, event: dict[str, Any]) -> InboundMessage:
        """Build from a single LINE "message" webhook event.

        Only text messages are supported. LINE timestamps are epoch
        milliseconds.

        Raises:
            ValueError: If the event is not a text message event
        """
        if event.get("type") != "message":
            raise ValueError(f"Not a message event: {event.get('type')!r}")

        message = event.get("message") or {}
        if message.get("type") != "text":
            raise ValueError(f"Unsupported message type: {message.get('type')!r}")

        try:
            timestamp_ms = int(event["timestamp"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError("Message event has no valid timestamp") from e

        return cls(
            text=message.get("text", ""),
            sent_at=datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC),
            webhook_event_id=event.get("webhookEventId"),
        )

    @staticmethod
    def sender_id(event: dict[str, Any]) -> str:
        """Return the LINE user id of the event's sender.

        Raises:
            ValueError: If the event was not sent by a user
        """
        source = event.get("source") or {}
        user_id = source.get("userId")
        if not user_id:
            raise ValueError("Webhook event has no source user id")
        return user_id
