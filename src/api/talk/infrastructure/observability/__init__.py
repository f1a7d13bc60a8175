"""Observability probes for talk room persistence."""

from talk.infrastructure.observability.repository_probe import (
    DefaultTalkRoomRepositoryProbe,
    TalkRoomRepositoryProbe,
)

__all__ = [
    "DefaultTalkRoomRepositoryProbe",
    "TalkRoomRepositoryProbe",
]
