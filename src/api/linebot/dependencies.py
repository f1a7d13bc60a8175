"""Wiring for the LINE bot context.

Builds the webhook service from settings. This is the only module that
composes the Identity and Talk contexts with concrete infrastructure.
"""

from __future__ import annotations

from functools import lru_cache

from identity.infrastructure.line_profile_client import LineProfileClient
from identity.infrastructure.user_repository import UserRepository
from infrastructure.database.dependencies import (
    close_database_connections,
    get_session_factory,
)
from infrastructure.logging import configure_logging
from infrastructure.settings import (
    get_firestore_settings,
    get_line_settings,
    get_settings,
)
from linebot.application.services import LinebotWebhookService
from shared_kernel.document_store.firestore import FirestoreDocumentStore
from talk.infrastructure.talk_room_repository import TalkRoomRepository


@lru_cache
def get_document_store() -> FirestoreDocumentStore:
    """Get the application-scoped Firestore document store (singleton)."""
    settings = get_firestore_settings()
    return FirestoreDocumentStore(
        project_id=settings.project_id, database=settings.database
    )


def get_profile_client() -> LineProfileClient:
    """Get a LINE profile client authenticated with the channel token."""
    settings = get_line_settings()
    return LineProfileClient(
        channel_access_token=settings.channel_access_token.get_secret_value(),
        base_url=settings.api_base_url,
        timeout=settings.request_timeout_seconds,
    )


def build_webhook_service() -> LinebotWebhookService:
    """Build a LinebotWebhookService wired to PostgreSQL, Firestore and LINE.

    Configures logging on first use. Repositories share the process-wide
    session factory and document store.
    """
    configure_logging(get_settings().log_level)
    session_factory = get_session_factory()
    return LinebotWebhookService(
        user_repository=UserRepository(session_factory),
        profile_fetcher=get_profile_client(),
        talk_room_repository=TalkRoomRepository(
            session_factory,
            get_document_store(),
            write_timeout=get_firestore_settings().write_timeout_seconds,
        ),
    )


async def close_resources() -> None:
    """Close the document store client and dispose the database engine."""
    if get_document_store.cache_info().currsize:
        await get_document_store().close()
        get_document_store.cache_clear()
    await close_database_connections()
