"""Webhook application service for the LINE bot context.

Resolves the sender of an inbound message to a user and a talk room,
creating either just-in-time, and records the message as the room's latest
event.
"""

from __future__ import annotations

from identity.domain.aggregates import User
from identity.domain.value_objects import LineId
from identity.ports.exceptions import DuplicateAuthIdentityError
from identity.ports.repositories import IProfileFetcher, IUserRepository
from linebot.application.observability import (
    DefaultWebhookServiceProbe,
    WebhookServiceProbe,
)
from linebot.application.value_objects import InboundMessage
from shared_kernel.exceptions import NotAuthFoundError
from shared_kernel.observability_context import ObservationContext
from talk.domain.aggregates import Event, NewTalkRoom, TalkRoom
from talk.ports.exceptions import DuplicateTalkRoomError, TalkRoomNotFoundError
from talk.ports.repositories import ITalkRoomRepository


class LinebotWebhookService:
    """Application service handling inbound LINE messages.

    Steps run strictly in sequence within one call. Concurrent calls for the
    same sender are resolved by the stores' uniqueness constraints: the
    loser of a creation race re-reads the winner's record once.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        profile_fetcher: IProfileFetcher,
        talk_room_repository: ITalkRoomRepository,
        probe: WebhookServiceProbe | None = None,
    ):
        """Initialize LinebotWebhookService with dependencies.

        Args:
            user_repository: Repository for user identities
            profile_fetcher: Client fetching profiles of unseen senders
            talk_room_repository: Repository for talk rooms
            probe: Optional domain probe for observability
        """
        self._user_repository = user_repository
        self._profile_fetcher = profile_fetcher
        self._talk_room_repository = talk_room_repository
        self._probe = probe or DefaultWebhookServiceProbe()

    async def handle_inbound_message(
        self, auth_id: LineId, message: InboundMessage
    ) -> TalkRoom:
        """Record an inbound message in the sender's talk room.

        Creates the user and the talk room on first contact. When the talk
        room already exists the message is appended as its latest event;
        when it is created the message is its first event.

        Args:
            auth_id: LINE user id of the sender
            message: The inbound message

        Returns:
            The talk room with the message as its latest event

        Raises:
            ProfileFetchError: If an unseen sender's profile could not be fetched
            TalkRoomProjectionError: If the talk room's documents are missing
            CouldNotInsertError: If a document write failed
            CouldNotUpdateError: If the talk room card could not be updated
        """
        context = ObservationContext(
            request_id=message.webhook_event_id, sender_id=auth_id.value
        )
        probe = self._probe.with_context(context)

        try:
            user = await self._resolve_user(auth_id, probe)
            context = context.with_user(user.id.value)
            probe = self._probe.with_context(context)

            event = Event.new(message.text, send_at=message.sent_at)
            talk_room, created = await self._resolve_talk_room(user, event, probe)
            probe = self._probe.with_context(context.with_talk_room(talk_room.id.value))

            if not created:
                talk_room = await self._talk_room_repository.append_event(
                    NewTalkRoom.advance(talk_room, event)
                )
        except Exception as e:
            probe.message_handling_failed(auth_id.value, repr(e))
            raise

        probe.message_recorded(talk_room.id.value, event.id.value)
        return talk_room

    async def _resolve_user(self, auth_id: LineId, probe: WebhookServiceProbe) -> User:
        try:
            user = await self._user_repository.get_user(auth_id)
        except NotAuthFoundError:
            pass
        else:
            probe.user_resolved(user.id.value, was_created=False)
            return user

        profile = await self._profile_fetcher.fetch_profile(auth_id)
        try:
            user = await self._user_repository.create_user(profile)
        except DuplicateAuthIdentityError:
            probe.user_creation_race_lost(auth_id.value)
            user = await self._user_repository.get_user(auth_id)
            probe.user_resolved(user.id.value, was_created=False)
            return user

        probe.user_resolved(user.id.value, was_created=True)
        return user

    async def _resolve_talk_room(
        self, user: User, event: Event, probe: WebhookServiceProbe
    ) -> tuple[TalkRoom, bool]:
        """Return the user's talk room and whether this call created it."""
        try:
            talk_room = await self._talk_room_repository.get_talk_room(user.id)
        except TalkRoomNotFoundError:
            pass
        else:
            probe.talk_room_resolved(talk_room.id.value, was_created=False)
            return talk_room, False

        try:
            talk_room = await self._talk_room_repository.create_talk_room(
                NewTalkRoom.open(user.id, user.display_name, event)
            )
        except DuplicateTalkRoomError:
            probe.talk_room_creation_race_lost(user.id.value)
            talk_room = await self._talk_room_repository.get_talk_room(user.id)
            probe.talk_room_resolved(talk_room.id.value, was_created=False)
            return talk_room, False

        probe.talk_room_resolved(talk_room.id.value, was_created=True)
        return talk_room, True
