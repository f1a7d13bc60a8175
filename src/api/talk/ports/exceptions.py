"""Talk-specific repository exceptions."""

from __future__ import annotations

from shared_kernel.exceptions import NotFoundError, RepositoryError


class TalkRoomNotFoundError(NotFoundError):
    """No talk room identity row exists for the user.

    This is the only talk read failure that means "create one".
    """

    def __init__(self, primary_user_id: str) -> None:
        super().__init__("talk_rooms", primary_user_id)
        self.primary_user_id = primary_user_id


class TalkRoomProjectionError(NotFoundError):
    """The identity row exists but its card or latest event document is missing."""


class DuplicateTalkRoomError(RepositoryError):
    """Another request already reserved a talk room for this user."""

    def __init__(self, primary_user_id: str) -> None:
        super().__init__(f"Talk room already exists for user {primary_user_id}")
        self.primary_user_id = primary_user_id
