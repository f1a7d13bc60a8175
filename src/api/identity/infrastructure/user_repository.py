"""PostgreSQL implementation of IUserRepository.

Users are created just-in-time from the first webhook of an unseen auth
identity; this repository allocates the primary id and binds the provider
identity to it in a single transaction.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from identity.domain.aggregates import User
from identity.domain.value_objects import LineId, LineUserProfile, UserProfile
from identity.infrastructure.models import LineUserModel, PrimaryUserModel
from identity.infrastructure.observability import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)
from identity.ports.exceptions import DuplicateAuthIdentityError
from identity.ports.repositories import IUserRepository
from shared_kernel.exceptions import NotAuthFoundError
from shared_kernel.value_objects import PrimaryUserId

_LINE_ID_UNIQUE_INDEX = "ix_line_users_line_id"


class UserRepository(IUserRepository):
    """PostgreSQL-backed repository for User aggregates.

    Each operation opens its own session so a transaction never spans
    more than one logical operation.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        probe: UserRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with a session factory and probe.

        Args:
            session_factory: Factory producing AsyncSession instances
            probe: Optional domain probe for observability
        """
        self._session_factory = session_factory
        self._probe = probe or DefaultUserRepositoryProbe()

    async def get_user(self, auth_id: LineId) -> User:
        """Retrieve the user bound to a LINE identity.

        Args:
            auth_id: The LINE user id

        Returns:
            The User aggregate

        Raises:
            NotAuthFoundError: If no user is bound to auth_id
        """
        async with self._session_factory() as session:
            stmt = select(LineUserModel).where(LineUserModel.line_id == auth_id.value)
            result = await session.execute(stmt)
            model = result.scalar_one_or_none()

        if model is None:
            self._probe.auth_identity_not_found(auth_id.value)
            raise NotAuthFoundError(auth_id.value)

        self._probe.user_retrieved(model.primary_user_id, auth_id.value)
        return self._to_domain(model)

    async def create_user(self, profile: UserProfile) -> User:
        """Allocate a primary user id and bind the profile's identity to it.

        Both rows are written in one transaction; nothing is visible if
        either insert fails.

        Args:
            profile: Provider profile of the new user

        Returns:
            The newly created User aggregate

        Raises:
            DuplicateAuthIdentityError: If the auth id is already bound
        """
        user_id = PrimaryUserId.generate()
        now = datetime.now(UTC)
        match profile:
            case LineUserProfile(auth_id=auth_id):
                model = LineUserModel(
                    primary_user_id=user_id.value,
                    line_id=auth_id.value,
                    display_name=profile.display_name,
                    picture_url=profile.picture_url,
                    created_at=now,
                    updated_at=now,
                )
            case _:
                raise TypeError(f"Unsupported profile type: {type(profile).__name__}")

        try:
            async with self._session_factory() as session, session.begin():
                session.add(
                    PrimaryUserModel(id=user_id.value, created_at=now, updated_at=now)
                )
                # Parent row must exist before the foreign key is checked
                await session.flush()
                session.add(model)
                await session.flush()
        except IntegrityError as e:
            if _LINE_ID_UNIQUE_INDEX in str(e):
                self._probe.duplicate_auth_identity(profile.auth_id.value)
                raise DuplicateAuthIdentityError(profile.auth_id.value) from e
            raise

        self._probe.user_created(
            user_id.value, profile.auth_id.value, profile.provider.value
        )
        return self._to_domain(model)

    @staticmethod
    def _to_domain(model: LineUserModel) -> User:
        return User(
            id=PrimaryUserId(value=model.primary_user_id),
            auth_id=LineId(value=model.line_id),
            display_name=model.display_name,
            picture_url=model.picture_url,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
