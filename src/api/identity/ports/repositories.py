"""Repository and service protocols (ports) for the Identity context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from identity.domain.aggregates import User
from identity.domain.value_objects import LineId, UserProfile


@runtime_checkable
class IUserRepository(Protocol):
    """Transactional store for the canonical user record."""

    async def get_user(self, auth_id: LineId) -> User:
        """Retrieve the user bound to an auth identity.

        Args:
            auth_id: External auth identity

        Returns:
            The User aggregate

        Raises:
            NotAuthFoundError: If no user is bound to auth_id
        """
        ...

    async def create_user(self, profile: UserProfile) -> User:
        """Allocate a primary user id and persist the user in one transaction.

        Args:
            profile: Provider profile of the new user

        Returns:
            The fully materialized User aggregate

        Raises:
            DuplicateAuthIdentityError: If the auth id is already bound
        """
        ...


@runtime_checkable
class IProfileFetcher(Protocol):
    """Looks up a user's profile at the identity provider."""

    async def fetch_profile(self, auth_id: LineId) -> UserProfile:
        """Fetch the provider profile for an auth identity.

        Raises:
            ProfileFetchError: If the provider cannot return a profile
        """
        ...
