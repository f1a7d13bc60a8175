"""Domain probe for user repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to user persistence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserRepositoryProbe(Protocol):
    """Domain probe for user repository operations."""

    def user_created(self, user_id: str, auth_id: str, provider: str) -> None:
        """Record that a user was created."""
        ...

    def user_retrieved(self, user_id: str, auth_id: str) -> None:
        """Record that a user was retrieved."""
        ...

    def auth_identity_not_found(self, auth_id: str) -> None:
        """Record that no user is bound to an auth identity."""
        ...

    def duplicate_auth_identity(self, auth_id: str) -> None:
        """Record that a concurrent creation already bound the auth identity."""
        ...

    def with_context(self, context: ObservationContext) -> UserRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserRepositoryProbe:
    """Default implementation of UserRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultUserRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserRepositoryProbe(logger=self._logger, context=context)

    def user_created(self, user_id: str, auth_id: str, provider: str) -> None:
        """Record that a user was created."""
        self._logger.info(
            "user_created",
            primary_user_id=user_id,
            auth_id=auth_id,
            provider=provider,
            **self._get_context_kwargs(),
        )

    def user_retrieved(self, user_id: str, auth_id: str) -> None:
        """Record that a user was retrieved."""
        self._logger.debug(
            "user_retrieved",
            primary_user_id=user_id,
            auth_id=auth_id,
            **self._get_context_kwargs(),
        )

    def auth_identity_not_found(self, auth_id: str) -> None:
        """Record that no user is bound to an auth identity."""
        self._logger.debug(
            "auth_identity_not_found",
            auth_id=auth_id,
            **self._get_context_kwargs(),
        )

    def duplicate_auth_identity(self, auth_id: str) -> None:
        """Record that a concurrent creation already bound the auth identity."""
        self._logger.warning(
            "duplicate_auth_identity",
            auth_id=auth_id,
            **self._get_context_kwargs(),
        )
