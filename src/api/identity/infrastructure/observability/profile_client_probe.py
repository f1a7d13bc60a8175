"""Domain probe for identity provider profile lookups."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ProfileClientProbe(Protocol):
    """Domain probe for profile lookups at the identity provider."""

    def profile_requested(self, auth_id: str) -> None:
        """Record that a profile lookup started."""
        ...

    def profile_fetched(self, auth_id: str) -> None:
        """Record that a profile was returned."""
        ...

    def profile_fetch_failed(
        self,
        auth_id: str,
        reason: str,
        status_code: int | None = None,
    ) -> None:
        """Record that a profile lookup failed."""
        ...

    def with_context(self, context: ObservationContext) -> ProfileClientProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultProfileClientProbe:
    """Default implementation of ProfileClientProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultProfileClientProbe:
        """Create a new probe with observation context bound."""
        return DefaultProfileClientProbe(logger=self._logger, context=context)

    def profile_requested(self, auth_id: str) -> None:
        """Record that a profile lookup started."""
        self._logger.debug(
            "profile_requested",
            auth_id=auth_id,
            **self._get_context_kwargs(),
        )

    def profile_fetched(self, auth_id: str) -> None:
        """Record that a profile was returned."""
        self._logger.info(
            "profile_fetched",
            auth_id=auth_id,
            **self._get_context_kwargs(),
        )

    def profile_fetch_failed(
        self,
        auth_id: str,
        reason: str,
        status_code: int | None = None,
    ) -> None:
        """Record that a profile lookup failed."""
        self._logger.error(
            "profile_fetch_failed",
            auth_id=auth_id,
            reason=reason,
            status_code=status_code,
            **self._get_context_kwargs(),
        )
