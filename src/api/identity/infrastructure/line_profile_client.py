"""LINE Messaging API implementation of IProfileFetcher."""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from identity.domain.value_objects import LineId, LineUserProfile, UserProfile
from identity.infrastructure.line_models import LineProfileResponse
from identity.infrastructure.observability import (
    DefaultProfileClientProbe,
    ProfileClientProbe,
)
from identity.ports.exceptions import ProfileFetchError
from identity.ports.repositories import IProfileFetcher


class LineProfileClient(IProfileFetcher):
    """Fetches user profiles from the LINE Messaging API.

    Authenticates with the bot channel's access token. When no http client
    is injected, a short-lived one is opened per lookup.
    """

    def __init__(
        self,
        channel_access_token: str,
        base_url: str = "https://api.line.me",
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
        probe: ProfileClientProbe | None = None,
    ):
        self._channel_access_token = channel_access_token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http_client = http_client
        self._probe = probe or DefaultProfileClientProbe()

    @property
    def _request_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._channel_access_token}"}

    async def _get(self, url: str) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.get(
                url, headers=self._request_headers, timeout=self._timeout
            )
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.get(url, headers=self._request_headers)

    async def fetch_profile(self, auth_id: LineId) -> UserProfile:
        """Fetch the LINE profile of a user who messaged the bot.

        Args:
            auth_id: The LINE user id

        Returns:
            LineUserProfile for the user

        Raises:
            ProfileFetchError: On transport failure, non-200 response,
                or a body that is not a LINE profile
        """
        url = f"{self._base_url}/v2/bot/profile/{auth_id.value}"
        self._probe.profile_requested(auth_id.value)

        try:
            response = await self._get(url)
        except httpx.HTTPError as e:
            self._probe.profile_fetch_failed(auth_id.value, reason=repr(e))
            raise ProfileFetchError(
                f"Failed to reach LINE profile API for {auth_id.value}"
            ) from e

        if response.status_code != 200:
            self._probe.profile_fetch_failed(
                auth_id.value,
                reason="HTTP error",
                status_code=response.status_code,
            )
            raise ProfileFetchError(
                f"HTTP {response.status_code}: Failed to fetch profile for {auth_id.value}"
            )

        try:
            body = LineProfileResponse.model_validate_json(response.content)
        except ValidationError as e:
            self._probe.profile_fetch_failed(auth_id.value, reason=repr(e))
            raise ProfileFetchError(
                f"Malformed LINE profile for {auth_id.value}"
            ) from e

        self._probe.profile_fetched(auth_id.value)
        return LineUserProfile(
            auth_id=LineId(value=body.user_id),
            display_name=body.display_name,
            picture_url=body.picture_url,
        )
