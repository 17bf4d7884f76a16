"""
StreamMe OAuth utilities.

These helpers build the authorization redirect, exchange authorization codes
for tokens and fetch the profile of the user who granted access.
"""

from __future__ import annotations

from typing import Optional, Tuple
from urllib.parse import urlencode

import httpx
from fastapi import status

from streamme_client.core.config import OAuthSettings, StreamMeSettings
from streamme_client.models.user import StreamMeProfile


class OAuthTokenExchangeError(Exception):
    """Raised when the token endpoint fails or returns an error."""


class OAuthProfileError(Exception):
    """Raised when the user profile cannot be retrieved."""


class StreamMeOAuthClient:
    """Build StreamMe authorization URLs and exchange authorization codes."""

    def __init__(
        self,
        streamme_settings: StreamMeSettings,
        oauth_settings: OAuthSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._streamme = streamme_settings
        self._oauth = oauth_settings
        self._transport = transport

    @property
    def authorization_endpoint(self) -> str:
        return self._streamme.url(self._streamme.authorize_path)

    @property
    def token_endpoint(self) -> str:
        return self._streamme.url(self._streamme.token_path)

    def build_authorization_url(
        self, redirect_uri: str, state: Optional[str] = None
    ) -> str:
        """Construct the StreamMe consent URL."""
        params = {
            "response_type": "code",
            "client_id": self._streamme.client_id,
            "redirect_uri": redirect_uri,
        }
        if self._oauth.scopes:
            params["scope"] = " ".join(self._oauth.scopes)
        if state is not None:
            params["state"] = state
        return f"{self.authorization_endpoint}?{urlencode(params)}"

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._streamme.request_timeout, transport=self._transport
        )

    async def exchange_authorization_code(
        self, code: str, redirect_uri: str
    ) -> Tuple[str, Optional[str]]:
        """
        Exchange an authorization code for tokens.

        Returns a tuple of (access_token, refresh_token). StreamMe may omit the
        refresh token, in which case the second element is ``None``.
        """
        payload = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": redirect_uri,
            "client_id": self._streamme.client_id,
            "client_secret": self._streamme.client_secret,
        }

        try:
            async with self._http_client() as client:
                response = await client.post(
                    self.token_endpoint,
                    data=payload,
                    headers={"Accept": "application/json"},
                )
        except httpx.HTTPError as exc:
            raise OAuthTokenExchangeError(str(exc)) from exc

        if response.status_code != status.HTTP_200_OK:
            raise OAuthTokenExchangeError(response.text)

        try:
            token_payload = response.json()
        except ValueError as exc:
            raise OAuthTokenExchangeError("Token endpoint returned invalid JSON.") from exc

        access_token = token_payload.get("access_token")
        if not access_token:
            raise OAuthTokenExchangeError(
                "Incomplete token payload returned from StreamMe."
            )

        return access_token, token_payload.get("refresh_token")

    async def fetch_profile(self, access_token: str) -> StreamMeProfile:
        """Retrieve the profile of the user owning ``access_token``."""
        try:
            async with self._http_client() as client:
                response = await client.get(
                    self._streamme.url(self._streamme.profile_path),
                    headers={
                        "Authorization": f"Bearer {access_token}",
                        "Accept": "application/json",
                    },
                )
        except httpx.HTTPError as exc:
            raise OAuthProfileError(str(exc)) from exc

        if response.status_code != status.HTTP_200_OK:
            raise OAuthProfileError(
                f"Profile request failed with status {response.status_code}."
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise OAuthProfileError("Profile endpoint returned invalid JSON.") from exc

        if not isinstance(payload, dict):
            raise OAuthProfileError("Profile endpoint returned an unexpected document.")

        return StreamMeProfile.from_payload(payload)


__all__ = [
    "OAuthProfileError",
    "OAuthTokenExchangeError",
    "StreamMeOAuthClient",
]
