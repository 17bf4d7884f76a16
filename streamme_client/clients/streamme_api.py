"""Bearer-token proxy for the StreamMe REST API."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from fastapi import status

from streamme_client.core.config import StreamMeSettings
from streamme_client.models.user import UserRecord
from streamme_client.schemas.proxy import (
    ProxyResult,
    ProxySuccess,
    TransportFailure,
    UpstreamFailure,
)

logger = logging.getLogger(__name__)


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _missing_slug(user: UserRecord) -> TransportFailure:
    logger.warning("User %s has no StreamMe slug; not calling StreamMe.", user.id)
    return TransportFailure(message=f"User {user.id} has no StreamMe slug.")


def normalize_response(response: httpx.Response) -> ProxyResult:
    """Map a received StreamMe response onto the proxy result variants."""
    body = _decode_body(response)
    if response.status_code != status.HTTP_200_OK:
        return UpstreamFailure(code=response.status_code, body=body)
    return ProxySuccess(body=body)


class StreamMeAPIClient:
    """Issue authenticated calls to StreamMe on behalf of a logged-in user.

    The client owns the counter used to generate the placeholder email and
    display name sent by :meth:`update_profile`.
    """

    FEED_PATH = "/api-message/v1/users/{slug}/feed"
    EMOTICONS_PATH = "/api-emoticon/v1/{slug}/manage"
    ME_PATH = "/api-user/v1/me"

    def __init__(
        self,
        settings: StreamMeSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        update_count: int = 0,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._update_count = update_count

    @property
    def update_count(self) -> int:
        return self._update_count

    async def fetch_feed(self, user: UserRecord) -> ProxyResult:
        """Retrieve the user's message feed."""
        if not user.slug:
            return _missing_slug(user)
        return await self._send(
            "GET", self.FEED_PATH.format(slug=user.slug), user.access_token
        )

    async def fetch_emoticons(self, user: UserRecord) -> ProxyResult:
        """Retrieve the user's custom emoticons; may be empty."""
        if not user.slug:
            return _missing_slug(user)
        return await self._send(
            "GET", self.EMOTICONS_PATH.format(slug=user.slug), user.access_token
        )

    async def update_profile(self, user: UserRecord) -> ProxyResult:
        """Overwrite the user's email and display name with generated values."""
        count = self._update_count
        body = {
            "email": f"newemail{count}@gmail.com",
            "displayName": f"newname{count}",
        }
        try:
            return await self._send("PUT", self.ME_PATH, user.access_token, json=body)
        finally:
            self._update_count += 1

    async def _send(
        self,
        method: str,
        path: str,
        access_token: str,
        *,
        json: Any = None,
    ) -> ProxyResult:
        url = self._settings.url(path)
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/json",
        }
        try:
            async with httpx.AsyncClient(
                timeout=self._settings.request_timeout, transport=self._transport
            ) as client:
                response = await client.request(method, url, headers=headers, json=json)
        except httpx.RequestError as exc:
            logger.warning("StreamMe %s %s failed: %s", method, path, exc)
            return TransportFailure(message=str(exc) or exc.__class__.__name__)

        result = normalize_response(response)
        if isinstance(result, UpstreamFailure):
            logger.info(
                "StreamMe %s %s rejected with status %s", method, path, result.code
            )
        return result


__all__ = ["StreamMeAPIClient", "normalize_response"]
