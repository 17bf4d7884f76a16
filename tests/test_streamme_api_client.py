try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import json

import httpx
import pytest

from streamme_client.clients.streamme_api import StreamMeAPIClient, normalize_response
from streamme_client.core.config import StreamMeSettings
from streamme_client.models.user import UserRecord
from streamme_client.schemas import ProxySuccess, TransportFailure, UpstreamFailure

pytestmark = pytest.mark.anyio


USER = UserRecord(
    id="user-1",
    username="alice",
    slug="alice-slug",
    access_token="access-token",
    refresh_token="refresh-token",
)


class RecordingHandler:
    """httpx mock transport handler replaying queued responses."""

    def __init__(self, *responses) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _client(handler: RecordingHandler) -> StreamMeAPIClient:
    settings = StreamMeSettings(
        client_id="client", client_secret="secret", domain="https://streamme.test/"
    )
    return StreamMeAPIClient(settings, transport=httpx.MockTransport(handler))


async def test_fetch_feed_success_sends_bearer_token() -> None:
    handler = RecordingHandler(httpx.Response(200, json={"items": []}))

    result = await _client(handler).fetch_feed(USER)

    assert result == ProxySuccess(body={"items": []})
    request = handler.requests[0]
    assert request.method == "GET"
    assert str(request.url) == "https://streamme.test/api-message/v1/users/alice-slug/feed"
    assert request.headers["authorization"] == "Bearer access-token"


async def test_fetch_emoticons_surfaces_upstream_status() -> None:
    handler = RecordingHandler(httpx.Response(403, json={"error": "insufficient_scope"}))

    result = await _client(handler).fetch_emoticons(USER)

    assert isinstance(result, UpstreamFailure)
    assert result.code == 403
    assert result.status_code == 403
    assert result.to_content() == {
        "message": "something-went-wrong",
        "code": 403,
        "body": {"error": "insufficient_scope"},
    }
    assert str(handler.requests[0].url).endswith("/api-emoticon/v1/alice-slug/manage")


async def test_transport_error_becomes_transport_failure() -> None:
    handler = RecordingHandler(httpx.ConnectError("connection refused"))

    result = await _client(handler).fetch_feed(USER)

    assert result == TransportFailure(message="connection refused")


async def test_response_decoding_error_becomes_transport_failure() -> None:
    handler = RecordingHandler(httpx.DecodingError("invalid gzip body"))

    result = await _client(handler).fetch_feed(USER)

    assert result == TransportFailure(message="invalid gzip body")


async def test_user_without_slug_never_reaches_streamme() -> None:
    handler = RecordingHandler()
    user = USER.model_copy(update={"slug": None})
    client = _client(handler)

    feed = await client.fetch_feed(user)
    emoticons = await client.fetch_emoticons(user)

    assert isinstance(feed, TransportFailure)
    assert isinstance(emoticons, TransportFailure)
    assert "slug" in feed.message
    assert handler.requests == []


async def test_timeout_becomes_transport_failure() -> None:
    handler = RecordingHandler(httpx.ReadTimeout("timed out"))

    result = await _client(handler).fetch_emoticons(USER)

    assert isinstance(result, TransportFailure)
    assert result.message == "timed out"


async def test_update_profile_counter_advances_once_per_call() -> None:
    handler = RecordingHandler(
        httpx.Response(500, text="boom"),
        httpx.Response(200, json={"ok": True}),
    )
    client = _client(handler)

    first = await client.update_profile(USER)
    second = await client.update_profile(USER)

    assert isinstance(first, UpstreamFailure)
    assert isinstance(second, ProxySuccess)
    assert client.update_count == 2
    bodies = [json.loads(request.content) for request in handler.requests]
    assert bodies == [
        {"email": "newemail0@gmail.com", "displayName": "newname0"},
        {"email": "newemail1@gmail.com", "displayName": "newname1"},
    ]
    assert all(request.method == "PUT" for request in handler.requests)
    assert str(handler.requests[0].url) == "https://streamme.test/api-user/v1/me"


async def test_update_profile_counter_advances_on_transport_error() -> None:
    handler = RecordingHandler(httpx.ConnectError("connection refused"))
    client = _client(handler)

    result = await client.update_profile(USER)

    assert isinstance(result, TransportFailure)
    assert client.update_count == 1


def test_normalize_response_passes_text_bodies_through() -> None:
    response = httpx.Response(502, text="Bad Gateway")

    result = normalize_response(response)

    assert result == UpstreamFailure(code=502, body="Bad Gateway")


def test_normalize_response_empty_body_is_none() -> None:
    result = normalize_response(httpx.Response(404))

    assert result == UpstreamFailure(code=404, body=None)


def test_upstream_failure_without_code_defaults_to_400() -> None:
    failure = UpstreamFailure(code=None, body=None)

    assert failure.status_code == 400
    assert failure.to_content()["code"] is None
