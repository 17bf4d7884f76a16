"""Pytest configuration shared across the suite."""

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover
    import _bootstrap  # type: ignore # noqa: F401

from typing import Any

import httpx
import pytest
from fastapi.responses import HTMLResponse

from streamme_client.clients import StreamMeAPIClient
from streamme_client.core.config import (
    AppSettings,
    OAuthSettings,
    SessionSettings,
    StreamMeSettings,
)
from streamme_client.models.user import StreamMeProfile


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


class DummyOAuthClient:
    def __init__(self) -> None:
        self.profile = StreamMeProfile(id="user-1", username="alice", slug="alice-slug")
        self.codes: list[str] = []
        self.redirect_uris: list[str] = []
        self.states: list[str | None] = []

    def build_authorization_url(self, redirect_uri: str, state: str | None = None) -> str:
        self.states.append(state)
        return f"https://oauth.example.com/authorize?state={state}"

    async def exchange_authorization_code(
        self, code: str, redirect_uri: str
    ) -> tuple[str, str]:
        self.codes.append(code)
        self.redirect_uris.append(redirect_uri)
        return ("access-token", "refresh-token")

    async def fetch_profile(self, access_token: str) -> StreamMeProfile:
        return self.profile


class RecordingRenderer:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def render(self, request, view: str, context: dict[str, Any]) -> HTMLResponse:
        self.calls.append((view, context))
        return HTMLResponse(f"<p>{view}</p>")


class UpstreamStub:
    """Handler for ``httpx.MockTransport`` standing in for the StreamMe API."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.outcome: httpx.Response | Exception = httpx.Response(200, json={})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


@pytest.fixture()
def settings() -> AppSettings:
    return AppSettings(
        streamme=StreamMeSettings(
            client_id="test-client-id",
            client_secret="test-client-secret",
            domain="https://streamme.test",
        ),
        oauth=OAuthSettings(),
        session=SessionSettings(secret_key="test-session-secret"),
    )


@pytest.fixture()
def upstream() -> UpstreamStub:
    return UpstreamStub()


@pytest.fixture()
def web_app(settings, upstream):
    """A fresh application wired to fakes; yields (app, oauth_client, renderer)."""
    from streamme_client import dependencies
    from streamme_client.main import create_app

    application = create_app(settings)
    application.state.api_client = StreamMeAPIClient(
        settings.streamme, transport=httpx.MockTransport(upstream)
    )

    oauth_client = DummyOAuthClient()
    renderer = RecordingRenderer()
    application.dependency_overrides.update(
        {
            dependencies.get_oauth_client: lambda: oauth_client,
            dependencies.get_renderer: lambda: renderer,
        }
    )

    yield application, oauth_client, renderer

    application.dependency_overrides.clear()


@pytest.fixture()
async def client(web_app):
    application, _, _ = web_app
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=application), base_url="http://testserver"
    ) as test_client:
        yield test_client
