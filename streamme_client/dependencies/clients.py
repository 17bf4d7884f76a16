"""
Factories for the shared clients and services, and the FastAPI dependencies
that hand them to route handlers.

Components are built once in ``create_app`` and kept on ``app.state`` so each
application instance owns its own user store and update counter.
"""

from typing import Annotated, Optional

from fastapi import Depends, Request

from streamme_client.clients import StreamMeAPIClient, StreamMeOAuthClient
from streamme_client.core.config import AppSettings
from streamme_client.models.user import UserRecord
from streamme_client.services import (
    LoginRequiredError,
    OAuthFlowService,
    PageRenderer,
    SessionRegistry,
    UserStore,
)

from .config import get_app_settings


def build_components(settings: AppSettings) -> dict:
    """Construct the per-application collaborators."""
    return {
        "user_store": UserStore(),
        "sessions": SessionRegistry(),
        "oauth_client": StreamMeOAuthClient(settings.streamme, settings.oauth),
        "api_client": StreamMeAPIClient(settings.streamme),
        "renderer": PageRenderer(),
    }


def get_user_store(request: Request) -> UserStore:
    """Provide the application's user store."""
    return request.app.state.user_store


def get_session_registry(request: Request) -> SessionRegistry:
    """Provide the registry of live session ids."""
    return request.app.state.sessions


def get_oauth_client(request: Request) -> StreamMeOAuthClient:
    """Provide the StreamMe OAuth client."""
    return request.app.state.oauth_client


def get_api_client(request: Request) -> StreamMeAPIClient:
    """Provide the StreamMe API proxy client."""
    return request.app.state.api_client


def get_renderer(request: Request) -> PageRenderer:
    """Provide the page renderer."""
    return request.app.state.renderer


def get_oauth_flow(
    oauth_client: Annotated[StreamMeOAuthClient, Depends(get_oauth_client)],
    user_store: Annotated[UserStore, Depends(get_user_store)],
    sessions: Annotated[SessionRegistry, Depends(get_session_registry)],
    settings: Annotated[AppSettings, Depends(get_app_settings)],
) -> OAuthFlowService:
    """Build the login flow around the current collaborators."""
    return OAuthFlowService(oauth_client, user_store, settings.oauth, sessions)


def get_current_user(request: Request) -> Optional[UserRecord]:
    """The user resolved from the session, or ``None`` when anonymous."""
    return getattr(request.state, "user", None)


def require_login(
    user: Annotated[Optional[UserRecord], Depends(get_current_user)],
) -> UserRecord:
    """Gate for routes that need a logged-in user."""
    if user is None:
        raise LoginRequiredError()
    return user


__all__ = [
    "build_components",
    "get_api_client",
    "get_current_user",
    "get_oauth_client",
    "get_oauth_flow",
    "get_renderer",
    "get_session_registry",
    "get_user_store",
    "require_login",
]
