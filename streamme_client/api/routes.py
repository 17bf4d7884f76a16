"""
FastAPI routes for the StreamMe OAuth2 client demo.
"""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse

from streamme_client.clients import StreamMeAPIClient
from streamme_client.core.config import AppSettings
from streamme_client.dependencies import (
    get_api_client,
    get_app_settings,
    get_current_user,
    get_oauth_flow,
    get_renderer,
    require_login,
)
from streamme_client.models.user import UserRecord
from streamme_client.schemas import (
    OAuthCallbackParams,
    ProxyResult,
    TransportFailure,
    UpstreamFailure,
)
from streamme_client.services import OAuthFlowService, PageRenderer

router = APIRouter()


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=HTTPStatus.FOUND)


def _callback_url(request: Request, settings: AppSettings) -> str:
    """Absolute OAuth redirect URL; relative settings resolve against this host."""
    callback = settings.streamme.callback_url
    if callback.startswith("/"):
        return f"{str(request.base_url).rstrip('/')}{callback}"
    return callback


def _proxy_response(
    result: ProxyResult,
    *,
    request: Request,
    renderer: PageRenderer,
    user: UserRecord,
    routename: str,
) -> Response:
    if isinstance(result, TransportFailure):
        return PlainTextResponse(
            result.message, status_code=HTTPStatus.INTERNAL_SERVER_ERROR
        )
    if isinstance(result, UpstreamFailure):
        return JSONResponse(content=result.to_content(), status_code=result.status_code)
    return renderer.render(
        request,
        "user-data",
        {
            "username": user.username,
            "routename": routename,
            "data": json.dumps(result.body, indent=4),
        },
    )


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


@router.get("/")
async def home(
    request: Request,
    user: Annotated[Optional[UserRecord], Depends(get_current_user)],
    renderer: Annotated[PageRenderer, Depends(get_renderer)],
    settings: Annotated[AppSettings, Depends(get_app_settings)],
) -> Response:
    """Landing page; greets the user when logged in."""
    return renderer.render(
        request,
        "index",
        {"title": settings.title, "username": user.username if user else None},
    )


@router.get("/login")
async def login(
    request: Request,
    flow: Annotated[OAuthFlowService, Depends(get_oauth_flow)],
    settings: Annotated[AppSettings, Depends(get_app_settings)],
    state: Optional[str] = None,
) -> RedirectResponse:
    """Send the browser to the StreamMe consent screen."""
    url = flow.authorization_url(_callback_url(request, settings), state=state)
    return _redirect(url)


@router.get("/users/redirect")
async def oauth_callback(
    request: Request,
    params: Annotated[OAuthCallbackParams, Depends()],
    flow: Annotated[OAuthFlowService, Depends(get_oauth_flow)],
    settings: Annotated[AppSettings, Depends(get_app_settings)],
) -> RedirectResponse:
    """StreamMe redirects here with either a code or an error."""
    destination = await flow.login(
        params, _callback_url(request, settings), request.session
    )
    return _redirect(destination)


@router.get("/logout")
async def logout(
    request: Request,
    user: Annotated[UserRecord, Depends(require_login)],
    flow: Annotated[OAuthFlowService, Depends(get_oauth_flow)],
) -> RedirectResponse:
    """Remove the stored tokens, clear the session and go home."""
    flow.logout(user, request.session)
    return _redirect("/")


@router.get("/feed")
async def feed(
    request: Request,
    user: Annotated[UserRecord, Depends(require_login)],
    api_client: Annotated[StreamMeAPIClient, Depends(get_api_client)],
    renderer: Annotated[PageRenderer, Depends(get_renderer)],
) -> Response:
    """The user's StreamMe message feed."""
    result = await api_client.fetch_feed(user)
    return _proxy_response(
        result, request=request, renderer=renderer, user=user, routename="feed"
    )


@router.get("/emoticons")
async def emoticons(
    request: Request,
    user: Annotated[UserRecord, Depends(require_login)],
    api_client: Annotated[StreamMeAPIClient, Depends(get_api_client)],
    renderer: Annotated[PageRenderer, Depends(get_renderer)],
) -> Response:
    """The user's custom emoticons; needs the ``emoticon`` scope."""
    result = await api_client.fetch_emoticons(user)
    return _proxy_response(
        result, request=request, renderer=renderer, user=user, routename="emoticons"
    )


@router.get("/me")
async def update_me(
    request: Request,
    user: Annotated[UserRecord, Depends(require_login)],
    api_client: Annotated[StreamMeAPIClient, Depends(get_api_client)],
    renderer: Annotated[PageRenderer, Depends(get_renderer)],
) -> Response:
    """Push generated account details; needs the ``account`` scope."""
    result = await api_client.update_profile(user)
    return _proxy_response(
        result, request=request, renderer=renderer, user=user, routename="me"
    )


__all__ = ["router"]
