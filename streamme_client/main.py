"""
FastAPI application entrypoint for the StreamMe OAuth2 client demo.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from streamme_client.api.routes import router
from streamme_client.core.config import AppSettings, get_settings
from streamme_client.core.logging import configure_logging
from streamme_client.dependencies import build_components
from streamme_client.services import LoginRequiredError, UserSessionMiddleware

logger = logging.getLogger(__name__)


async def _redirect_anonymous(request: Request, exc: LoginRequiredError) -> RedirectResponse:
    logger.debug("Anonymous request to %s redirected home", request.url.path)
    return RedirectResponse(url="/", status_code=HTTPStatus.FOUND)


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """Factory for the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.title,
        version="0.1.0",
        description="Demonstrates the OAuth2 authorization code flow against StreamMe.",
    )
    app.state.settings = settings
    for name, component in build_components(settings).items():
        setattr(app.state, name, component)

    # Last added runs first: the session cookie is decoded before the user lookup.
    app.add_middleware(UserSessionMiddleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session.secret_key,
        session_cookie=settings.session.cookie_name,
        max_age=settings.session.max_age,
        same_site="lax",
        https_only=settings.session.https_only,
    )
    app.add_exception_handler(LoginRequiredError, _redirect_anonymous)
    app.include_router(router)
    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    settings = get_settings()
    logger.info("Server listening on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


__all__ = ["app", "create_app", "run"]
