"""
Authorization-code login flow against StreamMe.

Login moves a browser from anonymous, through the StreamMe consent screen, to
an authenticated session. Logout returns it to anonymous.
"""

from __future__ import annotations

import logging
from typing import Any, MutableMapping, Optional

from streamme_client.clients.streamme_auth import (
    OAuthProfileError,
    OAuthTokenExchangeError,
    StreamMeOAuthClient,
)
from streamme_client.core.config import OAuthSettings
from streamme_client.models.user import UserRecord
from streamme_client.schemas.auth import OAuthCallbackParams
from streamme_client.services.session_auth import (
    SessionRegistry,
    destroy_session,
    establish_session,
)
from streamme_client.services.user_store import UserStore

logger = logging.getLogger(__name__)


class LoginFailedError(Exception):
    """Raised when the callback cannot produce an authenticated user."""

    def __init__(self, reason: str, detail: Optional[str] = None) -> None:
        super().__init__(reason if detail is None else f"{reason}: {detail}")
        self.reason = reason
        self.detail = detail


class OAuthFlowService:
    """Drive the login, callback and logout steps."""

    def __init__(
        self,
        oauth_client: StreamMeOAuthClient,
        user_store: UserStore,
        oauth_settings: OAuthSettings,
        sessions: SessionRegistry,
    ) -> None:
        self._oauth_client = oauth_client
        self._store = user_store
        self._sessions = sessions
        self._settings = oauth_settings

    @property
    def success_redirect(self) -> str:
        return self._settings.success_redirect

    @property
    def failure_redirect(self) -> str:
        return self._settings.failure_redirect

    def authorization_url(self, redirect_uri: str, state: Optional[str] = None) -> str:
        """Build the StreamMe consent URL; nothing is recorded locally."""
        if state is not None:
            # Passed through untouched; StreamMe echoes it on the callback.
            logger.info("Starting StreamMe login with state=%s", state)
        else:
            logger.info("Starting StreamMe login")
        return self._oauth_client.build_authorization_url(redirect_uri, state=state)

    async def complete_login(
        self, params: OAuthCallbackParams, redirect_uri: str
    ) -> UserRecord:
        """Exchange the callback's code for tokens and persist the user."""
        if params.state is not None:
            logger.info("StreamMe callback received with state=%s", params.state)

        if params.error:
            raise LoginFailedError("access-denied", params.error_description or params.error)
        if not params.code:
            raise LoginFailedError("missing-code")

        try:
            access_token, refresh_token = (
                await self._oauth_client.exchange_authorization_code(
                    params.code, redirect_uri
                )
            )
        except OAuthTokenExchangeError as exc:
            raise LoginFailedError("token-exchange-failed", str(exc)) from exc

        try:
            profile = await self._oauth_client.fetch_profile(access_token)
        except OAuthProfileError as exc:
            raise LoginFailedError("profile-fetch-failed", str(exc)) from exc

        user = self._store.save(access_token, refresh_token, profile)
        if user is None:
            raise LoginFailedError("failed-to-save-user")

        logger.info("User %s (%s) logged in", user.id, user.username)
        return user

    async def login(
        self,
        params: OAuthCallbackParams,
        redirect_uri: str,
        session: MutableMapping[str, Any],
    ) -> str:
        """Handle the callback end to end and return where to send the browser."""
        try:
            user = await self.complete_login(params, redirect_uri)
        except LoginFailedError as exc:
            logger.warning("StreamMe login failed: %s", exc)
            return self.failure_redirect

        establish_session(session, user, self._sessions)
        return self.success_redirect

    def logout(self, user: UserRecord, session: MutableMapping[str, Any]) -> None:
        """Forget the user's tokens and end the session."""
        try:
            self._store.delete(user.id)
        except Exception:
            logger.exception("Failed to delete stored tokens for user %s", user.id)
        destroy_session(session, self._sessions)
        logger.info("User %s logged out", user.id)


__all__ = ["LoginFailedError", "OAuthFlowService"]
