"""
Bridge between the signed session cookie and the user store.

The cookie carries the user id and an opaque session id. The session id must
be live in the server-side :class:`SessionRegistry`; logout revokes it, so a
copy of an old cookie stays anonymous even if the user logs in again.
"""

from __future__ import annotations

import logging
import secrets
from typing import Any, Dict, MutableMapping, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from streamme_client.models.user import UserId, UserRecord

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"
SESSION_ID_KEY = "sid"


class LoginRequiredError(Exception):
    """Raised when a route that needs a user is reached anonymously."""


class SessionRegistry:
    """Live session ids, each bound to the user it was issued for."""

    def __init__(self) -> None:
        self._sessions: Dict[str, UserId] = {}

    def issue(self, user_id: UserId) -> str:
        session_id = secrets.token_urlsafe(32)
        self._sessions[session_id] = user_id
        return session_id

    def owner(self, session_id: str) -> Optional[UserId]:
        return self._sessions.get(session_id)

    def revoke(self, session_id: Optional[str]) -> None:
        if session_id is not None:
            self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)


def serialize_user(user: UserRecord) -> UserId:
    return user.id


def establish_session(
    session: MutableMapping[str, Any], user: UserRecord, registry: SessionRegistry
) -> None:
    """Start a fresh session naming ``user``."""
    registry.revoke(session.get(SESSION_ID_KEY))
    session.clear()
    session[SESSION_USER_KEY] = serialize_user(user)
    session[SESSION_ID_KEY] = registry.issue(user.id)


def destroy_session(
    session: MutableMapping[str, Any], registry: SessionRegistry
) -> None:
    registry.revoke(session.get(SESSION_ID_KEY))
    session.clear()


def resolve_user(request: Request) -> Optional[UserRecord]:
    """Return the user named by a live session, if the store still has it."""
    user_id = request.session.get(SESSION_USER_KEY)
    session_id = request.session.get(SESSION_ID_KEY)
    if user_id is None or session_id is None:
        return None

    if request.app.state.sessions.owner(session_id) != user_id:
        logger.debug("Session for user %s is not live; treating as anonymous.", user_id)
        return None

    user = request.app.state.user_store.get(user_id)
    if user is None:
        logger.debug("Session names unknown user %s; treating as anonymous.", user_id)
    return user


class UserSessionMiddleware(BaseHTTPMiddleware):
    """Attach the resolved user (or ``None``) to ``request.state.user``.

    Must run inside Starlette's ``SessionMiddleware``.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request.state.user = resolve_user(request)
        return await call_next(request)


__all__ = [
    "LoginRequiredError",
    "SESSION_ID_KEY",
    "SESSION_USER_KEY",
    "SessionRegistry",
    "UserSessionMiddleware",
    "destroy_session",
    "establish_session",
    "resolve_user",
    "serialize_user",
]
