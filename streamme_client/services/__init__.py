"""Service layer exports."""

from .oauth_flow import LoginFailedError, OAuthFlowService
from .rendering import PageRenderer
from .session_auth import LoginRequiredError, SessionRegistry, UserSessionMiddleware
from .user_store import UserStore

__all__ = [
    "LoginFailedError",
    "LoginRequiredError",
    "OAuthFlowService",
    "PageRenderer",
    "SessionRegistry",
    "UserSessionMiddleware",
    "UserStore",
]
