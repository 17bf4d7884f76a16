"""Expose constructed client wrappers."""

from .streamme_api import StreamMeAPIClient
from .streamme_auth import (
    OAuthProfileError,
    OAuthTokenExchangeError,
    StreamMeOAuthClient,
)

__all__ = [
    "OAuthProfileError",
    "OAuthTokenExchangeError",
    "StreamMeAPIClient",
    "StreamMeOAuthClient",
]
