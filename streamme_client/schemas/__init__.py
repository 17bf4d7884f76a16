"""Public schema exports."""

from .auth import OAuthCallbackParams
from .proxy import (
    DEFAULT_UPSTREAM_ERROR_CODE,
    UPSTREAM_ERROR_MESSAGE,
    ProxyResult,
    ProxySuccess,
    TransportFailure,
    UpstreamFailure,
)

__all__ = [
    "DEFAULT_UPSTREAM_ERROR_CODE",
    "OAuthCallbackParams",
    "ProxyResult",
    "ProxySuccess",
    "TransportFailure",
    "UPSTREAM_ERROR_MESSAGE",
    "UpstreamFailure",
]
