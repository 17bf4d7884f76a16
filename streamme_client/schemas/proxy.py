"""Result variants produced by the authenticated StreamMe API proxy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

UPSTREAM_ERROR_MESSAGE = "something-went-wrong"
DEFAULT_UPSTREAM_ERROR_CODE = 400


@dataclass(slots=True)
class TransportFailure:
    """No response was received from StreamMe."""

    message: str


@dataclass(slots=True)
class UpstreamFailure:
    """StreamMe answered with a status other than 200."""

    code: int | None
    body: Any

    @property
    def status_code(self) -> int:
        return self.code or DEFAULT_UPSTREAM_ERROR_CODE

    def to_content(self) -> dict[str, Any]:
        return {
            "message": UPSTREAM_ERROR_MESSAGE,
            "code": self.code,
            "body": self.body,
        }


@dataclass(slots=True)
class ProxySuccess:
    """StreamMe answered with 200; ``body`` is the decoded payload."""

    body: Any


ProxyResult = Union[TransportFailure, UpstreamFailure, ProxySuccess]


__all__ = [
    "DEFAULT_UPSTREAM_ERROR_CODE",
    "ProxyResult",
    "ProxySuccess",
    "TransportFailure",
    "UPSTREAM_ERROR_MESSAGE",
    "UpstreamFailure",
]
