"""
Domain models for authenticated StreamMe users.
"""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field

UserId = Union[int, str]


class StreamMeProfile(BaseModel):
    """Profile document returned by the StreamMe user endpoint."""

    id: Optional[UserId] = None
    username: Optional[str] = None
    slug: Optional[str] = None
    raw: Dict[str, Any] = Field(default_factory=dict, repr=False)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "StreamMeProfile":
        return cls(
            id=payload.get("id"),
            username=payload.get("username"),
            slug=payload.get("slug"),
            raw=payload,
        )


class UserRecord(BaseModel):
    """An authenticated end user of this client application."""

    id: UserId
    username: Optional[str] = None
    slug: Optional[str] = None
    access_token: str = Field(..., repr=False)
    refresh_token: Optional[str] = Field(None, repr=False)


__all__ = ["StreamMeProfile", "UserId", "UserRecord"]
