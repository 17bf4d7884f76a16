"""Schemas related to OAuth flows."""

from __future__ import annotations

from pydantic import BaseModel, Field


class OAuthCallbackParams(BaseModel):
    """Query parameters StreamMe appends when redirecting back to the app."""

    code: str | None = Field(None, description="Authorization code issued by StreamMe.")
    state: str | None = Field(None, description="Opaque value sent when starting OAuth.")
    error: str | None = Field(None, description="Error code when authorization failed.")
    error_description: str | None = None


__all__ = ["OAuthCallbackParams"]
