"""
Application configuration models and helpers.

Centralizes settings management so the web app, the OAuth client and the
StreamMe API proxy share a consistent configuration surface.
"""

from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class StreamMeSettings(BaseSettings):
    """Configuration required for interacting with StreamMe."""

    model_config = SettingsConfigDict(
        env_prefix="STREAMME_", env_file=".env", extra="ignore"
    )

    domain: str = Field("https://stream.me", description="Provider base URL.")
    client_id: str
    client_secret: str
    callback_url: str = Field(
        "/users/redirect",
        description=(
            "OAuth2 redirect URL registered with the client. Relative values are "
            "resolved against the inbound request."
        ),
    )
    authorize_path: str = "/api-auth/authorize"
    token_path: str = "/api-auth/token"
    profile_path: str = "/api-user/v1/me"
    request_timeout: float = Field(
        10.0, description="Seconds to wait on any outbound provider call."
    )

    @field_validator("domain")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    def url(self, path: str) -> str:
        """Join a provider path onto the configured domain."""
        return f"{self.domain}{path}"


class OAuthSettings(BaseSettings):
    """OAuth flow configuration."""

    model_config = SettingsConfigDict(
        env_prefix="OAUTH_", env_file=".env", extra="ignore"
    )

    scopes: Annotated[tuple[str, ...], NoDecode] = ("account", "emoticon")
    success_redirect: str = "/"
    failure_redirect: str = "/"

    @field_validator("scopes", mode="before")
    @classmethod
    def _split_scopes(
        cls, value: str | tuple[str, ...] | list[str]
    ) -> tuple[str, ...]:
        """Support providing scopes as a comma-separated string."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(value)
        return tuple(scope.strip() for scope in value.split(",") if scope.strip())


class SessionSettings(BaseSettings):
    """Session cookie configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SESSION_", env_file=".env", extra="ignore"
    )

    secret_key: str
    cookie_name: str = "session"
    max_age: int = Field(60, description="Cookie lifetime in seconds.")
    https_only: bool = False


class AppSettings(BaseSettings):
    """Root settings object for the FastAPI application."""

    model_config = SettingsConfigDict(
        env_prefix="APP_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    env: str = "development"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 3000
    title: str = "StreamMe OAuth2 Client Demo"
    streamme: StreamMeSettings = Field(default_factory=StreamMeSettings)
    oauth: OAuthSettings = Field(default_factory=OAuthSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()


__all__ = [
    "AppSettings",
    "OAuthSettings",
    "SessionSettings",
    "StreamMeSettings",
    "get_settings",
]
