"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    build_components,
    get_api_client,
    get_current_user,
    get_oauth_client,
    get_oauth_flow,
    get_renderer,
    get_session_registry,
    get_user_store,
    require_login,
)
from .config import SettingsDependency, get_app_settings

__all__ = [
    "SettingsDependency",
    "build_components",
    "get_api_client",
    "get_app_settings",
    "get_current_user",
    "get_oauth_client",
    "get_oauth_flow",
    "get_renderer",
    "get_session_registry",
    "get_user_store",
    "require_login",
]
