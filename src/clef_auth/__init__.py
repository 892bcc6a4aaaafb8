"""
Clef authentication client.

Exposes the ClefAPI client (authorize, info, logout, swag), its result models,
the error hierarchy with the invalid-token classifier, and the FastAPI demo
app factory (create_app).
"""

from .app import create_app
from .client import API_VERSION, DEFAULT_BASE_URL, ClefAPI
from .config import Settings
from .errors import (
    ClefError,
    ConfigError,
    DecodeError,
    InvalidTokenError,
    MalformedURLError,
    NotInitializedError,
    ProviderError,
    TransportError,
    is_invalid_token_error,
)
from .models import AuthorizeResult, InfoResult, LogoutResult, SwagRequest, SwagResult, UserInfo
from .protocol import IdentityProvider

__all__ = [
    "API_VERSION",
    "DEFAULT_BASE_URL",
    "ClefAPI",
    "IdentityProvider",
    "Settings",
    "create_app",
    "AuthorizeResult",
    "InfoResult",
    "LogoutResult",
    "SwagRequest",
    "SwagResult",
    "UserInfo",
    "ClefError",
    "ConfigError",
    "DecodeError",
    "InvalidTokenError",
    "MalformedURLError",
    "NotInitializedError",
    "ProviderError",
    "TransportError",
    "is_invalid_token_error",
]
