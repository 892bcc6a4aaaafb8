"""
Process-wide Clef client for scripts that do not want to pass a handle around.

initialize() must run once at startup; authorize / info / logout raise
NotInitializedError before that. The web app does not use this module, it
injects its own ClefAPI.
"""

from typing import Optional

from clef_auth.client import ClefAPI
from clef_auth.errors import NotInitializedError
from clef_auth.models import AuthorizeResult, InfoResult, LogoutResult

_api: Optional[ClefAPI] = None


def initialize(app_id: str, app_secret: str, **kwargs) -> ClefAPI:
    """Create the module-level client from the application id and secret."""
    global _api
    _api = ClefAPI(app_id, app_secret, **kwargs)
    return _api


def get_default_client() -> ClefAPI:
    """Return the module-level client, or raise NotInitializedError."""
    if _api is None:
        raise NotInitializedError()
    return _api


def reset() -> None:
    """Forget the module-level client. The caller owns closing it."""
    global _api
    _api = None


async def authorize(code: str) -> AuthorizeResult:
    return await get_default_client().authorize(code)


async def info(access_token: str) -> InfoResult:
    return await get_default_client().info(access_token)


async def logout(logout_token: str) -> LogoutResult:
    return await get_default_client().logout(logout_token)
