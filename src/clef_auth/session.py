"""
Session helpers for the Clef demo.

The access token lives in the signed, client-side session cookie set by
Starlette's SessionMiddleware. Clef reports logouts with a server-to-server
webhook, which cannot touch the browser's cookie, so logouts are recorded in a
LogoutRegistry (clef id -> logged_out_at) and every page view checks its session
against it.
"""

import threading
import time
from typing import Dict, Optional

from fastapi import Request

ACCESS_TOKEN_KEY = "access_token"
CLEF_ID_KEY = "clef_id"
LOGGED_IN_AT_KEY = "logged_in_at"


class LogoutRegistry:
    """In-memory record of when each Clef user last logged out."""

    def __init__(self):
        self._logged_out_at: Dict[int, int] = {}
        self._lock = threading.Lock()

    def record(self, clef_id: int, at: Optional[int] = None) -> None:
        """Remember that clef_id logged out (now, unless at is given)."""
        with self._lock:
            self._logged_out_at[clef_id] = int(time.time()) if at is None else at

    def logged_out_at(self, clef_id: int) -> Optional[int]:
        with self._lock:
            return self._logged_out_at.get(clef_id)


def login_session(request: Request, access_token: str, clef_id: Optional[int]) -> None:
    """Store a freshly authorized user in the session."""
    request.session[ACCESS_TOKEN_KEY] = access_token
    request.session[LOGGED_IN_AT_KEY] = int(time.time())
    if clef_id is not None:
        request.session[CLEF_ID_KEY] = clef_id


def get_access_token(request: Request) -> Optional[str]:
    """Return the access token stored in the session, if any."""
    return request.session.get(ACCESS_TOKEN_KEY) or None


def is_logged_out(request: Request, registry: LogoutRegistry) -> bool:
    """
    Return True if the provider reported a logout for this session's user at or
    after the session was created.
    """
    clef_id = request.session.get(CLEF_ID_KEY)
    if clef_id is None:
        return False
    logged_out_at = registry.logged_out_at(clef_id)
    if logged_out_at is None:
        return False
    return logged_out_at >= request.session.get(LOGGED_IN_AT_KEY, 0)


def clear_session(request: Request) -> None:
    request.session.clear()
