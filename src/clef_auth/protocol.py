"""
Protocol for identity providers used by the web layer.

The router only needs the three session operations; ClefAPI implements them,
and tests pass in fakes with the same async surface.
"""

from typing import Protocol, runtime_checkable

from clef_auth.models import AuthorizeResult, InfoResult, LogoutResult


@runtime_checkable
class IdentityProvider(Protocol):
    """Protocol for a Clef-style provider: code exchange, profile lookup, logout."""

    async def authorize(self, code: str) -> AuthorizeResult:
        """Exchange the callback code for an access token."""
        ...

    async def info(self, access_token: str) -> InfoResult:
        """Fetch the profile of the user the access token belongs to."""
        ...

    async def logout(self, logout_token: str) -> LogoutResult:
        """Exchange a logout token for the id of the user who logged out."""
        ...
