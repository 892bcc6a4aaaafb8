"""Shared fixtures: a ClefAPI wired to an httpx.MockTransport, and a fake provider for the web app."""

import json
from typing import Callable, List, Optional

import httpx
import pytest

from clef_auth.client import ClefAPI
from clef_auth.config import Settings
from clef_auth.errors import ClefError, InvalidTokenError, ProviderError
from clef_auth.models import AuthorizeResult, InfoResult, LogoutResult, UserInfo

APP_ID = "app-id-123"
APP_SECRET = "app-secret-456"
BASE_URL = "https://clef.io/api/"


def json_response(data, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, headers={"content-type": "application/json"}, content=json.dumps(data))


class RecordingHandler:
    """MockTransport handler that records requests and replies with queued responses."""

    def __init__(self, *responses: httpx.Response):
        self.responses: List[httpx.Response] = list(responses)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        template = self.responses[0] if len(self.responses) == 1 else self.responses.pop(0)
        return httpx.Response(template.status_code, headers=template.headers, content=template.content)


@pytest.fixture
def make_api() -> Callable[..., ClefAPI]:
    """Return a factory building a ClefAPI whose traffic goes to the given handler."""

    def _make(handler, base_url: str = BASE_URL) -> ClefAPI:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return ClefAPI(APP_ID, APP_SECRET, base_url=base_url, http_client=http_client)

    return _make


@pytest.fixture
def settings() -> Settings:
    return Settings(app_id=APP_ID, app_secret=APP_SECRET, session_secret="test-secret")


class FakeProvider:
    """In-memory IdentityProvider: one user, one code, one token."""

    def __init__(self):
        self.user = UserInfo(id=42, first_name="Ada", last_name="Lovelace", email="ada@example.com")
        self.valid_codes = {"abc123": "tok_1"}
        self.valid_tokens = {"tok_1"}
        self.logout_tokens = {"lt_9": 42}
        self.info_error: Optional[ClefError] = None
        self.calls: List[tuple] = []

    async def authorize(self, code: str) -> AuthorizeResult:
        self.calls.append(("authorize", code))
        if code not in self.valid_codes:
            raise ProviderError(message="Invalid OAuth Code.", internal_code="invalid_code", status_code=403)
        return AuthorizeResult(access_token=self.valid_codes[code], success=True)

    async def info(self, access_token: str) -> InfoResult:
        self.calls.append(("info", access_token))
        if self.info_error is not None:
            raise self.info_error
        if access_token not in self.valid_tokens:
            raise InvalidTokenError(message="Invalid token.", internal_code="invalid_token", status_code=403)
        return InfoResult(info=self.user, success=True)

    async def logout(self, logout_token: str) -> LogoutResult:
        self.calls.append(("logout", logout_token))
        if logout_token not in self.logout_tokens:
            raise ProviderError(message="Invalid logout token.", internal_code="invalid_logout_token", status_code=403)
        return LogoutResult(clef_id=self.logout_tokens[logout_token], success=True)


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()
