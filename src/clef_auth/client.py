"""
Clef API client.

ClefAPI builds form-encoded requests against the Clef API base URL, attaches the
application credentials to every mutating call, sends them with httpx and
decodes the JSON body into the pydantic model for the operation.

Decisions:
- Only HTTP 200 is success. Any other status is decoded as the provider's error
  body ({"message", "context", "error"}) and raised as ProviderError; if that body
  is itself malformed the error is raised with empty fields.
- A 200 response is decoded as the success shape even if it looks like an error
  body; a shape mismatch is a DecodeError, never an empty result.
- No retries. Timeouts come from the httpx client (CLEF_HTTP_TIMEOUT_SECONDS).
- Raw request/response dumps are logged at DEBUG only, with app_secret redacted.
"""

import logging
from typing import Optional, Type, TypeVar
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel, ValidationError

from clef_auth.errors import DecodeError, MalformedURLError, TransportError, provider_error_from_body
from clef_auth.models import (
    AuthorizeResult,
    InfoResult,
    LogoutResult,
    ProviderErrorBody,
    SwagRequest,
    SwagResult,
)

logger = logging.getLogger(__name__)

# Implemented Clef interface version
API_VERSION = "v1"
DEFAULT_BASE_URL = "https://clef.io/api/"
DEFAULT_TIMEOUT_SECONDS = 20.0

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

ModelT = TypeVar("ModelT", bound=BaseModel)


class ClefAPI:
    """Client for the Clef authorize / info / logout / swag endpoints."""

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        base_url: str = DEFAULT_BASE_URL,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        """Store credentials and the base URL; create an httpx client unless one is injected."""
        # Relative paths only resolve under the base when it ends with a slash
        if not base_url.endswith("/"):
            base_url += "/"
        self._base_url = httpx.URL(base_url)
        self._app_id = app_id
        self._app_secret = app_secret
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def base_url(self) -> httpx.URL:
        return self._base_url

    @property
    def app_id(self) -> str:
        return self._app_id

    async def aclose(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ClefAPI":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _credentials(self) -> dict:
        """Form fields identifying the application to the provider."""
        return {"app_id": self._app_id, "app_secret": self._app_secret}

    # -- operations ---------------------------------------------------------

    async def authorize(self, code: str) -> AuthorizeResult:
        """Exchange an OAuth code for an access token."""
        form = {"code": code, **self._credentials()}
        request = self.new_request("POST", "authorize", form)
        return await self.do(request, AuthorizeResult)

    async def info(self, access_token: str) -> InfoResult:
        """Return the profile of the user the access token belongs to."""
        request = self.new_request("GET", "info?" + urlencode({"access_token": access_token}))
        return await self.do(request, InfoResult)

    async def logout(self, logout_token: str) -> LogoutResult:
        """Exchange a logout token for the Clef id of the user who logged out."""
        form = {"logout_token": logout_token, **self._credentials()}
        request = self.new_request("POST", "logout", form)
        return await self.do(request, LogoutResult)

    async def swag(self, order: SwagRequest) -> SwagResult:
        """Order swag for the given shipping details."""
        form = {**self._credentials(), **order.form_fields()}
        request = self.new_request("POST", "swag", form)
        return await self.do(request, SwagResult)

    # -- raw requests -------------------------------------------------------

    def new_request(self, method: str, path: str, form: Optional[dict] = None) -> httpx.Request:
        """Build a request for path relative to the API base URL, form-encoding form if given."""
        try:
            ref = httpx.URL(path)
        except httpx.InvalidURL as e:
            raise MalformedURLError(f"invalid API path {path!r}: {e}") from e
        if ref.is_absolute_url or ref.host:
            raise MalformedURLError(f"API path must be relative to {self._base_url}: {path!r}")

        url = self._base_url.join(ref)
        if form is None:
            return self._client.build_request(method, url)
        return self._client.build_request(
            method,
            url,
            headers={"Content-Type": FORM_CONTENT_TYPE},
            content=urlencode(form).encode("utf-8"),
        )

    async def do(self, request: httpx.Request, model: Type[ModelT]) -> ModelT:
        """Send a raw request and decode the response into model."""
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Request:\n\n%s\n", _dump_request(request, self._app_secret))

        try:
            response = await self._client.send(request)
        except httpx.HTTPError as e:
            raise TransportError(f"{request.method} {request.url} failed: {e}") from e

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Response:\n\n%s\n", _dump_response(response))

        if response.status_code != httpx.codes.OK:
            try:
                body = ProviderErrorBody.model_validate_json(response.content)
            except ValidationError:
                body = ProviderErrorBody()
            raise provider_error_from_body(body.message, body.context, body.error, response.status_code)

        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(f"unexpected response from {request.url.path}: {e}") from e


def _dump_request(request: httpx.Request, secret: str) -> str:
    lines = [f"{request.method} {request.url} HTTP/1.1"]
    lines += [f"{name}: {value}" for name, value in request.headers.items()]
    body = request.content.decode("utf-8", errors="replace")
    if secret:
        body = body.replace(urlencode({"app_secret": secret}), "app_secret=REDACTED")
    return "\r\n".join(lines) + "\r\n\r\n" + body


def _dump_response(response: httpx.Response) -> str:
    lines = [f"{response.http_version} {response.status_code} {response.reason_phrase}"]
    lines += [f"{name}: {value}" for name, value in response.headers.items()]
    return "\r\n".join(lines) + "\r\n\r\n" + response.text
