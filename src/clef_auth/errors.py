"""
Exceptions raised by the Clef client.

Everything derives from ClefError so callers (and the web layer) can catch the
whole family in one place. Provider rejections carry the decoded error body;
the "Invalid token." rejection gets its own subclass at decode time so callers
never compare message strings themselves.
"""

INVALID_TOKEN_MESSAGE = "Invalid token."


class ClefError(Exception):
    """Base class for all Clef client errors."""


class ConfigError(ClefError):
    """Required configuration (app id / secret) is missing or invalid."""


class NotInitializedError(ClefError):
    """The module-level client was used before initialize() was called."""

    def __init__(self, message: str = "Clef API not initialized yet."):
        super().__init__(message)


class MalformedURLError(ClefError):
    """An operation path could not be resolved against the API base URL."""


class TransportError(ClefError):
    """The provider could not be reached (connection, DNS, timeout, protocol)."""


class DecodeError(ClefError):
    """A 200 response body was not valid JSON or did not match the expected shape."""


class ProviderError(ClefError):
    """
    Structured rejection returned by the provider on a non-200 response.

    The wire body is {"message", "context", "error"}; "error" is exposed as
    internal_code. A malformed body still produces a ProviderError, with empty
    fields.
    """

    def __init__(self, message: str = "", context: str = "", internal_code: str = "", status_code: int = 0):
        self.message = message
        self.context = context
        self.internal_code = internal_code
        self.status_code = status_code
        super().__init__(internal_code or message)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, context={self.context!r}, "
            f"internal_code={self.internal_code!r}, status_code={self.status_code})"
        )


class InvalidTokenError(ProviderError):
    """The provider rejected the access token as invalid or expired."""


def provider_error_from_body(message: str, context: str, internal_code: str, status_code: int) -> ProviderError:
    """Build the ProviderError variant matching a decoded error body."""
    cls = InvalidTokenError if message == INVALID_TOKEN_MESSAGE else ProviderError
    return cls(message=message, context=context, internal_code=internal_code, status_code=status_code)


def is_invalid_token_error(err: BaseException) -> bool:
    """Return True if err is a provider rejection of the access token."""
    return isinstance(err, ProviderError) and err.message == INVALID_TOKEN_MESSAGE
