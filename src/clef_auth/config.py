"""
Configuration for the Clef demo application.

Values come from the environment (main.py loads .env first):
CLEF_APP_ID and CLEF_APP_SECRET are required; CLEF_BASE_URL, CLEF_REDIRECT_URL,
CLEF_HTTP_TIMEOUT_SECONDS, SESSION_SECRET and DEBUG are optional.
"""

import logging
import os
from dataclasses import dataclass

from clef_auth.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS
from clef_auth.errors import ConfigError

DEFAULT_REDIRECT_URL = "http://localhost:5000/oauth_callback"
# Dev only; set SESSION_SECRET in any real deployment
DEFAULT_SESSION_SECRET = "change-me"


@dataclass(frozen=True)
class Settings:
    app_id: str
    app_secret: str
    base_url: str = DEFAULT_BASE_URL
    redirect_url: str = DEFAULT_REDIRECT_URL
    http_timeout: float = DEFAULT_TIMEOUT_SECONDS
    session_secret: str = DEFAULT_SESSION_SECRET
    debug: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from environment variables; raise ConfigError if credentials are missing."""
        app_id = os.getenv("CLEF_APP_ID", "")
        app_secret = os.getenv("CLEF_APP_SECRET", "")
        missing = [name for name, value in (("CLEF_APP_ID", app_id), ("CLEF_APP_SECRET", app_secret)) if not value]
        if missing:
            raise ConfigError(f"missing required environment variables: {', '.join(missing)}")

        raw_timeout = os.getenv("CLEF_HTTP_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
        try:
            http_timeout = float(raw_timeout)
        except ValueError:
            raise ConfigError(f"CLEF_HTTP_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}") from None

        return cls(
            app_id=app_id,
            app_secret=app_secret,
            base_url=os.getenv("CLEF_BASE_URL", DEFAULT_BASE_URL),
            redirect_url=os.getenv("CLEF_REDIRECT_URL", DEFAULT_REDIRECT_URL),
            http_timeout=http_timeout,
            session_secret=os.getenv("SESSION_SECRET", DEFAULT_SESSION_SECRET),
            debug=bool(os.getenv("DEBUG")),
        )


def configure_logging(debug: bool) -> None:
    """Set up root logging; DEBUG also turns on the raw request/response dumps."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
