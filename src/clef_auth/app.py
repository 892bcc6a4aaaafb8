"""
FastAPI application factory for the Clef demo.

create_app wires one ClefAPI (or an injected provider), the settings and the
logout registry onto app.state, adds the session cookie middleware and mounts
the static files and auth routes.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from clef_auth.client import ClefAPI
from clef_auth.config import Settings
from clef_auth.protocol import IdentityProvider
from clef_auth.router import create_auth_router
from clef_auth.session import LogoutRegistry

STATIC_DIR = Path(__file__).parent / "static"


def create_app(settings: Optional[Settings] = None, provider: Optional[IdentityProvider] = None) -> FastAPI:
    """Build the demo app. Settings default to the environment; provider defaults to a ClefAPI."""
    if settings is None:
        settings = Settings.from_env()
    owned_client: Optional[ClefAPI] = None
    if provider is None:
        owned_client = ClefAPI(
            settings.app_id,
            settings.app_secret,
            base_url=settings.base_url,
            timeout=settings.http_timeout,
        )
        provider = owned_client

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owned_client is not None:
            await owned_client.aclose()

    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings
    app.state.clef = provider
    app.state.logout_registry = LogoutRegistry()

    app.add_middleware(SessionMiddleware, secret_key=settings.session_secret)
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    app.include_router(create_auth_router())
    return app
