"""
FastAPI routes for the Clef login flow: index page, OAuth callback, logout.

The ClefAPI, settings and logout registry live on app.state (see app.create_app)
and reach the handlers through the get_* dependencies, so tests can swap in a
fake provider without touching module state.
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from clef_auth.config import Settings
from clef_auth.errors import ClefError, InvalidTokenError
from clef_auth.protocol import IdentityProvider
from clef_auth.session import (
    LogoutRegistry,
    clear_session,
    get_access_token,
    is_logged_out,
    login_session,
)

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def get_clef(request: Request) -> IdentityProvider:
    return request.app.state.clef


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_logout_registry(request: Request) -> LogoutRegistry:
    return request.app.state.logout_registry


def create_auth_router() -> APIRouter:
    """Create an APIRouter with /, /oauth_callback and /logout endpoints."""
    router = APIRouter()

    @router.get("/", name="index")
    async def index(
        request: Request,
        clef: IdentityProvider = Depends(get_clef),
        settings: Settings = Depends(get_settings),
        registry: LogoutRegistry = Depends(get_logout_registry),
    ):
        """Render the profile of the logged in user, or the login button."""
        context = {
            "info": None,
            "error": None,
            "logged_in": False,
            "app_id": settings.app_id,
            "redirect_url": settings.redirect_url,
        }

        access_token = get_access_token(request)
        if access_token and is_logged_out(request, registry):
            clear_session(request)
            access_token = None

        if access_token:
            try:
                result = await clef.info(access_token)
            except InvalidTokenError:
                # Expired or revoked token: show the login button, not an error
                clear_session(request)
            except ClefError as e:
                logger.warning("Clef info lookup failed: %r", e)
                context["error"] = str(e)
            else:
                context["info"] = result.info
                context["logged_in"] = result.info is not None

        return templates.TemplateResponse(request, "index.html", context)

    @router.get("/oauth_callback", name="oauth_callback")
    async def oauth_callback(
        request: Request,
        code: Optional[str] = None,
        clef: IdentityProvider = Depends(get_clef),
    ):
        """Exchange the callback code for an access token, store it in the session, redirect to /."""
        if not code:
            return JSONResponse({"error": "missing code"}, status_code=400)
        try:
            authorized = await clef.authorize(code)
            profile = await clef.info(authorized.access_token)
        except ClefError as e:
            logger.warning("Clef authorization failed: %r", e)
            return JSONResponse({"error": str(e)}, status_code=502)

        clef_id = profile.info.provider_user_id if profile.info else None
        login_session(request, authorized.access_token, clef_id)
        logger.info("Clef user %s logged in", clef_id)
        return RedirectResponse(url="/", status_code=302)

    @router.post("/logout", name="logout_webhook")
    async def logout_webhook(
        request: Request,
        logout_token: Optional[str] = Form(None),
        clef: IdentityProvider = Depends(get_clef),
        registry: LogoutRegistry = Depends(get_logout_registry),
    ):
        """Provider webhook: exchange the logout token and mark that user's sessions as ended."""
        if not logout_token:
            return JSONResponse({"error": "missing logout_token"}, status_code=400)
        try:
            result = await clef.logout(logout_token)
        except ClefError as e:
            logger.warning("Clef logout failed: %r", e)
            return JSONResponse({"error": str(e)}, status_code=502)

        registry.record(result.provider_user_id)
        clear_session(request)
        logger.info("Clef user %s logged out", result.provider_user_id)
        return {"success": True}

    @router.get("/logout", name="logout")
    async def logout(request: Request):
        """Clear the local session and go back to the index page."""
        clear_session(request)
        return RedirectResponse(url="/", status_code=302)

    return router
