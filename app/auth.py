"""
Google OAuth 2.0 routes and session cookie lifecycle.

- /auth/google/url returns the consent URL; the frontend return path rides in `state`.
- /auth/callback exchanges the code for tokens, stores both in HttpOnly
  cookies and redirects to the frontend return path.
- /api/auth/refresh trades the refresh cookie for a new access cookie.
- /api/auth/status is a cookie presence check; /api/auth/user reads the profile.
- /api/auth/logout clears both cookies.
"""
import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response

from config import FRONTEND_URL
from errors import InvalidRequest, Unauthenticated
from models import UserProfile
from services.oauth_service import (
    build_authorization_url,
    exchange_code,
    fetch_user_info,
    refresh_access_token,
)
from session import (
    clear_session_cookies,
    has_session,
    require_access_token,
    require_refresh_token,
    set_access_cookie,
    set_security_headers,
    set_session_cookies,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/auth/google/url")
def google_auth_url(return_url: str = Query("/", alias="returnUrl")):
    """Return the Google consent URL; returnUrl is where the frontend wants to land after login."""
    return {"url": build_authorization_url(return_url)}


@router.get("/auth/callback")
def google_callback(
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
):
    """
    Handle redirect from Google. Exchanges code for tokens, sets both session
    cookies and security headers, redirects to FRONTEND_URL + return path.
    """
    if error:
        raise InvalidRequest("Authentication failed", f"OAuth error: {error}")

    credentials = exchange_code(code, state)
    if not state.startswith("/"):
        # Redirected as-is; a state that is not a relative path can leave the frontend origin
        logger.warning("OAuth state is not a relative path: %r", state)
    logger.info("OAuth callback completed; issuing session cookies")

    redirect = RedirectResponse(
        url=f"{FRONTEND_URL}{state}",
        status_code=302,
    )
    set_session_cookies(redirect, credentials)
    set_security_headers(redirect)
    return redirect


@router.post("/api/auth/refresh")
def refresh(refresh_token: str = Depends(require_refresh_token)):
    access_token = refresh_access_token(refresh_token)
    response = JSONResponse({"success": True})
    set_access_cookie(response, access_token)
    set_security_headers(response)
    return response


@router.get("/api/auth/status")
def status(request: Request):
    """200 with empty body when both session cookies are present, else 401."""
    if not has_session(request):
        raise Unauthenticated("No access token or refresh token found")
    return Response(status_code=200)


@router.get("/api/auth/user", response_model=UserProfile)
def current_user(access_token: str = Depends(require_access_token)):
    return fetch_user_info(access_token)


@router.post("/api/auth/logout")
def logout():
    """Clear both session cookies. No session is required."""
    response = Response(status_code=200)
    clear_session_cookies(response)
    return response
