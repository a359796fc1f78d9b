"""
Session cookie store.

The credential pair is kept in two HttpOnly cookies (accessToken, refreshToken)
in plaintext; TLS and HttpOnly are the only protection. Domain and Secure come
from config so development (localhost) and production (shared parent domain)
differ only by environment. The require_* helpers are FastAPI dependencies that
reject the request with 401 before any upstream call is made.
"""
from fastapi import Request, Response

from config import (
    ACCESS_TOKEN_COOKIE_NAME,
    ACCESS_TOKEN_MAX_AGE,
    COOKIE_DOMAIN,
    REFRESH_TOKEN_COOKIE_NAME,
    REFRESH_TOKEN_MAX_AGE,
    SECURE_COOKIES,
)
from errors import Unauthenticated
from models import CredentialPair

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
}


# Cookie flags: HttpOnly (no JS access), SameSite=Lax (CSRF mitigation)
def _cookie_kwargs() -> dict:
    return {
        "httponly": True,
        "samesite": "lax",
        "secure": SECURE_COOKIES,
        "path": "/",
        "domain": COOKIE_DOMAIN,
    }


def set_access_cookie(response: Response, access_token: str) -> None:
    response.set_cookie(
        ACCESS_TOKEN_COOKIE_NAME,
        access_token,
        max_age=ACCESS_TOKEN_MAX_AGE,
        **_cookie_kwargs(),
    )


def set_session_cookies(response: Response, credentials: CredentialPair) -> None:
    """Issue both session cookies with their fixed expiry windows."""
    set_access_cookie(response, credentials.accessToken)
    response.set_cookie(
        REFRESH_TOKEN_COOKIE_NAME,
        credentials.refreshToken,
        max_age=REFRESH_TOKEN_MAX_AGE,
        **_cookie_kwargs(),
    )


def clear_session_cookies(response: Response) -> None:
    # Must match the path/domain the cookies were set with or browsers keep them
    for name in (ACCESS_TOKEN_COOKIE_NAME, REFRESH_TOKEN_COOKIE_NAME):
        response.delete_cookie(name, **_cookie_kwargs())


def read_session_cookies(request: Request) -> CredentialPair | None:
    """Return the credential pair, or None if either cookie is missing."""
    access_token = request.cookies.get(ACCESS_TOKEN_COOKIE_NAME)
    refresh_token = request.cookies.get(REFRESH_TOKEN_COOKIE_NAME)
    if not access_token or not refresh_token:
        return None
    return CredentialPair(accessToken=access_token, refreshToken=refresh_token)


def has_session(request: Request) -> bool:
    """Presence check only; tokens are not validated against Google."""
    return read_session_cookies(request) is not None


def set_security_headers(response: Response) -> None:
    for header, value in SECURITY_HEADERS.items():
        response.headers[header] = value


def require_access_token(request: Request) -> str:
    """FastAPI dependency: access token from cookie, or 401."""
    token = request.cookies.get(ACCESS_TOKEN_COOKIE_NAME)
    if not token:
        raise Unauthenticated("No access token found")
    return token


def require_refresh_token(request: Request) -> str:
    """FastAPI dependency: refresh token from cookie, or 401."""
    token = request.cookies.get(REFRESH_TOKEN_COOKIE_NAME)
    if not token:
        raise Unauthenticated("No refresh token found")
    return token
