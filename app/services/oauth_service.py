"""
Google OAuth 2.0 client: authorization URL, code exchange, refresh, user info.

Stateless: every function takes the token it needs as an argument, so no
credential holder is shared between concurrent requests. Provider failures
are raised as UpstreamAuthError / UpstreamError; no call is retried.
"""
import logging
from urllib.parse import urlencode

import requests

from config import (
    GOOGLE_AUTH_URL,
    GOOGLE_CLIENT_ID,
    GOOGLE_CLIENT_SECRET,
    GOOGLE_REDIRECT_URI,
    GOOGLE_TOKEN_URL,
    GOOGLE_USERINFO_URL,
    OAUTH_SCOPES,
    UPSTREAM_TIMEOUT,
)
from errors import InvalidRequest, UpstreamAuthError, UpstreamError
from models import CredentialPair, UserProfile

logger = logging.getLogger(__name__)

DEFAULT_RETURN_PATH = "/"


def build_authorization_url(return_path: str | None = None) -> str:
    """
    Google consent URL for the Drive scopes. prompt=consent forces a refresh
    token on every login; the return path travels in `state`.
    """
    params = {
        "client_id": GOOGLE_CLIENT_ID,
        "redirect_uri": GOOGLE_REDIRECT_URI,
        "response_type": "code",
        "scope": " ".join(OAUTH_SCOPES),
        "access_type": "offline",
        "include_granted_scopes": "true",
        "prompt": "consent",
        "state": return_path or DEFAULT_RETURN_PATH,
    }
    return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"


def _token_request(data: dict) -> dict:
    """POST to the token endpoint; returns the JSON body (may contain "error")."""
    resp = requests.post(
        GOOGLE_TOKEN_URL,
        data={
            "client_id": GOOGLE_CLIENT_ID,
            "client_secret": GOOGLE_CLIENT_SECRET,
            **data,
        },
        headers={"Content-Type": "application/x-www-form-urlencoded"},
        timeout=UPSTREAM_TIMEOUT,
    )
    return resp.json()


def exchange_code(code: str | None, state: str | None) -> CredentialPair:
    """
    Exchange an authorization code for an access/refresh token pair.
    Raises InvalidRequest before calling Google if code or state is missing,
    UpstreamAuthError if Google fails or omits either token.
    """
    if not code:
        raise InvalidRequest("Missing authorization code")
    if not state:
        raise InvalidRequest("Missing state parameter")

    try:
        token_data = _token_request({
            "code": code,
            "grant_type": "authorization_code",
            "redirect_uri": GOOGLE_REDIRECT_URI,
        })
    except (requests.RequestException, ValueError) as e:
        logger.error("Token exchange request failed: %s", e)
        raise UpstreamAuthError("Authentication failed", str(e)) from e

    if "error" in token_data:
        reason = token_data.get("error_description", token_data["error"])
        logger.warning("Token exchange rejected: %s", reason)
        raise UpstreamAuthError("Authentication failed", f"Token exchange failed: {reason}")

    access_token = token_data.get("access_token")
    refresh_token = token_data.get("refresh_token")
    if not access_token or not refresh_token:
        raise UpstreamAuthError("Authentication failed", "Invalid token response from Google")
    return CredentialPair(accessToken=access_token, refreshToken=refresh_token)


def refresh_access_token(refresh_token: str) -> str:
    """Return a new access token; UpstreamAuthError if Google rejects the refresh token."""
    try:
        data = _token_request({
            "refresh_token": refresh_token,
            "grant_type": "refresh_token",
        })
    except (requests.RequestException, ValueError) as e:
        logger.error("Token refresh request failed: %s", e)
        raise UpstreamAuthError("Failed to refresh token", str(e)) from e

    if "error" in data:
        reason = data.get("error_description", data["error"])
        logger.warning("Token refresh rejected: %s", reason)
        raise UpstreamAuthError("Failed to refresh token", reason)
    access_token = data.get("access_token")
    if not access_token:
        raise UpstreamAuthError("Failed to refresh token", "Invalid token response from Google")
    return access_token


def fetch_user_info(access_token: str) -> UserProfile:
    try:
        resp = requests.get(
            GOOGLE_USERINFO_URL,
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=UPSTREAM_TIMEOUT,
        )
        resp.raise_for_status()
        info = resp.json()
    except (requests.RequestException, ValueError) as e:
        logger.error("Error fetching user info: %s", e)
        raise UpstreamError("Failed to fetch user information", str(e)) from e
    return UserProfile(
        id=info.get("id"),
        email=info.get("email"),
        name=info.get("name"),
        picture=info.get("picture"),
    )
