"""
Application configuration from environment variables.

Load with python-dotenv in main so env vars are available before imports.
Everything that differs between development and production (cookie domain,
secure flag, redirect URI, error detail) is resolved here once at import and
read as constants elsewhere. Missing OAuth client credentials raise RuntimeError.
"""
import os

# Environment: development | production (affects cookie flags, error details)
ENV = os.getenv("ENV", "development").lower()
IS_PRODUCTION = ENV == "production"

# --- Required (raise if missing) ---
GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID")
GOOGLE_CLIENT_SECRET = os.getenv("GOOGLE_CLIENT_SECRET")

for name, val in [
    ("GOOGLE_CLIENT_ID", GOOGLE_CLIENT_ID),
    ("GOOGLE_CLIENT_SECRET", GOOGLE_CLIENT_SECRET),
]:
    if not val or not str(val).strip():
        raise RuntimeError(f"Required env var {name} is missing or empty")

# --- Optional with defaults ---
GOOGLE_REDIRECT_URI = os.getenv("GOOGLE_REDIRECT_URI", "http://localhost:8080/auth/callback")

# Frontend origin: post-login redirect target and the only CORS origin
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173").rstrip("/")

# Google endpoints
GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"
DRIVE_FILES_URL = "https://www.googleapis.com/drive/v3/files"
DRIVE_UPLOAD_URL = "https://www.googleapis.com/upload/drive/v3/files"

OAUTH_SCOPES = [
    "https://www.googleapis.com/auth/drive.file",
    "https://www.googleapis.com/auth/drive.install",
]

# Session cookies: plaintext tokens, HttpOnly, SameSite=Lax
ACCESS_TOKEN_COOKIE_NAME = "accessToken"
REFRESH_TOKEN_COOKIE_NAME = "refreshToken"
ACCESS_TOKEN_MAX_AGE = 3600  # 1 hour
REFRESH_TOKEN_MAX_AGE = 30 * 24 * 3600  # 30 days

# Production shares cookies across subdomains via COOKIE_DOMAIN (e.g. ".example.com");
# unset there means host-only cookies
COOKIE_DOMAIN = os.getenv("COOKIE_DOMAIN") or (None if IS_PRODUCTION else "localhost")

_SECURE_RAW = os.getenv("SECURE_COOKIES")
if _SECURE_RAW is None:
    SECURE_COOKIES = IS_PRODUCTION
else:
    SECURE_COOKIES = _SECURE_RAW.lower() in ("1", "true", "yes")


def _int_env(key: str, default: int) -> int:
    try:
        return max(1, int(os.getenv(key, str(default))))
    except ValueError:
        return default


# Request timeouts (connect, read) in seconds for every Google call
UPSTREAM_TIMEOUT = (
    _int_env("UPSTREAM_CONNECT_TIMEOUT", 5),
    _int_env("UPSTREAM_READ_TIMEOUT", 30),
)

# Listener
HOST = os.getenv("HOST", "0.0.0.0")
PORT = _int_env("PORT", 8080)
SSL_KEYFILE = os.getenv("SSL_KEYFILE") or None
SSL_CERTFILE = os.getenv("SSL_CERTFILE") or None

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
