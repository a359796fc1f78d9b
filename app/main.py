"""
Drive text-file proxy backend: Google OAuth session cookies and Drive file operations.

Load .env in development only (production uses env vars directly). Adds CORS,
error translation for ApiError, a global exception handler and /ping.
Run with `uvicorn main:app` or `python main.py` (TLS when SSL_KEYFILE and
SSL_CERTFILE are set).
"""
import logging
import os
from datetime import datetime, UTC
from pathlib import Path

from dotenv import load_dotenv

# Load .env only in development, before config reads the environment
if os.getenv("ENV", "development").lower() == "development":
    load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import (
    FRONTEND_URL,
    HOST,
    IS_PRODUCTION,
    LOG_LEVEL,
    PORT,
    SSL_CERTFILE,
    SSL_KEYFILE,
)
from errors import ApiError, InvalidRequest
from auth import router as auth_router
from drive import router as drive_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Drive Text Proxy",
    description="Google OAuth cookie sessions and text-file operations on Google Drive.",
)

# CORS: explicit origin, allow credentials (cookies). Never use "*" with cookies.
app.add_middleware(
    CORSMiddleware,
    allow_origins=[FRONTEND_URL] if FRONTEND_URL else [],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    """Render ApiError as JSON; the detail message is hidden in production."""
    content = {"error": exc.error, **exc.extra()}
    if exc.detail and not IS_PRODUCTION:
        content["message"] = exc.detail
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed query or body is an invalid request (400), not 422."""
    detail = "; ".join(str(err.get("msg")) for err in exc.errors())
    return await api_error_handler(request, InvalidRequest("Invalid request", detail or None))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch unhandled exceptions; log and return generic 500. Never leak stack traces."""
    # Let FastAPI handle HTTPException (validation, auth, etc.)
    if isinstance(exc, HTTPException):
        raise exc
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
    )


@app.get("/ping")
def ping():
    # UTC with milliseconds and a "Z" suffix, e.g. 2024-01-01T00:00:00.000Z
    timestamp = datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return {"pong": True, "timestamp": timestamp}


app.include_router(auth_router)
app.include_router(drive_router)


if __name__ == "__main__":
    import uvicorn

    tls = bool(SSL_KEYFILE and SSL_CERTFILE)
    logger.info("Starting %s server on %s:%s", "HTTPS" if tls else "HTTP", HOST, PORT)
    uvicorn.run(
        app,
        host=HOST,
        port=PORT,
        ssl_keyfile=SSL_KEYFILE if tls else None,
        ssl_certfile=SSL_CERTFILE if tls else None,
    )
