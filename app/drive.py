"""
Drive router: HTTP endpoints for star status, file content and rename.

Delegates Drive calls to services.drive_service with the access token from the
caller's cookie. A missing cookie is rejected by require_access_token before
any Drive call. Drive 404 becomes NotFound; any other Drive failure becomes
UpstreamError with a per-operation message. No retries.
"""
import logging

import requests
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from errors import ApiError, InvalidRequest, NotFound, UpstreamError
from models import FileContent, FileMetadata, FileName, StarStatus
from services.drive_service import (
    get_file_content,
    get_starred,
    rename_file,
    toggle_starred,
    update_content,
)
from session import require_access_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/drive")


# --- Request models ---


class ContentBody(BaseModel):
    """Request body for overwriting file content; empty string is valid content."""
    content: str | None = None


class RenameBody(BaseModel):
    filename: str | None = None


def _upstream_error(exc: Exception, failure: str) -> ApiError:
    """Translate a Drive request failure (HTTP error or unparseable reply) into the API error taxonomy."""
    response = getattr(exc, "response", None)
    if response is not None and response.status_code == 404:
        return NotFound("File not found")
    logger.error("%s: %s", failure, exc)
    return UpstreamError(failure, str(exc))


# --- Endpoints ---


@router.get("/files/{file_id}/star", response_model=StarStatus)
def get_star(file_id: str, access_token: str = Depends(require_access_token)):
    try:
        starred = get_starred(access_token, file_id)
    except (requests.RequestException, ValueError) as e:
        raise _upstream_error(e, "Failed to get file star status") from e
    return StarStatus(starred=starred)


@router.put("/files/{file_id}/star", response_model=StarStatus)
def toggle_star(file_id: str, access_token: str = Depends(require_access_token)):
    """Flip the starred flag and return the new value (last write wins)."""
    try:
        starred = toggle_starred(access_token, file_id)
    except (requests.RequestException, ValueError) as e:
        raise _upstream_error(e, "Failed to toggle file star status") from e
    return StarStatus(starred=starred)


@router.get("/files/{file_id}", response_model=FileContent)
def get_file(file_id: str, access_token: str = Depends(require_access_token)):
    """
    Return {filename, content, starred}. Files whose MIME type is not
    text-like are rejected with 400 and the list of supported types.
    """
    try:
        return get_file_content(access_token, file_id)
    except (requests.RequestException, ValueError) as e:
        raise _upstream_error(e, "Failed to fetch file") from e


@router.put("/files/{file_id}/content", response_model=FileMetadata)
def put_content(
    file_id: str,
    body: ContentBody,
    access_token: str = Depends(require_access_token),
):
    if body.content is None:
        raise InvalidRequest("Content is required")
    try:
        return update_content(access_token, file_id, body.content)
    except (requests.RequestException, ValueError) as e:
        raise _upstream_error(e, "Failed to update file content") from e


@router.put("/files/{file_id}", response_model=FileName)
def rename(
    file_id: str,
    body: RenameBody,
    access_token: str = Depends(require_access_token),
):
    if not body.filename or not body.filename.strip():
        raise InvalidRequest("Filename is required")
    try:
        return rename_file(access_token, file_id, body.filename)
    except (requests.RequestException, ValueError) as e:
        raise _upstream_error(e, "Failed to rename file") from e
