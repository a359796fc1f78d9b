"""
Drive service: Google Drive v3 REST calls for star, content and rename.

Business logic separated from HTTP layer. The caller's access token is passed
into every function and sent as a bearer header; nothing is cached, every read
goes to Drive. HTTP and connection errors propagate as requests exceptions for
the router to translate.
"""
from typing import Any
from urllib.parse import quote

import requests

from config import DRIVE_FILES_URL, DRIVE_UPLOAD_URL, UPSTREAM_TIMEOUT
from errors import UnsupportedMediaType
from models import FileContent, FileMetadata, FileName
from services.mime_types import is_text_like, supported_types


def _file_url(base: str, file_id: str) -> str:
    # ids are opaque; "/" or "?" must not reach the upstream path
    return f"{base}/{quote(file_id, safe='')}"


def _drive_request(
    method: str,
    url: str,
    access_token: str,
    **kwargs: Any,
) -> dict | None:
    """Call Drive API with timeout; returns JSON. Raises on HTTP errors."""
    headers = {"Authorization": f"Bearer {access_token}"}
    if "headers" in kwargs:
        headers.update(kwargs.pop("headers"))
    kwargs.setdefault("timeout", UPSTREAM_TIMEOUT)
    resp = requests.request(method, url, headers=headers, **kwargs)
    resp.raise_for_status()
    if resp.content:
        return resp.json()
    return None


def get_metadata(access_token: str, file_id: str, fields: str) -> dict:
    """Fetch selected metadata fields of one file."""
    data = _drive_request(
        "GET",
        _file_url(DRIVE_FILES_URL, file_id),
        access_token,
        params={"fields": fields},
    )
    return data or {}


def get_starred(access_token: str, file_id: str) -> bool:
    return bool(get_metadata(access_token, file_id, "starred").get("starred"))


def set_starred(access_token: str, file_id: str, starred: bool) -> bool:
    """Write the starred flag; returns the value Drive reports back."""
    data = _drive_request(
        "PATCH",
        _file_url(DRIVE_FILES_URL, file_id),
        access_token,
        params={"fields": "starred"},
        json={"starred": starred},
    )
    return bool((data or {}).get("starred"))


def toggle_starred(access_token: str, file_id: str) -> bool:
    """
    Flip the starred flag and return the new value. Read then write with no
    revision check: a concurrent toggle from another client can be lost.
    """
    current = get_starred(access_token, file_id)
    return set_starred(access_token, file_id, not current)


def download_text(access_token: str, file_id: str) -> str:
    """Download the raw media of a file decoded as UTF-8."""
    resp = requests.get(
        _file_url(DRIVE_FILES_URL, file_id),
        headers={"Authorization": f"Bearer {access_token}"},
        params={"alt": "media"},
        timeout=UPSTREAM_TIMEOUT,
    )
    resp.raise_for_status()
    # Drive often omits charset; requests would then fall back to ISO-8859-1
    return resp.content.decode("utf-8", errors="replace")


def get_file_content(access_token: str, file_id: str) -> FileContent:
    """
    Return name, text content and starred flag of a file. Raises
    UnsupportedMediaType, without downloading, when the MIME type is not text-like.
    """
    meta = get_metadata(access_token, file_id, "name, mimeType, starred")
    mime = meta.get("mimeType")
    if not is_text_like(mime):
        raise UnsupportedMediaType(mime, supported_types())
    content = download_text(access_token, file_id)
    return FileContent(
        filename=meta.get("name", ""),
        content=content,
        starred=bool(meta.get("starred")),
    )


def update_content(access_token: str, file_id: str, content: str) -> FileMetadata:
    """
    Overwrite the media body of a file, keeping its current MIME type. The
    allow-list is not consulted on write.
    """
    mime = get_metadata(access_token, file_id, "mimeType").get("mimeType") or "text/plain"
    data = _drive_request(
        "PATCH",
        _file_url(DRIVE_UPLOAD_URL, file_id),
        access_token,
        params={"uploadType": "media", "fields": "id, name, mimeType"},
        headers={"Content-Type": mime},
        data=content.encode("utf-8"),
    ) or {}
    return FileMetadata(
        id=data.get("id", file_id),
        name=data.get("name", ""),
        mimeType=data.get("mimeType", mime),
    )


def rename_file(access_token: str, file_id: str, filename: str) -> FileName:
    data = _drive_request(
        "PATCH",
        _file_url(DRIVE_FILES_URL, file_id),
        access_token,
        params={"fields": "id, name"},
        json={"name": filename},
    ) or {}
    return FileName(id=data.get("id", file_id), name=data.get("name", filename))
