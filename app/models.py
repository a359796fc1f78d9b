"""
Data models for the Drive proxy.

Nothing here is persisted: every value lives for one request. Field names
follow the JSON the frontend and Google use (camelCase).
"""
from pydantic import BaseModel


class CredentialPair(BaseModel):
    """
    Google tokens held only in the caller's cookie jar.

    - accessToken: bearer token for Drive/userinfo calls (cookie max-age 1 hour).
    - refreshToken: exchanged for a new accessToken (cookie max-age 30 days).
    """
    accessToken: str
    refreshToken: str


class UserProfile(BaseModel):
    id: str | None = None
    email: str | None = None
    name: str | None = None
    picture: str | None = None


class StarStatus(BaseModel):
    starred: bool


class FileContent(BaseModel):
    filename: str
    content: str
    starred: bool = False


class FileMetadata(BaseModel):
    id: str
    name: str
    mimeType: str


class FileName(BaseModel):
    id: str
    name: str
