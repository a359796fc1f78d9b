import os
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

APP_DIR = Path(__file__).resolve().parent.parent / "app"
if str(APP_DIR) not in sys.path:
    sys.path.insert(0, str(APP_DIR))

# config reads the environment once at import
os.environ["ENV"] = "test"
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id"
os.environ["GOOGLE_CLIENT_SECRET"] = "test-client-secret"
os.environ["GOOGLE_REDIRECT_URI"] = "http://localhost:8080/auth/callback"
os.environ["FRONTEND_URL"] = "http://localhost:5173"
os.environ.pop("COOKIE_DOMAIN", None)
os.environ.pop("SECURE_COOKIES", None)

from fastapi.testclient import TestClient  # noqa: E402

from fakes import FakeDrive  # noqa: E402

DRIVE_FILES = {
    "md-1": {
        "name": "notes.md",
        "mimeType": "text/markdown",
        "starred": False,
        "content": "# Notes\n\n- café\n",
    },
    "py-1": {
        "name": "script.py",
        "mimeType": "application/x-python",
        "starred": True,
        "content": "print('hi')\n",
    },
    "pdf-1": {
        "name": "report.pdf",
        "mimeType": "application/pdf",
        "starred": False,
    },
}


@pytest.fixture
def client():
    import main

    with TestClient(main.app) as test_client:
        yield test_client


@pytest.fixture
def authed_client(client):
    client.cookies.set("accessToken", "access-tok")
    client.cookies.set("refreshToken", "refresh-tok")
    return client


@pytest.fixture
def upstream(mocker):
    """Patch every outbound requests call; tests configure the mocks they need."""
    return SimpleNamespace(
        request=mocker.patch("requests.request"),
        get=mocker.patch("requests.get"),
        post=mocker.patch("requests.post"),
    )


@pytest.fixture
def fake_drive(upstream):
    drive = FakeDrive(DRIVE_FILES)
    upstream.request.side_effect = drive.request
    upstream.get.side_effect = drive.get
    return drive
