import pytest
import requests

from config import DRIVE_FILES_URL
from fakes import FakeDrive, make_response


@pytest.mark.parametrize(
    "method, path, body",
    [
        ("GET", "/api/drive/files/md-1/star", None),
        ("PUT", "/api/drive/files/md-1/star", None),
        ("GET", "/api/drive/files/md-1", None),
        ("PUT", "/api/drive/files/md-1/content", {"content": "x"}),
        ("PUT", "/api/drive/files/md-1", {"filename": "x.md"}),
    ],
)
def test_requires_access_cookie_before_calling_drive(client, fake_drive, upstream, method, path, body):
    client.cookies.set("refreshToken", "refresh-tok")

    resp = client.request(method, path, json=body)

    assert resp.status_code == 401
    assert resp.json()["error"] == "No access token found"
    assert upstream.request.call_count == 0
    assert upstream.get.call_count == 0
    assert fake_drive.calls == []


def test_get_star(authed_client, fake_drive):
    assert authed_client.get("/api/drive/files/py-1/star").json() == {"starred": True}
    method, url, params = fake_drive.calls[0]
    assert method == "GET"
    assert params["fields"] == "starred"


def test_toggle_star_twice_restores_original(authed_client, fake_drive):
    first = authed_client.put("/api/drive/files/md-1/star")
    assert first.status_code == 200
    assert first.json() == {"starred": True}
    assert fake_drive.files["md-1"]["starred"] is True

    second = authed_client.put("/api/drive/files/md-1/star")
    assert second.json() == {"starred": False}
    assert fake_drive.files["md-1"]["starred"] is False


def test_bearer_token_comes_from_cookie(authed_client, upstream, fake_drive):
    authed_client.get("/api/drive/files/md-1/star")
    assert upstream.request.call_args.kwargs["headers"]["Authorization"] == "Bearer access-tok"


def test_get_markdown_file_inline(authed_client, fake_drive):
    resp = authed_client.get("/api/drive/files/md-1")

    assert resp.status_code == 200
    assert resp.json() == {
        "filename": "notes.md",
        "content": "# Notes\n\n- café\n",
        "starred": False,
    }


def test_get_source_file_by_application_x_type(authed_client, fake_drive):
    resp = authed_client.get("/api/drive/files/py-1")
    assert resp.status_code == 200
    assert resp.json()["content"] == "print('hi')\n"
    assert resp.json()["starred"] is True


def test_get_pdf_is_unsupported(authed_client, fake_drive, upstream):
    resp = authed_client.get("/api/drive/files/pdf-1")

    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "Unsupported file type"
    assert body["mimeType"] == "application/pdf"
    assert "application/pdf" in body["details"]
    assert "text/markdown" in body["supportedTypes"]
    # metadata only, media never downloaded
    upstream.get.assert_not_called()


def test_missing_file_is_404(authed_client, fake_drive):
    for method, path, body in [
        ("GET", "/api/drive/files/nope/star", None),
        ("PUT", "/api/drive/files/nope/star", None),
        ("GET", "/api/drive/files/nope", None),
        ("PUT", "/api/drive/files/nope/content", {"content": "x"}),
        ("PUT", "/api/drive/files/nope", {"filename": "x.md"}),
    ]:
        resp = authed_client.request(method, path, json=body)
        assert resp.status_code == 404, path
        assert resp.json() == {"error": "File not found"}


def test_drive_failure_is_500(authed_client, upstream):
    drive = FakeDrive(fail_with=503)
    upstream.request.side_effect = drive.request

    resp = authed_client.put("/api/drive/files/md-1/star")

    assert resp.status_code == 500
    assert resp.json()["error"] == "Failed to toggle file star status"


def test_drive_connection_error_is_500(authed_client, upstream):
    upstream.request.side_effect = requests.ConnectionError("unreachable")
    resp = authed_client.get("/api/drive/files/md-1")
    assert resp.status_code == 500
    assert resp.json()["error"] == "Failed to fetch file"


def test_update_content_keeps_mime_type(authed_client, fake_drive):
    resp = authed_client.put("/api/drive/files/py-1/content", json={"content": "print('bye')\n"})

    assert resp.status_code == 200
    assert resp.json() == {"id": "py-1", "name": "script.py", "mimeType": "application/x-python"}
    assert fake_drive.files["py-1"]["content"] == "print('bye')\n"
    assert fake_drive.files["py-1"]["uploadedMimeType"] == "application/x-python"


def test_update_content_accepts_empty_string(authed_client, fake_drive):
    resp = authed_client.put("/api/drive/files/md-1/content", json={"content": ""})
    assert resp.status_code == 200
    assert fake_drive.files["md-1"]["content"] == ""


def test_update_content_requires_content(authed_client, fake_drive):
    resp = authed_client.put("/api/drive/files/md-1/content", json={})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Content is required"
    assert fake_drive.calls == []


def test_rename(authed_client, fake_drive):
    resp = authed_client.put("/api/drive/files/md-1", json={"filename": "renamed.md"})

    assert resp.status_code == 200
    assert resp.json() == {"id": "md-1", "name": "renamed.md"}
    assert fake_drive.files["md-1"]["name"] == "renamed.md"


@pytest.mark.parametrize("body", [{}, {"filename": ""}, {"filename": "   "}])
def test_rename_requires_filename(authed_client, fake_drive, body):
    resp = authed_client.put("/api/drive/files/md-1", json=body)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Filename is required"
    assert fake_drive.calls == []


def test_file_id_is_quoted_into_drive_path(authed_client, upstream):
    upstream.request.return_value = make_response(json_data={"starred": True})

    resp = authed_client.get("/api/drive/files/abc%3FsupportsAllDrives=true/star")

    assert resp.status_code == 200
    url = upstream.request.call_args.args[1]
    assert url == f"{DRIVE_FILES_URL}/abc%3FsupportsAllDrives%3Dtrue"


def test_non_json_drive_reply_is_500(authed_client, upstream):
    upstream.request.return_value = make_response(content=b"<html>proxy error</html>")

    resp = authed_client.put("/api/drive/files/md-1", json={"filename": "x.md"})

    assert resp.status_code == 500
    assert resp.json()["error"] == "Failed to rename file"
