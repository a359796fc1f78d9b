"""
Error taxonomy for the API.

Each error carries the HTTP status, a public message that is always returned,
and an optional detail that main.api_error_handler only exposes outside
production.
"""


class ApiError(Exception):
    """Base for errors translated into a JSON response at the handler boundary."""

    status_code = 500

    def __init__(self, error: str, detail: str | None = None):
        self.error = error
        self.detail = detail
        super().__init__(error if detail is None else f"{error}: {detail}")

    def extra(self) -> dict:
        """Fields added to the response body regardless of environment."""
        return {}


class InvalidRequest(ApiError):
    status_code = 400


class Unauthenticated(ApiError):
    status_code = 401


class NotFound(ApiError):
    status_code = 404


class UnsupportedMediaType(ApiError):
    """MIME gate rejection; the diagnostic fields are part of the public body."""

    status_code = 400

    def __init__(self, mime_type: str | None, supported_types: list[str]):
        self.mime_type = mime_type
        self.supported_types = supported_types
        super().__init__(
            "Unsupported file type",
            f'The file type "{mime_type}" is not supported. This editor only '
            "supports text-based files and source code files.",
        )

    def extra(self) -> dict:
        return {
            "details": self.detail,
            "mimeType": self.mime_type,
            "supportedTypes": self.supported_types,
        }


class UpstreamAuthError(ApiError):
    status_code = 401


class UpstreamError(ApiError):
    status_code = 500
