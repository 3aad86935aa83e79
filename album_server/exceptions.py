"""
Application exceptions.

Request-time errors are turned into ``{response_key: message}`` JSON responses
with their ``status_code`` by the handler registered in ``album_server.main``.
``BootstrapError`` is raised only during startup and aborts the process.
"""


class AlbumServerError(Exception):
    """Base exception for the album server."""

    status_code = 500
    # JSON 응답 본문의 키 ({"error": message})
    response_key = "error"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class AlbumNotFoundError(AlbumServerError):
    """Referenced album does not exist."""

    status_code = 404
    response_key = "message"

    def __init__(self, album_id: int | None = None):
        super().__init__("Album not found")
        self.album_id = album_id


class BadRequestError(AlbumServerError):
    """Malformed request body or missing upload file."""

    status_code = 400


class UploadWriteError(AlbumServerError):
    """Uploaded file could not be written to the upload directory."""

    status_code = 500

    def __init__(self, path: str, reason: str = ""):
        super().__init__("Failed to save file")
        self.path = path
        self.reason = reason


class BootstrapError(AlbumServerError):
    """Work directory, seed data or database could not be prepared at startup."""
