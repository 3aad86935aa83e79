"""
Pydantic schemas package.
All schemas are exported here for easy import.
"""
from album_server.schemas.album import (
    AlbumPayload,
    AlbumResponse,
    ErrorResponse,
    MessageResponse,
    format_validation_error,
    parse_album_payload,
)
from album_server.schemas.photo import PhotoResponse

__all__ = [
    # Album schemas
    "AlbumPayload",
    "AlbumResponse",
    "parse_album_payload",
    # Photo schemas
    "PhotoResponse",
    # Common
    "ErrorResponse",
    "MessageResponse",
    "format_validation_error",
]
