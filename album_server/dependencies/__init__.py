"""
FastAPI dependencies package.
"""
from album_server.dependencies.context import (
    get_album_service,
    get_database,
    get_db,
    get_photo_service,
    get_upload_storage,
)

__all__ = [
    "get_album_service",
    "get_database",
    "get_db",
    "get_photo_service",
    "get_upload_storage",
]
