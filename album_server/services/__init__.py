"""
Services package.
Contains business logic on top of the repositories and upload storage.
"""
from album_server.services.local_storage import LocalUploadStorage
from album_server.services.album import AlbumService
from album_server.services.photo import PhotoService

__all__ = [
    "LocalUploadStorage",
    "AlbumService",
    "PhotoService",
]
