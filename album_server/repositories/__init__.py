"""
Repositories package.
Explicit data-access layer over the SQLAlchemy models.
"""
from album_server.repositories.base import Repository
from album_server.repositories.album import AlbumRepository
from album_server.repositories.photo import PhotoRepository

__all__ = ["Repository", "AlbumRepository", "PhotoRepository"]
