"""
Database models package.
All models are exported here for easy import.
"""
from album_server.models.album import Album
from album_server.models.photo import Photo

__all__ = ["Album", "Photo"]
