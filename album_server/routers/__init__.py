"""
API routers package.
"""
from album_server.routers.albums import router as albums_router
from album_server.routers.photos import router as photos_router
from album_server.routers.health import router as health_router

__all__ = ["albums_router", "photos_router", "health_router"]
