"""
Request dependencies.

The persistence handle and upload storage are built once by ``create_app``
and kept on ``app.state``; handlers get them (and the services built on
them) through ``Depends``.
"""
from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from album_server.database import Database
from album_server.services.album import AlbumService
from album_server.services.local_storage import LocalUploadStorage
from album_server.services.photo import PhotoService


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_upload_storage(request: Request) -> LocalUploadStorage:
    return request.app.state.upload_storage


async def get_db(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.
    Ensures proper cleanup of connections after each request.

    Usage:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with database.session() as session:
        yield session


def get_album_service(db: AsyncSession = Depends(get_db)) -> AlbumService:
    return AlbumService(db)


def get_photo_service(
    db: AsyncSession = Depends(get_db),
    storage: LocalUploadStorage = Depends(get_upload_storage),
) -> PhotoService:
    return PhotoService(db, storage)
