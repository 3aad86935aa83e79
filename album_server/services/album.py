"""
Album service for managing albums.
"""
import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from album_server.exceptions import AlbumNotFoundError
from album_server.models.album import Album
from album_server.repositories.album import AlbumRepository
from album_server.repositories.photo import PhotoRepository
from album_server.schemas.album import AlbumPayload

logger = logging.getLogger("album_server.album")


class AlbumService:
    """
    Service for handling album operations.
    Deleting an album also deletes its photo records.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.albums = AlbumRepository(db)
        self.photos = PhotoRepository(db)

    async def list_albums(self) -> List[Album]:
        """All albums ordered by id."""
        return await self.albums.find_all()

    async def get_album(self, album_id: int) -> Album:
        """
        Get an album by ID.

        Raises:
            AlbumNotFoundError: no album with this id
        """
        album = await self.albums.find_by_id(album_id)
        if album is None:
            raise AlbumNotFoundError(album_id)
        return album

    async def create_album(self, payload: AlbumPayload) -> Album:
        """
        Create a new album. The id is assigned by the database.

        Args:
            payload: Album body ({title})

        Returns:
            Created Album model
        """
        album = await self.albums.create(Album(title=payload.title))
        await self.db.commit()
        logger.info("Album created", extra={"event": "album", "album_id": album.id})
        return album

    async def update_album(self, album: Album, payload: AlbumPayload) -> Album:
        """
        Replace the album title and save the whole record.

        Args:
            album: Album previously loaded by ``get_album``
            payload: Album body ({title})

        Returns:
            Updated Album model
        """
        album.title = payload.title
        album = await self.albums.save(album)
        await self.db.commit()
        logger.info("Album updated", extra={"event": "album", "album_id": album.id})
        return album

    async def delete_album(self, album_id: int) -> None:
        """
        Delete an album and every photo record that references it.

        Photos go first and are committed on their own, so they stay
        deleted even when the album itself turns out not to exist.
        Stored files are left in the upload directory.

        Raises:
            AlbumNotFoundError: no album row was deleted
        """
        removed_photos = await self.photos.delete_by_album(album_id)
        await self.db.commit()

        deleted = await self.albums.delete(album_id)
        await self.db.commit()

        if deleted == 0:
            raise AlbumNotFoundError(album_id)

        logger.info(
            "Album deleted",
            extra={"event": "album", "album_id": album_id, "photos_deleted": removed_photos},
        )
