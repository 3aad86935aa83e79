"""
Photo service for managing photos.
"""
import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from album_server.models.photo import Photo
from album_server.repositories.photo import PhotoRepository
from album_server.services.local_storage import LocalUploadStorage, sanitize_filename

logger = logging.getLogger("album_server.photo")


def stored_name(album_id: int, filename: str) -> str:
    """Upload directory name of a photo: ``<album_id>_<basename>``."""
    return f"{album_id}_{sanitize_filename(filename)}"


class PhotoService:
    """
    Service for handling photo operations.
    Files go to the local upload directory, metadata to the database.
    """

    def __init__(self, db: AsyncSession, storage: LocalUploadStorage):
        self.db = db
        self.storage = storage
        self.photos = PhotoRepository(db)

    async def list_album_photos(self, album_id: int) -> List[Photo]:
        """Photos referencing ``album_id``. The album itself is not checked."""
        return await self.photos.find_by_album(album_id)

    async def upload_photo(
        self,
        album_id: int,
        filename: str,
        file_content: bytes,
    ) -> Photo:
        """
        Write the photo file, then save its metadata.

        The album is not required to exist. An existing file with the same
        name is overwritten and a new record is still created.

        Args:
            album_id: Album the photo belongs to
            filename: Original filename as sent by the client
            file_content: Photo file content as bytes

        Returns:
            Created Photo model

        Raises:
            UploadWriteError: the file could not be written (no record is created)
        """
        name = stored_name(album_id, filename)
        await self.storage.save(name, file_content)

        photo = await self.photos.create(
            Photo(
                album_id=album_id,
                title=filename,
                url=self.storage.url_for(name),
            )
        )
        await self.db.commit()
        logger.info(
            "Photo uploaded",
            extra={"event": "photo", "photo_id": photo.id, "album_id": album_id, "size": len(file_content)},
        )
        return photo
