"""Photo repository."""
from typing import List

from album_server.models.photo import Photo
from album_server.repositories.base import Repository


class PhotoRepository(Repository[Photo]):
    """Data access for the ``photos`` table."""

    model = Photo

    async def find_by_album(self, album_id: int) -> List[Photo]:
        return await self.find_where(album_id=album_id)

    async def delete_by_album(self, album_id: int) -> int:
        return await self.delete_where(album_id=album_id)
