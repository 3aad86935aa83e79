"""Album repository."""
from album_server.models.album import Album
from album_server.repositories.base import Repository


class AlbumRepository(Repository[Album]):
    """Data access for the ``albums`` table."""

    model = Album
