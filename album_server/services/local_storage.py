"""Local filesystem storage for uploaded photos."""
import logging
from pathlib import Path, PurePosixPath

import aiofiles

from album_server.exceptions import UploadWriteError

logger = logging.getLogger("album_server.storage")


def sanitize_filename(filename: str) -> str:
    """Strip client-supplied directory components (``/`` and ``\\``)."""
    return PurePosixPath(filename.replace("\\", "/")).name


class LocalUploadStorage:
    """Upload directory backend.

    Files are stored flat:
        <root>/
            <album_id>_<filename>

    and served back under ``/<url_prefix>/<name>`` by the static mount.
    """

    def __init__(self, root: Path, url_prefix: str = "uploads"):
        self.root = Path(root)
        self.url_prefix = url_prefix.strip("/")

    def path_for(self, name: str) -> Path:
        """Full filesystem path for a stored file name."""
        return self.root / sanitize_filename(name)

    def url_for(self, name: str) -> str:
        """Relative URL of a stored file, e.g. ``/uploads/1_beach.jpg``."""
        return f"/{self.url_prefix}/{sanitize_filename(name)}"

    async def save(self, name: str, content: bytes) -> Path:
        """Write ``content`` to ``<root>/<name>``, replacing any existing file.

        Raises:
            UploadWriteError: the file could not be written
        """
        file_path = self.path_for(name)
        try:
            async with aiofiles.open(file_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error(
                "Failed to write upload",
                exc_info=e,
                extra={"event": "storage", "path": str(file_path)},
            )
            raise UploadWriteError(str(file_path), str(e)) from e
        return file_path
