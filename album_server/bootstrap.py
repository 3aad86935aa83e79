"""
Storage bootstrap.

Runs once at startup, before the server accepts connections, and
materializes the seed database and seed uploads into the writable work
directory:

    <work_dir>/
        database.db     copied from <seed>/database.db if absent
        uploads/        seed files copied in by name if absent

Existing files are never overwritten, so restarts keep user data.
"""
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from album_server.config import Settings
from album_server.exceptions import BootstrapError

logger = logging.getLogger("album_server.bootstrap")

SEED_DATABASE_NAME = "database.db"
SEED_UPLOADS_NAME = "uploads"


@dataclass(frozen=True)
class StoragePaths:
    """Resolved writable locations."""
    database_path: Path
    uploads_dir: Path


def ensure_database(settings: Settings) -> Path:
    """
    Make sure the database file exists, copying the seed snapshot on first run.

    Raises:
        BootstrapError: work directory or seed copy failed
    """
    db_path = settings.database_path

    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise BootstrapError(f"Cannot create directory {db_path.parent}: {e}") from e

    if not db_path.exists():
        seed_db = settings.seed_path / SEED_DATABASE_NAME
        try:
            shutil.copyfile(seed_db, db_path)
        except OSError as e:
            raise BootstrapError(f"Cannot copy seed database {seed_db} to {db_path}: {e}") from e
        logger.info(
            "Seed database extracted",
            extra={"event": "bootstrap", "path": str(db_path)},
        )

    return db_path


def ensure_uploads(settings: Settings) -> Path:
    """
    Make sure the upload directory exists and holds every seed upload.

    A seed file is copied only when no file of the same name exists at the
    destination. A single failed copy is logged and skipped.

    Raises:
        BootstrapError: upload directory could not be created or the seed
            uploads could not be listed
    """
    uploads_dir = settings.uploads_dir

    try:
        uploads_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise BootstrapError(f"Cannot create directory {uploads_dir}: {e}") from e

    seed_uploads = settings.seed_path / SEED_UPLOADS_NAME
    try:
        seed_files = sorted(p for p in seed_uploads.iterdir() if p.is_file())
    except OSError as e:
        raise BootstrapError(f"Cannot read seed uploads {seed_uploads}: {e}") from e

    for seed_file in seed_files:
        dst_path = uploads_dir / seed_file.name
        if dst_path.exists():
            continue
        try:
            shutil.copyfile(seed_file, dst_path)
        except OSError as e:
            logger.error(
                "Failed to extract seed upload",
                extra={"event": "bootstrap", "path": str(dst_path), "error": str(e)},
            )
            continue
        logger.info(
            "Seed upload extracted",
            extra={"event": "bootstrap", "path": str(dst_path)},
        )

    return uploads_dir


def bootstrap_storage(settings: Settings) -> StoragePaths:
    """Prepare the database file and upload directory."""
    return StoragePaths(
        database_path=ensure_database(settings),
        uploads_dir=ensure_uploads(settings),
    )
