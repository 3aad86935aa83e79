"""Test configuration and fixtures for Album Server.

Every test gets an isolated environment:
- seed directory (empty database snapshot + one seed upload)
- work directory holding the live database and uploads
- application built from those settings, lifespan included
"""
import asyncio
from pathlib import Path
from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from album_server.config import Settings

SEED_UPLOAD_NAME = "seed.jpg"
SEED_UPLOAD_BYTES = b"\xff\xd8\xff\xe0seed-image\xff\xd9"


@pytest.fixture
def seed_dir(tmp_path: Path) -> Path:
    """Seed data laid out like the bundled one."""
    seed = tmp_path / "seed"
    (seed / "uploads").mkdir(parents=True)
    # A zero-length file is a valid empty SQLite database
    (seed / "database.db").write_bytes(b"")
    (seed / "uploads" / SEED_UPLOAD_NAME).write_bytes(SEED_UPLOAD_BYTES)
    return seed


@pytest.fixture
def test_settings(tmp_path: Path, seed_dir: Path) -> Settings:
    """Settings pointing every writable path into tmp_path."""
    return Settings(
        work_dir=tmp_path / "work",
        seed_dir=seed_dir,
        metrics_enabled=False,
    )


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    from album_server.main import create_app

    return create_app(test_settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Test client with the lifespan (bootstrap + schema) already run.

    Usage:
        def test_something(client):
            response = client.get("/albums")
            assert response.status_code == 200
    """
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def run_async():
    """Helper to run async functions in sync context."""
    def _run(coro):
        return asyncio.run(coro)
    return _run


@pytest.fixture
def database(test_settings: Settings, run_async):
    """Bootstrapped database with the schema created."""
    from album_server.bootstrap import bootstrap_storage
    from album_server.database import Database

    bootstrap_storage(test_settings)
    db = Database(test_settings.database_url)
    run_async(db.init_db())
    yield db
    run_async(db.close())


@pytest.fixture
def test_image_bytes() -> bytes:
    """Small fake JPEG payload (content is never inspected)."""
    return b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + bytes(range(256)) + b"\xff\xd9"


@pytest.fixture
def album(client: TestClient) -> dict:
    """An album created through the API."""
    response = client.post("/albums", json={"title": "Vacation"})
    assert response.status_code == 201
    return response.json()
