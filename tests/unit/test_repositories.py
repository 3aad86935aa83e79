"""Repository and service tests against a real SQLite file."""
import pytest

from album_server.database import Database
from album_server.exceptions import AlbumNotFoundError
from album_server.models import Album, Photo
from album_server.repositories import AlbumRepository, PhotoRepository
from album_server.schemas import AlbumPayload
from album_server.services import AlbumService


class TestAlbumRepository:

    def test_create_assigns_increasing_ids(self, database: Database, run_async):
        async def scenario():
            async with database.session() as session:
                repo = AlbumRepository(session)
                first = await repo.create(Album(title="a"))
                second = await repo.create(Album(title="b"))
                return first.id, second.id

        first_id, second_id = run_async(scenario())

        assert first_id >= 1
        assert second_id > first_id

    def test_committed_rows_are_visible_to_new_sessions(self, database: Database, run_async):
        async def scenario():
            async with database.session() as session:
                await AlbumRepository(session).create(Album(title="kept"))
            async with database.session() as session:
                return [a.title for a in await AlbumRepository(session).find_all()]

        assert run_async(scenario()) == ["kept"]

    def test_find_by_id_missing_returns_none(self, database: Database, run_async):
        async def scenario():
            async with database.session() as session:
                return await AlbumRepository(session).find_by_id(12345)

        assert run_async(scenario()) is None

    def test_save_updates_whole_record(self, database: Database, run_async):
        async def scenario():
            async with database.session() as session:
                album = await AlbumRepository(session).create(Album(title="old"))
            album.title = "new"
            async with database.session() as session:
                await AlbumRepository(session).save(album)
            async with database.session() as session:
                return (await AlbumRepository(session).find_by_id(album.id)).title

        assert run_async(scenario()) == "new"

    def test_delete_reports_affected_rows(self, database: Database, run_async):
        async def scenario():
            async with database.session() as session:
                repo = AlbumRepository(session)
                album = await repo.create(Album(title="gone"))
                return await repo.delete(album.id), await repo.delete(album.id)

        assert run_async(scenario()) == (1, 0)

    def test_failed_unit_of_work_is_rolled_back(self, database: Database, run_async):
        async def scenario():
            with pytest.raises(RuntimeError):
                async with database.session() as session:
                    await AlbumRepository(session).create(Album(title="rolled back"))
                    raise RuntimeError("boom")
            async with database.session() as session:
                return await AlbumRepository(session).find_all()

        assert run_async(scenario()) == []


class TestPhotoRepository:

    def test_find_and_delete_by_album(self, database: Database, run_async):
        async def scenario():
            async with database.session() as session:
                repo = PhotoRepository(session)
                for album_id, title in ((1, "a"), (2, "b"), (1, "c")):
                    await repo.create(Photo(album_id=album_id, title=title, url=f"/uploads/{title}"))
            async with database.session() as session:
                repo = PhotoRepository(session)
                before = [p.title for p in await repo.find_by_album(1)]
                removed = await repo.delete_by_album(1)
            async with database.session() as session:
                repo = PhotoRepository(session)
                return before, removed, await repo.find_by_album(1), len(await repo.find_by_album(2))

        before, removed, after, others = run_async(scenario())

        assert before == ["a", "c"]
        assert removed == 2
        assert after == []
        assert others == 1


class TestAlbumService:

    def test_delete_missing_album_still_removes_photos(self, database: Database, run_async):
        async def scenario():
            async with database.session() as session:
                await PhotoRepository(session).create(Photo(album_id=9, title="x", url="/uploads/9_x"))
            with pytest.raises(AlbumNotFoundError):
                async with database.session() as session:
                    await AlbumService(session).delete_album(9)
            async with database.session() as session:
                return await PhotoRepository(session).find_by_album(9)

        assert run_async(scenario()) == []

    def test_get_missing_album_raises(self, database: Database, run_async):
        async def scenario():
            async with database.session() as session:
                await AlbumService(session).get_album(404)

        with pytest.raises(AlbumNotFoundError) as exc_info:
            run_async(scenario())

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Album not found"

    def test_create_then_update(self, database: Database, run_async):
        async def scenario():
            async with database.session() as session:
                service = AlbumService(session)
                album = await service.create_album(AlbumPayload(title="Vacation"))
                album = await service.update_album(album, AlbumPayload(title="Holidays"))
                return album.id

        album_id = run_async(scenario())

        async def reload():
            async with database.session() as session:
                return (await AlbumService(session).get_album(album_id)).title

        assert run_async(reload()) == "Holidays"
