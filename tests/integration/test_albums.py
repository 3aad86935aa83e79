"""
Album endpoint integration tests.

Verifies:
- Album CRUD operations
- Error responses (404 / 400) and their JSON shape
- Photo cascade on album deletion
- Id assignment
"""
import pytest
from fastapi.testclient import TestClient


class TestAlbumListing:
    """GET /albums"""

    def test_empty_store_returns_empty_list(self, client: TestClient):
        response = client.get("/albums")

        assert response.status_code == 200
        assert response.json() == []

    def test_lists_albums_in_id_order(self, client: TestClient):
        for title in ("First", "Second", "Third"):
            client.post("/albums", json={"title": title})

        response = client.get("/albums")

        assert response.status_code == 200
        assert [a["title"] for a in response.json()] == ["First", "Second", "Third"]
        ids = [a["id"] for a in response.json()]
        assert ids == sorted(ids)


class TestAlbumCreation:
    """POST /albums"""

    def test_create_returns_record_with_id(self, client: TestClient):
        response = client.post("/albums", json={"title": "Vacation"})

        assert response.status_code == 201
        assert response.json() == {"id": 1, "title": "Vacation"}

    @pytest.mark.parametrize("title", ["Vacation", "", "Été 2024 🌞", "a" * 1000])
    def test_create_then_get_returns_same_title(self, client: TestClient, title: str):
        created = client.post("/albums", json={"title": title}).json()

        response = client.get(f"/albums/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"id": created["id"], "title": title}

    def test_duplicate_titles_are_allowed(self, client: TestClient):
        first = client.post("/albums", json={"title": "Same"})
        second = client.post("/albums", json={"title": "Same"})

        assert first.status_code == second.status_code == 201
        assert first.json()["id"] != second.json()["id"]

    def test_missing_title_defaults_to_empty(self, client: TestClient):
        response = client.post("/albums", json={})

        assert response.status_code == 201
        assert response.json()["title"] == ""

    def test_client_supplied_id_is_ignored(self, client: TestClient):
        response = client.post("/albums", json={"id": 99, "title": "Mine"})

        assert response.status_code == 201
        assert response.json() == {"id": 1, "title": "Mine"}
        assert client.get("/albums/99").status_code == 404

    @pytest.mark.parametrize(
        "body",
        [b"not json", b"", b"[1, 2]", b"\"Vacation\"", b'{"title": 5}', b'{"title": ["x"]}'],
    )
    def test_unparseable_body_is_bad_request(self, client: TestClient, body: bytes):
        response = client.post(
            "/albums",
            content=body,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "error" in response.json()
        assert client.get("/albums").json() == []

    @pytest.mark.parametrize("body", [b"null", b'{"title": null}', b" null\n"])
    def test_null_binds_to_empty_title(self, client: TestClient, body: bytes):
        response = client.post(
            "/albums",
            content=body,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 201
        assert response.json()["title"] == ""


class TestAlbumRetrieval:
    """GET /albums/{id}"""

    def test_missing_album_is_not_found(self, client: TestClient):
        response = client.get("/albums/42")

        assert response.status_code == 404
        assert response.json() == {"message": "Album not found"}

    @pytest.mark.parametrize("raw_id", ["abc", "1.5", "0x1"])
    def test_non_numeric_id_is_not_found(self, client: TestClient, album: dict, raw_id: str):
        response = client.get(f"/albums/{raw_id}")

        assert response.status_code == 404
        assert response.json() == {"message": "Album not found"}


class TestAlbumUpdate:
    """PUT /albums/{id}"""

    def test_update_replaces_title(self, client: TestClient, album: dict):
        response = client.put(f"/albums/{album['id']}", json={"title": "Holidays"})

        assert response.status_code == 200
        assert response.json() == {"id": album["id"], "title": "Holidays"}
        assert client.get(f"/albums/{album['id']}").json()["title"] == "Holidays"

    def test_null_title_clears_title(self, client: TestClient, album: dict):
        response = client.put(f"/albums/{album['id']}", json={"title": None})

        assert response.status_code == 200
        assert response.json() == {"id": album["id"], "title": ""}

    def test_update_missing_album_is_not_found_and_creates_nothing(self, client: TestClient, album: dict):
        response = client.put("/albums/999", json={"title": "Ghost"})

        assert response.status_code == 404
        assert response.json() == {"message": "Album not found"}
        assert client.get("/albums").json() == [album]

    def test_missing_album_wins_over_bad_body(self, client: TestClient):
        response = client.put(
            "/albums/999",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 404

    def test_bad_body_is_bad_request_and_keeps_title(self, client: TestClient, album: dict):
        response = client.put(
            f"/albums/{album['id']}",
            content=b'{"title": 12}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "error" in response.json()
        assert client.get(f"/albums/{album['id']}").json()["title"] == album["title"]


class TestAlbumDeletion:
    """DELETE /albums/{id}"""

    def test_delete_album(self, client: TestClient, album: dict):
        response = client.delete(f"/albums/{album['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "Album deleted"}
        assert client.get(f"/albums/{album['id']}").status_code == 404

    def test_delete_missing_album_is_not_found(self, client: TestClient):
        response = client.delete("/albums/7")

        assert response.status_code == 404
        assert response.json() == {"message": "Album not found"}

    def test_delete_removes_all_album_photos(
        self,
        client: TestClient,
        album: dict,
        test_image_bytes: bytes,
    ):
        other = client.post("/albums", json={"title": "Other"}).json()
        for i in range(3):
            client.post(
                f"/albums/{album['id']}/photos",
                files={"photo": (f"p{i}.jpg", test_image_bytes, "image/jpeg")},
            )
        client.post(
            f"/albums/{other['id']}/photos",
            files={"photo": ("keep.jpg", test_image_bytes, "image/jpeg")},
        )
        assert len(client.get(f"/albums/{album['id']}/photos").json()) == 3

        response = client.delete(f"/albums/{album['id']}")

        assert response.status_code == 200
        assert client.get(f"/albums/{album['id']}/photos").json() == []
        assert client.get(f"/albums/{album['id']}").status_code == 404
        assert len(client.get(f"/albums/{other['id']}/photos").json()) == 1

    def test_orphan_photos_are_removed_even_without_album(
        self,
        client: TestClient,
        test_image_bytes: bytes,
    ):
        client.post(
            "/albums/5/photos",
            files={"photo": ("orphan.jpg", test_image_bytes, "image/jpeg")},
        )

        response = client.delete("/albums/5")

        assert response.status_code == 404
        assert client.get("/albums/5/photos").json() == []

    def test_deleted_ids_are_not_reused(self, client: TestClient):
        client.post("/albums", json={"title": "one"})
        second = client.post("/albums", json={"title": "two"}).json()
        client.delete(f"/albums/{second['id']}")

        third = client.post("/albums", json={"title": "three"}).json()

        assert third["id"] > second["id"]


class TestAlbumScenario:
    """Create, upload, delete, lookup."""

    def test_full_lifecycle(self, client: TestClient, test_image_bytes: bytes):
        created = client.post("/albums", json={"title": "Vacation"})
        assert created.status_code == 201
        assert created.json() == {"id": 1, "title": "Vacation"}

        uploaded = client.post(
            "/albums/1/photos",
            files={"photo": ("beach.jpg", test_image_bytes, "image/jpeg")},
        )
        assert uploaded.status_code == 201
        assert uploaded.json() == {
            "id": 1,
            "albumId": 1,
            "title": "beach.jpg",
            "url": "/uploads/1_beach.jpg",
        }

        deleted = client.delete("/albums/1")
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Album deleted"}

        assert client.get("/albums/1").status_code == 404
