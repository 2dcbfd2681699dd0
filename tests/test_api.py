"""
Tests for the HTTP command layer
"""
import json

import pytest
from fastapi.testclient import TestClient

from boardstore.main import app


@pytest.fixture
def client(data_dir):
    """Test client bound to an isolated data directory"""
    with TestClient(app) as test_client:
        yield test_client


def create(client, name):
    response = client.post("/api/boards/", json={"name": name})
    assert response.status_code == 201
    return response.json()


class TestBoardRoutes:
    """Test the board endpoints"""

    def test_create_and_list(self, client):
        """Should list created boards and the active one"""
        first = create(client, "First")
        second = create(client, "Second")

        response = client.get("/api/boards/")

        assert response.status_code == 200
        body = response.json()
        assert [item["id"] for item in body["items"]] == [first["id"], second["id"]]
        assert body["items"][0]["type"] == "board"
        assert body["active_board_id"] == second["id"]

    def test_rename(self, client):
        """Should rename and return the board"""
        board = create(client, "Old")

        response = client.patch(f"/api/boards/{board['id']}", json={"name": "New"})

        assert response.status_code == 200
        assert response.json()["name"] == "New"

    def test_unknown_board_is_404(self, client):
        """Should map a missing board to 404 with the reason"""
        response = client.patch("/api/boards/missing", json={"name": "New"})

        assert response.status_code == 404
        assert response.json() == {"detail": "Board not found"}

    def test_set_active_unknown_is_404(self, client):
        """Should reject unknown ids without changing the active board"""
        board = create(client, "Only")

        response = client.put("/api/boards/active", json={"board_id": "ghost"})

        assert response.status_code == 404
        assert client.get("/api/boards/").json()["active_board_id"] == board["id"]

    def test_document_round_trip(self, client):
        """Should save and load the document string"""
        board = create(client, "Doc")
        blob = json.dumps({"elements": [{"id": "e"}]})

        saved = client.put(f"/api/boards/{board['id']}/data", json={"data": blob})
        loaded = client.get(f"/api/boards/{board['id']}/data")

        assert saved.status_code == 204
        assert loaded.json() == {"board_id": board["id"], "data": blob}

    def test_collaboration_link_and_thumbnail(self, client):
        """Should update board metadata"""
        board = create(client, "Meta")

        client.put(
            f"/api/boards/{board['id']}/collaboration-link",
            json={"link": "https://example.com/r"},
        )
        client.put(f"/api/boards/{board['id']}/thumbnail", json={"thumbnail": "t"})

        item = client.get("/api/boards/").json()["items"][0]
        assert item["collaboration_link"] == "https://example.com/r"
        assert item["thumbnail"] == "t"

    def test_duplicate_and_delete(self, client):
        """Should duplicate to the top level and delete by id"""
        board = create(client, "Original")

        copy = client.post(f"/api/boards/{board['id']}/duplicate", json={"name": "Copy"})
        deleted = client.delete(f"/api/boards/{board['id']}")

        assert copy.status_code == 201
        assert deleted.status_code == 204
        items = client.get("/api/boards/").json()["items"]
        assert [item["id"] for item in items] == [copy.json()["id"]]

    def test_set_index_with_folder(self, client):
        """Should accept tagged items and drop empty folders"""
        a = create(client, "A")
        b = create(client, "B")

        response = client.put(
            "/api/boards/index",
            json={
                "items": [
                    {"type": "folder", "id": "f1", "name": "Folder", "items": [b]},
                    {"type": "folder", "id": "f2", "name": "Empty", "items": []},
                    dict(a, type="board"),
                ]
            },
        )

        assert response.status_code == 200
        items = response.json()["items"]
        assert [item["id"] for item in items] == ["f1", a["id"]]
        assert items[0]["items"][0]["id"] == b["id"]


class TestTransferRoutes:
    """Test export and import endpoints"""

    def test_export_then_import(self, client, tmp_path):
        """Should export to a file and import a copy back"""
        board = create(client, "Sketch")
        target = tmp_path / "export.json"

        exported = client.post("/api/transfer/export", json={"file_path": str(target)})
        imported = client.post(
            "/api/transfer/import",
            json={"file_path": str(target), "selected_indices": [0]},
        )

        assert exported.json() == {"file_path": str(target), "boards": 1}
        assert imported.json() == {"imported": 1, "skipped": 0}
        body = client.get("/api/boards/").json()
        assert [item["name"] for item in body["items"]] == ["Sketch", "Sketch (Copy)"]
        assert body["active_board_id"] == board["id"]

    def test_import_malformed_is_400(self, client, tmp_path):
        """Should map unreadable files to 400"""
        response = client.post(
            "/api/transfer/import",
            json={"file_path": str(tmp_path / "missing.json"), "selected_indices": [0]},
        )

        assert response.status_code == 400

    def test_import_undecodable_is_400(self, client, tmp_path):
        """Should map a file that is not UTF-8 to 400"""
        path = tmp_path / "binary.json"
        path.write_bytes(b"\xff\xfe\x00garbage")

        response = client.post(
            "/api/transfer/import",
            json={"file_path": str(path), "selected_indices": [0]},
        )

        assert response.status_code == 400


class TestSystemRoutes:
    """Test health and stats endpoints"""

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    def test_stats(self, client):
        board = create(client, "One")

        stats = client.get("/api/system/stats").json()

        assert stats == {
            "boards": 1,
            "folders": 0,
            "index_items": 1,
            "active_board_id": board["id"],
        }

    def test_boards_dir(self, client, data_dir):
        response = client.get("/api/system/boards-dir")

        assert response.json() == {"path": str(data_dir / "boards")}
