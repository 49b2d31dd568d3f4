"""Tests for the /canciones endpoints."""

import json

import pytest
from fastapi.testclient import TestClient

from repertorio_api.app.core.errors import StorageFault
from repertorio_api.app.core.store import InMemoryStore
from repertorio_api.app.main import create_app

SONG_A = {"titulo": "Song A", "artista": "Artist A", "tono": "C"}
SONG_B = {"titulo": "Song B", "artista": "Artist B", "tono": "Dm"}


def read_file(path):
    return json.loads(path.read_text(encoding="utf-8"))


class TestScenario:
    """End to end walk through against the JSON file."""

    def test_full_lifecycle(self, client, repertoire_path):
        response = client.get("/canciones")
        assert response.status_code == 200
        assert response.json() == []
        assert repertoire_path.read_text(encoding="utf-8") == "[]"

        response = client.post("/canciones", json=SONG_A)
        assert response.status_code == 201
        assert response.json() == {"message": "Canción agregada", "cancion": {"id": 1, **SONG_A}}

        response = client.post("/canciones", json=SONG_B)
        assert response.status_code == 201
        assert response.json()["cancion"]["id"] == 2

        response = client.put("/canciones/1", json={"tono": "G"})
        assert response.status_code == 200
        assert response.json() == {
            "message": "Canción actualizada",
            "cancion": {"id": 1, "titulo": "Song A", "artista": "Artist A", "tono": "G"},
        }

        response = client.delete("/canciones/1")
        assert response.status_code == 200
        assert response.json() == {"message": "Canción eliminada", "id": 1}
        assert client.get("/canciones").json() == [{"id": 2, **SONG_B}]

        response = client.delete("/canciones/1")
        assert response.status_code == 404
        assert response.json() == {"error": "Canción no encontrada"}

        assert read_file(repertoire_path) == [{"id": 2, **SONG_B}]


class TestListSongs:
    def test_list_is_idempotent(self, client):
        client.post("/canciones", json=SONG_A)

        assert client.get("/canciones").json() == client.get("/canciones").json()

    def test_records_are_returned_as_stored(self, repertoire_path, client):
        stored = [
            {"id": 4, "titulo": "X", "artista": "Y", "tono": "E", "notas": "capo 2"},
            {"id": 2, "titulo": "Z", "artista": "W", "tono": "A"},
        ]
        repertoire_path.write_text(json.dumps(stored), encoding="utf-8")

        assert client.get("/canciones").json() == stored

    def test_records_without_id_are_listed(self, repertoire_path, client):
        stored = [{"titulo": "X", "artista": "Y", "tono": "E"}, 1, "texto"]
        repertoire_path.write_text(json.dumps(stored), encoding="utf-8")

        response = client.get("/canciones")

        assert response.status_code == 200
        assert response.json() == stored

    def test_key_order_is_kept(self, repertoire_path, client):
        stored = [{"tono": "E", "id": 3, "titulo": "X", "artista": "Y"}]
        repertoire_path.write_text(json.dumps(stored), encoding="utf-8")

        body = client.get("/canciones").json()

        assert list(body[0]) == ["tono", "id", "titulo", "artista"]

    def test_malformed_file_is_reported_as_500(self, repertoire_path, client):
        repertoire_path.write_text("not json", encoding="utf-8")

        response = client.get("/canciones")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Error leyendo repertorio"
        assert body["detalle"]
        assert repertoire_path.read_text(encoding="utf-8") == "not json"


class TestCreateSong:
    @pytest.mark.parametrize("missing", ["titulo", "artista", "tono"])
    def test_missing_field_is_rejected(self, memory_client, memory_store, missing):
        payload = {k: v for k, v in SONG_A.items() if k != missing}

        response = memory_client.post("/canciones", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "Faltan campos: titulo, artista, tono"}
        assert memory_store.writes == 0

    @pytest.mark.parametrize("empty", ["", None, 0, False])
    def test_falsy_field_is_rejected(self, memory_client, memory_store, empty):
        response = memory_client.post("/canciones", json={**SONG_A, "tono": empty})

        assert response.status_code == 400
        assert memory_store.writes == 0

    def test_missing_body_is_rejected(self, memory_client):
        response = memory_client.post("/canciones")

        assert response.status_code == 400
        assert response.json()["error"] == "Faltan campos: titulo, artista, tono"

    def test_invalid_json_body_is_rejected(self, memory_client, memory_store):
        response = memory_client.post(
            "/canciones", content=b"{titulo", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Payload inválido"
        assert memory_store.writes == 0

    def test_extra_fields_are_not_stored(self, memory_client):
        response = memory_client.post("/canciones", json={**SONG_A, "id": 50, "extra": True})

        assert response.json()["cancion"] == {"id": 1, **SONG_A}

    def test_appends_at_end(self, repertoire_path, client):
        repertoire_path.write_text(json.dumps([{"id": 7, **SONG_B}]), encoding="utf-8")

        response = client.post("/canciones", json=SONG_A)

        assert response.json()["cancion"]["id"] == 8
        assert read_file(repertoire_path) == [{"id": 7, **SONG_B}, {"id": 8, **SONG_A}]

    def test_ids_increase_across_deletes(self, memory_client):
        ids = [memory_client.post("/canciones", json=SONG_A).json()["cancion"]["id"] for _ in range(3)]
        memory_client.delete("/canciones/2")
        memory_client.delete("/canciones/1")

        new_id = memory_client.post("/canciones", json=SONG_B).json()["cancion"]["id"]

        assert ids == [1, 2, 3]
        assert new_id == 4

    def test_highest_id_is_handed_out_again_after_its_deletion(self, memory_client):
        for _ in range(3):
            memory_client.post("/canciones", json=SONG_A)
        memory_client.delete("/canciones/3")

        new_id = memory_client.post("/canciones", json=SONG_B).json()["cancion"]["id"]

        assert new_id == 3

    def test_storage_fault_is_reported_as_500(self, repertoire_path, client):
        repertoire_path.write_text("[", encoding="utf-8")

        response = client.post("/canciones", json=SONG_A)

        assert response.status_code == 500
        assert response.json()["error"] == "Error guardando canción"
        assert "detalle" in response.json()


class TestUpdateSong:
    @pytest.fixture
    def seeded(self, memory_store):
        memory_store._songs = [{"id": 1, **SONG_A}, {"id": 2, **SONG_B}]
        return memory_store

    def test_unsupplied_fields_keep_their_values(self, seeded, memory_client):
        response = memory_client.put("/canciones/2", json={"titulo": "Nuevo"})

        assert response.json()["cancion"] == {"id": 2, "titulo": "Nuevo", "artista": "Artist B", "tono": "Dm"}

    def test_empty_string_overwrites(self, seeded, memory_client):
        response = memory_client.put("/canciones/1", json={"artista": ""})

        assert response.status_code == 200
        assert response.json()["cancion"]["artista"] == ""

    def test_null_overwrites(self, seeded, memory_client):
        memory_client.put("/canciones/1", json={"tono": None})

        assert memory_client.get("/canciones").json()[0]["tono"] is None

    def test_order_is_preserved(self, seeded, memory_client):
        memory_client.put("/canciones/1", json={"tono": "F"})

        assert [song["id"] for song in memory_client.get("/canciones").json()] == [1, 2]

    def test_id_cannot_be_changed(self, seeded, memory_client):
        response = memory_client.put("/canciones/1", json={"id": 9})

        assert response.json()["cancion"]["id"] == 1

    def test_string_ids_in_file_match(self, memory_store, memory_client):
        memory_store._songs = [{"id": "3", **SONG_A}]

        response = memory_client.put("/canciones/3", json={"tono": "A"})

        assert response.status_code == 200
        assert response.json()["cancion"] == {"id": "3", **{**SONG_A, "tono": "A"}}

    @pytest.mark.parametrize("song_id", ["99", "abc"])
    def test_unknown_id_is_404(self, seeded, memory_client, song_id):
        response = memory_client.put(f"/canciones/{song_id}", json={"tono": "G"})

        assert response.status_code == 404
        assert response.json() == {"error": "Canción no encontrada"}
        assert seeded.writes == 0


    def test_digit_separator_is_not_an_id(self, memory_store, memory_client):
        memory_store._songs = [{"id": 10, **SONG_A}]

        response = memory_client.put("/canciones/1_0", json={"tono": "G"})

        assert response.status_code == 404
        assert memory_store.writes == 0

    def test_key_order_is_kept(self, memory_store, memory_client):
        memory_store._songs = [{"tono": "E", "id": 3, "titulo": "X", "artista": "Y"}]

        response = memory_client.put("/canciones/3", json={"titulo": "Z"})

        assert list(response.json()["cancion"]) == ["tono", "id", "titulo", "artista"]


class TestDeleteSong:
    @pytest.fixture
    def seeded(self, memory_store):
        memory_store._songs = [{"id": 1, **SONG_A}, {"id": 2, **SONG_B}]
        return memory_store

    def test_unknown_id_is_404(self, seeded, memory_client):
        response = memory_client.delete("/canciones/5")

        assert response.status_code == 404
        assert seeded.writes == 0
        assert len(memory_client.get("/canciones").json()) == 2

    def test_query_parameter_fallback(self, seeded, memory_client):
        response = memory_client.delete("/canciones/x?id=2")

        assert response.status_code == 200
        assert response.json() == {"message": "Canción eliminada", "id": 2}
        assert memory_client.get("/canciones").json() == [{"id": 1, **SONG_A}]

    def test_path_id_wins_over_query(self, seeded, memory_client):
        response = memory_client.delete("/canciones/1?id=2")

        assert response.json()["id"] == 1

    def test_non_numeric_without_query_is_404(self, seeded, memory_client):
        assert memory_client.delete("/canciones/abc").status_code == 404


class FailingStore(InMemoryStore):
    async def write_all(self, songs):
        raise StorageFault(detalle="disk full")


class TestStorageFaults:
    """Write failures surface as 500 with the operation's message."""

    @pytest.fixture
    def failing_client(self, app_settings):
        store = FailingStore([{"id": 1, **SONG_A}])
        return TestClient(create_app(app_settings, store=store))

    @pytest.mark.parametrize(
        "method, path, body, error",
        [
            ("POST", "/canciones", SONG_B, "Error guardando canción"),
            ("PUT", "/canciones/1", {"tono": "G"}, "Error actualizando canción"),
            ("DELETE", "/canciones/1", None, "Error eliminando canción"),
        ],
    )
    def test_write_failure(self, failing_client, method, path, body, error):
        response = failing_client.request(method, path, json=body)

        assert response.status_code == 500
        assert response.json() == {"error": error, "detalle": "disk full"}


class TestClientAssets:
    def test_index_is_served(self, tmp_path, app_settings):
        public = tmp_path / "public"
        public.mkdir()
        (public / "index.html").write_text("<h1>Repertorio</h1>", encoding="utf-8")
        (public / "app.js").write_text("console.log(1)", encoding="utf-8")
        client = TestClient(create_app(app_settings, store=InMemoryStore()))

        response = client.get("/")
        assert response.status_code == 200
        assert "Repertorio" in response.text
        assert client.get("/app.js").text == "console.log(1)"
        assert client.get("/canciones").json() == []

    def test_missing_index_is_404(self, client):
        response = client.get("/")

        assert response.status_code == 404
        assert response.json() == {"error": "Cliente no disponible"}
