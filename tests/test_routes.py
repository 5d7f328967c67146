"""HTTP tests for the folder endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from folder_manager.backend import BackendError, InMemoryBackend
from folder_manager.config import Settings
from folder_manager.domain.folders import Folder
from folder_manager.main import create_app

EXPECTED_PAIR = [
    {"id": "5", "name": "12345", "topLevelFolder": "Unrestricted information"},
    {"id": "6", "name": "12345", "topLevelFolder": "Restricted information"},
]


def _client_folders_exist(backend) -> None:
    backend.lookups[("1", "1967")] = Folder(id="3", name="1967")
    backend.lookups[("2", "1967")] = Folder(id="4", name="1967")
    backend.lookups[("3", "12345")] = Folder(id="5", name="12345")
    backend.lookups[("4", "12345")] = Folder(id="6", name="12345")


def test_health_endpoint_returns_ok(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_request_id_is_echoed(client: TestClient) -> None:
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"
    assert client.get("/health").headers["X-Request-ID"]


# ------------------------
# GET /folders/{client_id}
# ------------------------


def test_get_invalid_client_id(client: TestClient, backend) -> None:
    response = client.get("/folders/ABC")

    assert response.status_code == 400
    assert response.json() == {
        "detail": {
            "error_code": "invalid_client_id",
            "error_message": "Invalid client id 'ABC'",
        }
    }
    assert backend.lookup_calls == []


def test_get_not_found(client: TestClient, backend) -> None:
    response = client.get("/folders/12345(67)")

    assert response.status_code == 404
    assert response.json()["detail"] == {
        "error_code": "not_found",
        "error_message": "No folders found for client id '12345(67)'",
    }
    assert sorted(backend.lookup_calls) == [("1", "1967"), ("2", "1967")]


def test_get_backend_error_is_500(client: TestClient, backend) -> None:
    backend.lookups[("1", "1967")] = RuntimeError("e1")
    backend.lookups[("2", "1967")] = RuntimeError("e2")

    response = client.get("/folders/12345(67)")

    assert response.status_code == 500
    assert response.json()["detail"] == {"error_code": "internal_error", "error_message": "e1"}
    assert len(backend.lookup_calls) == 2


def test_get_year_serial_form(client: TestClient, backend) -> None:
    _client_folders_exist(backend)

    response = client.get("/folders/1967-12345")

    assert response.status_code == 200
    assert response.json() == {"folders": EXPECTED_PAIR}


def test_get_serial_year_form(client: TestClient, backend) -> None:
    _client_folders_exist(backend)

    response = client.get("/folders/12345(67)")

    assert response.status_code == 200
    assert response.json() == {"folders": EXPECTED_PAIR}


# ------------------------
# POST /folders
# ------------------------


def test_post_invalid_client_id(client: TestClient, backend) -> None:
    response = client.post("/folders", json={"clientId": "2001-12345"})

    assert response.status_code == 400
    assert response.json()["detail"] == {
        "error_code": "invalid_client_id",
        "error_message": "Invalid client id '2001-12345'",
    }
    assert backend.lookup_calls == []


def test_post_missing_client_id(client: TestClient) -> None:
    response = client.post("/folders", json={})

    assert response.status_code == 400
    assert response.json()["detail"]["error_code"] == "invalid_client_id"


def test_post_numeric_client_id_is_read_as_text(client: TestClient, backend) -> None:
    response = client.post("/folders", json={"clientId": 12345})

    assert response.status_code == 400
    assert response.json()["detail"] == {
        "error_code": "invalid_client_id",
        "error_message": "Invalid client id '12345'",
    }
    assert backend.lookup_calls == []


def test_post_without_body(client: TestClient, backend) -> None:
    response = client.post("/folders")

    assert response.status_code == 400
    assert response.json()["detail"]["error_code"] == "invalid_client_id"
    assert backend.lookup_calls == []


def test_post_client_id_embedded_in_text(client: TestClient, backend) -> None:
    response = client.post("/folders", json={"clientId": "ref 12345(67)"})

    assert response.status_code == 201
    assert ("1", "1967") in backend.create_calls
    assert ("2", "1967") in backend.create_calls


def test_post_existing_client_id(client: TestClient, backend) -> None:
    _client_folders_exist(backend)

    response = client.post("/folders", json={"clientId": "12345(67)"})

    assert response.status_code == 400
    assert response.json()["detail"] == {
        "error_code": "already_exists",
        "error_message": "client id '12345(67)' already exists",
    }
    assert backend.create_calls == []


def test_post_backend_error_is_500(client: TestClient, backend) -> None:
    backend.lookups[("1", "1967")] = BackendError("e1")
    backend.lookups[("2", "1967")] = BackendError("e2")

    response = client.post("/folders", json={"clientId": "1967-12345"})

    assert response.status_code == 500
    assert response.json()["detail"] == {"error_code": "internal_error", "error_message": "e1"}


def test_post_creates_folders(client: TestClient, backend) -> None:
    backend.creates[("1", "1967")] = Folder(id="3", name="1967")
    backend.creates[("2", "1967")] = Folder(id="4", name="1967")
    backend.creates[("3", "12345")] = Folder(id="5", name="12345")
    backend.creates[("4", "12345")] = Folder(id="6", name="12345")

    response = client.post("/folders", json={"clientId": "1967-12345"})

    assert response.status_code == 201
    assert response.headers["Location"] == "/folders/1967-12345"
    assert response.json() == {"folders": EXPECTED_PAIR}
    assert len(backend.create_calls) == 4


# ------------------------
# App wiring
# ------------------------


def test_create_then_get_on_memory_backend() -> None:
    client = TestClient(create_app(Settings(), backend=InMemoryBackend()))

    created = client.post("/folders", json={"clientId": "12345(00)"})
    fetched = client.get("/folders/2000-12345")
    duplicate = client.post("/folders", json={"clientId": "2000-12345"})

    assert created.status_code == 201
    assert fetched.status_code == 200
    assert fetched.json() == created.json()
    assert duplicate.status_code == 400


def test_shutdown_closes_backend(backend) -> None:
    with TestClient(create_app(backend=backend)) as client:
        assert client.get("/health").status_code == 200
        assert backend.closed is False
    assert backend.closed is True
