from fastapi.testclient import TestClient

from gym_api.app.core.config import Settings
from gym_api.app.core.db import Database
from gym_api.app.main import create_app, describe_validation_errors


def test_health_reports_database(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "ok"}


def test_serves_errors_until_database_is_reachable(tmp_path):
    data_dir = tmp_path / "data"
    database = Database(str(data_dir / "gym.db"), connect_retries=1, connect_backoff=0)
    app = create_app(Settings(), database)

    with TestClient(app) as client:
        response = client.get("/api/clases")
        assert response.status_code == 500
        assert response.json() == {"message": "Error al obtener las clases"}
        assert client.get("/api/health").status_code == 503

        data_dir.mkdir()

        assert client.get("/api/clases").status_code == 200
        assert client.get("/api/health").status_code == 200
    database.close()


def test_unknown_route_uses_message_body(client):
    response = client.get("/api/nada")
    assert response.status_code == 404
    assert "message" in response.json()


def test_describe_validation_errors_lists_each_field_once():
    errors = [
        {"loc": ("body", "socioId"), "msg": "Field required"},
        {"loc": ("body", "socioId"), "msg": "again"},
        {"loc": ("body", "claseId"), "msg": "Field required"},
        {"loc": ("body",), "msg": "Field required"},
    ]
    assert describe_validation_errors(errors) == (
        "Faltan campos obligatorios o tienen un formato inválido: socioId, claseId, body"
    )


def test_describe_validation_errors_hides_json_offsets():
    errors = [{"type": "json_invalid", "loc": ("body", 12), "msg": "JSON decode error"}]
    assert describe_validation_errors(errors) == (
        "Faltan campos obligatorios o tienen un formato inválido: body"
    )
