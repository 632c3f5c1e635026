import sqlite3
from contextlib import contextmanager

import pytest

from gym_api.app.services.member_service import MemberService


def test_register_then_lookup_has_no_enrollments(client):
    response = client.post(
        "/api/socios",
        json={"nombre": "Ana", "apellido": "Diaz", "email": "ana@x.com"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Socio registrado con éxito."
    assert isinstance(body["socioId"], int)

    lookup = client.get(f"/api/socios/{body['socioId']}")
    assert lookup.status_code == 200
    assert lookup.json() == {
        "id": body["socioId"],
        "nombre": "Ana Diaz",
        "email": "ana@x.com",
        "activo": True,
        "inscripciones": [],
    }


def test_register_strips_whitespace(client, fetch_one):
    response = client.post(
        "/api/socios",
        json={"nombre": "  Ana ", "apellido": "Diaz", "email": " ana@x.com "},
    )
    assert response.status_code == 201
    assert fetch_one("SELECT nombre FROM socios WHERE id = ?", (response.json()["socioId"],)) == "Ana"


def test_register_missing_field_is_400(client, fetch_one):
    response = client.post("/api/socios", json={"nombre": "Ana", "email": "ana@x.com"})

    assert response.status_code == 400
    assert "apellido" in response.json()["message"]
    assert fetch_one("SELECT COUNT(*) FROM socios") == 0


def test_register_blank_field_is_400(client):
    response = client.post("/api/socios", json={"nombre": "   ", "apellido": "Diaz", "email": "ana@x.com"})
    assert response.status_code == 400
    assert "nombre" in response.json()["message"]


def test_register_invalid_email_is_400(client):
    response = client.post("/api/socios", json={"nombre": "Ana", "apellido": "Diaz", "email": "ana"})
    assert response.status_code == 400
    assert "email" in response.json()["message"]


def test_lookup_lists_enrollments(client, make_class, make_member):
    member = make_member()
    yoga = make_class("Yoga", "08:00:00")
    boxeo = make_class("Boxeo", "20:30:00")
    make_class("Pilates", "10:00:00")
    for clase in (boxeo, yoga):
        client.post("/api/inscripciones", json={"socioId": member, "claseId": clase})

    response = client.get(f"/api/socios/{member}")

    assert response.status_code == 200
    assert response.json()["inscripciones"] == [
        {"id": yoga, "nombre": "Yoga", "descripcion": "08:00"},
        {"id": boxeo, "nombre": "Boxeo", "descripcion": "20:30"},
    ]


def test_lookup_unknown_member_is_404(client):
    response = client.get("/api/socios/999")
    assert response.status_code == 404
    assert response.json() == {"message": "Socio no encontrado"}


def test_lookup_non_numeric_id_is_400(client):
    response = client.get("/api/socios/abc")
    assert response.status_code == 400
    assert "member_id" in response.json()["message"]


def test_deactivate_releases_all_enrollments(client, make_class, make_member, fetch_one):
    member = make_member()
    other = make_member("Luis", "Perez", "luis@x.com")
    classes = [make_class(f"Clase {n}", f"0{n}:00:00", cupo_maximo=5) for n in range(1, 4)]
    for clase in classes:
        client.post("/api/inscripciones", json={"socioId": member, "claseId": clase})
    client.post("/api/inscripciones", json={"socioId": other, "claseId": classes[0]})

    response = client.delete(f"/api/socios/{member}")

    assert response.status_code == 200
    assert response.json() == {"message": f"Socio con ID {member} ha sido dado de baja (inactivado)."}
    assert fetch_one("SELECT activo FROM socios WHERE id = ?", (member,)) == 0
    assert fetch_one("SELECT COUNT(*) FROM inscripciones WHERE socio_id = ?", (member,)) == 0
    assert fetch_one("SELECT COUNT(*) FROM inscripciones WHERE socio_id = ?", (other,)) == 1
    assert fetch_one("SELECT cupos_ocupados FROM clases WHERE id = ?", (classes[0],)) == 1
    assert fetch_one("SELECT cupos_ocupados FROM clases WHERE id = ?", (classes[1],)) == 0

    lookup = client.get(f"/api/socios/{member}").json()
    assert lookup["activo"] is False
    assert lookup["inscripciones"] == []


def test_deactivate_rolls_back_when_a_step_fails(client, make_class, make_member, fetch_one, monkeypatch):
    member = make_member()
    classes = [make_class(f"Clase {n}", f"0{n}:00:00") for n in range(1, 3)]
    for clase in classes:
        client.post("/api/inscripciones", json={"socioId": member, "claseId": clase})

    def fail(cursor, member_id):
        raise sqlite3.OperationalError("simulated failure")

    monkeypatch.setattr(MemberService, "_mark_inactive", staticmethod(fail))

    response = client.delete(f"/api/socios/{member}")

    assert response.status_code == 500
    assert response.json() == {"message": "Error al procesar la baja del socio."}
    assert fetch_one("SELECT activo FROM socios WHERE id = ?", (member,)) == 1
    assert fetch_one("SELECT COUNT(*) FROM inscripciones WHERE socio_id = ?", (member,)) == 2
    for clase in classes:
        assert fetch_one("SELECT cupos_ocupados FROM clases WHERE id = ?", (clase,)) == 1


def test_deactivated_member_cannot_enroll(client, make_class, make_member):
    member = make_member()
    clase = make_class()
    client.delete(f"/api/socios/{member}")

    response = client.post("/api/inscripciones", json={"socioId": member, "claseId": clase})

    assert response.status_code == 409
    assert response.json() == {"message": "El socio no está activo."}


def test_deactivate_unknown_member_is_200(client):
    response = client.delete("/api/socios/4242")
    assert response.status_code == 200


@pytest.mark.parametrize("member_id", ["9223372036854775808", "0", "-5"])
def test_lookup_out_of_range_id_is_400(client, member_id):
    response = client.get(f"/api/socios/{member_id}")
    assert response.status_code == 400
    assert "member_id" in response.json()["message"]


@pytest.mark.parametrize("member_id", ["0", "-1", "9223372036854775808"])
def test_deactivate_out_of_range_id_is_400(client, make_member, fetch_one, member_id):
    make_member()

    response = client.delete(f"/api/socios/{member_id}")

    assert response.status_code == 400
    assert fetch_one("SELECT COUNT(*) FROM socios WHERE activo = 1") == 1


class _CursorWithoutRowId:
    """Cursor stand-in whose inserts report no row ID."""

    lastrowid = None

    def __init__(self, cursor):
        self._cursor = cursor

    def __getattr__(self, name):
        return getattr(self._cursor, name)


def test_register_without_assigned_id_is_500_and_rolled_back(client, db, fetch_one, monkeypatch):
    real_transaction = db.transaction

    @contextmanager
    def transaction():
        with real_transaction() as cursor:
            yield _CursorWithoutRowId(cursor)

    monkeypatch.setattr(db, "transaction", transaction)

    response = client.post(
        "/api/socios",
        json={"nombre": "Ana", "apellido": "Diaz", "email": "ana@x.com"},
    )

    assert response.status_code == 500
    assert response.json() == {"message": "Error al registrar el socio."}
    assert fetch_one("SELECT COUNT(*) FROM socios") == 0
