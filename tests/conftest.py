"""Shared fixtures: a fresh SQLite file per test and a client bound to it."""

import pytest
from fastapi.testclient import TestClient

from gym_api.app.core.config import Settings
from gym_api.app.core.db import Database
from gym_api.app.main import create_app


@pytest.fixture
def db(tmp_path):
    database = Database(str(tmp_path / "gym.db"), connect_retries=1, connect_backoff=0)
    yield database
    database.close()


@pytest.fixture
def client(db):
    app = create_app(Settings(), db)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_class(db):
    def _make_class(nombre="Yoga", horario="08:00:00", cupo_maximo=10):
        with db.cursor() as cursor:
            cursor.execute(
                "INSERT INTO clases (nombre, horario, cupo_maximo) VALUES (?, ?, ?)",
                (nombre, horario, cupo_maximo),
            )
            return cursor.lastrowid

    return _make_class


@pytest.fixture
def make_member(db):
    def _make_member(nombre="Ana", apellido="Diaz", email="ana@x.com", activo=True):
        with db.cursor() as cursor:
            cursor.execute(
                "INSERT INTO socios (nombre, apellido, email, activo) VALUES (?, ?, ?, ?)",
                (nombre, apellido, email, int(activo)),
            )
            return cursor.lastrowid

    return _make_member


@pytest.fixture
def fetch_one(db):
    """Run a query and return the first column of the first row."""

    def _fetch_one(sql, params=()):
        with db.cursor() as cursor:
            row = cursor.execute(sql, params).fetchone()
        return row[0] if row else None

    return _fetch_one
