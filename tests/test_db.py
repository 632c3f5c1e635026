import sqlite3

import pytest

from gym_api.app.core import db as db_module
from gym_api.app.core.db import DEMO_CLASSES, MIGRATIONS, Database, apply_migrations, get_database_path
from gym_api.app.core.exceptions import DataStoreError


def test_connect_applies_migrations_once(db, fetch_one):
    db.connect()
    latest = MIGRATIONS[-1][0]
    assert fetch_one("SELECT MAX(version) FROM migrations") == latest

    # Re-running on an up to date schema is a no-op.
    assert apply_migrations(db.connect()) == latest
    assert fetch_one("SELECT COUNT(*) FROM migrations") == len(MIGRATIONS)


def test_connection_is_reused(db):
    assert db.connect() is db.connect()


def test_seed_demo_classes_only_into_empty_catalog(tmp_path):
    path = str(tmp_path / "seeded.db")
    first = Database(path, seed_demo_data=True)
    with first.cursor() as cursor:
        assert cursor.execute("SELECT COUNT(*) FROM clases").fetchone()[0] == len(DEMO_CLASSES)
    first.close()

    second = Database(path, seed_demo_data=True)
    with second.cursor() as cursor:
        assert cursor.execute("SELECT COUNT(*) FROM clases").fetchone()[0] == len(DEMO_CLASSES)
    second.close()


def test_transaction_rolls_back_on_error(db, make_member, fetch_one):
    with pytest.raises(RuntimeError):
        with db.transaction() as cursor:
            cursor.execute(
                "INSERT INTO socios (nombre, apellido, email) VALUES ('Ana', 'Diaz', 'ana@x.com')"
            )
            raise RuntimeError("boom")
    assert fetch_one("SELECT COUNT(*) FROM socios") == 0


def test_sqlite_errors_become_data_store_errors(db, make_class, fetch_one):
    clase = make_class(cupo_maximo=1)
    with pytest.raises(DataStoreError) as excinfo:
        with db.transaction() as cursor:
            cursor.execute("UPDATE clases SET cupos_ocupados = 2 WHERE id = ?", (clase,))
    assert isinstance(excinfo.value.__cause__, sqlite3.IntegrityError)
    assert fetch_one("SELECT cupos_ocupados FROM clases WHERE id = ?", (clase,)) == 0
    # A constraint violation does not cost us the connection.
    assert db.is_connected


def test_connect_retries_with_backoff(tmp_path, monkeypatch):
    delays = []
    monkeypatch.setattr(db_module.time, "sleep", delays.append)
    database = Database(str(tmp_path / "missing" / "gym.db"), connect_retries=3, connect_backoff=0.5)

    with pytest.raises(DataStoreError):
        database.connect()

    assert delays == [0.5, 1.0]
    assert not database.is_connected


def test_reconnects_after_connection_is_lost(db, fetch_one):
    db.connect().close()

    with pytest.raises(DataStoreError):
        with db.cursor() as cursor:
            cursor.execute("SELECT 1")

    assert not db.is_connected
    assert fetch_one("SELECT 1") == 1


def test_ping(db, tmp_path):
    assert db.ping() is True
    assert Database(str(tmp_path / "missing" / "gym.db"), connect_retries=1).ping() is False


def test_relative_database_path_is_resolved_against_project_root():
    path = get_database_path("gym.db")
    assert path.endswith("gym.db")
    assert get_database_path(":memory:") == ":memory:"


def test_request_path_reconnect_tries_once_without_sleeping(tmp_path, monkeypatch):
    delays = []
    monkeypatch.setattr(db_module.time, "sleep", delays.append)
    database = Database(str(tmp_path / "missing" / "gym.db"), connect_retries=3, connect_backoff=0.5)

    assert database.ping() is False
    with pytest.raises(DataStoreError):
        with database.transaction():
            pass

    assert delays == []
