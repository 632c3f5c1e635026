"""
SQLite database integration and simple migration system.

This module provides the :class:`Database` handle shared by every
request, the schema migrations applied when it connects and the demo
class catalog.  SQLite is used as a lightweight embedded database; to
switch to another DBMS you would replace the connection logic and
adapt the SQL syntax accordingly.

The handle opens a single connection lazily and reuses it for the
lifetime of the process.  The startup connect is retried with
exponential backoff; reconnects made while serving requests try once,
so an outage never stalls the event loop.  A connection that fails at
the connection level (closed, unreadable file, I/O error) is dropped so
that the next request opens a fresh one.  All ``sqlite3`` errors leave this module as
:class:`~gym_api.app.core.exceptions.DataStoreError`.

Class capacity is tracked explicitly in ``clases.cupos_ocupados``.
Services keep it in step with the ``inscripciones`` rows by changing
both inside one :meth:`Database.transaction`.
"""

import logging
import os
import sqlite3
import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .config import Settings
from .exceptions import DataStoreError


logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS socios (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            nombre TEXT NOT NULL,
            apellido TEXT NOT NULL,
            email TEXT NOT NULL,
            activo INTEGER NOT NULL DEFAULT 1,
            fecha_alta TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        -- cupos_ocupados always equals the number of inscripciones rows
        -- for the class; the CHECK keeps it inside [0, cupo_maximo].
        CREATE TABLE IF NOT EXISTS clases (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            nombre TEXT NOT NULL,
            horario TEXT NOT NULL,
            cupo_maximo INTEGER NOT NULL,
            cupos_ocupados INTEGER NOT NULL DEFAULT 0,
            CHECK (cupos_ocupados >= 0 AND cupos_ocupados <= cupo_maximo)
        );

        CREATE TABLE IF NOT EXISTS inscripciones (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            socio_id INTEGER NOT NULL,
            clase_id INTEGER NOT NULL,
            fecha_inscripcion TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            UNIQUE (socio_id, clase_id),
            FOREIGN KEY(socio_id) REFERENCES socios(id),
            FOREIGN KEY(clase_id) REFERENCES clases(id)
        );
        """,
    ),
    # Migration 2: lookups by member and by class
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_inscripciones_socio_id ON inscripciones(socio_id);
        CREATE INDEX IF NOT EXISTS idx_inscripciones_clase_id ON inscripciones(clase_id);
        """,
    ),
]

# (nombre, horario, cupo_maximo)
DEMO_CLASSES: list[tuple[str, str, int]] = [
    ("Yoga", "08:00:00", 15),
    ("Pilates", "10:00:00", 10),
    ("Spinning", "18:30:00", 20),
    ("Funcional", "19:30:00", 12),
    ("Boxeo", "20:30:00", 8),
]

# Fragments of ``sqlite3`` error messages after which the connection
# itself can no longer be trusted.
_CONNECTION_ERROR_MARKERS = (
    "unable to open",
    "disk i/o error",
    "file is not a database",
    "closed database",
)


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    ``:memory:`` and absolute paths are returned unchanged.  Relative
    paths are resolved against the project root (the directory that
    contains the ``gym_api`` package).
    """
    if database_url == ":memory:" or os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


def apply_migrations(conn: sqlite3.Connection, seed_demo_data: bool = False) -> int:
    """Create or upgrade the schema and return the resulting version.

    Applied versions are stored in the ``migrations`` table; each
    pending migration runs in its own transaction together with the
    insert of its version number.  When ``seed_demo_data`` is true and
    the class catalog is empty, :data:`DEMO_CLASSES` are inserted.
    """
    conn.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
    row = conn.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
    current_version = row["version"] if row and row["version"] is not None else 0

    for version, sql in MIGRATIONS:
        if version > current_version:
            conn.executescript(
                f"BEGIN;\n{sql}\nINSERT INTO migrations (version) VALUES ({version});\nCOMMIT;"
            )
            logger.info("Applied database migration %s", version)
            current_version = version

    if seed_demo_data:
        count = conn.execute("SELECT COUNT(*) AS total FROM clases").fetchone()["total"]
        if count == 0:
            conn.executemany(
                "INSERT INTO clases (nombre, horario, cupo_maximo) VALUES (?, ?, ?)",
                DEMO_CLASSES,
            )
            logger.info("Seeded %s demo classes", len(DEMO_CLASSES))
    return current_version


def _is_connection_error(exc: sqlite3.Error) -> bool:
    if isinstance(exc, sqlite3.ProgrammingError):
        return True
    message = str(exc).lower()
    return any(marker in message for marker in _CONNECTION_ERROR_MARKERS)


class Database:
    """Lazily-connected, process-wide SQLite handle.

    Parameters
    ----------
    path : str
        Filesystem path of the database (or ``":memory:"``).
    connect_retries : int
        Total number of connection attempts before giving up.
    connect_backoff : float
        Delay in seconds before the second attempt; doubled after each
        further failure.
    seed_demo_data : bool
        Whether to insert the demo class catalog into an empty database.
    """

    def __init__(
        self,
        path: str,
        *,
        connect_retries: int = 3,
        connect_backoff: float = 0.5,
        seed_demo_data: bool = False,
    ) -> None:
        self.path = path
        self.connect_retries = max(1, connect_retries)
        self.connect_backoff = connect_backoff
        self.seed_demo_data = seed_demo_data
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.RLock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            get_database_path(settings.database_url),
            connect_retries=settings.db_connect_retries,
            connect_backoff=settings.db_connect_backoff,
            seed_demo_data=settings.seed_demo_data,
        )

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    def _open(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.path, check_same_thread=False, isolation_level=None)
        try:
            # Return rows as dict‑like objects keyed by column name
            conn.row_factory = sqlite3.Row
            # Foreign key support is off by default in SQLite and must be
            # enabled per connection.
            conn.execute("PRAGMA foreign_keys = ON")
            apply_migrations(conn, seed_demo_data=self.seed_demo_data)
        except sqlite3.Error:
            conn.close()
            raise
        return conn

    def connect(self, attempts: Optional[int] = None) -> sqlite3.Connection:
        """Return the shared connection, opening it if necessary.

        ``attempts`` defaults to ``connect_retries``; sleeping between
        attempts blocks the caller, so request handlers pass ``1``.
        Raises ``DataStoreError`` once every attempt has failed.
        """
        attempts = max(1, attempts or self.connect_retries)
        with self._lock:
            if self._conn is not None:
                return self._conn
            delay = self.connect_backoff
            for attempt in range(1, attempts + 1):
                try:
                    self._conn = self._open()
                except sqlite3.Error as exc:
                    logger.warning(
                        "Database connection attempt %s/%s to %s failed: %s",
                        attempt,
                        attempts,
                        self.path,
                        exc,
                    )
                    if attempt == attempts:
                        raise DataStoreError(f"Could not connect to database {self.path}") from exc
                    if delay > 0:
                        time.sleep(delay)
                    delay *= 2
                else:
                    logger.info("Database connection established (%s)", self.path)
                    return self._conn
        # Unreachable: the loop either returns or raises.
        raise DataStoreError(f"Could not connect to database {self.path}")

    def close(self) -> None:
        """Close and drop the shared connection, if any."""
        with self._lock:
            if self._conn is not None:
                try:
                    self._conn.close()
                finally:
                    self._conn = None

    def _handle_error(self, exc: sqlite3.Error) -> None:
        if _is_connection_error(exc):
            logger.warning("Dropping database connection after error: %s", exc)
            try:
                self.close()
            except sqlite3.Error:
                self._conn = None

    @contextmanager
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor in autocommit mode, for reads and single statements."""
        with self._lock:
            conn = self.connect(attempts=1)
            try:
                yield conn.cursor()
            except sqlite3.Error as exc:
                self._handle_error(exc)
                raise DataStoreError(str(exc)) from exc

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Cursor]:
        """Run the enclosed statements as one atomic unit.

        Opens the transaction with ``BEGIN IMMEDIATE`` so the write lock
        is taken before any check is read.  Commits when the block exits
        normally; on any exception rolls back and re-raises, converting
        ``sqlite3`` errors into ``DataStoreError``.
        """
        with self._lock:
            conn = self.connect(attempts=1)
            try:
                cursor = conn.cursor()
                cursor.execute("BEGIN IMMEDIATE")
                yield cursor
                cursor.execute("COMMIT")
            except BaseException as exc:
                self._rollback(conn)
                if isinstance(exc, sqlite3.Error):
                    self._handle_error(exc)
                    raise DataStoreError(str(exc)) from exc
                raise

    def _rollback(self, conn: sqlite3.Connection) -> None:
        try:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
        except sqlite3.Error:
            logger.exception("Rollback failed")

    def ping(self) -> bool:
        """Return ``True`` when the database answers a trivial query."""
        try:
            with self.cursor() as cursor:
                cursor.execute("SELECT 1").fetchone()
        except DataStoreError:
            return False
        return True
