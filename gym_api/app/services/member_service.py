"""
Business logic for gym members.

Members are never physically deleted.  Deactivation releases every
class slot the member holds, removes their enrollments and clears the
``activo`` flag, all inside a single transaction: either the member
ends up inactive with no enrollments, or nothing changes.
"""

import logging
import sqlite3

from gym_api.app.core.db import Database
from gym_api.app.core.exceptions import DataStoreError, MemberNotFoundError
from gym_api.app.schemas.gym_class import ClassSummary
from gym_api.app.schemas.member import MemberCreate, MemberRead


logger = logging.getLogger(__name__)


class MemberService:
    """Service for looking up, registering and deactivating members."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def get_member(self, member_id: int) -> MemberRead:
        """Return a member together with the classes they are enrolled in.

        Raises ``MemberNotFoundError`` if no member has this ID.  A
        member without enrollments comes back with an empty
        ``inscripciones`` list.
        """
        with self.db.cursor() as cursor:
            rows = cursor.execute(
                """
                SELECT s.id, s.nombre, s.apellido, s.email, s.activo,
                       c.id AS clase_id,
                       c.nombre AS clase_nombre,
                       substr(c.horario, 1, 5) AS clase_descripcion
                FROM socios s
                LEFT JOIN inscripciones i ON i.socio_id = s.id
                LEFT JOIN clases c ON c.id = i.clase_id
                WHERE s.id = ?
                ORDER BY c.horario, c.id
                """,
                (member_id,),
            ).fetchall()
        if not rows:
            raise MemberNotFoundError(member_id)

        first = rows[0]
        return MemberRead(
            id=first["id"],
            nombre=f"{first['nombre']} {first['apellido']}",
            email=first["email"],
            activo=bool(first["activo"]),
            inscripciones=[
                ClassSummary(
                    id=row["clase_id"],
                    nombre=row["clase_nombre"],
                    descripcion=row["clase_descripcion"],
                )
                for row in rows
                if row["clase_id"] is not None
            ],
        )

    async def register(self, data: MemberCreate) -> int:
        """Insert a new active member and return the assigned ID."""
        with self.db.transaction() as cursor:
            cursor.execute(
                "INSERT INTO socios (nombre, apellido, email, activo) VALUES (?, ?, ?, 1)",
                (data.nombre, data.apellido, data.email),
            )
            member_id = cursor.lastrowid
            if not member_id:
                raise DataStoreError("Inserted member has no ID")
        logger.info("Registered member %s (%s)", member_id, data.email)
        return member_id

    async def deactivate(self, member_id: int) -> int:
        """Soft-delete a member and drop all of their enrollments.

        Returns the number of enrollments released.  Any failure rolls
        the whole operation back and surfaces as ``DataStoreError``.
        """
        with self.db.transaction() as cursor:
            released = self._release_enrollments(cursor, member_id)
            self._mark_inactive(cursor, member_id)
        logger.info("Deactivated member %s, released %s enrollments", member_id, released)
        return released

    @staticmethod
    def _release_enrollments(cursor: sqlite3.Cursor, member_id: int) -> int:
        # One row per class at most, so each class gives back one slot.
        cursor.execute(
            """
            UPDATE clases
            SET cupos_ocupados = cupos_ocupados - 1
            WHERE id IN (SELECT clase_id FROM inscripciones WHERE socio_id = ?)
            """,
            (member_id,),
        )
        cursor.execute("DELETE FROM inscripciones WHERE socio_id = ?", (member_id,))
        return cursor.rowcount

    @staticmethod
    def _mark_inactive(cursor: sqlite3.Cursor, member_id: int) -> None:
        cursor.execute("UPDATE socios SET activo = 0 WHERE id = ?", (member_id,))
