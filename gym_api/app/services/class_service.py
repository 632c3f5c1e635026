"""
Read access to the class catalog.

Classes are created by the database seed or by an administrator
working directly on the database; the API only lists them.
"""

from typing import List

from gym_api.app.core.db import Database
from gym_api.app.schemas.gym_class import ClassRead


class ClassService:
    """Service for listing gym classes."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_classes(self) -> List[ClassRead]:
        """Return every class ordered by schedule.

        ``descripcion`` is the ``HH:MM`` part of the stored schedule and
        ``cuposDisponibles`` the capacity not yet taken by enrollments.
        """
        with self.db.cursor() as cursor:
            rows = cursor.execute(
                """
                SELECT id,
                       nombre,
                       substr(horario, 1, 5) AS descripcion,
                       cupo_maximo - cupos_ocupados AS cupos_disponibles
                FROM clases
                ORDER BY horario, id
                """
            ).fetchall()
        return [
            ClassRead(
                id=row["id"],
                nombre=row["nombre"],
                descripcion=row["descripcion"],
                cupos_disponibles=row["cupos_disponibles"],
            )
            for row in rows
        ]
