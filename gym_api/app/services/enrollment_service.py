"""
Business logic for class enrollments.

``EnrollmentService.enroll`` is the enrollment procedure: inside one
``BEGIN IMMEDIATE`` transaction it validates the member and the class,
rejects duplicates and takes a slot with a conditional increment of
``clases.cupos_ocupados`` before inserting the enrollment row.  The
result mirrors a stored procedure's output: a numeric code (``0`` for
success) and a message for the front desk.

Cancelling an enrollment deletes the row and gives the slot back in
the same transaction, so the capacity counter always matches the
number of enrollments.
"""

import logging

from gym_api.app.core.db import Database
from gym_api.app.core.exceptions import EnrollmentNotFoundError
from gym_api.app.schemas.enrollment import EnrollmentResult


logger = logging.getLogger(__name__)

OK = 0
MEMBER_NOT_FOUND = 1
MEMBER_INACTIVE = 2
CLASS_NOT_FOUND = 3
ALREADY_ENROLLED = 4
CLASS_FULL = 5

MESSAGES = {
    OK: "Inscripción realizada con éxito.",
    MEMBER_NOT_FOUND: "El socio no existe.",
    MEMBER_INACTIVE: "El socio no está activo.",
    CLASS_NOT_FOUND: "La clase no existe.",
    ALREADY_ENROLLED: "El socio ya está inscripto en esta clase.",
    CLASS_FULL: "No hay cupos disponibles para esta clase.",
}


def _result(code: int) -> EnrollmentResult:
    return EnrollmentResult(codigo_error=code, mensaje=MESSAGES[code])


class EnrollmentService:
    """Service for enrolling members in classes and cancelling enrollments."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def enroll(self, member_id: int, class_id: int) -> EnrollmentResult:
        """Enroll a member in a class if every business rule allows it.

        Checks run in this order: the member exists, the member is
        active, the class exists, the member is not already enrolled
        and the class still has a free slot.  The first failing rule
        decides the returned code; nothing is written in that case.
        """
        with self.db.transaction() as cursor:
            member = cursor.execute(
                "SELECT activo FROM socios WHERE id = ?",
                (member_id,),
            ).fetchone()
            if not member:
                result = _result(MEMBER_NOT_FOUND)
            elif not member["activo"]:
                result = _result(MEMBER_INACTIVE)
            elif not cursor.execute("SELECT id FROM clases WHERE id = ?", (class_id,)).fetchone():
                result = _result(CLASS_NOT_FOUND)
            elif cursor.execute(
                "SELECT id FROM inscripciones WHERE socio_id = ? AND clase_id = ?",
                (member_id, class_id),
            ).fetchone():
                result = _result(ALREADY_ENROLLED)
            else:
                # Check and take the slot in a single statement.
                cursor.execute(
                    """
                    UPDATE clases
                    SET cupos_ocupados = cupos_ocupados + 1
                    WHERE id = ? AND cupos_ocupados < cupo_maximo
                    """,
                    (class_id,),
                )
                if cursor.rowcount == 0:
                    result = _result(CLASS_FULL)
                else:
                    cursor.execute(
                        "INSERT INTO inscripciones (socio_id, clase_id) VALUES (?, ?)",
                        (member_id, class_id),
                    )
                    result = _result(OK)

        if result.ok:
            logger.info("Member %s enrolled in class %s", member_id, class_id)
        else:
            logger.info(
                "Enrollment of member %s in class %s rejected (%s): %s",
                member_id,
                class_id,
                result.codigo_error,
                result.mensaje,
            )
        return result

    async def cancel(self, member_id: int, class_id: int) -> None:
        """Remove an enrollment and release its slot.

        Raises ``EnrollmentNotFoundError`` if the member was not
        enrolled in the class; nothing changes in that case.
        """
        with self.db.transaction() as cursor:
            cursor.execute(
                "DELETE FROM inscripciones WHERE socio_id = ? AND clase_id = ?",
                (member_id, class_id),
            )
            if cursor.rowcount == 0:
                raise EnrollmentNotFoundError(member_id, class_id)
            cursor.execute(
                "UPDATE clases SET cupos_ocupados = cupos_ocupados - 1 WHERE id = ?",
                (class_id,),
            )
        logger.info("Member %s left class %s", member_id, class_id)
