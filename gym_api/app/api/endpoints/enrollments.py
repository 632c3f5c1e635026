"""
Enrollment endpoints.

``POST /api/inscripciones`` runs the enrollment procedure and answers
201 on success or 409 with the procedure's message when a business
rule rejects it (class full, already enrolled, unknown or inactive
member, unknown class).  ``DELETE /api/inscripciones`` cancels an
enrollment; the slot is released by the service in the same
transaction.
"""

import logging

from fastapi import APIRouter, HTTPException, status

from gym_api.app.core.dependencies import EnrollmentServiceDep
from gym_api.app.core.exceptions import DataStoreError, EnrollmentNotFoundError
from gym_api.app.schemas.common import MessageResponse
from gym_api.app.schemas.enrollment import EnrollmentRequest


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def enroll_member(
    enrollment: EnrollmentRequest,
    service: EnrollmentServiceDep,
) -> MessageResponse:
    """Enroll a member in a class."""
    try:
        result = await service.enroll(enrollment.socio_id, enrollment.clase_id)
    except DataStoreError:
        logger.exception(
            "Unexpected error enrolling member %s in class %s",
            enrollment.socio_id,
            enrollment.clase_id,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al procesar la inscripción",
        )
    if not result.ok:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=result.mensaje)
    return MessageResponse(message=result.mensaje)


@router.delete("", response_model=MessageResponse)
async def cancel_enrollment(
    enrollment: EnrollmentRequest,
    service: EnrollmentServiceDep,
) -> MessageResponse:
    """Cancel a member's enrollment in a class."""
    try:
        await service.cancel(enrollment.socio_id, enrollment.clase_id)
    except EnrollmentNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No se encontró la inscripción para dar de baja.",
        )
    except DataStoreError:
        logger.exception(
            "Database error cancelling enrollment of member %s in class %s",
            enrollment.socio_id,
            enrollment.clase_id,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al procesar la baja de la inscripción.",
        )
    return MessageResponse(message="Inscripción dada de baja correctamente.")
