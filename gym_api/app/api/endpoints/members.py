"""
Member endpoints.

Look up a member with their enrollments, register a new member and
deregister (soft-delete) an existing one.  Deregistration drops the
member's enrollments and marks them inactive in one transaction.
"""

import logging

from fastapi import APIRouter, HTTPException, Path, status

from gym_api.app.core.dependencies import MemberServiceDep
from gym_api.app.core.exceptions import DataStoreError, MemberNotFoundError
from gym_api.app.schemas.common import MAX_ID, MessageResponse
from gym_api.app.schemas.member import MemberCreate, MemberCreated, MemberRead


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{member_id}", response_model=MemberRead)
async def get_member(
    service: MemberServiceDep,
    member_id: int = Path(..., gt=0, le=MAX_ID, description="ID of the member"),
) -> MemberRead:
    """Return a member and the classes they are enrolled in."""
    try:
        return await service.get_member(member_id)
    except MemberNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Socio no encontrado")
    except DataStoreError:
        logger.exception("Database error while looking up member %s", member_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al consultar la base de datos",
        )


@router.post("", response_model=MemberCreated, status_code=status.HTTP_201_CREATED)
async def register_member(member: MemberCreate, service: MemberServiceDep) -> MemberCreated:
    """Register a new, active member and return the assigned ID."""
    try:
        member_id = await service.register(member)
    except DataStoreError:
        logger.exception("Database error while registering member %s", member.email)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al registrar el socio.",
        )
    return MemberCreated(message="Socio registrado con éxito.", socio_id=member_id)


@router.delete("/{member_id}", response_model=MessageResponse)
async def deactivate_member(
    service: MemberServiceDep,
    member_id: int = Path(..., gt=0, le=MAX_ID, description="ID of the member"),
) -> MessageResponse:
    """Deregister a member.

    Every enrollment of the member is removed and their slots are
    released before the member is marked inactive.  If any step fails
    the whole operation is rolled back and a 500 is returned.
    """
    try:
        await service.deactivate(member_id)
    except DataStoreError:
        logger.exception("Database error while deactivating member %s", member_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al procesar la baja del socio.",
        )
    return MessageResponse(message=f"Socio con ID {member_id} ha sido dado de baja (inactivado).")
