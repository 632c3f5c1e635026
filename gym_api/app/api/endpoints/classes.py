"""
Class catalog endpoint.

``GET /api/clases`` lists every class with its ``HH:MM`` schedule in
``descripcion``; the front desk uses it to show which classes a member
can still join.
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, status

from gym_api.app.core.dependencies import ClassServiceDep
from gym_api.app.core.exceptions import DataStoreError
from gym_api.app.schemas.gym_class import ClassRead


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[ClassRead])
async def list_classes(service: ClassServiceDep) -> List[ClassRead]:
    """Return the full class catalog."""
    try:
        return await service.list_classes()
    except DataStoreError:
        logger.exception("Database error while listing classes")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al obtener las clases",
        )
