"""
Top‑level API router.

Aggregates the domain routers under their Spanish resource names.  The
application mounts this router under ``/api``.
"""

from fastapi import APIRouter

from .endpoints import classes, enrollments, health, members

router = APIRouter()

router.include_router(classes.router, prefix="/clases", tags=["clases"])
router.include_router(members.router, prefix="/socios", tags=["socios"])
router.include_router(enrollments.router, prefix="/inscripciones", tags=["inscripciones"])
router.include_router(health.router, prefix="/health", tags=["health"])
