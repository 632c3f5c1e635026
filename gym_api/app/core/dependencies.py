"""Dependency injection helpers for FastAPI routes.

Services are built per request around the process-wide ``Database``
handle stored on ``app.state.db`` by ``create_app``.
"""

from typing import Annotated

from fastapi import Depends, Request

from gym_api.app.core.db import Database
from gym_api.app.services.class_service import ClassService
from gym_api.app.services.enrollment_service import EnrollmentService
from gym_api.app.services.member_service import MemberService


def get_database(request: Request) -> Database:
    """Return the database handle owned by the running application."""
    return request.app.state.db


def get_class_service(db: Database = Depends(get_database)) -> ClassService:
    return ClassService(db)


def get_member_service(db: Database = Depends(get_database)) -> MemberService:
    return MemberService(db)


def get_enrollment_service(db: Database = Depends(get_database)) -> EnrollmentService:
    return EnrollmentService(db)


# Type aliases for dependency injection
DatabaseDep = Annotated[Database, Depends(get_database)]
ClassServiceDep = Annotated[ClassService, Depends(get_class_service)]
MemberServiceDep = Annotated[MemberService, Depends(get_member_service)]
EnrollmentServiceDep = Annotated[EnrollmentService, Depends(get_enrollment_service)]
