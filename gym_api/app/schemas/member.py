"""
Pydantic models for gym members (socios).

``MemberCreate`` validates the registration form: every field is
required and must not be blank once surrounding whitespace is
stripped.  ``MemberRead`` is the lookup response, with the member's
full name joined into ``nombre`` and the enrolled classes nested in
``inscripciones``.
"""

from typing import List

from pydantic import BaseModel, Field, field_validator

from .gym_class import ClassSummary


class MemberCreate(BaseModel):
    """Schema for registering a member."""

    nombre: str = Field(..., min_length=1, examples=["Ana"])
    apellido: str = Field(..., min_length=1, examples=["Diaz"])
    email: str = Field(..., min_length=3, examples=["ana@x.com"])

    model_config = {
        "str_strip_whitespace": True,
    }

    @field_validator("email")
    @classmethod
    def email_has_at_sign(cls, value: str) -> str:
        if "@" not in value:
            raise ValueError("email must contain '@'")
        return value


class MemberCreated(BaseModel):
    message: str
    socio_id: int = Field(..., alias="socioId")

    model_config = {
        "populate_by_name": True,
    }


class MemberRead(BaseModel):
    """Schema for reading a member with the classes they are enrolled in."""

    id: int
    nombre: str = Field(..., examples=["Ana Diaz"], description="First and last name")
    email: str
    activo: bool = True
    inscripciones: List[ClassSummary] = Field(default_factory=list)

    model_config = {
        "from_attributes": True,
    }
