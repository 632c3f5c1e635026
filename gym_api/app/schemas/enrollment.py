"""
Pydantic models for class enrollments (inscripciones).

Both enrollment and cancellation take the same body,
``{"socioId": ..., "claseId": ...}``.  Identifiers must be positive;
``0`` is treated as missing, as the browser client does.
"""

from pydantic import BaseModel, Field

from .common import MAX_ID


class EnrollmentRequest(BaseModel):
    socio_id: int = Field(..., alias="socioId", gt=0, le=MAX_ID, examples=[1])
    clase_id: int = Field(..., alias="claseId", gt=0, le=MAX_ID, examples=[2])

    model_config = {
        "populate_by_name": True,
    }


class EnrollmentResult(BaseModel):
    """Outcome of the enrollment procedure.

    ``codigo_error`` is ``0`` on success; any other value is a business
    rule rejection (see ``EnrollmentService``) and ``mensaje`` explains
    it in words suitable for the front desk.
    """

    codigo_error: int
    mensaje: str

    @property
    def ok(self) -> bool:
        return self.codigo_error == 0
