"""
Pydantic models for gym classes.

Classes are read-only through the API.  ``descripcion`` carries the
class schedule formatted as ``HH:MM``, which is what the front‑desk
client shows next to the class name.
"""

from pydantic import BaseModel, Field


class ClassSummary(BaseModel):
    """Class as listed inside a member's enrollments."""

    id: int
    nombre: str = Field(..., examples=["Yoga"])
    descripcion: str = Field(..., examples=["08:00"], description="Scheduled time (HH:MM)")

    model_config = {
        "from_attributes": True,
    }


class ClassRead(ClassSummary):
    """Class as returned by the catalog, with its remaining capacity."""

    cupos_disponibles: int = Field(..., alias="cuposDisponibles", ge=0)

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }
