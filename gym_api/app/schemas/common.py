"""Shared response bodies."""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Body of every plain success and error response."""

    message: str = Field(..., examples=["Inscripción dada de baja correctamente."])


# Largest value an SQLite INTEGER column can hold; identifiers beyond it
# cannot exist and are rejected as invalid input.
MAX_ID = 2**63 - 1
