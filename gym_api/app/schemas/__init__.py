"""
Pydantic schema definitions for API payloads.

The wire format keeps the Spanish field names used by the front‑desk
browser client (``socioId``, ``claseId``, ``inscripciones``...).
"""
