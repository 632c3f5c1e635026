"""
Service layer abstraction.

Each service encapsulates the rules for a domain and runs its SQL
through the shared :class:`~gym_api.app.core.db.Database` handle, so
API handlers only translate results into HTTP responses.
"""
