"""Health check endpoint."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from gym_api.app.core.dependencies import DatabaseDep


router = APIRouter()


@router.get("")
async def health(db: DatabaseDep) -> JSONResponse:
    """Report whether the database answers queries.

    Returns 200 when it does and 503 otherwise, so load balancers can
    hold traffic back while the database is unreachable.
    """
    if db.ping():
        return JSONResponse({"status": "ok", "database": "ok"})
    return JSONResponse({"status": "degraded", "database": "unavailable"}, status_code=503)
