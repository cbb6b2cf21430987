"""System router providing the health check endpoint."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text

from todoapi.api.deps import get_logger
from todoapi.jsonapi.interceptor import jsonapi_route
from todoapi.logger import LoggerService

router = APIRouter(route_class=jsonapi_route("system-health"))


@router.get("/health")
async def health_check(
    request: Request, logger: LoggerService = Depends(get_logger)
) -> dict:
    """Return system health status including database connectivity.

    The resource id is always ``current``; the status is ``healthy`` when the
    database answers and ``degraded`` otherwise.
    """
    db_ok = False
    try:
        session_factory = request.app.state.session_factory
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
        db_ok = True
    except Exception as exc:
        logger.warn("HealthCheck", f"Database health check failed: {exc!r}")

    return {
        "id": "current",
        "status": "healthy" if db_ok else "degraded",
        "database": "connected" if db_ok else "disconnected",
    }
