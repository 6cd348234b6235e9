"""
Health check endpoints.
"""

import time

import aiosqlite
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from src.application.dto.responses import ComponentHealthResponse, HealthResponse
from src.config import get_logger, get_settings
from src.core.exceptions import LedgerError

router = APIRouter(prefix="/api/health", tags=["health"])

logger = get_logger(__name__)

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse, responses={503: {"model": HealthResponse}})
async def health_check() -> HealthResponse | JSONResponse:
    """
    Service health check.

    Probes SQLite with a trivial query; answers 503 when it is unreachable.
    """
    from src.infrastructure.storage.sqlite import get_connection_pool

    settings = get_settings()
    db_status = ComponentHealthResponse(name="sqlite", available=False)

    try:
        pool = await get_connection_pool()
        start = time.time()
        async with pool.acquire() as conn:
            await conn.execute("SELECT 1")
        db_status = ComponentHealthResponse(
            name="sqlite",
            available=True,
            latency_ms=(time.time() - start) * 1000,
        )

    except (aiosqlite.Error, OSError, LedgerError) as e:
        logger.warning("database_probe_failed", error=str(e))
        db_status.error = str(e)

    response = HealthResponse(
        status="healthy" if db_status.available else "unhealthy",
        version=settings.app_version,
        uptime_seconds=time.time() - _start_time,
        database=db_status,
    )
    if not db_status.available:
        return JSONResponse(status_code=503, content=response.model_dump(mode="json"))
    return response
