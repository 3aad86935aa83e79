"""
Health Check 라우터.

로드밸런서용 readiness(DB ping 포함)와 liveness 엔드포인트를 제공합니다.
"""
import asyncio
import logging
import time
from typing import Any, Dict

from fastapi import APIRouter, HTTPException, Request, status

from album_server.utils.prometheus_metrics import ready

logger = logging.getLogger("album_server.health")
router = APIRouter(prefix="/health", tags=["Health"])


@router.get(
    "",
    summary="Health check",
)
async def health_check(request: Request) -> Dict[str, Any]:
    """
    Readiness check for load balancers.

    - 503 while the application is shutting down
    - database ping with a 1 second timeout
    """
    start_time = time.perf_counter()

    if ready._value.get() == 0:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Application is not ready",
        )

    try:
        await asyncio.wait_for(request.app.state.database.ping(), timeout=1.0)
    except asyncio.TimeoutError:
        logger.warning("DB health check timeout", extra={"event": "health"})
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database connection timeout",
        )
    except Exception as e:
        logger.warning("DB health check failed", extra={"event": "health", "error": str(e)})
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database connection failed",
        )

    return {
        "status": "healthy",
        "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
    }


@router.get(
    "/liveness",
    summary="Liveness check",
)
async def liveness() -> Dict[str, str]:
    """Process is up. No dependencies are checked."""
    return {"status": "alive"}
