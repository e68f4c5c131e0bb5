# 📄 File: marketplace/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# Simple "are you alive?" and "are you ready to work?" checks used by load balancers and monitoring.
# 🧪 Purpose (Technical Summary):
# Liveness endpoint returning service name and version, and a readiness endpoint that requires the
# database to answer. Redis is reported but not required since the cache degrades to misses.
# 🔗 Dependencies:
# FastAPI, marketplace.shared.infrastructure.database.connection, marketplace.shared.config.redis
# 🔄 Connected Modules / Calls From:
# marketplace.api.v1.router, load balancers, container orchestrators

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from marketplace.shared.config.redis import check_redis_health
from marketplace.shared.config.settings import get_settings
from marketplace.shared.infrastructure.database.connection import database_health_check

logger = logging.getLogger(__name__)

health_router = APIRouter(tags=["Health Check"])


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@health_router.get(
    "/health",
    summary="Basic Health Check",
    description="Liveness check for load balancers and monitoring"
)
async def health_check() -> JSONResponse:
    settings = get_settings()
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "timestamp": _timestamp(),
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION
        }
    )


@health_router.get(
    "/health/ready",
    summary="Readiness Check",
    description="Returns 200 when the database is reachable, 503 otherwise"
)
async def readiness_check() -> JSONResponse:
    """
    Readiness check.

    The database is critical; the cache status is included for information only.
    """
    db_health = await database_health_check()
    checks = {"database": db_health}

    if get_settings().CACHE_ENABLED:
        checks["cache"] = await check_redis_health()

    if db_health["status"] != "healthy":
        logger.warning(f"Readiness check failed: database {db_health.get('error')}")
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "reason": "database_unhealthy",
                "checks": checks,
                "timestamp": _timestamp()
            }
        )

    return JSONResponse(
        status_code=200,
        content={"status": "ready", "checks": checks, "timestamp": _timestamp()}
    )
