"""Health check and monitoring endpoints."""

import platform
import sys
import time
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from pricetag.api.deps import AppSettings, TagService
from pricetag.api.schemas import HealthResponse, ServiceHealth

router = APIRouter(prefix="/health", tags=["Health"])

# Track server start time for uptime calculation
_server_start_time = datetime.now(timezone.utc)


def _get_system_info() -> dict[str, Any]:
    """Get system information for health endpoints."""
    return {
        "hostname": platform.node(),
        "platform": platform.system(),
        "python_version": sys.version.split()[0],
        "architecture": platform.machine(),
    }


def _get_uptime() -> dict[str, Any]:
    """Calculate server uptime."""
    now = datetime.now(timezone.utc)
    delta = now - _server_start_time

    days = delta.days
    hours, remainder = divmod(delta.seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    return {
        "started_at": _server_start_time.isoformat(),
        "uptime_seconds": int(delta.total_seconds()),
        "uptime_human": f"{days}d {hours}h {minutes}m {seconds}s",
    }


async def _timed_health_check(
    name: str, check_fn: Callable[[], bool]
) -> tuple[str, bool, float, str | None]:
    """Execute a blocking health check in the thread pool and measure its latency.

    Returns:
        Tuple of (name, healthy, latency_ms, error_message)
    """
    start = time.perf_counter()
    try:
        result = await run_in_threadpool(check_fn)
        latency = (time.perf_counter() - start) * 1000
        return (name, result, latency, None)
    except Exception as e:
        latency = (time.perf_counter() - start) * 1000
        return (name, False, latency, str(e))


@router.get(
    "",
    response_model=HealthResponse,
    summary="Comprehensive health check",
    response_description="Health status of the feed and the image cache",
)
async def health_check(service: TagService, settings: AppSettings) -> HealthResponse:
    """
    Comprehensive health check endpoint for monitoring.

    - **Feed**: the product feed can be loaded and parsed
    - **Cache**: the cache directory is writable

    An unreadable feed makes the service unhealthy; an unwritable cache only
    degrades it, since tags are still rendered.
    """
    _, feed_ok, feed_latency, feed_error = await _timed_health_check(
        "feed", service.feed.check_health
    )
    _, cache_ok, cache_latency, cache_error = await _timed_health_check(
        "cache", service.cache.check_health
    )

    feed_details: dict[str, Any] = {"path": str(service.feed.path)}
    if feed_error:
        feed_details["error"] = feed_error
    cache_details: dict[str, Any] = {
        "directory": str(service.cache.directory),
        "expiration_seconds": service.cache.expiration_seconds,
    }
    if cache_error:
        cache_details["error"] = cache_error

    if not feed_ok:
        overall_status = "unhealthy"
    elif not cache_ok:
        overall_status = "degraded"
    else:
        overall_status = "healthy"

    return HealthResponse(
        status=overall_status,
        timestamp=datetime.now(timezone.utc),
        version=settings.app_version,
        services={
            "feed": ServiceHealth(
                status="healthy" if feed_ok else "unhealthy",
                latency_ms=round(feed_latency, 2),
                details=feed_details,
            ),
            "cache": ServiceHealth(
                status="healthy" if cache_ok else "degraded",
                latency_ms=round(cache_latency, 2),
                details=cache_details,
            ),
        },
    )


@router.get(
    "/live",
    summary="Liveness probe",
    response_description="Simple liveness check for orchestrators",
)
async def liveness() -> dict[str, str]:
    """
    Liveness probe endpoint.

    Returns 200 if the service process is running. Does not touch the feed
    or the cache.
    """
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get(
    "/ready",
    summary="Readiness probe",
    response_description="Readiness check for load balancers",
)
async def readiness(service: TagService) -> JSONResponse:
    """
    Readiness probe endpoint.

    Returns 503 Service Unavailable while the product feed cannot be loaded.
    """
    feed_ok = await run_in_threadpool(service.feed.check_health)

    if not feed_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "feed_unavailable",
                "message": "Product feed could not be loaded",
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "ready",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


@router.get(
    "/info",
    summary="System information",
    response_description="Detailed system and runtime information",
)
async def system_info(settings: AppSettings) -> dict[str, Any]:
    """
    Get application metadata, system information and uptime.
    """
    return {
        "application": {
            "name": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
        },
        "system": _get_system_info(),
        "uptime": _get_uptime(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
