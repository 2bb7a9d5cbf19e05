"""
Health check endpoints.

Provides endpoints for monitoring application health and status.
"""

from typing import Any, Dict

from fastapi import APIRouter

from config.settings import get_settings


router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """
    Basic health check endpoint.

    Returns:
        Health status with basic info
    """
    return {
        "status": "healthy",
        "service": "product-search-gateway",
    }


@router.get("/health/detailed")
async def detailed_health_check() -> Dict[str, Any]:
    """
    Health with configuration status.

    Backends are not called (no probing traffic against the commerce
    services); only whether each one is configured is reported.
    """
    settings = get_settings()

    catalog_configured = bool(settings.catalog_service_endpoint)
    environment_configured = bool(settings.commerce_environment_id)

    return {
        "status": "healthy" if catalog_configured and environment_configured else "degraded",
        "service": "product-search-gateway",
        "environment": settings.environment,
        "checks": {
            "config": "ok",
            "catalog_service": {
                "endpoint": settings.catalog_service_endpoint,
                "configured": catalog_configured,
            },
            "live_search": {
                "endpoint": settings.resolved_live_search_endpoint,
                "configured": bool(settings.resolved_live_search_endpoint),
            },
            "commerce_environment": {
                "configured": environment_configured,
            },
        },
    }


@router.get("/ready")
async def readiness_check() -> Dict[str, str]:
    """
    Kubernetes-style readiness probe.

    Returns 200 if the service is ready to accept traffic.
    """
    settings = get_settings()
    if not settings.commerce_environment_id:
        return {"status": "not_ready", "reason": "commerce_environment_not_configured"}

    return {"status": "ready"}


@router.get("/live")
async def liveness_check() -> Dict[str, str]:
    """
    Kubernetes-style liveness probe.

    Returns 200 if the service is alive.
    """
    return {"status": "alive"}
