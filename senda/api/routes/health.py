"""
Health check endpoints for Senda API.

Provides:
- /live - Liveness probe (service alive)
- /ready - Readiness probe (external client configuration)
"""
from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, Depends

from senda.api.deps import get_client_config
from senda.core.config import GeocodingClientConfig, settings

router = APIRouter(tags=["health"])


@router.get(
    "/live",
    summary="Liveness probe",
    description="Quick check if the service is alive.",
)
async def liveness_probe() -> Dict[str, Any]:
    """Kubernetes-style liveness probe."""
    return {"alive": True, "timestamp": datetime.utcnow().isoformat()}


@router.get(
    "/ready",
    summary="Readiness probe",
    description="Reports whether the lookup service and AI assistant are configured.",
)
async def readiness_probe(
    config: GeocodingClientConfig = Depends(get_client_config),
) -> Dict[str, Any]:
    # Without an API key the ladder still works; only the AI step is skipped.
    assistant_ready = bool(config.ai_assistant_api_key)
    return {
        "status": "healthy" if assistant_ready else "degraded",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "services": {
            "geocoding": {"status": "healthy", "base_url": config.lookup_service_base_url},
            "assistant": {"status": "healthy" if assistant_ready else "degraded"},
        },
    }
