# leadcapture/routes/health.py
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, status
from pydantic import BaseModel

from leadcapture import __version__
from leadcapture.core.config import settings

router = APIRouter(tags=["health"])

_started_at = time.monotonic()


class HealthCheckResponse(BaseModel):
    status: str
    service: str
    environment: str
    version: str
    timestamp: str
    uptime: float
    endpoints: Dict[str, str]


@router.get("/health", response_model=HealthCheckResponse, status_code=status.HTTP_200_OK)
async def health_check():
    """Report service status and the upstream endpoints it is configured for."""
    return HealthCheckResponse(
        status="healthy",
        service="leadcapture",
        environment=settings.environment,
        version=__version__,
        timestamp=datetime.now(timezone.utc).isoformat(),
        uptime=round(time.monotonic() - _started_at, 3),
        endpoints={
            "ip_lookup": settings.ip_lookup_url,
            "email_validation": settings.email_validation_url,
            "lead_capture": settings.hubspot_form_url,
        },
    )


@router.get("/health/live", status_code=status.HTTP_200_OK)
async def liveness_check():
    return {
        "status": "alive",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
