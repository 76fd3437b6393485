"""Health check endpoints for monitoring service status."""

import logging
from datetime import UTC, datetime
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from regiondex.config import RegionDexConfig
from regiondex.system.structlog_configurator import get_package_version
from regiondex.web.core.container import Container
from regiondex.web.models.health import HealthCheckResponse, LivenessProbeResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health")


@router.get("/", response_model=HealthCheckResponse)
@inject
async def health_check(
    config: Annotated[RegionDexConfig, Depends(Provide[Container.config])],
) -> HealthCheckResponse:
    """Check basic health status of the service.

    Upstream availability is not probed; PokeAPI is only contacted on demand.
    """
    return HealthCheckResponse(
        status="healthy",
        timestamp=datetime.now(UTC).isoformat(),
        version=get_package_version(),
        service="regiondex",
        upstream=config.pokeapi.base_url,
    )


@router.get("/live", response_model=LivenessProbeResponse)
async def liveness_probe() -> LivenessProbeResponse:
    """Kubernetes-style liveness probe."""
    return LivenessProbeResponse(status="alive")
