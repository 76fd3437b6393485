"""Web API contract models using Pydantic for validation."""

from regiondex.web.models.health import HealthCheckResponse, LivenessProbeResponse
from regiondex.web.models.pokedex import (
    EvolutionResponse,
    RegionCreaturesResponse,
    RegionListResponse,
    RegionOutcomesResponse,
    RegionResponse,
)

__all__ = [
    "EvolutionResponse",
    "HealthCheckResponse",
    "LivenessProbeResponse",
    "RegionCreaturesResponse",
    "RegionListResponse",
    "RegionOutcomesResponse",
    "RegionResponse",
]
