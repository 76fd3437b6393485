"""Pokedex API response models."""

from pydantic import BaseModel, Field

from regiondex.pokeapi.models import CreatureSummary, FetchOutcome


class RegionResponse(BaseModel):
    """One entry of the region catalog."""

    name: str = Field(..., description="Region name")
    min_id: int = Field(..., description="First national dex number (inclusive)")
    max_id: int = Field(..., description="Last national dex number (inclusive)")
    size: int = Field(..., description="Number of creatures in the region")


class RegionListResponse(BaseModel):
    """Response for the region catalog endpoint."""

    regions: list[RegionResponse]


class RegionCreaturesResponse(BaseModel):
    """All creatures of a region, in ID order."""

    region: RegionResponse
    count: int
    creatures: list[CreatureSummary]


class RegionOutcomesResponse(BaseModel):
    """Per-ID outcomes of a region fetch that tolerates failures."""

    region: RegionResponse
    succeeded: int
    failed: int
    outcomes: list[FetchOutcome]


class EvolutionResponse(BaseModel):
    """Evolution sequence for a creature."""

    creature: str = Field(..., description="Creature the chain was resolved for")
    chain: list[str] = Field(..., description="First-branch evolution sequence")
    alternatives: list[list[str]] = Field(
        default_factory=list, description="Every root-to-leaf path, first branch included"
    )
