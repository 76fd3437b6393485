"""Pydantic models for template context validation.

These models define the required and optional context variables for each template,
providing type safety and early detection of missing variables.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from regiondex.config.models import RegionDexConfig
from regiondex.pokeapi.models import CreatureSummary
from regiondex.regions.catalog import Region


class BaseTemplateContext(BaseModel):
    """Base context required by base.html.j2 template.

    All page templates must provide at least these variables.
    """

    config: RegionDexConfig = Field(..., description="Application configuration")
    page_name: str | None = Field(default=None, description="Page title to display in header")
    active_page: str = Field(default="", description="Active navigation item identifier")

    # Error state shared by every page; retry_url re-requests the same page
    error: str | None = Field(default=None, description="Error message if page failed to load")
    retry_url: str | None = Field(default=None, description="URL that retries the failed load")

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_serializer("config")
    def serialize_config(
        self,
        config: RegionDexConfig,
        _info: Any,  # noqa: ANN401
    ) -> dict[str, Any]:
        """Serialize config to dict for template access via config['key']."""
        return config.model_dump()


class RegionsPageContext(BaseTemplateContext):
    """Context for regions.html.j2 (the region selector)."""

    regions: list[Region] = Field(..., description="Regions in catalog order")

    @field_serializer("regions")
    def serialize_regions(
        self,
        regions: list[Region],
        _info: Any,  # noqa: ANN401
    ) -> list[dict[str, Any]]:
        return [
            {"name": r.name, "min_id": r.min_id, "max_id": r.max_id, "size": r.size}
            for r in regions
        ]


class RegionPageContext(BaseTemplateContext):
    """Context for region.html.j2 (creature list of one region)."""

    region_name: str = Field(..., description="Canonical region name")
    min_id: int
    max_id: int
    creatures: list[CreatureSummary] = Field(default_factory=list)


class CreaturePageContext(BaseTemplateContext):
    """Context for creature.html.j2 (detail view)."""

    creature: CreatureSummary | None = Field(default=None)
    region_name: str | None = Field(default=None, description="Region the creature belongs to")
    evolution_chain: list[str] = Field(default_factory=list)
    chain_error: str | None = Field(
        default=None, description="Set when the creature loaded but its chain did not"
    )
