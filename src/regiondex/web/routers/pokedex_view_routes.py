"""Pokedex view routes: region selector, region list and creature detail pages."""

import logging
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from regiondex.config import RegionDexConfig
from regiondex.evolution.resolver import EvolutionResolver
from regiondex.pokeapi.client import PokeAPIClient
from regiondex.pokeapi.errors import ChainFailure, LookupFailure, RegionConfigurationError
from regiondex.regions.batch import RegionBatchFetcher
from regiondex.regions.catalog import REGIONS, get_region, region_for_creature
from regiondex.web.core.container import Container
from regiondex.web.models.template_contexts import (
    CreaturePageContext,
    RegionPageContext,
    RegionsPageContext,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _status_for(error: LookupFailure) -> int:
    return 404 if error.not_found else 502


@router.get("/", response_class=HTMLResponse)
@inject
async def regions_view(
    request: Request,
    templates: Annotated[Jinja2Templates, Depends(Provide[Container.templates])],
    config: Annotated[RegionDexConfig, Depends(Provide[Container.config])],
) -> HTMLResponse:
    """Render the region selector."""
    context = RegionsPageContext(
        config=config,
        active_page="regions",
        page_name="Select a Region",
        regions=list(REGIONS.values()),
    )
    return templates.TemplateResponse(request, "regions.html.j2", context.model_dump())


@router.get("/regions/{region_name}", response_class=HTMLResponse)
@inject
async def region_view(
    request: Request,
    region_name: str,
    templates: Annotated[Jinja2Templates, Depends(Provide[Container.templates])],
    config: Annotated[RegionDexConfig, Depends(Provide[Container.config])],
    batch_fetcher: Annotated[RegionBatchFetcher, Depends(Provide[Container.batch_fetcher])],
) -> HTMLResponse:
    """Render the list of every creature in a region.

    The whole region is fetched before rendering; if any lookup fails the page
    shows an error state with a retry link instead of a partial list.
    """
    try:
        region = get_region(region_name)
    except RegionConfigurationError as e:
        context = RegionsPageContext(
            config=config,
            active_page="regions",
            page_name="Select a Region",
            regions=list(REGIONS.values()),
            error=str(e),
        )
        return templates.TemplateResponse(
            request, "regions.html.j2", context.model_dump(), status_code=404
        )

    context = RegionPageContext(
        config=config,
        active_page="regions",
        page_name=region.name,
        region_name=region.name,
        min_id=region.min_id,
        max_id=region.max_id,
    )
    status_code = 200
    try:
        context.creatures = await batch_fetcher.fetch_region(region)
    except LookupFailure as e:
        logger.error("Error loading region %s: %s", region.name, e)
        context.error = f"Could not load the {region.name} creatures: {e}"
        context.retry_url = str(request.url)
        status_code = 502

    return templates.TemplateResponse(
        request, "region.html.j2", context.model_dump(), status_code=status_code
    )


@router.get("/pokemon/{id_or_name}", response_class=HTMLResponse)
@inject
async def creature_view(
    request: Request,
    id_or_name: str,
    templates: Annotated[Jinja2Templates, Depends(Provide[Container.templates])],
    config: Annotated[RegionDexConfig, Depends(Provide[Container.config])],
    client: Annotated[PokeAPIClient, Depends(Provide[Container.pokeapi_client])],
    resolver: Annotated[EvolutionResolver, Depends(Provide[Container.evolution_resolver])],
) -> HTMLResponse:
    """Render a creature's detail page with its evolution chain.

    Each chain entry links back to this route by name, so following an
    evolution opens a fresh, independently resolved detail page.
    """
    context = CreaturePageContext(config=config, active_page="regions", page_name=id_or_name)

    try:
        creature = await client.get_creature(id_or_name)
    except LookupFailure as e:
        logger.error("Error loading creature %s: %s", id_or_name, e)
        context.error = f"Could not load {id_or_name}: {e}"
        context.retry_url = str(request.url)
        return templates.TemplateResponse(
            request, "creature.html.j2", context.model_dump(), status_code=_status_for(e)
        )

    context.creature = creature
    context.page_name = creature.name
    region = region_for_creature(creature.id)
    context.region_name = region.name if region else None

    try:
        context.evolution_chain = await resolver.resolve_chain(creature)
    except ChainFailure as e:
        logger.error("Error resolving evolution chain for %s: %s", creature.name, e)
        context.chain_error = str(e)
        context.retry_url = str(request.url)

    return templates.TemplateResponse(request, "creature.html.j2", context.model_dump())
