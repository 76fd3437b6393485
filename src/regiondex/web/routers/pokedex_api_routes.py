"""Pokedex API routes mirroring the view pages as JSON."""

import logging
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query

from regiondex.evolution.resolver import (
    EvolutionResolver,
    enumerate_branches,
    walk_first_branch,
)
from regiondex.pokeapi.client import PokeAPIClient
from regiondex.pokeapi.errors import LookupFailure, RegionConfigurationError
from regiondex.pokeapi.models import CreatureSummary
from regiondex.regions.batch import RegionBatchFetcher
from regiondex.regions.catalog import REGIONS, Region, get_region
from regiondex.web.core.container import Container
from regiondex.web.models.pokedex import (
    EvolutionResponse,
    RegionCreaturesResponse,
    RegionListResponse,
    RegionOutcomesResponse,
    RegionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _region_response(region: Region) -> RegionResponse:
    return RegionResponse(
        name=region.name, min_id=region.min_id, max_id=region.max_id, size=region.size
    )


def _lookup_http_error(error: LookupFailure) -> HTTPException:
    """Map an upstream failure to 404 (missing upstream) or 502 (anything else)."""
    if error.not_found:
        return HTTPException(status_code=404, detail=str(error))
    return HTTPException(status_code=502, detail=str(error))


def _get_region_or_404(region_name: str) -> Region:
    try:
        return get_region(region_name)
    except RegionConfigurationError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.get("/regions", response_model=RegionListResponse)
async def list_regions() -> RegionListResponse:
    """List the region catalog."""
    return RegionListResponse(regions=[_region_response(r) for r in REGIONS.values()])


@router.get(
    "/regions/{region_name}/pokemon",
    response_model=RegionCreaturesResponse | RegionOutcomesResponse,
)
@inject
async def get_region_creatures(
    region_name: str,
    batch_fetcher: Annotated[RegionBatchFetcher, Depends(Provide[Container.batch_fetcher])],
    settled: bool = Query(False, description="Report each lookup instead of failing as a whole"),
) -> RegionCreaturesResponse | RegionOutcomesResponse:
    """Fetch every creature of a region.

    By default the whole batch fails (502/404) if any lookup fails. With
    `settled=true` every ID gets its own success or failure entry.
    """
    region = _get_region_or_404(region_name)

    if settled:
        outcomes = await batch_fetcher.fetch_region_settled(region)
        succeeded = sum(1 for outcome in outcomes if outcome.ok)
        return RegionOutcomesResponse(
            region=_region_response(region),
            succeeded=succeeded,
            failed=len(outcomes) - succeeded,
            outcomes=outcomes,
        )

    try:
        creatures = await batch_fetcher.fetch_region(region)
    except LookupFailure as e:
        raise _lookup_http_error(e) from e

    return RegionCreaturesResponse(
        region=_region_response(region), count=len(creatures), creatures=creatures
    )


@router.get("/pokemon/{id_or_name}", response_model=CreatureSummary)
@inject
async def get_creature(
    id_or_name: str,
    client: Annotated[PokeAPIClient, Depends(Provide[Container.pokeapi_client])],
) -> CreatureSummary:
    """Look up a single creature by national dex number or name."""
    try:
        return await client.get_creature(id_or_name)
    except LookupFailure as e:
        raise _lookup_http_error(e) from e


@router.get("/pokemon/{id_or_name}/evolution", response_model=EvolutionResponse)
@inject
async def get_evolution(
    id_or_name: str,
    client: Annotated[PokeAPIClient, Depends(Provide[Container.pokeapi_client])],
    resolver: Annotated[EvolutionResolver, Depends(Provide[Container.evolution_resolver])],
) -> EvolutionResponse:
    """Resolve a creature's evolution chain.

    `chain` follows the first branch at every level; `alternatives` lists every
    path through the tree for creatures with branching evolutions.
    """
    try:
        creature = await client.get_creature(id_or_name)
        root = await resolver.fetch_chain(creature)
    except LookupFailure as e:
        raise _lookup_http_error(e) from e

    if root is None:
        chain = [creature.species.name]
        return EvolutionResponse(creature=creature.name, chain=chain, alternatives=[chain])

    return EvolutionResponse(
        creature=creature.name,
        chain=walk_first_branch(root),
        alternatives=enumerate_branches(root),
    )
