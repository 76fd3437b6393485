"""The `regiondex` command-line interface."""

import asyncio
import sys
from typing import NoReturn

import click

from regiondex.cli.navigator import Navigator, format_creature
from regiondex.config import ConfigManager, RegionDexConfig
from regiondex.evolution.resolver import EvolutionResolver
from regiondex.pokeapi.client import PokeAPIClient
from regiondex.pokeapi.errors import ChainFailure, RegionDexError
from regiondex.regions.batch import RegionBatchFetcher
from regiondex.regions.catalog import REGIONS, get_region
from regiondex.system.path_resolver import PathResolver


def _load_config() -> RegionDexConfig:
    return ConfigManager(PathResolver()).load()


def _client(config: RegionDexConfig) -> PokeAPIClient:
    return PokeAPIClient(base_url=config.pokeapi.base_url, timeout=config.pokeapi.timeout)


def _fail(message: str) -> NoReturn:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


@click.group()
def cli() -> None:
    """Browse creatures by region and follow their evolution chains."""


@cli.command()
def regions() -> None:
    """List the regions and their national dex ranges."""
    for region in REGIONS.values():
        click.echo(f"{region.name:<8} #{region.min_id}-#{region.max_id} ({region.size})")


@cli.command()
@click.argument("region_name")
@click.option(
    "--settled",
    is_flag=True,
    help="Report failed lookups individually instead of failing the whole region",
)
def browse(region_name: str, settled: bool) -> None:
    """List every creature of REGION_NAME, in national dex order.

    Examples:
        # Whole region, fails if any lookup fails
        regiondex browse kanto

        # Keep going past failed lookups
        regiondex browse johto --settled
    """
    asyncio.run(_browse_async(region_name, settled))


async def _browse_async(region_name: str, settled: bool) -> None:
    try:
        config = _load_config()
        region = get_region(region_name)
        async with _client(config) as client:
            fetcher = RegionBatchFetcher(client)
            if settled:
                outcomes = await fetcher.fetch_region_settled(region)
            else:
                creatures = await fetcher.fetch_region(region)
    except (RegionDexError, ValueError) as e:
        _fail(str(e))

    click.echo(click.style(f"{region.name} (#{region.min_id}-#{region.max_id})", bold=True))
    if not settled:
        for creature in creatures:
            click.echo(f"#{creature.id:>4} {creature.name}")
        return

    failed = 0
    for outcome in outcomes:
        if outcome.creature is not None:
            click.echo(f"#{outcome.creature_id:>4} {outcome.creature.name}")
        else:
            failed += 1
            line = f"#{outcome.creature_id:>4} failed: {outcome.error}"
            click.echo(click.style(line, fg="red"))
    if failed:
        click.echo(click.style(f"{failed} of {len(outcomes)} lookups failed", fg="yellow"))


@cli.command()
@click.argument("id_or_name")
def show(id_or_name: str) -> None:
    """Show one creature and its evolution chain."""
    asyncio.run(_show_async(id_or_name))


async def _show_async(id_or_name: str) -> None:
    chain_error = None
    try:
        config = _load_config()
        async with _client(config) as client:
            creature = await client.get_creature(id_or_name)
            try:
                chain = await EvolutionResolver(client).resolve_chain(creature)
            except ChainFailure as e:
                chain_error = str(e)
    except (RegionDexError, ValueError) as e:
        _fail(str(e))

    for line in format_creature(creature):
        click.echo(line)
    if chain_error is not None:
        _fail(chain_error)
    click.echo(f"Evolution Chain: {' -> '.join(chain)}")


@cli.command()
def navigate() -> None:
    """Browse interactively: pick a region, a creature, then follow evolutions."""
    asyncio.run(_navigate_async())


async def _navigate_async() -> None:
    try:
        config = _load_config()
    except ValueError as e:
        _fail(str(e))

    async with _client(config) as client:
        navigator = Navigator(client, max_depth=config.navigation.max_depth)
        await navigator.run()


@cli.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address")
@click.option("--port", default=8000, show_default=True, type=int, help="Bind port")
@click.option("--reload", is_flag=True, help="Reload on code changes (development)")
def serve(host: str, port: int, reload: bool) -> None:
    """Run the web application."""
    import uvicorn

    uvicorn.run("regiondex.web.main:app", host=host, port=port, reload=reload)


def main() -> None:
    """Entry point for the `regiondex` console script."""
    cli()


if __name__ == "__main__":
    main()
