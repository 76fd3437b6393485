"""Dependency injection container for the RegionDex application."""

from dependency_injector import containers, providers
from fastapi.templating import Jinja2Templates
from jinja2 import StrictUndefined

from regiondex.evolution.resolver import EvolutionResolver
from regiondex.pokeapi.client import PokeAPIClient
from regiondex.regions.batch import RegionBatchFetcher
from regiondex.system.path_resolver import PathResolver
from regiondex.web.core.config import get_config


def create_jinja2_templates(resolver: PathResolver) -> Jinja2Templates:
    """Create Jinja2Templates with dynamic path from resolver and strict undefined handling.

    Configures Jinja2 to raise errors on undefined variables, making missing
    template context obvious during development.
    """
    templates = Jinja2Templates(directory=str(resolver.get_templates_dir()))
    templates.env.undefined = StrictUndefined
    return templates


class Container(containers.DeclarativeContainer):
    """Application dependency injection container.

    The PokeAPI client is a singleton so every request shares one connection
    pool; fetchers and resolvers are cheap and built per use.
    """

    path_resolver = providers.Singleton(PathResolver)

    config = providers.Singleton(
        get_config,
        path_resolver=path_resolver,
    )

    templates = providers.Singleton(
        create_jinja2_templates,
        resolver=path_resolver,
    )

    pokeapi_client = providers.Singleton(
        PokeAPIClient,
        base_url=providers.Factory(lambda c: c.pokeapi.base_url, c=config),
        timeout=providers.Factory(lambda c: c.pokeapi.timeout, c=config),
    )

    batch_fetcher = providers.Factory(
        RegionBatchFetcher,
        client=pokeapi_client,
    )

    evolution_resolver = providers.Factory(
        EvolutionResolver,
        client=pokeapi_client,
    )
