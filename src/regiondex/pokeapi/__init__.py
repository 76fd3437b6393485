"""PokeAPI access: client, resource models and error taxonomy."""

from regiondex.pokeapi.client import PokeAPIClient
from regiondex.pokeapi.errors import (
    BatchFailure,
    ChainFailure,
    LookupFailure,
    RegionConfigurationError,
    RegionDexError,
)
from regiondex.pokeapi.models import (
    CreatureSummary,
    EvolutionChainNode,
    FetchOutcome,
    NamedResource,
    SpeciesRecord,
)

__all__ = [
    "BatchFailure",
    "ChainFailure",
    "CreatureSummary",
    "EvolutionChainNode",
    "FetchOutcome",
    "LookupFailure",
    "NamedResource",
    "PokeAPIClient",
    "RegionConfigurationError",
    "RegionDexError",
    "SpeciesRecord",
]
