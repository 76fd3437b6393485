"""Evolution chain resolution.

A creature's evolution line is found in two hops: creature → species →
evolution chain. The chain is a tree; RegionDex follows only the first child
at every level, which yields a single linear sequence of names.
"""

import logging

from regiondex.pokeapi.client import PokeAPIClient
from regiondex.pokeapi.errors import ChainFailure, LookupFailure
from regiondex.pokeapi.models import CreatureSummary, EvolutionChainNode

logger = logging.getLogger(__name__)


def walk_first_branch(root: EvolutionChainNode) -> list[str]:
    """Walk a chain from the root, always taking the first child.

    Sibling branches are never visited.

    Returns:
        Names from root to the end of the first-child path (at least one)
    """
    names = []
    node: EvolutionChainNode | None = root
    while node is not None:
        names.append(node.name)
        node = node.evolves_to[0] if node.evolves_to else None
    return names


def enumerate_branches(root: EvolutionChainNode) -> list[list[str]]:
    """List every root-to-leaf path of a chain, in upstream child order.

    The first path is always the one returned by `walk_first_branch`.
    """
    paths: list[list[str]] = []
    stack: list[tuple[EvolutionChainNode, list[str]]] = [(root, [])]
    while stack:
        node, prefix = stack.pop()
        path = [*prefix, node.name]
        if not node.evolves_to:
            paths.append(path)
            continue
        # Reversed so the first child is popped, and therefore emitted, first
        for child in reversed(node.evolves_to):
            stack.append((child, path))
    return paths


class EvolutionResolver:
    """Resolve the evolution sequence shown on a creature's detail view."""

    def __init__(self, client: PokeAPIClient) -> None:
        self.client = client

    async def fetch_chain(self, creature: CreatureSummary) -> EvolutionChainNode | None:
        """Fetch the root node of a creature's evolution chain.

        Returns:
            The root node, or None if the species has no chain reference

        Raises:
            ChainFailure: If the species or chain lookup fails
        """
        try:
            species = await self.client.get_species(creature.species.url)
            if species.evolution_chain is None:
                logger.warning("Species %s has no evolution chain", species.name)
                return None
            return await self.client.get_evolution_chain(species.evolution_chain.url)
        except LookupFailure as e:
            raise ChainFailure(creature.name, e) from e

    async def resolve_chain(self, creature: CreatureSummary) -> list[str]:
        """Resolve the first-branch evolution sequence for a creature.

        Raises:
            ChainFailure: If either lookup fails; no partial chain is returned
        """
        root = await self.fetch_chain(creature)
        if root is None:
            return [creature.species.name]

        sequence = walk_first_branch(root)
        logger.debug("Evolution chain for %s: %s", creature.name, " -> ".join(sequence))
        return sequence

    async def resolve_chain_for(self, id_or_name: int | str) -> list[str]:
        """Look up a creature by ID or name, then resolve its chain.

        Raises:
            LookupFailure: If the creature lookup fails
            ChainFailure: If chain resolution fails
        """
        creature = await self.client.get_creature(id_or_name)
        return await self.resolve_chain(creature)
