"""Evolution chain resolution."""

from regiondex.evolution.resolver import EvolutionResolver, enumerate_branches, walk_first_branch

__all__ = ["EvolutionResolver", "enumerate_branches", "walk_first_branch"]
