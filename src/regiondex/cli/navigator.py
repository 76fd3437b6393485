"""Interactive terminal navigator: regions → creature list → creature detail.

Every screen's data is loaded by a task owned by its entry on the navigation
stack. Going back cancels whatever that screen was still fetching.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

import click

from regiondex.evolution.resolver import EvolutionResolver
from regiondex.navigation.stack import NavigationStack, Screen, ScreenKind
from regiondex.pokeapi.client import PokeAPIClient
from regiondex.pokeapi.errors import ChainFailure, LookupFailure
from regiondex.pokeapi.models import CreatureSummary
from regiondex.regions.batch import RegionBatchFetcher
from regiondex.regions.catalog import REGIONS, get_region

logger = logging.getLogger(__name__)

BACK = "b"
QUIT = "q"
RETRY = "r"


@dataclass
class CreatureDetail:
    """Data for the detail screen."""

    creature: CreatureSummary
    evolution_chain: list[str] = field(default_factory=list)
    chain_error: str | None = None


def format_creature(creature: CreatureSummary) -> list[str]:
    """Detail lines for a creature, as shown by `show` and the navigator."""
    return [
        f"#{creature.id} {creature.name}",
        f"Height: {creature.height}",
        f"Weight: {creature.weight}",
        f"Types: {', '.join(creature.types)}",
    ]


class Navigator:
    """Drive the three screens from a terminal prompt."""

    def __init__(
        self,
        client: PokeAPIClient,
        max_depth: int = 20,
        prompt: Callable[[str], Awaitable[str]] | None = None,
        echo: Callable[[str], Any] = click.echo,
    ) -> None:
        self.client = client
        self.fetcher = RegionBatchFetcher(client)
        self.resolver = EvolutionResolver(client)
        self.stack = NavigationStack(max_depth=max_depth)
        self.prompt = prompt or self._click_prompt
        self.echo = echo

    @staticmethod
    async def _click_prompt(text: str) -> str:
        # click.prompt blocks; keep the event loop free for in-flight loads
        return await asyncio.to_thread(click.prompt, text, default="", show_default=False)

    async def load_detail(self, id_or_name: int | str) -> CreatureDetail:
        """Load a creature and its evolution chain.

        A chain failure still returns the creature, with the error attached.
        """
        creature = await self.client.get_creature(id_or_name)
        try:
            chain = await self.resolver.resolve_chain(creature)
        except ChainFailure as e:
            return CreatureDetail(creature, chain_error=str(e))
        return CreatureDetail(creature, evolution_chain=chain)

    def open(self, kind: ScreenKind, argument: str | int) -> Screen:
        """Push a screen and start loading its data."""
        if kind is ScreenKind.REGION:
            region = get_region(str(argument))
            return self.stack.push(kind, region.name, lambda: self.fetcher.fetch_region(region))
        return self.stack.push(kind, argument, lambda: self.load_detail(argument))

    def retry(self) -> Screen:
        """Reload the current screen from scratch."""
        screen = self.stack.pop()
        if screen is None:
            return self.stack.current
        return self.open(screen.kind, screen.argument)  # type: ignore[arg-type]

    async def run(self) -> None:
        """Run until the user quits."""
        while True:
            screen = self.stack.current
            self.echo("")
            self.echo(" > ".join(self.stack.breadcrumbs()))

            if screen.kind is ScreenKind.REGIONS:
                keep_going = await self._regions_screen()
            elif screen.kind is ScreenKind.REGION:
                keep_going = await self._region_screen(screen)
            else:
                keep_going = await self._creature_screen(screen)

            if not keep_going:
                self.stack.reset()
                return

    async def _regions_screen(self) -> bool:
        names = list(REGIONS)
        for index, name in enumerate(names, start=1):
            region = REGIONS[name]
            self.echo(f"{index:>2}. {name} (#{region.min_id}-#{region.max_id})")

        choice = (await self.prompt("Select a region (number or name, q to quit)")).strip()
        if choice.lower() == QUIT:
            return False

        name = self._pick(choice, names)
        if name is None:
            self.echo(f"Unknown region: {choice}")
            return True
        self.open(ScreenKind.REGION, name)
        return True

    async def _region_screen(self, screen: Screen) -> bool:
        self.echo(f"Loading {screen.title}...")
        try:
            creatures: list[CreatureSummary] = await screen.result()
        except LookupFailure as e:
            return await self._error_prompt(str(e))

        for creature in creatures:
            self.echo(f"#{creature.id:>4} {creature.name}")

        choice = (await self.prompt("Select a creature (#id or name, b back, q quit)")).strip()
        if choice.lower() == QUIT:
            return False
        if choice.lower() == BACK or not choice:
            self.stack.pop()
            return True

        wanted = choice.lstrip("#").lower()
        for creature in creatures:
            if wanted in (str(creature.id), creature.name):
                self.open(ScreenKind.CREATURE, creature.name)
                return True
        self.echo(f"Not in {screen.title}: {choice}")
        return True

    async def _creature_screen(self, screen: Screen) -> bool:
        try:
            detail: CreatureDetail = await screen.result()
        except LookupFailure as e:
            return await self._error_prompt(str(e))

        for line in format_creature(detail.creature):
            self.echo(line)

        self.echo("Evolution Chain:")
        if detail.chain_error:
            self.echo(f"  {detail.chain_error}")
        for index, name in enumerate(detail.evolution_chain, start=1):
            self.echo(f"  {index}. {name}")

        choice = (await self.prompt("Follow an evolution (number or name, b back, q quit)")).strip()
        if choice.lower() == QUIT:
            return False
        if choice.lower() == BACK or not choice:
            self.stack.pop()
            return True
        if choice.lower() == RETRY and detail.chain_error:
            self.retry()
            return True

        name = self._pick(choice, detail.evolution_chain)
        if name is None:
            self.echo(f"Not in the evolution chain: {choice}")
            return True
        self.open(ScreenKind.CREATURE, name)
        return True

    async def _error_prompt(self, message: str) -> bool:
        """Show a load failure and offer retry, back or quit."""
        self.echo(click.style(f"Error: {message}", fg="red"))
        choice = (await self.prompt("r retry, b back, q quit")).strip().lower()
        if choice == QUIT:
            return False
        if choice == RETRY:
            self.retry()
        else:
            self.stack.pop()
        return True

    @staticmethod
    def _pick(choice: str, options: list[str]) -> str | None:
        """Match a 1-based index or a case-insensitive name against options."""
        if choice.isdigit():
            index = int(choice) - 1
            return options[index] if 0 <= index < len(options) else None
        for option in options:
            if option.casefold() == choice.casefold():
                return option
        return None
