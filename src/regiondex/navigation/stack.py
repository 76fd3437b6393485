"""Bounded navigation history for the interactive browser.

Each screen owns the task that loads its data. Popping a screen, or evicting
it because the history grew past `max_depth`, cancels that task so work for
screens the user has left is not carried on.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)


class ScreenKind(StrEnum):
    """The three screens of the app."""

    REGIONS = "regions"
    REGION = "region"
    CREATURE = "creature"


@dataclass
class Screen:
    """One entry in the navigation history."""

    kind: ScreenKind
    argument: str | int | None = None
    task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def title(self) -> str:
        if self.kind is ScreenKind.REGIONS:
            return "Regions"
        return str(self.argument)

    @property
    def loading(self) -> bool:
        return self.task is not None and not self.task.done()

    def cancel(self) -> bool:
        """Cancel the in-flight load, if any. Returns True if a task was cancelled."""
        if self.task is None:
            return False
        if self.task.done():
            # Mark a failure the user never looked at as retrieved
            if not self.task.cancelled():
                self.task.exception()
            return False
        self.task.cancel()
        return True

    async def result(self) -> Any:  # noqa: ANN401
        """Wait for the screen's data. Screens without a loader have none."""
        if self.task is None:
            return None
        return await self.task


class NavigationStack:
    """Push/pop history rooted at the region selector, capped at `max_depth`."""

    def __init__(self, max_depth: int = 20) -> None:
        if max_depth < 2:
            raise ValueError("max_depth must allow at least one screen above the root")
        self.max_depth = max_depth
        self._screens: list[Screen] = [Screen(ScreenKind.REGIONS)]

    @property
    def current(self) -> Screen:
        return self._screens[-1]

    @property
    def root(self) -> Screen:
        return self._screens[0]

    @property
    def depth(self) -> int:
        return len(self._screens)

    def history(self) -> list[Screen]:
        return list(self._screens)

    def breadcrumbs(self) -> list[str]:
        return [screen.title for screen in self._screens]

    def push(
        self,
        kind: ScreenKind,
        argument: str | int | None = None,
        loader: Callable[[], Awaitable[Any]] | None = None,
    ) -> Screen:
        """Open a new screen on top of the history.

        Args:
            kind: Which screen to open
            argument: Region name or creature ID/name the screen shows
            loader: Coroutine factory fetching the screen's data; started
                immediately as a task owned by the screen

        Returns:
            The new current screen
        """
        screen = Screen(kind, argument)
        if loader is not None:
            screen.task = asyncio.ensure_future(loader())
        self._screens.append(screen)

        # The root selector is never evicted
        while len(self._screens) > self.max_depth:
            evicted = self._screens.pop(1)
            evicted.cancel()
            logger.debug("Evicted %s screen %s from history", evicted.kind, evicted.title)
        return screen

    def pop(self) -> Screen | None:
        """Leave the current screen, cancelling its load.

        Returns:
            The popped screen, or None when already at the root
        """
        if len(self._screens) == 1:
            return None
        screen = self._screens.pop()
        if screen.cancel():
            logger.debug("Cancelled load for %s screen %s", screen.kind, screen.title)
        return screen

    def reset(self) -> None:
        """Return to the region selector, cancelling every pending load."""
        while self.pop() is not None:
            pass
