"""Concurrent fan-out fetch of every creature in a region."""

import asyncio
import logging
import time

from regiondex.pokeapi.client import PokeAPIClient
from regiondex.pokeapi.errors import BatchFailure, LookupFailure
from regiondex.pokeapi.models import CreatureSummary, FetchOutcome
from regiondex.regions.catalog import Region, get_region, validate_range

logger = logging.getLogger(__name__)

RegionRange = Region | tuple[int, int]


def _as_id_range(region_range: RegionRange) -> range:
    if isinstance(region_range, Region):
        return region_range.ids()
    min_id, max_id = region_range
    validate_range(min_id, max_id)
    return range(min_id, max_id + 1)


class RegionBatchFetcher:
    """Fetch all creatures of a region with one concurrent lookup per ID."""

    def __init__(self, client: PokeAPIClient) -> None:
        self.client = client

    async def fetch_region(self, region_range: RegionRange) -> list[CreatureSummary]:
        """Fetch every creature in an inclusive ID range.

        All lookups start at once. The result is index-aligned with the range
        (element i has ID min + i) no matter in which order responses arrive.

        Args:
            region_range: A Region or a (min_id, max_id) tuple

        Returns:
            Creature summaries in ID order

        Raises:
            RegionConfigurationError: If the range is invalid
            BatchFailure: If any single lookup fails; pending lookups are cancelled
        """
        ids = _as_id_range(region_range)
        started = time.monotonic()
        logger.info("Fetching %d creatures (%d-%d)", len(ids), ids.start, ids[-1])

        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(self._lookup(creature_id)) for creature_id in ids]
        except ExceptionGroup as group_error:
            failures, others = group_error.split(BatchFailure)
            if others is not None or failures is None:
                raise
            # Lowest failing ID wins when several lookups fail before cancellation
            first = min(failures.exceptions, key=lambda e: e.creature_id)
            logger.error("Batch fetch of %d-%d failed: %s", ids.start, ids[-1], first)
            raise first from first.cause

        logger.info("Fetched %d creatures in %.2fs", len(tasks), time.monotonic() - started)
        return [task.result() for task in tasks]

    async def fetch_region_by_name(self, name: str) -> list[CreatureSummary]:
        """Resolve a region by name and fetch all its creatures."""
        return await self.fetch_region(get_region(name))

    async def fetch_region_settled(self, region_range: RegionRange) -> list[FetchOutcome]:
        """Fetch every creature in a range, reporting each lookup separately.

        A failed lookup yields an outcome with `error` set instead of failing
        the whole batch.

        Returns:
            One outcome per ID, in ID order
        """
        ids = _as_id_range(region_range)
        results = await asyncio.gather(
            *(self.client.get_creature(creature_id) for creature_id in ids),
            return_exceptions=True,
        )

        outcomes = []
        for creature_id, result in zip(ids, results, strict=True):
            if isinstance(result, LookupFailure):
                outcomes.append(
                    FetchOutcome(
                        creature_id=creature_id,
                        error=str(result),
                        status_code=result.status_code,
                    )
                )
            elif isinstance(result, BaseException):
                raise result
            else:
                outcomes.append(FetchOutcome(creature_id=creature_id, creature=result))

        failed = sum(1 for outcome in outcomes if not outcome.ok)
        if failed:
            logger.warning("%d of %d lookups failed", failed, len(outcomes))
        return outcomes

    async def _lookup(self, creature_id: int) -> CreatureSummary:
        try:
            return await self.client.get_creature(creature_id)
        except LookupFailure as e:
            raise BatchFailure(creature_id, e) from e
