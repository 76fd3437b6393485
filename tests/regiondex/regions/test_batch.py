"""Tests for RegionBatchFetcher."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from regiondex.pokeapi.client import PokeAPIClient
from regiondex.pokeapi.errors import BatchFailure, LookupFailure, RegionConfigurationError
from regiondex.regions.batch import RegionBatchFetcher
from regiondex.regions.catalog import REGIONS


@pytest.fixture
def fetcher(pokeapi_client):
    """Create a RegionBatchFetcher against the fake API."""
    return RegionBatchFetcher(pokeapi_client)


class TestFetchRegion:
    """Test the all-or-nothing region fetch."""

    @pytest.mark.asyncio
    async def test_kanto_in_id_order(self, fetcher, fake_api):
        """Test that Kanto comes back complete and in ID order when later IDs answer first."""
        fake_api.reverse_arrival = True

        creatures = await fetcher.fetch_region(REGIONS["Kanto"])

        assert len(creatures) == 151
        assert [creature.id for creature in creatures] == list(range(1, 152))
        assert creatures[0].name == "bulbasaur"
        assert creatures[24].name == "pikachu"

    @pytest.mark.asyncio
    async def test_tuple_range(self, fetcher, fake_api):
        """Test that a (min, max) tuple is accepted as a range."""
        creatures = await fetcher.fetch_region((133, 136))

        assert [creature.name for creature in creatures] == [
            "eevee",
            "vaporeon",
            "jolteon",
            "flareon",
        ]
        assert sorted(fake_api.requests) == sorted(
            f"/api/v2/pokemon/{creature_id}" for creature_id in range(133, 137)
        )

    @pytest.mark.asyncio
    async def test_single_creature_range(self, fetcher):
        """Test that min == max yields exactly one creature."""
        creatures = await fetcher.fetch_region((25, 25))

        assert [creature.name for creature in creatures] == ["pikachu"]

    @pytest.mark.asyncio
    async def test_lookups_run_concurrently(self, fake_api):
        """Test that lookups overlap instead of running one after another."""
        in_flight = 0
        peak = 0

        async def slow_handler(request):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.05)
            in_flight -= 1
            return await fake_api.handler(request)

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(slow_handler))
        client = PokeAPIClient(base_url="https://pokeapi.test/api/v2", http_client=http_client)

        creatures = await RegionBatchFetcher(client).fetch_region((1, 10))

        assert len(creatures) == 10
        assert peak > 1

    @pytest.mark.asyncio
    async def test_one_failure_fails_the_batch(self, fetcher, fake_api):
        """Test that a single failed lookup fails the whole region."""
        fake_api.fail("pokemon/42", 500)

        with pytest.raises(BatchFailure) as exc_info:
            await fetcher.fetch_region(REGIONS["Kanto"])

        failure = exc_info.value
        assert failure.creature_id == 42
        assert failure.status_code == 500
        assert isinstance(failure, LookupFailure)
        assert isinstance(failure.cause, LookupFailure)
        assert failure.__cause__ is failure.cause

    @pytest.mark.asyncio
    async def test_lowest_failing_id_is_reported(self, fetcher, fake_api):
        """Test that the lowest failed ID is reported when several lookups fail."""
        fake_api.fail("pokemon/42", 500)
        fake_api.fail("pokemon/40", 404)

        with pytest.raises(BatchFailure) as exc_info:
            await fetcher.fetch_region((1, 60))

        assert exc_info.value.creature_id == 40
        assert exc_info.value.not_found

    @pytest.mark.asyncio
    async def test_failure_cancels_pending_lookups(self, fake_api):
        """Test that a failure cancels lookups that are still in flight."""
        cancelled = []

        async def hanging_handler(request):
            if request.url.path.endswith("/pokemon/3"):
                return httpx.Response(500)
            try:
                await asyncio.sleep(30)
            except asyncio.CancelledError:
                cancelled.append(request.url.path)
                raise
            return await fake_api.handler(request)

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(hanging_handler))
        client = PokeAPIClient(base_url="https://pokeapi.test/api/v2", http_client=http_client)

        with pytest.raises(BatchFailure):
            await asyncio.wait_for(RegionBatchFetcher(client).fetch_region((1, 5)), timeout=5)

        assert "/api/v2/pokemon/1" in cancelled

    @pytest.mark.asyncio
    async def test_malformed_record_fails_the_batch(self):
        """Test that an unusable creature document fails the batch with BatchFailure."""
        document = {"id": 2, "name": "ivysaur", "types": [{"slot": 1}], "species": {"name": "x"}}
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=document))
        client = PokeAPIClient(
            base_url="https://pokeapi.test/api/v2",
            http_client=httpx.AsyncClient(transport=transport),
        )

        with pytest.raises(BatchFailure) as exc_info:
            await RegionBatchFetcher(client).fetch_region((1, 3))

        assert isinstance(exc_info.value.cause, LookupFailure)

    @pytest.mark.asyncio
    async def test_invalid_range_makes_no_requests(self, fetcher, fake_api):
        """Test that min > max is rejected before any lookup is issued."""
        with pytest.raises(RegionConfigurationError):
            await fetcher.fetch_region((10, 5))

        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_fetch_region_by_name(self, fetcher):
        """Test fetching a region by its case-insensitive name."""
        creatures = await fetcher.fetch_region_by_name("johto")

        assert len(creatures) == 100
        assert creatures[0].name == "chikorita"
        assert creatures[-1].id == 251

    @pytest.mark.asyncio
    async def test_fetch_unknown_region_by_name(self, fetcher, fake_api):
        """Test that an unknown region name is a configuration error."""
        with pytest.raises(RegionConfigurationError, match="Unknown region"):
            await fetcher.fetch_region_by_name("Orre")

        assert fake_api.requests == []


class TestFetchRegionSettled:
    """Test the settled region fetch that keeps going past failures."""

    @pytest.mark.asyncio
    async def test_outcomes_per_id(self, fetcher, fake_api):
        """Test that each ID gets its own outcome, failures included."""
        fake_api.fail("pokemon/26", 404)
        fake_api.break_connection("pokemon/27")

        outcomes = await fetcher.fetch_region_settled((25, 28))

        assert [outcome.creature_id for outcome in outcomes] == [25, 26, 27, 28]
        assert [outcome.ok for outcome in outcomes] == [True, False, False, True]
        assert outcomes[0].creature.name == "pikachu"
        assert outcomes[1].status_code == 404
        assert "404" in outcomes[1].error
        assert outcomes[2].status_code is None
        assert "connection refused" in outcomes[2].error

    @pytest.mark.asyncio
    async def test_all_succeed(self, fetcher):
        """Test a settled fetch without failures."""
        outcomes = await fetcher.fetch_region_settled((1, 3))

        assert all(outcome.ok for outcome in outcomes)
        assert [outcome.creature.name for outcome in outcomes] == [
            "bulbasaur",
            "ivysaur",
            "venusaur",
        ]

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(self):
        """Test that errors other than lookup failures are not turned into outcomes."""
        client = MagicMock(spec=PokeAPIClient)
        client.get_creature = AsyncMock(side_effect=RuntimeError("bug"))

        with pytest.raises(RuntimeError, match="bug"):
            await RegionBatchFetcher(client).fetch_region_settled((1, 2))

    @pytest.mark.asyncio
    async def test_invalid_range(self, fetcher):
        """Test that the settled fetch validates its range too."""
        with pytest.raises(RegionConfigurationError):
            await fetcher.fetch_region_settled((0, 5))
