"""Async PokeAPI client.

Issues single read-only lookups against PokeAPI and turns every way a lookup
can go wrong into a `LookupFailure`. There is no retry and no caching; each
call goes to the network.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from regiondex.pokeapi.errors import LookupFailure
from regiondex.pokeapi.models import CreatureSummary, EvolutionChainNode, SpeciesRecord

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://pokeapi.co/api/v2"


class PokeAPIClient:
    """Read-only client for the PokeAPI REST service."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API root, without trailing slash
            timeout: Per-request timeout in seconds
            http_client: Optional pre-built httpx client (owned by the caller)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client: httpx.AsyncClient | None = http_client
        self._owns_client = http_client is None

    async def start(self) -> httpx.AsyncClient:
        """Open the shared HTTP connection pool and return it."""
        if self.client is not None:
            return self.client

        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
            headers={"Accept": "application/json"},
        )
        self._owns_client = True
        logger.info("PokeAPI client started for %s", self.base_url)
        return self.client

    async def stop(self) -> None:
        """Close the connection pool if this client opened it."""
        if self.client is not None and self._owns_client:
            await self.client.aclose()
            self.client = None
            logger.info("PokeAPI client stopped")

    async def __aenter__(self) -> "PokeAPIClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        await self.stop()

    def creature_url(self, id_or_name: int | str) -> str:
        """Build the single-creature lookup URL for an ID or a name."""
        key = str(id_or_name).strip().lower()
        return f"{self.base_url}/pokemon/{key}"

    async def get_creature(self, id_or_name: int | str) -> CreatureSummary:
        """Look up one creature by national dex number or by name.

        Raises:
            LookupFailure: If the request fails or the body is unusable
        """
        url = self.creature_url(id_or_name)
        data = await self.get_json(url)
        return self._parse(CreatureSummary, data, url)

    async def get_species(self, url: str) -> SpeciesRecord:
        """Dereference a species link taken from a creature record."""
        data = await self.get_json(url)
        return self._parse(SpeciesRecord, data, url)

    async def get_evolution_chain(self, url: str) -> EvolutionChainNode:
        """Dereference an evolution chain link and return its root node."""
        data = await self.get_json(url)
        if not isinstance(data, dict) or "chain" not in data:
            raise LookupFailure(f"Evolution chain document has no root: {url}", target=url)
        return self._parse(EvolutionChainNode, data["chain"], url)

    async def get_json(self, url: str) -> Any:  # noqa: ANN401
        """GET a URL and decode its JSON body.

        Raises:
            LookupFailure: On transport errors, non-2xx status, or invalid JSON
        """
        client = await self.start()

        logger.debug("GET %s", url)
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("PokeAPI returned %s for %s", status, url)
            raise LookupFailure(
                f"PokeAPI returned {status} for {url}", target=url, status_code=status
            ) from e
        except httpx.RequestError as e:
            logger.warning("Request to %s failed: %s", url, e)
            raise LookupFailure(f"Request to {url} failed: {e}", target=url) from e

        try:
            return response.json()
        except ValueError as e:
            raise LookupFailure(f"Malformed JSON from {url}", target=url) from e

    @staticmethod
    def _parse(model: type, data: Any, url: str) -> Any:  # noqa: ANN401
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise LookupFailure(
                f"Unexpected {model.__name__} document from {url}: {e.error_count()} errors",
                target=url,
            ) from e
