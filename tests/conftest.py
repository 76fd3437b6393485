import asyncio
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import httpx
import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from regiondex.config.models import RegionDexConfig
from regiondex.pokeapi.client import PokeAPIClient
from regiondex.system.path_resolver import PathResolver
from regiondex.web.core.container import Container
from regiondex.web.core.factory import create_app

BASE_URL = "https://pokeapi.test/api/v2"

NAMED_CREATURES = {
    1: ("bulbasaur", ["grass", "poison"]),
    2: ("ivysaur", ["grass", "poison"]),
    3: ("venusaur", ["grass", "poison"]),
    25: ("pikachu", ["electric"]),
    128: ("tauros", ["normal"]),
    133: ("eevee", ["normal"]),
    134: ("vaporeon", ["water"]),
    135: ("jolteon", ["electric"]),
    136: ("flareon", ["fire"]),
    152: ("chikorita", ["grass"]),
}


def chain_node(name: str, *children: dict[str, Any]) -> dict[str, Any]:
    """Build an evolution chain node in PokeAPI's shape."""
    return {
        "is_baby": False,
        "species": {"name": name, "url": f"{BASE_URL}/pokemon-species/{name}/"},
        "evolution_details": [],
        "evolves_to": list(children),
    }


class FakePokeAPI:
    """In-memory PokeAPI served through httpx.MockTransport.

    Creatures 1-1010 exist. Named ones carry real-looking data and evolution
    chains; the rest are `creature-{id}` with single-node chains.
    """

    def __init__(self) -> None:
        self.requests: list[str] = []
        self.failures: dict[str, int] = {}  # path -> status code to return
        self.broken_paths: set[str] = set()  # path -> raise a transport error
        self.reverse_arrival = False
        self.chains: dict[int, dict[str, Any]] = {
            1: chain_node("bulbasaur", chain_node("ivysaur", chain_node("venusaur"))),
            67: chain_node(
                "eevee", chain_node("vaporeon"), chain_node("jolteon"), chain_node("flareon")
            ),
        }
        self.chain_of_species: dict[int, int | None] = {
            1: 1, 2: 1, 3: 1, 133: 67, 134: 67, 135: 67, 136: 67
        }

    @staticmethod
    def name_of(creature_id: int) -> str:
        return NAMED_CREATURES.get(creature_id, (f"creature-{creature_id}", []))[0]

    def id_of(self, key: str) -> int | None:
        if key.isdigit():
            creature_id = int(key)
            return creature_id if 1 <= creature_id <= 1010 else None
        for creature_id, (name, _) in NAMED_CREATURES.items():
            if name == key:
                return creature_id
        if key.startswith("creature-") and key[9:].isdigit():
            return self.id_of(key[9:])
        return None

    def creature_doc(self, creature_id: int) -> dict[str, Any]:
        name, types = NAMED_CREATURES.get(creature_id, (f"creature-{creature_id}", ["normal"]))
        return {
            "id": creature_id,
            "name": name,
            "base_experience": 64,
            "height": 7 + creature_id % 10,
            "weight": 69 + creature_id,
            "sprites": {
                "front_default": f"https://sprites.test/{creature_id}.png",
                "back_default": None,
            },
            "types": [
                {"slot": slot, "type": {"name": t, "url": f"{BASE_URL}/type/{t}/"}}
                for slot, t in enumerate(types, start=1)
            ],
            "species": {"name": name, "url": f"{BASE_URL}/pokemon-species/{creature_id}/"},
        }

    def species_doc(self, species_id: int) -> dict[str, Any]:
        chain_id = self.chain_of_species.get(species_id, 1000 + species_id)
        return {
            "id": species_id,
            "name": self.name_of(species_id),
            "evolution_chain": (
                None if chain_id is None else {"url": f"{BASE_URL}/evolution-chain/{chain_id}/"}
            ),
        }

    def chain_doc(self, chain_id: int) -> dict[str, Any]:
        if chain_id in self.chains:
            root = self.chains[chain_id]
        else:
            root = chain_node(self.name_of(chain_id - 1000))
        return {"id": chain_id, "baby_trigger_item": None, "chain": root}

    async def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append(path)
        parts = [p for p in path.split("/") if p]  # ["api", "v2", resource, key]

        if self.reverse_arrival and parts[2] == "pokemon" and parts[3].isdigit():
            # Higher IDs answer first
            await asyncio.sleep((1100 - int(parts[3])) / 100_000)

        if path in self.broken_paths:
            raise httpx.ConnectError("connection refused", request=request)
        if path in self.failures:
            return httpx.Response(self.failures[path], json={"detail": "error"})

        resource, key = parts[2], parts[3]
        if resource == "pokemon":
            creature_id = self.id_of(key)
            if creature_id is None:
                return httpx.Response(404, text="Not Found")
            return httpx.Response(200, json=self.creature_doc(creature_id))
        if resource == "pokemon-species":
            return httpx.Response(200, json=self.species_doc(int(key)))
        if resource == "evolution-chain":
            return httpx.Response(200, json=self.chain_doc(int(key)))
        return httpx.Response(404, text="Not Found")

    def fail(self, path_suffix: str, status_code: int = 500) -> None:
        self.failures[f"/api/v2/{path_suffix}"] = status_code

    def break_connection(self, path_suffix: str) -> None:
        self.broken_paths.add(f"/api/v2/{path_suffix}")


@pytest.fixture(autouse=True)
def isolated_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep config and data files inside the test's temporary directory."""
    monkeypatch.setenv("REGIONDEX_DATA", str(tmp_path / "data"))
    monkeypatch.setenv("REGIONDEX_CONFIG", str(tmp_path / "config" / "regiondex.yaml"))
    return tmp_path


@pytest.fixture
def path_resolver() -> PathResolver:
    return PathResolver()


@pytest.fixture
def test_config() -> RegionDexConfig:
    return RegionDexConfig(pokeapi={"base_url": BASE_URL, "timeout": 5.0})


@pytest.fixture
def fake_api() -> FakePokeAPI:
    return FakePokeAPI()


@pytest.fixture
def http_client(fake_api: FakePokeAPI) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(fake_api.handler))


@pytest.fixture
def pokeapi_client(http_client: httpx.AsyncClient) -> PokeAPIClient:
    """PokeAPIClient talking to the fake API."""
    return PokeAPIClient(base_url=BASE_URL, http_client=http_client)


@pytest.fixture
def app_with_fake_api(test_config: RegionDexConfig, pokeapi_client: PokeAPIClient):
    """FastAPI app whose container serves the fake API client and test config.

    Container providers are overridden before the app is created.
    """
    Container.config.override(providers.Singleton(lambda: test_config))
    Container.pokeapi_client.override(providers.Singleton(lambda: pokeapi_client))

    app = create_app()
    yield app

    Container.config.reset_override()
    Container.pokeapi_client.reset_override()


@pytest.fixture
def client(app_with_fake_api) -> Iterator[TestClient]:
    """Test client with the app lifespan running."""
    with TestClient(app_with_fake_api) as test_client:
        yield test_client
