"""Pydantic models for the PokeAPI resources RegionDex reads.

Upstream documents carry far more data than we display. Each model declares
only the fields we read and ignores the rest.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class NamedResource(BaseModel):
    """A `{name, url}` reference as embedded throughout PokeAPI documents."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str
    url: str = ""


class ResourceRef(BaseModel):
    """An unnamed `{url}` reference (e.g. a species' evolution chain)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    url: str


class CreatureSummary(BaseModel):
    """A single creature record as returned by `/pokemon/{id_or_name}`."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., description="National dex number")
    name: str
    sprite_url: str | None = Field(default=None, description="Front default sprite image")
    height: int = 0
    weight: int = 0
    types: list[str] = Field(default_factory=list)
    species: NamedResource

    @model_validator(mode="before")
    @classmethod
    def flatten_upstream_fields(cls, data: Any) -> Any:  # noqa: ANN401
        """Pick the sprite URL and type names out of their nested upstream shapes."""
        if not isinstance(data, dict):
            return data

        data = dict(data)
        sprites = data.pop("sprites", None)
        if "sprite_url" not in data and isinstance(sprites, dict):
            data["sprite_url"] = sprites.get("front_default")

        raw_types = data.get("types")
        if isinstance(raw_types, list) and raw_types and isinstance(raw_types[0], dict):
            # Upstream orders type entries by slot
            data["types"] = [_type_name(entry) for entry in raw_types]
        return data


def _type_name(entry: Any) -> str:  # noqa: ANN401
    type_ref = entry.get("type") if isinstance(entry, dict) else None
    if not isinstance(type_ref, dict) or not isinstance(type_ref.get("name"), str):
        raise ValueError(f"malformed type entry: {entry!r}")
    return type_ref["name"]


class SpeciesRecord(BaseModel):
    """A species record as returned by `/pokemon-species/{id}`."""

    model_config = ConfigDict(extra="ignore")

    name: str
    evolution_chain: ResourceRef | None = None


class EvolutionChainNode(BaseModel):
    """One node of an evolution tree.

    Children are kept in upstream order; the first child is the branch that
    RegionDex follows.
    """

    model_config = ConfigDict(extra="ignore")

    species: NamedResource
    evolves_to: list["EvolutionChainNode"] = Field(default_factory=list)

    @property
    def name(self) -> str:
        return self.species.name


class FetchOutcome(BaseModel):
    """Settled result of one lookup within a region batch."""

    creature_id: int
    creature: CreatureSummary | None = None
    error: str | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.creature is not None
