"""Static table of regions and their national dex ID ranges."""

from dataclasses import dataclass
from types import MappingProxyType

from regiondex.pokeapi.errors import RegionConfigurationError


@dataclass(frozen=True)
class Region:
    """A named, inclusive range of creature IDs."""

    name: str
    min_id: int
    max_id: int

    def __post_init__(self) -> None:
        validate_range(self.min_id, self.max_id)

    @property
    def size(self) -> int:
        return self.max_id - self.min_id + 1

    def ids(self) -> range:
        """Return the creature IDs of this region in ascending order."""
        return range(self.min_id, self.max_id + 1)


def validate_range(min_id: int, max_id: int) -> None:
    """Reject ranges that cannot describe a region.

    Raises:
        RegionConfigurationError: If a bound is not a positive int or min > max
    """
    for bound in (min_id, max_id):
        if isinstance(bound, bool) or not isinstance(bound, int) or bound < 1:
            raise RegionConfigurationError(f"Region bounds must be positive integers: {bound!r}")
    if min_id > max_id:
        raise RegionConfigurationError(f"Invalid region range: {min_id} > {max_id}")


REGIONS: MappingProxyType[str, Region] = MappingProxyType(
    {
        region.name: region
        for region in (
            Region("Kanto", 1, 151),
            Region("Johto", 152, 251),
            Region("Hoenn", 252, 386),
            Region("Sinnoh", 387, 493),
            Region("Unova", 494, 649),
            Region("Kalos", 650, 721),
            Region("Alola", 722, 809),
            Region("Galar", 810, 898),
            Region("Paldea", 899, 1010),
        )
    }
)


def region_names() -> list[str]:
    """Region names in catalog (release) order."""
    return list(REGIONS)


def get_region(name: str) -> Region:
    """Find a region by name, ignoring case.

    Raises:
        RegionConfigurationError: If no region has that name
    """
    wanted = name.strip().casefold()
    for region in REGIONS.values():
        if region.name.casefold() == wanted:
            return region
    raise RegionConfigurationError(f"Unknown region: {name!r}")


def region_for_creature(creature_id: int) -> Region | None:
    """Return the region whose range contains a creature ID, if any."""
    for region in REGIONS.values():
        if region.min_id <= creature_id <= region.max_id:
            return region
    return None
