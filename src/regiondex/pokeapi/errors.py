"""Error taxonomy for region lookups and upstream PokeAPI failures."""


class RegionDexError(Exception):
    """Base class for all RegionDex errors."""


class RegionConfigurationError(RegionDexError, ValueError):
    """Raised for an unknown region name or an invalid ID range."""


class LookupFailure(RegionDexError):
    """A single upstream lookup failed.

    Covers transport errors, non-success status codes, and bodies that are not
    valid JSON or lack the fields we read.
    """

    def __init__(self, message: str, target: str = "", status_code: int | None = None):
        super().__init__(message)
        self.target = target
        self.status_code = status_code

    @property
    def not_found(self) -> bool:
        """Whether the upstream reported the resource as missing."""
        return self.status_code == 404


class BatchFailure(LookupFailure):
    """A region batch fetch failed because one of its lookups failed."""

    def __init__(self, creature_id: int, cause: LookupFailure):
        super().__init__(
            f"Batch fetch failed at creature {creature_id}: {cause}",
            target=cause.target,
            status_code=cause.status_code,
        )
        self.creature_id = creature_id
        self.cause = cause


class ChainFailure(LookupFailure):
    """Evolution chain resolution failed; no partial chain is produced."""

    def __init__(self, creature_name: str, cause: LookupFailure):
        super().__init__(
            f"Could not resolve evolution chain for {creature_name}: {cause}",
            target=cause.target,
            status_code=cause.status_code,
        )
        self.creature_name = creature_name
        self.cause = cause
