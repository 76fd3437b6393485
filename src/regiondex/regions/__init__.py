"""Region catalog and region-wide batch fetching."""

from regiondex.regions.batch import RegionBatchFetcher
from regiondex.regions.catalog import REGIONS, Region, get_region, region_for_creature, region_names

__all__ = [
    "REGIONS",
    "Region",
    "RegionBatchFetcher",
    "get_region",
    "region_for_creature",
    "region_names",
]
