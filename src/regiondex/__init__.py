"""RegionDex: browse creatures by region and follow their evolution chains."""
