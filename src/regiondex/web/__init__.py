"""RegionDex web application."""
