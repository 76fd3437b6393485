"""Command-line interface for RegionDex."""
