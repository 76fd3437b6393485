"""RegionDex configuration package.

This package provides centralized configuration management with:
- Pydantic-validated settings
- Default file creation
- YAML parsing and serialization
"""

from .manager import ConfigManager
from .models import LoggingConfig, NavigationConfig, PokeAPIConfig, RegionDexConfig

__all__ = [
    "ConfigManager",
    "LoggingConfig",
    "NavigationConfig",
    "PokeAPIConfig",
    "RegionDexConfig",
]
