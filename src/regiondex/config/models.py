"""Configuration models for RegionDex.

This module contains all configuration-related Pydantic models used throughout the application.
"""

from pydantic import BaseModel, Field, field_validator


class LoggingConfig(BaseModel):
    """Structlog-based logging configuration."""

    level: str = "INFO"
    json_logs: bool | None = None  # None = auto-detect based on environment
    include_caller: bool = False  # Include file:line info (useful for debugging)
    extra_fields: dict[str, str] = Field(default_factory=lambda: {"service": "regiondex"})

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level '{v}'")
        return level


class PokeAPIConfig(BaseModel):
    """Upstream PokeAPI connection settings."""

    base_url: str = "https://pokeapi.co/api/v2"
    timeout: float = 10.0  # Per-request timeout in seconds

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an absolute http(s) URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid PokeAPI base URL '{v}'. Must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Timeouts must be positive."""
        if v <= 0:
            raise ValueError("PokeAPI timeout must be positive")
        return v


class NavigationConfig(BaseModel):
    """Interactive navigation settings."""

    max_depth: int = Field(default=20, ge=2)  # History cap, region selector included


class RegionDexConfig(BaseModel):
    """Configuration settings for the RegionDex application."""

    site_name: str = "RegionDex"

    pokeapi: PokeAPIConfig = Field(default_factory=PokeAPIConfig)
    navigation: NavigationConfig = Field(default_factory=NavigationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
