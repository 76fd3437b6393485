"""Configuration loading and saving."""

import logging
import shutil
from typing import Any

import yaml
from pydantic import ValidationError

from regiondex.config.models import RegionDexConfig
from regiondex.system.path_resolver import PathResolver

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading, saving, and validation."""

    def __init__(self, path_resolver: PathResolver | None = None):
        """Initialize ConfigManager.

        Args:
            path_resolver: Optional PathResolver instance. If None, creates a new one.
        """
        self.path_resolver = path_resolver or PathResolver()
        self.config_path = self.path_resolver.get_regiondex_config_path()

    def load(self) -> RegionDexConfig:
        """Load configuration, creating the file with defaults if missing.

        Returns:
            RegionDexConfig: Loaded and validated configuration

        Raises:
            ValueError: If the configuration fails validation
        """
        self._ensure_config_exists()
        raw_config = self._read_yaml()

        try:
            return self._create_config_object(raw_config)
        except ValidationError as e:
            raise ValueError(f"Configuration validation failed: {e}") from e

    def save(self, config: RegionDexConfig) -> None:
        """Save configuration to file with backup.

        Args:
            config: Configuration to save

        Raises:
            PermissionError: If config file cannot be written
        """
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config_path.exists():
            backup_path = self.config_path.with_suffix(".yaml.backup")
            try:
                shutil.copy2(self.config_path, backup_path)
            except PermissionError:
                logger.warning("Could not create backup at %s", backup_path)

        config_yaml = yaml.dump(config.model_dump(), default_flow_style=False, sort_keys=False)
        self.config_path.write_text(config_yaml)
        logger.info("Configuration saved successfully to %s", self.config_path)

    def _ensure_config_exists(self) -> None:
        """Write a default config file if none exists yet."""
        if self.config_path.exists():
            return

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            defaults = RegionDexConfig().model_dump()
            self.config_path.write_text(
                yaml.dump(defaults, default_flow_style=False, sort_keys=False)
            )
        except OSError:
            # Read-only deployments run on defaults
            logger.warning("Could not create default config at %s", self.config_path)

    def _read_yaml(self) -> dict[str, Any]:
        """Read YAML config file.

        Returns:
            dict: Raw configuration dictionary (empty if the file is missing)

        Raises:
            ValueError: If the file is not a YAML mapping
        """
        if not self.config_path.exists():
            return {}
        try:
            raw_config = yaml.safe_load(self.config_path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {self.config_path}: {e}") from e
        if not isinstance(raw_config, dict):
            raise ValueError(f"Configuration in {self.config_path} must be a mapping")
        return raw_config

    def _create_config_object(self, raw_config: dict[str, Any]) -> RegionDexConfig:
        """Create RegionDexConfig object from dictionary, dropping unknown keys."""
        expected_fields = set(RegionDexConfig.model_fields.keys())
        filtered_config = {k: v for k, v in raw_config.items() if k in expected_fields}

        unexpected_fields = set(raw_config.keys()) - expected_fields
        if unexpected_fields:
            logger.warning("Ignoring unknown config fields: %s", sorted(unexpected_fields))

        return RegionDexConfig(**filtered_config)
