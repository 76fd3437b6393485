import os
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class PathResolver:
    """Central authority for all file path resolution in RegionDex.

    Uses environment variables for configuration with sensible defaults.
    """

    def __init__(self) -> None:
        """Initialize PathResolver with environment-based configuration."""
        app_dir = os.getenv("REGIONDEX_APP")
        self.package_dir = Path(app_dir) / "src" / "regiondex" if app_dir else PACKAGE_DIR
        self.data_dir = Path(os.getenv("REGIONDEX_DATA", "/var/lib/regiondex"))

    def get_regiondex_config_path(self) -> Path:
        """Get the path to the main configuration file.

        Checks REGIONDEX_CONFIG environment variable first, then falls back to default.
        """
        config_path = os.getenv("REGIONDEX_CONFIG")
        if config_path:
            return Path(config_path)

        return self.data_dir / "config" / "regiondex.yaml"

    def get_data_dir(self) -> Path:
        """Get the data directory path."""
        return self.data_dir

    def get_static_dir(self) -> Path:
        """Get the directory for static web assets."""
        return self.package_dir / "web" / "static"

    def get_templates_dir(self) -> Path:
        """Get the directory for HTML templates."""
        return self.package_dir / "web" / "templates"
