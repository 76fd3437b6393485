"""RegionDex web application entry point for ASGI servers."""

import logging

from regiondex.config import ConfigManager
from regiondex.system.structlog_configurator import configure_structlog
from regiondex.web.core.factory import create_app

# Configure logging before anything else imports and creates loggers
config_manager = ConfigManager()
config = config_manager.load()
configure_structlog(config)

# Disable uvicorn access logger since we have our own structured logging middleware
logging.getLogger("uvicorn.access").disabled = True

app = create_app()
