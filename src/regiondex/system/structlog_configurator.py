"""Structlog-based logging configuration for RegionDex.

Supports different deployment targets:
- Docker: Uses stdout with JSON output
- Development: Human-readable console output unless JSON is requested
"""

import logging
import os
import sys
from collections.abc import Callable
from importlib.metadata import PackageNotFoundError, version
from typing import Any

import structlog

from regiondex.config.models import RegionDexConfig


def is_docker_environment() -> bool:
    """Check if running in a Docker container."""
    return os.path.exists("/.dockerenv") or os.environ.get("DOCKER_CONTAINER") == "true"


def get_package_version() -> str:
    """Get the installed RegionDex version."""
    try:
        return version("regiondex")
    except PackageNotFoundError:
        return "unknown"


def get_deployment_environment() -> str:
    """Get deployment environment with 'unknown' fallback."""
    if is_docker_environment():
        return "docker"
    elif os.environ.get("REGIONDEX_ENV") == "development":
        return "development"
    elif os.environ.get("REGIONDEX_ENV") == "production":
        return "production"
    else:
        return "unknown"


def _add_static_context(extra_fields: dict[str, str]) -> Callable:
    """Processor to add static context fields to all log entries."""

    def processor(
        logger: structlog.BoundLogger, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict.update(extra_fields)
        return event_dict

    return processor


def _use_json(config: RegionDexConfig) -> bool:
    """Decide between JSON and human-readable rendering."""
    if config.logging.json_logs is not None:
        return config.logging.json_logs
    if os.environ.get("REGIONDEX_JSON_LOGS", "").lower() == "true":
        return True
    # Auto-detect: JSON for Docker/production, human-readable elsewhere
    return get_deployment_environment() in {"docker", "production"}


def _configure_processors(config: RegionDexConfig) -> list:
    """Configure structlog processors based on environment."""
    extra_fields = {
        "service": "regiondex",
        "version": get_package_version(),
        "deployment": get_deployment_environment(),
        **config.logging.extra_fields,  # Allow config to override/add fields
    }

    processors = [
        structlog.contextvars.merge_contextvars,
        _add_static_context(extra_fields),
        structlog.processors.add_log_level,
        structlog.stdlib.ExtraAdder(),  # stdlib `extra=` fields
        structlog.processors.TimeStamper(fmt="ISO"),
    ]

    if config.logging.include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder())

    if _use_json(config):
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    return processors


def _configure_handlers(config: RegionDexConfig, processors: list) -> None:
    """Route stdlib logging through structlog's renderer onto stdout."""
    root_logger = logging.getLogger()
    log_level = getattr(logging, config.logging.level.upper(), logging.INFO)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=processors[:-1],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                processors[-1],
            ],
        )
    )
    root_logger.addHandler(console_handler)

    # httpx logs every request at INFO; keep it for debugging only
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))


def configure_structlog(config: RegionDexConfig) -> None:
    """Configure structlog-based logging system.

    Args:
        config: The RegionDexConfig instance containing logging settings.
    """
    processors = _configure_processors(config)

    structlog.configure(
        processors=[*processors[:-1], structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, config.logging.level.upper(), logging.INFO)
        ),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configure_handlers(config, processors)

    logger = structlog.get_logger(__name__)
    logger.info(
        "Structured logging configured",
        log_level=config.logging.level,
        environment=get_deployment_environment(),
        json_output=_use_json(config),
    )
