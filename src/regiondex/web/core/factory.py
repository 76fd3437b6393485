"""Application factory for creating FastAPI application with dependency injection."""

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from regiondex.system.structlog_configurator import get_package_version
from regiondex.web.core.container import Container
from regiondex.web.core.lifespan import lifespan
from regiondex.web.middleware.request_logging import StructuredRequestLoggingMiddleware
from regiondex.web.routers import (
    health_api_routes,
    pokedex_api_routes,
    pokedex_view_routes,
)


def create_app() -> FastAPI:
    """Create FastAPI application with dependency injection.

    Returns:
        FastAPI: The configured application instance.
    """
    container = Container()

    app = FastAPI(
        lifespan=lifespan,
        title="RegionDex API",
        description="Browse creatures by region, with their evolution chains, from PokeAPI",
        version=get_package_version(),
    )
    app.container = container  # type: ignore[attr-defined]

    app.add_middleware(StructuredRequestLoggingMiddleware)

    container.wire(
        modules=[
            "regiondex.web.routers.health_api_routes",
            "regiondex.web.routers.pokedex_api_routes",
            "regiondex.web.routers.pokedex_view_routes",
        ]
    )

    # === API Routes ===
    app.include_router(pokedex_api_routes.router, prefix="/api", tags=["Pokedex API"])
    app.include_router(health_api_routes.router, prefix="/api", tags=["Health Check API"])

    # === View Routes (excluded from API documentation) ===
    app.include_router(
        pokedex_view_routes.router,
        tags=["Pokedex Views"],
        include_in_schema=False,
    )

    static_dir = container.path_resolver().get_static_dir()
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=static_dir), name="static")

    return app
