"""Tests for the application factory and lifespan."""

from unittest.mock import AsyncMock, MagicMock

from dependency_injector import providers
from fastapi.testclient import TestClient

from regiondex.pokeapi.client import PokeAPIClient
from regiondex.web.core.container import Container
from regiondex.web.core.factory import create_app


class TestCreateApp:
    """Test app assembly."""

    def test_registers_api_routes(self, client):
        """Should document the pokedex and health API routes."""
        schema_paths = client.get("/openapi.json").json()["paths"]

        assert {
            "/api/regions",
            "/api/regions/{region_name}/pokemon",
            "/api/pokemon/{id_or_name}",
            "/api/pokemon/{id_or_name}/evolution",
            "/api/health/",
            "/api/health/live",
        } <= set(schema_paths)

    def test_registers_view_routes(self, client):
        """Should serve the region selector, region and creature pages."""
        for path in ("/", "/regions/kanto", "/pokemon/pikachu"):
            response = client.get(path)

            assert response.status_code == 200, path
            assert "text/html" in response.headers["content-type"]

    def test_views_are_excluded_from_schema(self, client):
        """Should only document the JSON API."""
        schema_paths = client.get("/openapi.json").json()["paths"]

        assert "/api/regions" in schema_paths
        assert "/regions/{region_name}" not in schema_paths

    def test_serves_static_files(self, client):
        """Should serve the stylesheet."""
        response = client.get("/static/style.css")

        assert response.status_code == 200
        assert "text/css" in response.headers["content-type"]


class TestLifespan:
    """Test the shared client's lifecycle."""

    def test_client_started_and_stopped(self, test_config):
        """Should open the PokeAPI client on startup and close it on shutdown."""
        mock_client = MagicMock(spec=PokeAPIClient)
        mock_client.start = AsyncMock()
        mock_client.stop = AsyncMock()
        Container.config.override(providers.Singleton(lambda: test_config))
        Container.pokeapi_client.override(providers.Singleton(lambda: mock_client))

        try:
            with TestClient(create_app()):
                mock_client.start.assert_awaited_once()
                mock_client.stop.assert_not_awaited()
            mock_client.stop.assert_awaited_once()
        finally:
            Container.config.reset_override()
            Container.pokeapi_client.reset_override()
