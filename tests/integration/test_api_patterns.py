"""Integration tests for pattern and tile API endpoints using FastAPI TestClient."""

import os
from unittest.mock import patch

import numpy as np
import pytest

# FastAPI/httpx may not be installed; skip these tests if not available
pytest.importorskip("fastapi")
pytest.importorskip("httpx")

from fastapi.testclient import TestClient


@pytest.fixture
def client(tmp_path):
    """FastAPI test client with a small configured size limit."""
    with patch.dict(os.environ, {
        "KOLAMGEN_OUTPUT_DIR": str(tmp_path / "output"),
        "KOLAMGEN_MAX_SIZE": "25",
    }):
        # Reset the global config so it picks up our env vars
        import kolamgen.config as config_module
        config_module._config = None

        from kolamgen.api.main import app
        with TestClient(app) as c:
            yield c

        config_module._config = None


class TestHealthCheck:
    """Test health and config endpoints."""

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_config(self, client):
        data = client.get("/api/config").json()
        assert data["max_size"] == 25
        assert data["cell_spacing"] == 60.0


class TestPatternEndpoints:
    def test_generate_pattern(self, client):
        response = client.get("/api/patterns", params={"size": 5, "seed": 3})
        assert response.status_code == 200
        data = response.json()
        assert data["pattern"]["rows"] == 5
        assert len(data["pattern"]["dots"]) == 25
        assert data["synthesis"]["half_period"] == 2
        assert data["synthesis"]["seed"] == 3

    def test_generated_matrix_is_symmetric(self, client, mirror_lookups):
        hl, vl = mirror_lookups
        data = client.get("/api/patterns", params={"size": 6, "seed": 1}).json()
        matrix = np.array(data["pattern"]["matrix"])
        np.testing.assert_array_equal(hl[matrix[:, ::-1]], matrix)
        np.testing.assert_array_equal(vl[matrix[::-1, :]], matrix)

    def test_seed_is_repeatable(self, client):
        a = client.get("/api/patterns", params={"size": 8, "seed": 5}).json()
        b = client.get("/api/patterns", params={"size": 8, "seed": 5}).json()
        assert a["pattern"] == b["pattern"]

    def test_custom_spacing(self, client):
        data = client.get("/api/patterns", params={"size": 3, "spacing": 10}).json()
        assert data["pattern"]["dimensions"]["width"] == 40.0

    @pytest.mark.parametrize("size", [1, 0, -1])
    def test_undersized_rejected(self, client, size):
        response = client.get("/api/patterns", params={"size": size})
        assert response.status_code == 422
        assert "at least 2" in response.json()["detail"]

    def test_oversized_rejected(self, client):
        response = client.get("/api/patterns", params={"size": 26})
        assert response.status_code == 422
        assert "exceeds maximum" in response.json()["detail"]

    def test_bad_spacing_rejected(self, client):
        response = client.get("/api/patterns", params={"size": 3, "spacing": -1})
        assert response.status_code == 422

    def test_svg(self, client):
        response = client.get("/api/patterns/svg", params={"size": 4, "seed": 2})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("image/svg+xml")
        assert response.text.startswith("<svg")
        assert "<animate" not in response.text

    def test_animated_svg(self, client):
        response = client.get("/api/patterns/svg", params={"size": 4, "animate": True, "speed": 10})
        assert response.status_code == 200
        assert "<animate" in response.text

    def test_svg_speed_range(self, client):
        response = client.get("/api/patterns/svg", params={"size": 4, "speed": 11})
        assert response.status_code == 422

    def test_png(self, client):
        response = client.get("/api/patterns/png", params={"size": 3, "seed": 0})
        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content[:8] == b"\x89PNG\r\n\x1a\n"


class TestTileEndpoints:
    def test_list_tiles(self, client):
        data = client.get("/api/tiles").json()
        assert [t["id"] for t in data] == list(range(1, 17))
        assert data[0]["points"] == []
        assert data[0]["edges"] == "----"

    def test_get_tile(self, client):
        data = client.get("/api/tiles/3").json()
        assert data["horizontal_mirror"] == 5
        assert data["vertical_mirror"] == 3
        assert data["vertical_self_inverse"] is True
        assert data["horizontal_self_inverse"] is False
        assert 1 in data["compatible"]
        assert len(data["points"]) == 5

    def test_unknown_tile(self, client):
        response = client.get("/api/tiles/17")
        assert response.status_code == 404


class TestErrorSchema:
    def test_documented_error_responses(self, client):
        paths = client.get("/openapi.json").json()["paths"]
        ref = "#/components/schemas/ErrorResponse"
        for route in ("/api/patterns", "/api/patterns/svg", "/api/patterns/png"):
            schema = paths[route]["get"]["responses"]["422"]["content"]["application/json"]["schema"]
            assert schema["$ref"] == ref
        tile_schema = paths["/api/tiles/{tile_id}"]["get"]["responses"]["404"]["content"]["application/json"]["schema"]
        assert tile_schema["$ref"] == ref

    def test_error_bodies_match_schema(self, client):
        from kolamgen.api.schemas import ErrorResponse

        too_small = client.get("/api/patterns", params={"size": 1})
        missing_tile = client.get("/api/tiles/99")
        assert ErrorResponse(**too_small.json()).detail
        assert ErrorResponse(**missing_tile.json()).detail == "Tile 99 not found"
