"""Tests for health endpoint (F4)."""

from academy import __version__


class TestHealth:
    """Tests for GET /health."""

    def test_health_ok(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["version"] == __version__
        assert "timestamp" in data

    def test_openapi_lists_api_routes(self, client):
        """JSON routes are documented, HTML pages are not."""
        paths = client.get("/openapi.json").json()["paths"]
        assert "/api/topics" in paths
        assert "/api/sections/{section_id}" in paths
        assert "/sections/{section_id}" not in paths
