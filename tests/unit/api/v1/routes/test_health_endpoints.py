from httpx import AsyncClient


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    async def test_health_check(self, client: AsyncClient):
        """Test health check endpoint."""
        response = await client.get("/api/v1/health/")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "subscriptions-api"}

    async def test_db_health_check(self, client: AsyncClient):
        """Test database health check endpoint."""
        response = await client.get("/api/v1/health/db")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"

    async def test_gateway_health_check(self, client: AsyncClient, mock_payment_provider):
        """Test gateway health check reports the provider result."""
        response = await client.get("/api/v1/health/gateway")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

        mock_payment_provider.health_check.return_value = False
        response = await client.get("/api/v1/health/gateway")
        assert response.json() == {"status": "unhealthy", "gateway": "unavailable"}

    async def test_healthz(self, client: AsyncClient):
        response = await client.get("/healthz")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
