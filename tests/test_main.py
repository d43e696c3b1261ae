from app.core.config import settings

class TestApplication:

    def test_health(self, client):
        """Test health check endpoint."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "X-Process-Time" in response.headers

    def test_api_info_lists_routers(self, client):
        """Test API information endpoint."""
        data = client.get("/api/v1/info").json()

        assert data["clinic"] == settings.CLINIC_NAME
        assert set(data["endpoints"]) >= {"authentication", "doctors", "patients", "appointments"}

    def test_not_found_keeps_detail(self, client):
        """Test 404 responses carry the raised message and path."""
        response = client.get("/api/v1/doctors/4242")

        assert response.status_code == 404
        assert response.json()["detail"] == "Doctor not found"
        assert response.json()["path"] == "/api/v1/doctors/4242"
