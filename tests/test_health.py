"""
Tests — Health probes, error bodies and response headers.
"""


class TestHealth:
    def test_health(self, client):
        res = client.get("/api/health")
        assert res.status_code == 200
        assert res.get_json()["status"] == "ok"

    def test_ready(self, client):
        assert client.get("/api/health/ready").status_code == 200

    def test_live_checks_database(self, client):
        body = client.get("/api/health/live").get_json()
        assert body["checks"]["database"]["status"] == "ok"
        assert body["checks"]["app"]["testing"] is True


class TestErrorBodies:
    def test_unknown_route_is_json(self, client):
        res = client.get("/api/nope")
        assert res.status_code == 404
        assert res.get_json()["details"]["path"] == "/api/nope"

    def test_method_not_allowed_is_json(self, client):
        res = client.delete("/api/programs")
        assert res.status_code == 405
        assert "error" in res.get_json()


class TestHeaders:
    def test_security_and_timing_headers(self, client):
        res = client.get("/api/health")
        assert res.headers["X-Content-Type-Options"] == "nosniff"
        assert res.headers["X-Frame-Options"] == "DENY"
        assert "X-Request-ID" in res.headers
        assert float(res.headers["X-Request-Duration-Ms"]) >= 0

    def test_request_id_propagated(self, client):
        res = client.get("/api/health", headers={"X-Request-ID": "abc123"})
        assert res.headers["X-Request-ID"] == "abc123"
