from fastapi.testclient import TestClient

from senda.main import app


def test_request_id_generated():
    """A request without X-Request-ID gets one in the response."""
    client = TestClient(app)
    response = client.get("/api/v1/health/live")

    assert response.status_code == 200
    assert response.headers.get("x-request-id")
    assert response.headers.get("x-process-time") is not None


def test_request_id_preserved():
    client = TestClient(app)
    response = client.get(
        "/api/v1/health/live", headers={"X-Request-ID": "senda-trace-1"}
    )

    assert response.headers["x-request-id"] == "senda-trace-1"
