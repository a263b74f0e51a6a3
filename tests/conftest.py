import pytest
from fastapi.testclient import TestClient

from senda.core.config import GeocodingClientConfig
from senda.main import app


@pytest.fixture
def client_config() -> GeocodingClientConfig:
    return GeocodingClientConfig(
        lookup_service_base_url="https://nominatim.openstreetmap.org/search",
        lookup_user_agent="SendaApp/1.0",
        ai_assistant_endpoint=(
            "https://generativelanguage.googleapis.com/v1/models/"
            "gemini-1.5-flash:generateContent"
        ),
        ai_assistant_api_key="test-key",
        lookup_country="ar",
        lookup_limit=1,
        lookup_timeout=5,
        ai_assistant_timeout=5,
    )


# -----------------------------------------------------------------------------
# Client Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(scope="function")
def client():
    """
    TestClient for the FastAPI app.
    Dependency overrides set by a test are cleared afterwards.
    """
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
