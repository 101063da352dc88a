from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

import app.clients.http as http_module
from app.core.config import Settings, get_settings
from app.main import app

CHROMA_URL = "http://chroma.test:8000"


@pytest.fixture(autouse=True)
def reset_http_client():
    """Each test gets a freshly created shared client (and so a fresh respx hook)."""
    http_module._http_client = None
    yield
    http_module._http_client = None


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        chroma_url=CHROMA_URL,
        chroma_tenant="default_tenant",
        chroma_database="default_database",
        default_limit=2,
    )


@pytest.fixture
def client(test_settings):
    """TestClient pointed at a fake ChromaDB address, lifespan hooks mocked."""
    app.dependency_overrides[get_settings] = lambda: test_settings
    with patch("app.main.close_http_client", new_callable=AsyncMock):
        with TestClient(app) as c:
            yield c
    app.dependency_overrides.clear()
