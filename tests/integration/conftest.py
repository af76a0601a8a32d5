"""Integration test fixtures for SpeechBridge.

Provides an async HTTP client over the real FastAPI app with the
translation pipeline swapped for one built on fake providers.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app
from src.api.routes.translate import get_pipeline
from src.services.pipeline import TranslationPipeline


@pytest.fixture
def app(settings):
    """Create a fresh FastAPI application instance."""
    return create_app(settings)


@pytest.fixture
def pipeline(mock_stt, mock_llm):
    """Real pipeline wired to the mock providers."""
    return TranslationPipeline(stt=mock_stt, llm=mock_llm)


@pytest.fixture
async def async_client(app, pipeline):
    """AsyncClient whose requests use the fake-provider pipeline."""
    app.dependency_overrides[get_pipeline] = lambda: pipeline
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def unconfigured_client(app):
    """AsyncClient using the real pipeline factory (no overrides)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
