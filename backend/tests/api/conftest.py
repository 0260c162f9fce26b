"""API test fixtures — FastAPI app with the record store dependency overridden.

Invariants:
    - Every test gets a fresh store writing to its own tmp_path snapshot
    - Dependency overrides are cleared after each test

Design Decisions:
    - ASGITransport does not run the lifespan, so the store is injected
      through app.dependency_overrides instead of app.state
"""

import pytest
from httpx import ASGITransport, AsyncClient

from recordstore.infrastructure.record_store import get_store
from recordstore.main import app


@pytest.fixture
async def client(store):
    """FastAPI test client bound to the `store` fixture."""
    app.dependency_overrides[get_store] = lambda: store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
