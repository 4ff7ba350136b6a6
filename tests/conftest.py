import os

# The module-level engine is never used by tests; every test gets its own file
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DATABASE_URL_SYNC"] = ""
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ.setdefault("ENVIRONMENT", "test")

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from app import models  # noqa: F401
from app.database import Base, build_async_engine, build_session_factory, build_sync_engine, get_db, sync_url_for
from app.main import app


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'inventory.db'}"


@pytest.fixture
def session_factory(database_url):
    """Fresh schema per test, created through a sync engine."""
    sync_engine = build_sync_engine(sync_url_for(database_url))
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()
    return build_session_factory(build_async_engine(database_url))


@pytest.fixture
def override_db(session_factory):
    async def _get_test_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_test_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client(override_db) -> TestClient:
    return TestClient(app)


@pytest_asyncio.fixture
async def http_client(override_db):
    """httpx client running the app in-process on the test's event loop."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
        yield http


@pytest.fixture
def product_payload() -> dict:
    return {
        "product_name": "Widget A",
        "description": "Steel widget",
        "price": 19.99,
        "quantity": 12,
        "category": "Tools",
    }


@pytest.fixture
def create_product(client, product_payload):
    """Create a product through the API and return its JSON."""

    def _create(**overrides):
        payload = {**product_payload, **overrides}
        response = client.post("/api/products", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
