import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from easyform.config.database import get_database
from easyform.main import app


@pytest.fixture
def database():
    # Fresh in-memory database per test
    return AsyncMongoMockClient()["easyform_test"]


@pytest.fixture
def client(database):
    async def override_get_database():
        yield database

    app.dependency_overrides[get_database] = override_get_database
    # No context manager: lifespan (logging setup) is not needed here
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def company_id(client):
    response = client.post("/api/company", json={
        "name": "Globex",
        "email": "ops@globex.test",
        "metadata": {"address": "1 Main St"},
    })
    assert response.status_code == 201
    return response.json()["id"]
