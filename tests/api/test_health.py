"""
Test suite for health check endpoints.

System role: Verification of health check HTTP API
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from ragchat.api.deps import get_session_factory, get_vector_store_dependency
from ragchat.core.exceptions import PersistenceError


@pytest.fixture
def session_factory() -> MagicMock:
    """Provide session factory whose session answers SELECT 1."""
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = AsyncMock()
    factory.return_value.__aexit__.return_value = False
    return factory


class TestHealthEndpoints:
    """Test suite for /api/health routes."""

    def test_health_should_report_healthy(self, client: TestClient) -> None:
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "message": "Server Healthy"}

    def test_health_db_should_report_healthy(self, app: FastAPI, session_factory: MagicMock) -> None:
        app.dependency_overrides[get_session_factory] = lambda: session_factory

        response = TestClient(app).get("/api/health/db")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_health_db_should_report_unreachable_database(self, app: FastAPI, session_factory: MagicMock) -> None:
        session_factory.return_value.__aenter__.side_effect = OperationalError("SELECT 1", {}, Exception("down"))
        app.dependency_overrides[get_session_factory] = lambda: session_factory

        response = TestClient(app).get("/api/health/db")

        assert response.status_code == 503
        assert response.json() == {"status": "unhealthy", "message": "Database unreachable"}

    def test_health_vector_store_should_report_row_count(self, app: FastAPI, memory_store) -> None:
        app.dependency_overrides[get_vector_store_dependency] = lambda: memory_store

        response = TestClient(app).get("/api/health/vector-store")

        assert response.status_code == 200
        assert response.json()["message"] == "Vector store accessible (0 chunks)"

    def test_health_vector_store_should_report_failure(self, app: FastAPI) -> None:
        store = AsyncMock()
        store.count.side_effect = PersistenceError("down", operation="count")
        app.dependency_overrides[get_vector_store_dependency] = lambda: store

        response = TestClient(app).get("/api/health/vector-store")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
