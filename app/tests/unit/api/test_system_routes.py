"""Unit tests for the system routes."""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.routes.system import router
from infrastructure.configuration import Settings
from infrastructure.services import get_notification_service, get_settings


@pytest.fixture
def app():
    app = FastAPI()
    app.include_router(router)
    yield app
    app.dependency_overrides.clear()


@pytest.mark.unit
class TestSystemRoutes:
    def test_version(self, app):
        app.dependency_overrides[get_settings] = lambda: Settings(GIT_SHA="abc123")

        with TestClient(app) as client:
            response = client.get("/version")

        assert response.status_code == 200
        assert response.json() == {"version": "abc123"}

    def test_health(self, app):
        with TestClient(app) as client:
            response = client.get("/health")

        assert response.json() == {"status": "ok"}

    def test_notification_health_default_wiring(self, app):
        with TestClient(app) as client:
            response = client.get("/health/notifications")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["channels"] == {
            "in_app": True,
            "email": True,
            "sms": True,
            "push": True,
        }

    def test_notification_health_degraded(self, app):
        service = MagicMock()
        service.health_check.return_value = {"in_app": False, "email": True}
        app.dependency_overrides[get_notification_service] = lambda: service

        with TestClient(app) as client:
            response = client.get("/health/notifications")

        assert response.status_code == 503
        assert response.json() == {
            "status": "degraded",
            "channels": {"in_app": False, "email": True},
        }
