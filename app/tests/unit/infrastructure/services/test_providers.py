"""
Unit tests for dependency injection providers.

Tests cover:
- get_settings() and get_notification_service() caching behavior
- SettingsDep / NotificationServiceDep with FastAPI dependency injection
- Dependency override pattern for testing
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient
from fastapi import FastAPI

from infrastructure.configuration import Settings
from infrastructure.notifications.models import NotificationResult
from infrastructure.notifications.service import NotificationService
from infrastructure.services import NotificationServiceDep, SettingsDep
from infrastructure.services.providers import get_notification_service, get_settings


@pytest.mark.unit
class TestGetSettings:
    """Tests for get_settings() provider function."""

    def test_get_settings_returns_settings_instance(self):
        """get_settings() returns a Settings instance."""
        assert isinstance(get_settings(), Settings)

    def test_get_settings_returns_cached_instance(self):
        """get_settings() returns the same instance (caching)."""
        assert get_settings() is get_settings()

    def test_get_settings_cache_can_be_cleared(self):
        """get_settings() cache can be cleared for testing."""
        instance1 = get_settings()
        get_settings.cache_clear()
        instance2 = get_settings()
        assert instance1 is not instance2


@pytest.mark.unit
class TestGetNotificationService:
    """Tests for get_notification_service() provider function."""

    def test_returns_service(self):
        assert isinstance(get_notification_service(), NotificationService)

    def test_returns_cached_instance(self):
        assert get_notification_service() is get_notification_service()

    def test_default_channels(self):
        service = get_notification_service()

        assert set(service.list_channels()) == {"in_app", "email", "sms", "push"}


@pytest.mark.unit
class TestDependencyOverridePattern:
    """Tests for FastAPI dependency override pattern."""

    def test_settings_dep_with_dependency_override(self):
        """SettingsDep can be overridden in FastAPI app."""
        app = FastAPI()

        @app.get("/config")
        def get_config(settings: SettingsDep) -> dict:
            return {"is_settings_instance": isinstance(settings, Settings)}

        app.dependency_overrides[get_settings] = lambda: MagicMock(spec=Settings)

        try:
            with TestClient(app) as client:
                response = client.get("/config")

            assert response.status_code == 200
            assert response.json()["is_settings_instance"] is True
        finally:
            app.dependency_overrides.clear()

    def test_notification_service_dep_in_route(self):
        """NotificationServiceDep resolves the default service in a route."""
        app = FastAPI()

        @app.post("/orders/{order_id}/ready")
        async def order_ready(order_id: str, notifications: NotificationServiceDep):
            result = await notifications.send(
                "buyer-1", "order_ready", {"orderNumber": order_id}
            )
            return {
                "notification_id": result.in_app_notification_id,
                "channels": [r.channel.value for r in result.channels],
            }

        with TestClient(app) as client:
            response = client.post("/orders/FM-1001/ready")

        assert response.status_code == 200
        assert response.json()["notification_id"]
        assert response.json()["channels"] == ["push", "in_app"]

    def test_notification_service_dep_override(self):
        """NotificationServiceDep can be overridden in tests."""
        app = FastAPI()

        @app.post("/notify")
        async def notify(notifications: NotificationServiceDep):
            result = await notifications.send("u1", "vendor_approved")
            return {"type": result.notification_type}

        mock_service = MagicMock(spec=NotificationService)
        mock_service.send = AsyncMock(
            return_value=NotificationResult(notification_type="vendor_approved")
        )
        app.dependency_overrides[get_notification_service] = lambda: mock_service

        try:
            with TestClient(app) as client:
                response = client.post("/notify")

            assert response.json() == {"type": "vendor_approved"}
            mock_service.send.assert_awaited_once_with("u1", "vendor_approved")
        finally:
            app.dependency_overrides.clear()
