"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache

from infrastructure.configuration import Settings
from infrastructure.notifications.service import NotificationService


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    This is the single source of truth for settings across the entire application.
    The @lru_cache decorator ensures only ONE instance is created per process,
    even if called from multiple packages.

    Infrastructure packages should use this directly to ensure singleton consistency:
        from infrastructure.services.providers import get_settings
        settings = get_settings()

    Application code should use the DI type alias for testability:
        from infrastructure.services import SettingsDep
        @router.get("/config")
        def get_config(settings: SettingsDep):
            return settings.model_dump()

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_notification_service() -> NotificationService:
    """
    Get application-scoped notification service singleton.

    The default wiring uses the in-memory stores and the placeholder email,
    SMS and push senders. Deployments replace stores or senders by building
    their own NotificationService and overriding this provider.

    Returns:
        NotificationService: Cached service built from application settings.

    Usage:
        @router.post("/orders/{order_id}/ready")
        async def order_ready(notifications: NotificationServiceDep):
            result = await notifications.send(buyer_id, "order_ready", data)
            return {"notification_id": result.in_app_notification_id}
    """
    return NotificationService(settings=get_settings())
