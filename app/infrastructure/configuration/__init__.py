"""Infrastructure configuration module - public API.

Centralized configuration management using Pydantic BaseSettings.

Exports:
    settings: Module-level Settings instance
    Settings: Main settings class (for testing/overrides)
    NotificationSettings: Notification feature settings class

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()
    sms_limit = settings.notifications.SMS_MAX_LENGTH
    ```
"""

from infrastructure.configuration.settings import Settings, settings
from infrastructure.configuration.features import NotificationSettings

__all__ = ["Settings", "settings", "NotificationSettings"]
