"""Infrastructure modules for the marketplace notification service.

Centralized infrastructure components:
- configuration: Settings management (settings, NotificationSettings)
- logging: Structured logging (configure_logging, get_module_logger)
- notifications: Notification registry, dispatcher and channel senders
- operations: Operation results (OperationResult, OperationStatus)
- persistence: Notification and profile stores
- services: Dependency injection services (SettingsDep, NotificationServiceDep)
"""

# Configuration
from infrastructure.configuration import settings

# Logging
from infrastructure.logging import get_module_logger

# Operations
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

# Dependency Injection Services
from infrastructure.services import (
    SettingsDep,
    NotificationServiceDep,
    get_settings,
    get_notification_service,
)

__all__ = [
    # Configuration
    "settings",
    # Logging
    "get_module_logger",
    # Operations
    "OperationResult",
    "OperationStatus",
    # Dependency Injection Services
    "SettingsDep",
    "NotificationServiceDep",
    "get_settings",
    "get_notification_service",
]
