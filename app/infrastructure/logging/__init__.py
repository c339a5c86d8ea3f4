"""Structured logging infrastructure.

Centralized structlog configuration for the notification subsystem.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_module_logger(): Get a logger for the calling module
    - bind_notification_context(): Context manager for per-send logging context
    - get_correlation_id(): Get current correlation ID from context
    - clear_notification_context(): Clear all bound context

Processors:
    - add_app_info(): Add app name/version
    - mask_contact_points(): Partially mask emails, phone numbers, push keys
    - truncate_large_values(): Limit string lengths

Example:
    from infrastructure.logging import get_module_logger, bind_notification_context

    logger = get_module_logger()

    with bind_notification_context(user_id="u1", notification_type="order_ready"):
        logger.info("notification_dispatched")
"""

from infrastructure.logging.setup import (
    configure_logging,
    get_module_logger,
)

from infrastructure.logging.context import (
    bind_notification_context,
    get_correlation_id,
    clear_notification_context,
)

from infrastructure.logging.formatters import (
    add_app_info,
    mask_contact_points,
    truncate_large_values,
    CONTACT_PATTERNS,
)

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_notification_context",
    "get_correlation_id",
    "clear_notification_context",
    "add_app_info",
    "mask_contact_points",
    "truncate_large_values",
    "CONTACT_PATTERNS",
]
