"""Marketplace notification dispatch.

Sends a typed notification to a user across the channels its urgency
selects (in-app, email, SMS, push), honoring user preferences, contact
points and vendor tier, and reports a per-channel outcome.

Usage:
    from infrastructure.notifications import (
        NotificationService,
        NotificationType,
        SendOptions,
    )

    service = NotificationService(settings)

    result = await service.send(
        buyer_id,
        NotificationType.ORDER_READY,
        {"orderNumber": "FM-1001", "vendorName": "Green Acres"},
        SendOptions(vertical="farmers_market"),
    )

    # Check results
    for channel_result in result.channels:
        logger.info("channel_outcome", **channel_result.model_dump())
"""

# Models
from infrastructure.notifications.models import (
    ChannelResult,
    DEFAULT_PREFERENCES,
    NotificationAudience,
    NotificationChannel,
    NotificationResult,
    NotificationTemplateData,
    NotificationType,
    NotificationUrgency,
    OutboundMessage,
    SendOptions,
    UserPreferences,
)

# Registry
from infrastructure.notifications.registry import (
    NOTIFICATION_REGISTRY,
    NotificationTypeConfig,
    RenderedNotification,
    URGENCY_CHANNELS,
    UnknownNotificationTypeError,
    get_channels_for_urgency,
    get_config,
    render,
)

# Preferences
from infrastructure.notifications.preferences import (
    PreferenceResolver,
    RecipientContext,
    TIER_NOTIFICATION_CHANNELS,
    should_send_channel,
)

# Dispatcher
from infrastructure.notifications.dispatcher import NotificationDispatcher

# Channel interface
from infrastructure.notifications.channels.base import ChannelSender

# Channel implementations
from infrastructure.notifications.channels.email import EmailSender
from infrastructure.notifications.channels.in_app import InAppSender
from infrastructure.notifications.channels.push import PushSender
from infrastructure.notifications.channels.sms import SmsSender

# Service
from infrastructure.notifications.service import NotificationService

# Export all public interfaces
__all__ = [
    # Models
    "ChannelResult",
    "DEFAULT_PREFERENCES",
    "NotificationAudience",
    "NotificationChannel",
    "NotificationResult",
    "NotificationTemplateData",
    "NotificationType",
    "NotificationUrgency",
    "OutboundMessage",
    "SendOptions",
    "UserPreferences",
    # Registry
    "NOTIFICATION_REGISTRY",
    "NotificationTypeConfig",
    "RenderedNotification",
    "URGENCY_CHANNELS",
    "UnknownNotificationTypeError",
    "get_channels_for_urgency",
    "get_config",
    "render",
    # Preferences
    "PreferenceResolver",
    "RecipientContext",
    "TIER_NOTIFICATION_CHANNELS",
    "should_send_channel",
    # Dispatcher
    "NotificationDispatcher",
    # Channel interface
    "ChannelSender",
    # Channel implementations
    "EmailSender",
    "InAppSender",
    "PushSender",
    "SmsSender",
    # Service
    "NotificationService",
]
