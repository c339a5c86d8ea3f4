"""Test fixtures for notification infrastructure tests."""

import pytest
from typing import Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

from infrastructure.configuration import NotificationSettings, Settings
from infrastructure.notifications.channels.base import ChannelSender
from infrastructure.notifications.channels.in_app import InAppSender
from infrastructure.notifications.dispatcher import NotificationDispatcher
from infrastructure.notifications.models import ChannelResult, NotificationChannel
from infrastructure.notifications.preferences import PreferenceResolver
from infrastructure.persistence import (
    InMemoryNotificationStore,
    InMemoryProfileStore,
    UserProfile,
)


@pytest.fixture
def notification_settings() -> Settings:
    """Settings with notification defaults, independent of the environment."""
    return Settings(
        notifications=NotificationSettings(
            DEFAULT_VERTICAL="farmers_market",
            EMAIL_FROM_ADDRESS="noreply@mail.farmersmarketing.app",
            SMS_MAX_LENGTH=1600,
            TIER_GATED_VERTICALS="food_trucks",
            BATCH_PREFETCH_PROFILES=True,
        )
    )


@pytest.fixture
def notification_store() -> InMemoryNotificationStore:
    return InMemoryNotificationStore()


@pytest.fixture
def profile_store() -> InMemoryProfileStore:
    return InMemoryProfileStore()


@pytest.fixture
def mock_sender_factory():
    """Factory for mock channel senders.

    Returns:
        Factory function creating a ChannelSender mock whose `send` is an
        AsyncMock returning a successful ChannelResult for the channel.

    Example:
        email_sender = mock_sender_factory(NotificationChannel.EMAIL)
        email_sender.send.return_value = ChannelResult.failed(
            NotificationChannel.EMAIL, "provider rejected"
        )
    """

    def _factory(
        channel: NotificationChannel,
        message_id: Optional[str] = None,
    ) -> MagicMock:
        sender = MagicMock(spec=ChannelSender)
        sender.channel = channel
        sender.send = AsyncMock(
            return_value=ChannelResult.sent(
                channel, message_id=message_id or f"{channel.value}-msg-1"
            )
        )
        return sender

    return _factory


@pytest.fixture
def mock_senders(mock_sender_factory) -> Dict[NotificationChannel, MagicMock]:
    """Mock senders for email, SMS and push."""
    return {
        channel: mock_sender_factory(channel)
        for channel in (
            NotificationChannel.EMAIL,
            NotificationChannel.SMS,
            NotificationChannel.PUSH,
        )
    }


@pytest.fixture
def dispatcher_factory(notification_settings, notification_store, profile_store):
    """Factory for dispatchers wired to the in-memory stores.

    The in-app channel always uses a real InAppSender on `notification_store`
    so tests can assert on inserted rows.

    Example:
        dispatcher = dispatcher_factory(senders=mock_senders, profiles=[profile])
    """

    def _factory(
        senders: Optional[Dict[NotificationChannel, ChannelSender]] = None,
        profiles: Optional[List[UserProfile]] = None,
        settings: Optional[Settings] = None,
        resolver: Optional[PreferenceResolver] = None,
    ) -> NotificationDispatcher:
        settings = settings or notification_settings
        for profile in profiles or []:
            profile_store.upsert(profile)

        all_senders: Dict[NotificationChannel, ChannelSender] = {
            NotificationChannel.IN_APP: InAppSender(notification_store)
        }
        all_senders.update(senders or {})

        return NotificationDispatcher(
            senders=all_senders,
            preference_resolver=resolver
            or PreferenceResolver(
                profile_store,
                tier_gated_verticals=settings.notifications.tier_gated_verticals,
            ),
            settings=settings,
        )

    return _factory
