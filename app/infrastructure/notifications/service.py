"""Notification service for dependency injection.

Provides a class-based interface to the notification system for easier DI and testing.
"""

from typing import Dict, List, Optional, Union, TYPE_CHECKING

from infrastructure.notifications.dispatcher import (
    NotificationDispatcher,
    TemplateDataInput,
)
from infrastructure.notifications.models import (
    NotificationChannel,
    NotificationResult,
    NotificationType,
    SendOptions,
)
from infrastructure.notifications.preferences import PreferenceResolver
from infrastructure.persistence import (
    InMemoryNotificationStore,
    InMemoryProfileStore,
    NotificationStore,
    ProfileStore,
)

if TYPE_CHECKING:
    from infrastructure.configuration import Settings
    from infrastructure.notifications.channels.base import ChannelSender


class NotificationService:
    """Class-based notification service.

    Wraps the NotificationDispatcher with a service interface to support
    dependency injection and easier testing with mocks.

    This is a thin facade - all actual work is delegated to the underlying
    NotificationDispatcher instance.

    Usage:
        # Via dependency injection
        from infrastructure.services import NotificationServiceDep

        @router.post("/orders/{order_id}/ready")
        async def mark_ready(order_id: str, notification_service: NotificationServiceDep):
            result = await notification_service.send(
                buyer_id, "order_ready", {"orderNumber": order_number}
            )
            return {"notification_id": result.in_app_notification_id}

        # Direct instantiation
        from infrastructure.services import get_settings
        from infrastructure.notifications import NotificationService

        service = NotificationService(get_settings())
        results = await service.send_batch(admin_ids, "new_vendor_application", data)
    """

    def __init__(
        self,
        settings: "Settings",
        senders: Optional[Dict[NotificationChannel, "ChannelSender"]] = None,
        dispatcher: Optional[NotificationDispatcher] = None,
        notification_store: Optional[NotificationStore] = None,
        profile_store: Optional[ProfileStore] = None,
    ):
        """Initialize notification service.

        Args:
            settings: Settings instance (required, passed from provider).
            senders: Optional dict of channel to ChannelSender instances.
                     If not provided, creates the default senders from settings.
            dispatcher: Optional pre-configured NotificationDispatcher instance.
                       If not provided, creates one with the senders.
            notification_store: Store for in-app rows (default: in-memory).
            profile_store: Store for user profiles (default: in-memory).
        """
        if dispatcher is None:
            if senders is None:
                # Import here to avoid circular dependency at module level
                from infrastructure.notifications.channels.email import EmailSender
                from infrastructure.notifications.channels.in_app import InAppSender
                from infrastructure.notifications.channels.push import PushSender
                from infrastructure.notifications.channels.sms import SmsSender

                if notification_store is None:
                    notification_store = InMemoryNotificationStore()

                senders = {
                    NotificationChannel.IN_APP: InAppSender(notification_store),
                    NotificationChannel.EMAIL: EmailSender(settings),
                    NotificationChannel.SMS: SmsSender(settings),
                    NotificationChannel.PUSH: PushSender(settings),
                }

            if profile_store is None:
                profile_store = InMemoryProfileStore()

            dispatcher = NotificationDispatcher(
                senders=senders,
                preference_resolver=PreferenceResolver(
                    profile_store,
                    tier_gated_verticals=settings.notifications.tier_gated_verticals,
                ),
                settings=settings,
            )

        self._dispatcher = dispatcher
        self._settings = settings

    async def send(
        self,
        user_id: str,
        notification_type: Union[NotificationType, str],
        template_data: TemplateDataInput = None,
        options: Optional[SendOptions] = None,
    ) -> NotificationResult:
        """Send one notification to one user.

        Args:
            user_id: Recipient user profile id
            notification_type: Type enum member or its string tag
            template_data: Values the templates read
            options: Vertical and caller-known contact points

        Returns:
            NotificationResult with one ChannelResult per channel considered
        """
        return await self._dispatcher.send(
            user_id, notification_type, template_data, options
        )

    async def send_batch(
        self,
        user_ids: List[str],
        notification_type: Union[NotificationType, str],
        template_data: TemplateDataInput = None,
        options: Optional[SendOptions] = None,
    ) -> List[NotificationResult]:
        """Send the same notification to many users concurrently.

        Returns:
            One NotificationResult per user id, in input order
        """
        return await self._dispatcher.send_batch(
            user_ids, notification_type, template_data, options
        )

    def register_sender(self, sender: "ChannelSender") -> None:
        """Register (or replace) the sender for its channel.

        Allows swapping a placeholder for a real provider after service
        initialization.

        Args:
            sender: ChannelSender implementation
        """
        self._dispatcher.senders[sender.channel] = sender

    def get_sender(self, channel: NotificationChannel) -> Optional["ChannelSender"]:
        """Get the sender registered for a channel.

        Args:
            channel: Channel to look up

        Returns:
            ChannelSender instance or None if not registered
        """
        return self._dispatcher.senders.get(NotificationChannel(channel))

    def list_channels(self) -> List[str]:
        """List all channels with a registered sender.

        Returns:
            List of channel tags currently available
        """
        return [ch.value for ch in self._dispatcher.get_available_channels()]

    def health_check(self) -> Dict[str, bool]:
        """Health of every registered sender, keyed by channel tag."""
        return self._dispatcher.health_check()

    @property
    def dispatcher(self) -> NotificationDispatcher:
        """Access underlying NotificationDispatcher instance.

        Provided for advanced use cases that need direct access
        to the NotificationDispatcher API.

        Returns:
            The underlying NotificationDispatcher instance
        """
        return self._dispatcher
