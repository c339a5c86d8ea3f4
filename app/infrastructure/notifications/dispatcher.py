"""Notification dispatcher with urgency-based channel routing.

Centralized notification delivery that:
- Looks up the notification type in the registry and renders its content
- Routes to the fixed channel list for the type's urgency
- Applies recipient preferences, contact points and vendor tier per channel
- Records one ChannelResult per channel; failures are data, never raised
- Fans batch sends out concurrently with per-recipient isolation

Usage Example:
    from infrastructure.notifications import (
        NotificationDispatcher,
        NotificationType,
        SendOptions,
    )

    dispatcher = NotificationDispatcher(
        senders={NotificationChannel.IN_APP: InAppSender(store)},
        preference_resolver=PreferenceResolver(profile_store),
        settings=settings,
    )

    result = await dispatcher.send(
        "u-123",
        NotificationType.ORDER_READY,
        {"orderNumber": "FM-1001", "vendorName": "Green Acres"},
        SendOptions(vertical="farmers_market"),
    )
    logger.info("sent", delivered=result.delivered_channels)
"""

import asyncio
from typing import Any, Dict, List, Mapping, Optional, Union, TYPE_CHECKING

from pydantic import ValidationError

from infrastructure.logging import bind_notification_context, get_module_logger
from infrastructure.notifications.channels.base import ChannelSender
from infrastructure.notifications.models import (
    ChannelResult,
    NotificationChannel,
    NotificationResult,
    NotificationTemplateData,
    NotificationType,
    OutboundMessage,
    SendOptions,
)
from infrastructure.notifications.preferences import (
    PreferenceResolver,
    RecipientContext,
    filter_channels_for_tier,
    should_send_channel,
)
from infrastructure.notifications.registry import (
    UnknownNotificationTypeError,
    get_channels_for_urgency,
    get_config,
)
from infrastructure.persistence import UserProfile

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = get_module_logger()

TemplateDataInput = Union[NotificationTemplateData, Mapping[str, Any], None]

_CONTACT_CHANNELS = {
    NotificationChannel.EMAIL: ("email", "No email address available"),
    NotificationChannel.SMS: ("phone", "No phone number available"),
}


def _type_tag(notification_type: Union[NotificationType, str]) -> str:
    if isinstance(notification_type, NotificationType):
        return notification_type.value
    return str(notification_type)


def _failed_send(notification_type: Union[NotificationType, str], error: str):
    """Result for a send that never reached channel dispatch."""
    return NotificationResult(
        notification_type=_type_tag(notification_type),
        channels=[ChannelResult.failed(NotificationChannel.IN_APP, error)],
    )


class NotificationDispatcher:
    """Urgency-routed notification dispatcher.

    Attributes:
        senders: Dict mapping channel to its ChannelSender
        preference_resolver: Resolves preferences, contacts and tier per recipient
        default_vertical: Vertical used for action links when the caller gives none
        batch_prefetch: Fetch all batch recipients' profiles in one store call

    Example:
        dispatcher = NotificationDispatcher(
            senders={
                NotificationChannel.IN_APP: InAppSender(store),
                NotificationChannel.EMAIL: EmailSender(settings),
            },
            preference_resolver=PreferenceResolver(profile_store),
            settings=settings,
        )

        results = await dispatcher.send_batch(user_ids, "market_approved", data)
    """

    def __init__(
        self,
        senders: Dict[NotificationChannel, ChannelSender],
        preference_resolver: PreferenceResolver,
        settings: "Settings",
    ):
        """Initialize notification dispatcher.

        Args:
            senders: Dict mapping channel to ChannelSender instance
            preference_resolver: Recipient context resolver
            settings: Settings instance with notifications configuration
        """
        self.senders = dict(senders)
        self.preference_resolver = preference_resolver
        self.default_vertical = settings.notifications.DEFAULT_VERTICAL
        self.batch_prefetch = settings.notifications.BATCH_PREFETCH_PROFILES

        logger.info(
            "initialized_notification_dispatcher",
            channels=[ch.value for ch in self.senders],
            default_vertical=self.default_vertical,
            batch_prefetch=self.batch_prefetch,
        )

    async def send(
        self,
        user_id: str,
        notification_type: Union[NotificationType, str],
        template_data: TemplateDataInput = None,
        options: Optional[SendOptions] = None,
    ) -> NotificationResult:
        """Send one notification to one user across its urgency's channels.

        Process:
        1. Look up the type config (unknown type -> single failed in-app result)
        2. Render title, message and action URL
        3. Resolve channel list from urgency, then apply tier gating
        4. Resolve recipient preferences and contact points
        5. Per channel: SMS policy, preference gate, contact check, send
        6. Return the aggregate with the in-app row id

        Args:
            user_id: Recipient user profile id
            notification_type: Type enum member or its string tag
            template_data: Values the templates read (model or dict)
            options: Vertical and caller-known contact points

        Returns:
            NotificationResult with one ChannelResult per channel considered.
            Never raises.
        """
        return await self._send_isolated(
            user_id, notification_type, template_data, options, profiles=None
        )

    async def send_batch(
        self,
        user_ids: List[str],
        notification_type: Union[NotificationType, str],
        template_data: TemplateDataInput = None,
        options: Optional[SendOptions] = None,
    ) -> List[NotificationResult]:
        """Send the same notification to many users concurrently.

        Each send is isolated: an exception escaping one becomes a failed
        result for that user only.

        Args:
            user_ids: Recipients, in the order results are returned
            notification_type: Type enum member or its string tag
            template_data: Values the templates read, shared by all sends
            options: Shared options. Caller-supplied contact points apply to
                every recipient, so batch callers normally leave them unset.

        Returns:
            One NotificationResult per user id, in input order.
        """
        if not user_ids:
            return []

        profiles: Optional[Dict[str, UserProfile]] = None
        if self.batch_prefetch:
            profiles = await self.preference_resolver.prefetch(list(user_ids))

        results = await asyncio.gather(
            *[
                self._send_isolated(
                    user_id,
                    notification_type,
                    template_data,
                    options,
                    profiles,
                )
                for user_id in user_ids
            ]
        )

        logger.info(
            "notification_batch_dispatched",
            notification_type=_type_tag(notification_type),
            recipient_count=len(user_ids),
            prefetched=profiles is not None,
            in_app_created=sum(1 for r in results if r.in_app_notification_id),
        )
        return list(results)

    async def _send_isolated(
        self,
        user_id: str,
        notification_type: Union[NotificationType, str],
        template_data: TemplateDataInput,
        options: Optional[SendOptions],
        profiles: Optional[Dict[str, UserProfile]],
    ) -> NotificationResult:
        try:
            if profiles is None:
                return await self._send(
                    user_id, notification_type, template_data, options
                )
            return await self._send(
                user_id,
                notification_type,
                template_data,
                options,
                profile=profiles.get(user_id),
                prefetched=True,
            )
        except Exception as e:
            logger.error(
                "notification_send_failed",
                user_id=user_id,
                notification_type=_type_tag(notification_type),
                error=str(e),
                exc_info=True,
            )
            return _failed_send(notification_type, f"Send failed: {e}")

    async def _send(
        self,
        user_id: str,
        notification_type: Union[NotificationType, str],
        template_data: TemplateDataInput,
        options: Optional[SendOptions],
        profile: Optional[UserProfile] = None,
        prefetched: bool = False,
    ) -> NotificationResult:
        options = options or SendOptions()
        vertical = options.vertical or self.default_vertical

        with bind_notification_context(
            user_id=user_id,
            notification_type=_type_tag(notification_type),
            vertical=vertical,
        ):
            try:
                config = get_config(notification_type)
            except UnknownNotificationTypeError as e:
                logger.warning("unknown_notification_type", error=str(e))
                return _failed_send(notification_type, str(e))

            try:
                data = self._coerce_template_data(template_data)
            except ValidationError as e:
                logger.warning(
                    "invalid_template_data",
                    error_count=e.error_count(),
                    error=str(e),
                )
                return _failed_send(
                    notification_type, f"Invalid template data: {e.error_count()} error(s)"
                )

            message = OutboundMessage(
                user_id=user_id,
                notification_type=NotificationType(notification_type),
                title=config.title(data),
                message=config.message(data),
                action_url=config.action_url(data, vertical),
                data=data.to_record_data(),
                vertical=vertical,
            )

            recipient = await self.preference_resolver.resolve(
                user_id, options, vertical, profile=profile, prefetched=prefetched
            )
            message = message.model_copy(
                update={"email": recipient.email, "phone": recipient.phone}
            )

            urgency_channels = get_channels_for_urgency(config.urgency)
            channels = filter_channels_for_tier(urgency_channels, recipient.tier)
            if len(channels) != len(urgency_channels):
                logger.info(
                    "channels_tier_gated",
                    tier=recipient.tier,
                    removed=[
                        ch.value for ch in urgency_channels if ch not in channels
                    ],
                )

            results = [
                await self._dispatch_channel(channel, message, recipient)
                for channel in channels
            ]

            in_app_id = None
            for result in results:
                if result.channel == NotificationChannel.IN_APP and result.success:
                    in_app_id = result.message_id

            logger.info(
                "notification_dispatched",
                urgency=config.urgency.value,
                channels=[r.channel.value for r in results],
                delivered=[
                    r.channel.value for r in results if r.success and not r.skipped
                ],
                skipped=[r.channel.value for r in results if r.skipped],
                failed=[r.channel.value for r in results if not r.success],
                in_app_notification_id=in_app_id,
            )

            return NotificationResult(
                notification_type=_type_tag(notification_type),
                channels=results,
                in_app_notification_id=in_app_id,
            )

    async def _dispatch_channel(
        self,
        channel: NotificationChannel,
        message: OutboundMessage,
        recipient: RecipientContext,
    ) -> ChannelResult:
        """Apply the per-channel gates, then invoke the sender."""
        prefs = recipient.preferences

        if channel == NotificationChannel.SMS and prefs.push_enabled:
            return ChannelResult.skip(channel, "push is enabled, SMS not needed")

        if not should_send_channel(channel, prefs):
            return ChannelResult.skip(
                channel, f"User has {channel.value} notifications disabled"
            )

        if channel in _CONTACT_CHANNELS:
            attr, reason = _CONTACT_CHANNELS[channel]
            if not getattr(message, attr):
                return ChannelResult.skip(channel, reason)

        sender = self.senders.get(channel)
        if sender is None:
            logger.warning(
                "channel_sender_missing",
                channel=channel.value,
                available_channels=[ch.value for ch in self.senders],
            )
            return ChannelResult.failed(
                channel, f"No sender registered for channel {channel.value}"
            )

        try:
            return await sender.send(message)
        except Exception as e:
            logger.error(
                "channel_sender_exception",
                channel=channel.value,
                error=str(e),
                exc_info=True,
            )
            return ChannelResult.failed(channel, f"Channel exception: {e}")

    @staticmethod
    def _coerce_template_data(
        template_data: TemplateDataInput,
    ) -> NotificationTemplateData:
        if template_data is None:
            return NotificationTemplateData()
        if isinstance(template_data, NotificationTemplateData):
            return template_data
        return NotificationTemplateData.model_validate(dict(template_data))

    def get_available_channels(self) -> List[NotificationChannel]:
        """Channels with a registered sender."""
        return list(self.senders.keys())

    def health_check(self) -> Dict[str, bool]:
        """Check health of all senders.

        Returns:
            Dict mapping channel tag to health status (True=healthy)
        """
        health_status = {}

        for channel, sender in self.senders.items():
            try:
                result = sender.health_check()
                health_status[channel.value] = result.is_success
            except Exception as e:
                logger.error(
                    "channel_health_check_failed",
                    channel=channel.value,
                    error=str(e),
                    exc_info=True,
                )
                health_status[channel.value] = False

        return health_status
