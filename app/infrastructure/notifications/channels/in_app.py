"""In-app channel: one row per send in the notification store."""

import structlog
from infrastructure.notifications.channels.base import ChannelSender
from infrastructure.notifications.models import (
    ChannelResult,
    NotificationChannel,
    OutboundMessage,
)
from infrastructure.operations import OperationResult
from infrastructure.persistence import NotificationRecord, NotificationStore

logger = structlog.get_logger()


class InAppSender(ChannelSender):
    """In-app notification channel.

    Inserts a notification row the web app lists in the recipient's inbox.
    The stored `data` is the template data plus the rendered action URL.
    Every call inserts a new row; there is no de-duplication.
    """

    def __init__(self, store: NotificationStore):
        """Initialize in-app sender.

        Args:
            store: Notification store that persists in-app rows.
        """
        self._store = store
        logger.info("initialized_in_app_sender", store=type(store).__name__)

    @property
    def channel(self) -> NotificationChannel:
        """Channel identifier."""
        return NotificationChannel.IN_APP

    async def send(self, message: OutboundMessage) -> ChannelResult:
        """Insert the in-app row.

        Args:
            message: Rendered message.

        Returns:
            ChannelResult with the generated row id as message_id.
        """
        record = NotificationRecord(
            user_id=message.user_id,
            type=message.notification_type.value,
            title=message.title,
            message=message.message,
            data={**message.data, "actionUrl": message.action_url},
        )

        try:
            result = await self._store.insert_notification(record)
        except Exception as e:
            logger.error(
                "in_app_insert_error",
                user_id=message.user_id,
                notification_type=message.notification_type.value,
                error=str(e),
                exc_info=True,
            )
            return ChannelResult.failed(self.channel, f"In-app insert error: {e}")

        if not result.is_success:
            logger.error(
                "in_app_insert_failed",
                user_id=message.user_id,
                notification_type=message.notification_type.value,
                error=result.message,
                error_code=result.error_code,
            )
            return ChannelResult.failed(self.channel, result.message)

        notification_id = (result.data or {}).get("id")
        logger.info(
            "in_app_notification_created",
            user_id=message.user_id,
            notification_id=notification_id,
        )
        return ChannelResult.sent(self.channel, message_id=notification_id)

    def health_check(self) -> OperationResult:
        return OperationResult.success(
            message="Notification store configured",
            data={"store": type(self._store).__name__},
        )
