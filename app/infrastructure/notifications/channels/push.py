"""Push channel: web push payload for the recipient's subscriptions."""

from typing import Any, Dict, TYPE_CHECKING

import structlog
from infrastructure.notifications.channels.base import ChannelSender
from infrastructure.notifications.models import (
    ChannelResult,
    NotificationChannel,
    OutboundMessage,
)
from infrastructure.operations import OperationResult

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = structlog.get_logger()

PUSH_TAG = "notification"


def build_push_payload(message: OutboundMessage) -> Dict[str, Any]:
    """Payload the service worker displays."""
    return {
        "title": message.title,
        "body": message.message,
        "url": message.action_url,
        "tag": PUSH_TAG,
    }


class PushSender(ChannelSender):
    """Web push notification channel.

    Delivery is not integrated yet: every message is reported as skipped.
    """

    def __init__(self, settings: "Settings"):
        """Initialize push sender.

        Args:
            settings: Settings instance. Push has no settings of its own until
                a delivery backend is wired in.
        """
        logger.info("initialized_push_sender", backend="placeholder")

    @property
    def channel(self) -> NotificationChannel:
        """Channel identifier."""
        return NotificationChannel.PUSH

    async def send(self, message: OutboundMessage) -> ChannelResult:
        """Send a push notification to every subscription of the recipient."""
        return await self._deliver(message.user_id, build_push_payload(message))

    def health_check(self) -> OperationResult:
        return OperationResult.success(
            message="Push service not integrated; sends are skipped",
            data={"integrated": False},
        )

    async def _deliver(self, user_id: str, payload: Dict[str, Any]) -> ChannelResult:
        """Hand the payload to the push service."""
        logger.info(
            "push_delivery_skipped",
            user_id=user_id,
            url=payload["url"],
            reason="push service not integrated",
        )
        return ChannelResult.skip(self.channel, "push service not integrated")
