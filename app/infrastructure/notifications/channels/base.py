"""Channel sender abstract base class.

All channel implementations (in-app, email, SMS, push) must implement this
interface.
"""

from abc import ABC, abstractmethod

from infrastructure.notifications.models import (
    ChannelResult,
    NotificationChannel,
    OutboundMessage,
)
from infrastructure.operations import OperationResult


class ChannelSender(ABC):
    """Abstract base class for channel senders.

    Each sender handles delivery through one channel:
    - InAppSender: notification row in the notification store
    - EmailSender: branded HTML email
    - SmsSender: text message to an E.164 phone number
    - PushSender: web push payload

    The dispatcher decides whether a channel should be attempted at all
    (preferences, contact points, tier). A sender only delivers the message
    it is given.

    Example Implementation:
        class WebhookSender(ChannelSender):

            @property
            def channel(self) -> NotificationChannel:
                return NotificationChannel.PUSH

            async def send(self, message: OutboundMessage) -> ChannelResult:
                response = await self._post(message)
                return ChannelResult.sent(self.channel, message_id=response.id)
    """

    @property
    @abstractmethod
    def channel(self) -> NotificationChannel:
        """Channel this sender delivers on.

        Returns:
            NotificationChannel used for routing and logging
        """
        pass

    @abstractmethod
    async def send(self, message: OutboundMessage) -> ChannelResult:
        """Deliver one rendered message to one recipient.

        Must handle provider errors gracefully and return a failed
        ChannelResult rather than raising. The dispatcher still converts an
        escaping exception into a failed result.

        Args:
            message: Rendered message with its resolved destination

        Returns:
            ChannelResult for this channel
        """
        pass

    @abstractmethod
    def health_check(self) -> OperationResult:
        """Check sender health (backing store or provider reachable).

        Returns:
            OperationResult indicating sender health
        """
        pass
