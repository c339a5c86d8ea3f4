"""SMS channel: "{title}: {message}" text to an E.164 number."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

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


@dataclass(frozen=True)
class OutboundSms:
    """Text message handed to the delivery backend."""

    to: str
    body: str


class SmsSender(ChannelSender):
    """SMS notification channel.

    Requires phone numbers in E.164 format (+1234567890). Delivery is not
    integrated yet: every valid message is reported as skipped.
    """

    def __init__(self, settings: "Settings"):
        """Initialize SMS sender.

        Args:
            settings: Settings instance with notifications configuration.
        """
        self._max_length = settings.notifications.SMS_MAX_LENGTH
        logger.info(
            "initialized_sms_sender",
            backend="placeholder",
            max_length=self._max_length,
        )

    @property
    def channel(self) -> NotificationChannel:
        """Channel identifier."""
        return NotificationChannel.SMS

    async def send(self, message: OutboundMessage) -> ChannelResult:
        """Send the text message for one notification.

        Args:
            message: Rendered message with a resolved phone number.

        Returns:
            ChannelResult from the SMS service, or failed if the number does
            not validate.
        """
        resolve_result = self.resolve_recipient(message.phone)
        if not resolve_result.is_success:
            logger.warning(
                "sms_recipient_invalid",
                user_id=message.user_id,
                error_code=resolve_result.error_code,
            )
            return ChannelResult.failed(
                self.channel,
                f"Failed to resolve recipient: {resolve_result.message}",
            )

        sms = OutboundSms(
            to=resolve_result.data["phone_number"],
            body=self.format_body(message.title, message.message),
        )
        return await self._deliver(sms)

    def format_body(self, title: str, message: str) -> str:
        """Join title and message, truncated to the configured maximum."""
        body = f"{title}: {message}"
        if len(body) > self._max_length:
            logger.warning(
                "sms_message_truncated",
                original_length=len(body),
                max_length=self._max_length,
            )
            body = body[: self._max_length - 3] + "..."
        return body

    def resolve_recipient(self, phone_number: str) -> OperationResult:
        """Validate the destination phone number.

        Returns:
            OperationResult with phone_number in data field.
        """
        if not phone_number:
            return OperationResult.permanent_error(
                message="Phone number required for SMS",
                error_code="MISSING_PHONE",
            )

        phone = phone_number.strip()
        if not phone.startswith("+"):
            return OperationResult.permanent_error(
                message="Phone number must be in E.164 format (+1234567890)",
                error_code="INVALID_PHONE_FORMAT",
            )

        # E.164 allows 1-15 digits after +
        digits = phone[1:]
        if not digits.isdigit() or len(digits) > 15:
            return OperationResult.permanent_error(
                message="Phone number must have 1-15 digits after +",
                error_code="INVALID_PHONE_LENGTH",
            )

        return OperationResult.success(
            message="Phone number validated",
            data={"phone_number": phone},
        )

    def health_check(self) -> OperationResult:
        return OperationResult.success(
            message="SMS service not integrated; sends are skipped",
            data={"integrated": False},
        )

    async def _deliver(self, sms: OutboundSms) -> ChannelResult:
        """Hand the text message to the SMS service."""
        logger.info(
            "sms_delivery_skipped",
            phone_number=sms.to,
            length=len(sms.body),
            reason="SMS service not integrated",
        )
        return ChannelResult.skip(self.channel, "SMS service not integrated")
