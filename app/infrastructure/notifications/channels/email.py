"""Email channel: branded HTML email per vertical."""

import html
import re
from dataclasses import dataclass
from typing import Dict, TYPE_CHECKING

import structlog
from pydantic import EmailStr, TypeAdapter, ValidationError

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

_email_adapter = TypeAdapter(EmailStr)

_RULE = re.compile(r"─+")


@dataclass(frozen=True)
class EmailBranding:
    """Sender display name, link domain and accent colour for one vertical."""

    brand_name: str
    domain: str
    color: str


DEFAULT_BRANDING = EmailBranding(
    brand_name="Farmers Marketing", domain="farmersmarketing.app", color="#2d5016"
)

VERTICAL_BRANDING: Dict[str, EmailBranding] = {
    "fireworks": EmailBranding("Fireworks Stand", "fireworksstand.com", "#ff4500"),
    "food_trucks": EmailBranding("Food Truck'n", "foodtruckn.app", "#ff5757"),
    "farmers_market": EmailBranding("Fresh Market", "farmersmarketing.app", "#2d5016"),
}


def get_branding(vertical: str) -> EmailBranding:
    """Branding for a vertical; unknown verticals get the platform default."""
    return VERTICAL_BRANDING.get(vertical, DEFAULT_BRANDING)


def format_email_html(body: str, branding: EmailBranding = DEFAULT_BRANDING) -> str:
    """Render a plain-text body as a branded HTML email.

    The body is HTML-escaped; blank lines become paragraph breaks, single
    newlines become <br>, and runs of box-drawing rules become <hr>.
    """
    html_body = html.escape(body, quote=False)
    html_body = _RULE.sub(
        '<hr style="border:none;border-top:1px solid #e5e7eb;margin:8px 0">',
        html_body,
    )
    html_body = html_body.replace("\n\n", '</p><p style="margin:0 0 12px">')
    html_body = html_body.replace("\n", "<br>")

    return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><meta name="viewport" content="width=device-width,initial-scale=1"></head>
<body style="margin:0;padding:0;background:#f9fafb;font-family:-apple-system,BlinkMacSystemFont,'Segoe UI',Roboto,sans-serif">
  <div style="max-width:560px;margin:0 auto;padding:32px 16px">
    <div style="background:#fff;border-radius:8px;padding:32px;border:1px solid #e5e7eb">
      <div style="margin-bottom:24px">
        <strong style="color:{branding.color};font-size:18px">{branding.brand_name}</strong>
      </div>
      <p style="margin:0 0 12px;color:#374151;font-size:15px;line-height:1.6">{html_body}</p>
    </div>
    <p style="text-align:center;color:#9ca3af;font-size:12px;margin-top:16px">
      {branding.brand_name} &middot; <a href="https://{branding.domain}" style="color:#9ca3af">{branding.domain}</a>
    </p>
  </div>
</body>
</html>"""


@dataclass(frozen=True)
class OutboundEmail:
    """Fully built email handed to the delivery backend."""

    sender: str
    to: str
    subject: str
    html: str
    text: str


class EmailSender(ChannelSender):
    """Email notification channel.

    Builds the branded email for the message's vertical and hands it to the
    email service. Delivery is not integrated yet: every valid email is
    reported as skipped.
    """

    def __init__(self, settings: "Settings"):
        """Initialize email sender.

        Args:
            settings: Settings instance with notifications configuration.
        """
        self._from_address = settings.notifications.EMAIL_FROM_ADDRESS
        logger.info(
            "initialized_email_sender",
            backend="placeholder",
            sender=self._from_address,
        )

    @property
    def channel(self) -> NotificationChannel:
        """Channel identifier."""
        return NotificationChannel.EMAIL

    async def send(self, message: OutboundMessage) -> ChannelResult:
        """Send the email for one message.

        Args:
            message: Rendered message with a resolved email address.

        Returns:
            ChannelResult from the email service, or failed if the address
            does not validate.
        """
        resolve_result = self.resolve_recipient(message.email)
        if not resolve_result.is_success:
            logger.warning(
                "email_recipient_invalid",
                user_id=message.user_id,
                error_code=resolve_result.error_code,
            )
            return ChannelResult.failed(
                self.channel,
                f"Failed to resolve recipient: {resolve_result.message}",
            )

        email = self.build_email(message, resolve_result.data["email"])
        return await self._deliver(email)

    def build_email(self, message: OutboundMessage, to: str) -> OutboundEmail:
        """Build the branded email for a message."""
        branding = get_branding(message.vertical)
        return OutboundEmail(
            sender=f"{branding.brand_name} <{self._from_address}>",
            to=to,
            subject=message.title,
            html=format_email_html(message.message, branding),
            text=message.message,
        )

    def resolve_recipient(self, email: str) -> OperationResult:
        """Validate the destination email address.

        Returns:
            OperationResult with the normalized address in data["email"].
        """
        if not email:
            return OperationResult.permanent_error(
                message="Email address required",
                error_code="MISSING_EMAIL",
            )
        try:
            normalized = _email_adapter.validate_python(email.strip())
        except ValidationError:
            return OperationResult.permanent_error(
                message=f"Invalid email address format: {email}",
                error_code="INVALID_EMAIL_FORMAT",
            )
        return OperationResult.success(
            message="Email validated",
            data={"email": str(normalized)},
        )

    def health_check(self) -> OperationResult:
        return OperationResult.success(
            message="Email service not integrated; sends are skipped",
            data={"sender": self._from_address, "integrated": False},
        )

    async def _deliver(self, email: OutboundEmail) -> ChannelResult:
        """Hand the email to the email service."""
        logger.info(
            "email_delivery_skipped",
            email=email.to,
            subject=email.subject,
            reason="email service not integrated",
        )
        return ChannelResult.skip(self.channel, "email service not integrated")
