"""Notification system core models.

Closed enums that drive every lookup (type, urgency, channel, audience) and
the Pydantic models exchanged between the registry, the dispatcher and the
channel senders.

Template data is deliberately loose: every field is optional, unknown
fields are kept and numbers are accepted for text fields, so call sites can
pass whatever they have on hand. Keys are accepted in camelCase
(`orderNumber`, as stored for the web frontend) or snake_case
(`order_number`).
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class NotificationChannel(str, Enum):
    """Delivery mechanisms."""

    IN_APP = "in_app"
    EMAIL = "email"
    SMS = "sms"
    PUSH = "push"


class NotificationUrgency(str, Enum):
    """Urgency tiers. Urgency alone determines the channel list.

    immediate -> push + in-app
    urgent    -> SMS + in-app
    standard  -> email + in-app
    info      -> email only
    """

    IMMEDIATE = "immediate"
    URGENT = "urgent"
    STANDARD = "standard"
    INFO = "info"


class NotificationAudience(str, Enum):
    """Class of recipient a type targets. Informational only."""

    BUYER = "buyer"
    VENDOR = "vendor"
    ADMIN = "admin"


class NotificationType(str, Enum):
    """Every notification kind the marketplace sends."""

    # Buyer-facing
    ORDER_CONFIRMED = "order_confirmed"
    ORDER_READY = "order_ready"
    ORDER_FULFILLED = "order_fulfilled"
    ORDER_CANCELLED_BY_VENDOR = "order_cancelled_by_vendor"
    ORDER_EXPIRED = "order_expired"
    ORDER_REFUNDED = "order_refunded"
    PICKUP_MISSED = "pickup_missed"
    ISSUE_RESOLVED = "issue_resolved"
    MARKET_BOX_SKIP = "market_box_skip"
    # Vendor-facing
    NEW_PAID_ORDER = "new_paid_order"
    ORDER_CANCELLED_BY_BUYER = "order_cancelled_by_buyer"
    VENDOR_APPROVED = "vendor_approved"
    VENDOR_REJECTED = "vendor_rejected"
    MARKET_APPROVED = "market_approved"
    MARKET_REJECTED = "market_rejected"
    PICKUP_CONFIRMATION_NEEDED = "pickup_confirmation_needed"
    PICKUP_ISSUE_REPORTED = "pickup_issue_reported"
    INVENTORY_LOW_STOCK = "inventory_low_stock"
    INVENTORY_OUT_OF_STOCK = "inventory_out_of_stock"
    PAYOUT_PROCESSED = "payout_processed"
    PAYOUT_FAILED = "payout_failed"
    VENDOR_QUALITY_ALERT = "vendor_quality_alert"
    SUBSCRIPTION_UPGRADED = "subscription_upgraded"
    SUBSCRIPTION_PAYMENT_FAILED = "subscription_payment_failed"
    # Admin-facing
    NEW_VENDOR_APPLICATION = "new_vendor_application"
    NEW_MARKET_APPLICATION = "new_market_application"
    ISSUE_DISPUTED = "issue_disputed"
    FEEDBACK_SUBMITTED = "feedback_submitted"


class NotificationTemplateData(BaseModel):
    """Open record of values a template may read.

    Every template function must tolerate any subset of these being absent.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
        coerce_numbers_to_str=True,
    )

    order_number: Optional[str] = None
    order_id: Optional[str] = None
    order_item_id: Optional[str] = None
    item_title: Optional[str] = None
    vendor_name: Optional[str] = None
    vendor_id: Optional[str] = None
    buyer_name: Optional[str] = None
    market_name: Optional[str] = None
    pickup_date: Optional[str] = None
    amount_cents: Optional[Union[int, float]] = None
    reason: Optional[str] = None
    quantity: Optional[int] = None
    listing_title: Optional[str] = None
    resolution: Optional[str] = None
    offering_name: Optional[str] = None
    findings_count: Optional[int] = None
    findings_summary: Optional[str] = None
    tier: Optional[str] = None

    def to_record_data(self) -> Dict[str, Any]:
        """camelCase dict of the populated fields, as stored with in-app rows."""
        return self.model_dump(by_alias=True, exclude_none=True)


class UserPreferences(BaseModel):
    """Per-user channel opt-ins.

    Defaults apply whenever the profile has no stored value or the profile
    cannot be read at all. In-app has no preference: it is always sent.
    """

    model_config = ConfigDict(extra="ignore")

    email_order_updates: bool = True
    email_marketing: bool = False
    sms_order_updates: bool = False
    sms_marketing: bool = False
    push_enabled: bool = False


DEFAULT_PREFERENCES = UserPreferences()


class SendOptions(BaseModel):
    """Optional per-send context supplied by the caller.

    Attributes:
        vertical: Vertical used to build action links and email branding
        user_email: Contact email already known to the caller
        user_phone: Contact phone already known to the caller
    """

    vertical: Optional[str] = None
    user_email: Optional[str] = None
    user_phone: Optional[str] = None


class ChannelResult(BaseModel):
    """Outcome of one channel for one send.

    A skipped result is not an error: the dispatcher (or a placeholder
    sender) deliberately did not deliver on that channel, and `reason`
    says why.
    """

    channel: NotificationChannel
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None
    skipped: bool = False
    reason: Optional[str] = None

    @classmethod
    def sent(
        cls, channel: NotificationChannel, message_id: Optional[str] = None
    ) -> "ChannelResult":
        return cls(channel=channel, success=True, message_id=message_id)

    @classmethod
    def failed(cls, channel: NotificationChannel, error: str) -> "ChannelResult":
        return cls(channel=channel, success=False, error=error)

    @classmethod
    def skip(cls, channel: NotificationChannel, reason: str) -> "ChannelResult":
        return cls(channel=channel, success=True, skipped=True, reason=reason)


class NotificationResult(BaseModel):
    """Aggregate outcome of one send call.

    `notification_type` is a plain string so an unknown tag passed by a
    caller is echoed back unchanged.
    """

    notification_type: str
    channels: List[ChannelResult] = Field(default_factory=list)
    in_app_notification_id: Optional[str] = None

    def for_channel(self, channel: NotificationChannel) -> Optional[ChannelResult]:
        """First result recorded for `channel`, if any."""
        for result in self.channels:
            if result.channel == channel:
                return result
        return None

    @property
    def delivered_channels(self) -> List[NotificationChannel]:
        """Channels that succeeded without being skipped."""
        return [r.channel for r in self.channels if r.success and not r.skipped]


class OutboundMessage(BaseModel):
    """Rendered notification addressed to one recipient, handed to a sender.

    Attributes:
        user_id: Recipient user profile id
        notification_type: Type tag
        title: Rendered title (email subject, push title)
        message: Rendered body
        action_url: Path the recipient is sent to on click
        data: Template data as stored with the in-app row
        vertical: Vertical the notification belongs to
        email: Resolved email destination, if any
        phone: Resolved phone destination, if any
    """

    user_id: str
    notification_type: NotificationType
    title: str
    message: str
    action_url: str
    data: Dict[str, Any] = Field(default_factory=dict)
    vertical: str
    email: Optional[str] = None
    phone: Optional[str] = None
