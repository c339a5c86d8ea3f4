"""Notification type registry.

Central definition of every notification type with its:
- Urgency (determines which channels fire)
- Audience (informational)
- Templates: title, message and action URL

Every template is total over NotificationTemplateData: absent fields are
rendered as omitted clauses or generic nouns ("A customer", "the vendor"),
never as a literal "None".

The registry is built once at import, checked for totality over
NotificationType, and exposed read-only.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Tuple, Union

from infrastructure.notifications.models import (
    NotificationAudience,
    NotificationChannel,
    NotificationTemplateData,
    NotificationType,
    NotificationUrgency,
)

DEFAULT_VERTICAL = "farmers_market"

Template = Callable[[NotificationTemplateData], str]
ActionUrl = Callable[[NotificationTemplateData, Optional[str]], str]


class UnknownNotificationTypeError(LookupError):
    """Raised when a notification type tag is not in the registry."""

    def __init__(self, notification_type: object):
        self.notification_type = notification_type
        super().__init__(f"Unknown notification type: {notification_type}")


@dataclass(frozen=True)
class NotificationTypeConfig:
    """Rendering and routing config for one notification type."""

    urgency: NotificationUrgency
    audience: NotificationAudience
    title: Template
    message: Template
    action_url: ActionUrl


@dataclass(frozen=True)
class RenderedNotification:
    title: str
    message: str
    action_url: str


URGENCY_CHANNELS: Mapping[NotificationUrgency, Tuple[NotificationChannel, ...]] = (
    MappingProxyType(
        {
            NotificationUrgency.IMMEDIATE: (
                NotificationChannel.PUSH,
                NotificationChannel.IN_APP,
            ),
            NotificationUrgency.URGENT: (
                NotificationChannel.SMS,
                NotificationChannel.IN_APP,
            ),
            NotificationUrgency.STANDARD: (
                NotificationChannel.EMAIL,
                NotificationChannel.IN_APP,
            ),
            NotificationUrgency.INFO: (NotificationChannel.EMAIL,),
        }
    )
)


# ── Template helpers ─────────────────────────────────────────────────


def format_money(amount_cents: float) -> str:
    """Render cents as dollars, e.g. 2500 -> "$25.00"."""
    return f"${amount_cents / 100:.2f}"


def _order(d: NotificationTemplateData) -> str:
    return f"order #{d.order_number}" if d.order_number else "order"


def _vendor(d: NotificationTemplateData, fallback: str = "the vendor") -> str:
    return d.vendor_name or fallback


def _buyer(d: NotificationTemplateData) -> str:
    return d.buyer_name or "A customer"


def _clause(value: Optional[object], template: str) -> str:
    """Render `template` with `value` or drop the clause entirely."""
    if value is None or value == "":
        return ""
    return template.format(value)


def _quoted(value: Optional[str]) -> str:
    return f'"{value}"' if value else ""


def _listing(d: NotificationTemplateData) -> str:
    return _quoted(d.listing_title) or "One of your listings"


def _market_ref(d: NotificationTemplateData) -> str:
    return f"the market {_quoted(d.market_name)}" if d.market_name else "a new market"


def _findings(d: NotificationTemplateData) -> str:
    return f"\n\n{d.findings_summary}" if d.findings_summary else ""


def _amount_clause(d: NotificationTemplateData, template: str) -> str:
    if d.amount_cents is None:
        return ""
    return template.format(format_money(d.amount_cents))


def _title(text: str) -> Template:
    return lambda d: text


def _link(path: str) -> ActionUrl:
    def action_url(
        d: NotificationTemplateData, vertical: Optional[str] = None
    ) -> str:
        return f"/{vertical or DEFAULT_VERTICAL}/{path}"

    return action_url


# ── Type registry ────────────────────────────────────────────────────

_REGISTRY = {
    # ── Buyer-facing ─────────────────────────────────────────────────
    NotificationType.ORDER_CONFIRMED: NotificationTypeConfig(
        urgency=NotificationUrgency.STANDARD,
        audience=NotificationAudience.BUYER,
        title=_title("Order Confirmed"),
        message=lambda d: (
            f"{_vendor(d, 'The vendor')} confirmed your {_order(d)}"
            f"{_clause(d.item_title, ' for {}')}. "
            "We'll notify you when it's ready for pickup."
        ),
        action_url=_link("buyer/orders"),
    ),
    NotificationType.ORDER_READY: NotificationTypeConfig(
        urgency=NotificationUrgency.IMMEDIATE,
        audience=NotificationAudience.BUYER,
        title=_title("Order Ready for Pickup"),
        message=lambda d: (
            f"Your {_order(d)} from {_vendor(d)} has been marked ready for pickup"
            f"{_clause(d.market_name, ' at {}')}. "
            "It will be waiting for you during pickup hours, no need to rush."
        ),
        action_url=_link("buyer/orders"),
    ),
    NotificationType.ORDER_FULFILLED: NotificationTypeConfig(
        urgency=NotificationUrgency.INFO,
        audience=NotificationAudience.BUYER,
        title=_title("Order Complete"),
        message=lambda d: (
            f"Your {_order(d)} has been marked as picked up. "
            f"Thanks for shopping with {_vendor(d, 'us')}!"
        ),
        action_url=_link("buyer/orders"),
    ),
    NotificationType.ORDER_CANCELLED_BY_VENDOR: NotificationTypeConfig(
        urgency=NotificationUrgency.URGENT,
        audience=NotificationAudience.BUYER,
        title=_title("Order Cancelled"),
        message=lambda d: (
            f"{_vendor(d, 'The vendor')} cancelled your {_order(d)}."
            f"{_clause(d.reason, ' Reason: {}')} A refund will be processed."
        ),
        action_url=_link("buyer/orders"),
    ),
    NotificationType.ORDER_EXPIRED: NotificationTypeConfig(
        urgency=NotificationUrgency.STANDARD,
        audience=NotificationAudience.BUYER,
        title=_title("Order Expired"),
        message=lambda d: (
            f"Your {_order(d)} has expired because it wasn't confirmed in time."
            f"{_amount_clause(d, ' A refund of {} will be processed.')}"
        ),
        action_url=_link("buyer/orders"),
    ),
    NotificationType.ORDER_REFUNDED: NotificationTypeConfig(
        urgency=NotificationUrgency.STANDARD,
        audience=NotificationAudience.BUYER,
        title=_title("Refund Issued"),
        message=lambda d: (
            f"A refund{_amount_clause(d, ' of {}')} for your {_order(d)} "
            f"has been issued.{_clause(d.reason, ' Reason: {}')} "
            "It may take a few business days to appear on your statement."
        ),
        action_url=_link("buyer/orders"),
    ),
    NotificationType.PICKUP_MISSED: NotificationTypeConfig(
        urgency=NotificationUrgency.STANDARD,
        audience=NotificationAudience.BUYER,
        title=_title("Pickup Not Confirmed"),
        message=lambda d: (
            f"Your {_order(d)}{_clause(d.item_title, ' ({})')} from {_vendor(d)} "
            "was not marked as picked up during the scheduled pickup window. "
            "If you did pick up your items, please mark it as received in the app now. "
            "If there was a miscommunication, please reach out to the vendor directly."
        ),
        action_url=_link("buyer/orders"),
    ),
    NotificationType.ISSUE_RESOLVED: NotificationTypeConfig(
        urgency=NotificationUrgency.STANDARD,
        audience=NotificationAudience.BUYER,
        title=_title("Order Issue Resolved"),
        message=lambda d: (
            f"The issue you reported for your {_order(d)} has been resolved."
            f"{_clause(d.resolution, ' {}')}"
        ),
        action_url=_link("buyer/orders"),
    ),
    NotificationType.MARKET_BOX_SKIP: NotificationTypeConfig(
        urgency=NotificationUrgency.STANDARD,
        audience=NotificationAudience.BUYER,
        title=_title("Market Box Pickup Skipped"),
        message=lambda d: (
            f"{_vendor(d, 'Your vendor')} is skipping the "
            f"{_clause(d.offering_name, '{} ')}market box pickup on "
            f"{d.pickup_date or 'an upcoming date'}."
            f"{_clause(d.reason, ' Reason: {}')} "
            "Your subscription has been extended by one week."
        ),
        action_url=_link("buyer/subscriptions"),
    ),
    # ── Vendor-facing ────────────────────────────────────────────────
    NotificationType.NEW_PAID_ORDER: NotificationTypeConfig(
        urgency=NotificationUrgency.IMMEDIATE,
        audience=NotificationAudience.VENDOR,
        title=_title("New Order Received"),
        message=lambda d: (
            f"{_buyer(d)} placed {_order(d)}{_clause(d.item_title, ' for {}')}."
            f"{_clause(d.market_name, ' Pickup at {}')}"
            f"{_clause(d.pickup_date, ' on {}')}"
            f"{'.' if d.market_name or d.pickup_date else ''}"
        ),
        action_url=_link("vendor/dashboard"),
    ),
    NotificationType.ORDER_CANCELLED_BY_BUYER: NotificationTypeConfig(
        urgency=NotificationUrgency.STANDARD,
        audience=NotificationAudience.VENDOR,
        title=_title("Order Cancelled by Customer"),
        message=lambda d: (
            f"{_buyer(d)} cancelled {_order(d)}{_clause(d.item_title, ' for {}')}."
            f"{_clause(d.reason, ' Reason: {}')}"
        ),
        action_url=_link("vendor/dashboard"),
    ),
    NotificationType.VENDOR_APPROVED: NotificationTypeConfig(
        urgency=NotificationUrgency.STANDARD,
        audience=NotificationAudience.VENDOR,
        title=_title("Vendor Application Approved!"),
        message=lambda d: (
            "Congratulations! Your vendor application has been approved. "
            "You can now start listing products."
        ),
        action_url=_link("vendor/dashboard"),
    ),
    NotificationType.VENDOR_REJECTED: NotificationTypeConfig(
        urgency=NotificationUrgency.STANDARD,
        audience=NotificationAudience.VENDOR,
        title=_title("Vendor Application Update"),
        message=lambda d: (
            "Your vendor application was not approved at this time."
            f"{_clause(d.reason, ' Reason: {}')} "
            "You may reapply after addressing any issues."
        ),
        action_url=_link("vendor-signup"),
    ),
    NotificationType.MARKET_APPROVED: NotificationTypeConfig(
        urgency=NotificationUrgency.STANDARD,
        audience=NotificationAudience.VENDOR,
        title=_title("Market Approved!"),
        message=lambda d: (
            f"Your market{_clause(_quoted(d.market_name), ' {}')} "
            "has been approved and is now live."
        ),
        action_url=_link("vendor/dashboard"),
    ),
    NotificationType.MARKET_REJECTED: NotificationTypeConfig(
        urgency=NotificationUrgency.STANDARD,
        audience=NotificationAudience.VENDOR,
        title=_title("Market Submission Update"),
        message=lambda d: (
            f"Your market{_clause(_quoted(d.market_name), ' {}')} was not approved."
            f"{_clause(d.reason, ' Reason: {}')} "
            "You can update the details and submit it again."
        ),
        action_url=_link("vendor/markets"),
    ),
    NotificationType.PICKUP_CONFIRMATION_NEEDED: NotificationTypeConfig(
        urgency=NotificationUrgency.IMMEDIATE,
        audience=NotificationAudience.VENDOR,
        title=_title("Pickup Confirmation Needed"),
        message=lambda d: (
            f"{_buyer(d)} says they've picked up {_order(d)}. "
            "Please confirm within 30 seconds."
        ),
        action_url=_link("vendor/dashboard"),
    ),
    NotificationType.PICKUP_ISSUE_REPORTED: NotificationTypeConfig(
        urgency=NotificationUrgency.URGENT,
        audience=NotificationAudience.VENDOR,
        title=_title("Pickup Issue Reported"),
        message=lambda d: (
            f"An issue was reported for {_order(d)}."
            f"{_clause(d.reason, ' Details: {}')} Please check your dashboard."
        ),
        action_url=_link("vendor/dashboard"),
    ),
    NotificationType.INVENTORY_LOW_STOCK: NotificationTypeConfig(
        urgency=NotificationUrgency.INFO,
        audience=NotificationAudience.VENDOR,
        title=_title("Low Stock Warning"),
        message=lambda d: (
            f"{_listing(d)} "
            "is running low"
            f"{_clause(d.quantity, ', {} remaining')}."
        ),
        action_url=_link("vendor/listings"),
    ),
    NotificationType.INVENTORY_OUT_OF_STOCK: NotificationTypeConfig(
        urgency=NotificationUrgency.STANDARD,
        audience=NotificationAudience.VENDOR,
        title=_title("Item Out of Stock"),
        message=lambda d: (
            f"{_listing(d)} "
            "is now out of stock. Update your listing to restock."
        ),
        action_url=_link("vendor/listings"),
    ),
    NotificationType.PAYOUT_PROCESSED: NotificationTypeConfig(
        urgency=NotificationUrgency.INFO,
        audience=NotificationAudience.VENDOR,
        title=_title("Payout Processed"),
        message=lambda d: (
            f"A payout{_amount_clause(d, ' of {}')} has been sent to your account."
        ),
        action_url=_link("vendor/dashboard"),
    ),
    NotificationType.PAYOUT_FAILED: NotificationTypeConfig(
        urgency=NotificationUrgency.STANDARD,
        audience=NotificationAudience.VENDOR,
        title=_title("Payout Failed"),
        message=lambda d: (
            f"A payout{_amount_clause(d, ' of {}')}"
            f"{_clause(d.order_number, ' for order #{}')} "
            "could not be sent to your account."
            f"{_clause(d.reason, ' Reason: {}')} "
            "Please check your payout settings."
        ),
        action_url=_link("vendor/dashboard"),
    ),
    NotificationType.VENDOR_QUALITY_ALERT: NotificationTypeConfig(
        urgency=NotificationUrgency.STANDARD,
        audience=NotificationAudience.VENDOR,
        title=lambda d: (
            f"{d.findings_count} Listing Issue{'s' if d.findings_count != 1 else ''} Found"
            if d.findings_count is not None
            else "Listing Issues Found"
        ),
        message=lambda d: (
            "Our quality check found items that need your attention."
            f"{_findings(d)}"
        ),
        action_url=_link("vendor/dashboard"),
    ),
    NotificationType.SUBSCRIPTION_UPGRADED: NotificationTypeConfig(
        urgency=NotificationUrgency.INFO,
        audience=NotificationAudience.VENDOR,
        title=_title("Subscription Upgraded"),
        message=lambda d: (
            "Your subscription has been upgraded"
            f"{_clause(d.tier and d.tier.title(), ' to the {} plan')}. "
            "Your new limits are active now."
        ),
        action_url=_link("vendor/dashboard"),
    ),
    NotificationType.SUBSCRIPTION_PAYMENT_FAILED: NotificationTypeConfig(
        urgency=NotificationUrgency.URGENT,
        audience=NotificationAudience.VENDOR,
        title=_title("Subscription Payment Failed"),
        message=lambda d: (
            f"We couldn't process your subscription payment"
            f"{_amount_clause(d, ' of {}')}. "
            "Please update your payment method to keep your plan active."
        ),
        action_url=_link("vendor/dashboard"),
    ),
    # ── Admin-facing ─────────────────────────────────────────────────
    NotificationType.NEW_VENDOR_APPLICATION: NotificationTypeConfig(
        urgency=NotificationUrgency.STANDARD,
        audience=NotificationAudience.ADMIN,
        title=_title("New Vendor Application"),
        message=lambda d: (
            f"{_vendor(d, 'A new vendor')} has submitted an application for review."
        ),
        action_url=_link("admin/vendors"),
    ),
    NotificationType.NEW_MARKET_APPLICATION: NotificationTypeConfig(
        urgency=NotificationUrgency.STANDARD,
        audience=NotificationAudience.ADMIN,
        title=_title("New Market Submission"),
        message=lambda d: (
            f"{_vendor(d, 'A vendor')} submitted "
            f"{_market_ref(d)} "
            "for approval."
        ),
        action_url=_link("admin/markets"),
    ),
    NotificationType.ISSUE_DISPUTED: NotificationTypeConfig(
        urgency=NotificationUrgency.URGENT,
        audience=NotificationAudience.ADMIN,
        title=_title("Order Issue Disputed"),
        message=lambda d: (
            f"{_vendor(d, 'A vendor')} disputed the buyer's issue report on "
            f"{_order(d)} and confirmed delivery. Please review."
        ),
        action_url=_link("admin/orders"),
    ),
    NotificationType.FEEDBACK_SUBMITTED: NotificationTypeConfig(
        urgency=NotificationUrgency.INFO,
        audience=NotificationAudience.ADMIN,
        title=_title("New Feedback Submitted"),
        message=lambda d: (
            f"{d.buyer_name or d.vendor_name or 'A user'} submitted new feedback."
            f"{_clause(d.reason, ' Topic: {}')}"
        ),
        action_url=_link("admin/feedback"),
    ),
}

_missing = set(NotificationType) - set(_REGISTRY)
if _missing:
    raise RuntimeError(
        f"Notification registry is missing types: {sorted(t.value for t in _missing)}"
    )

NOTIFICATION_REGISTRY: Mapping[NotificationType, NotificationTypeConfig] = (
    MappingProxyType(_REGISTRY)
)


def get_config(
    notification_type: Union[NotificationType, str],
) -> NotificationTypeConfig:
    """Get the config for a notification type.

    Args:
        notification_type: Enum member or its string tag.

    Returns:
        NotificationTypeConfig for the type.

    Raises:
        UnknownNotificationTypeError: The tag is not a known type.
    """
    try:
        key = NotificationType(notification_type)
    except ValueError as e:
        raise UnknownNotificationTypeError(notification_type) from e
    return NOTIFICATION_REGISTRY[key]


def get_channels_for_urgency(
    urgency: NotificationUrgency,
) -> Tuple[NotificationChannel, ...]:
    """Fixed channel list for an urgency, in attempt order."""
    return URGENCY_CHANNELS[NotificationUrgency(urgency)]


def render(
    notification_type: Union[NotificationType, str],
    data: NotificationTemplateData,
    vertical: Optional[str] = None,
) -> RenderedNotification:
    """Render title, message and action URL for a type in one call.

    Raises:
        UnknownNotificationTypeError: The tag is not a known type.
    """
    config = get_config(notification_type)
    return RenderedNotification(
        title=config.title(data),
        message=config.message(data),
        action_url=config.action_url(data, vertical),
    )
