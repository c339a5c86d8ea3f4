"""Channel sender implementations."""

from infrastructure.notifications.channels.base import ChannelSender
from infrastructure.notifications.channels.email import (
    EmailBranding,
    EmailSender,
    format_email_html,
    get_branding,
)
from infrastructure.notifications.channels.in_app import InAppSender
from infrastructure.notifications.channels.push import PushSender, build_push_payload
from infrastructure.notifications.channels.sms import SmsSender

__all__ = [
    "ChannelSender",
    "EmailBranding",
    "EmailSender",
    "format_email_html",
    "get_branding",
    "InAppSender",
    "PushSender",
    "build_push_payload",
    "SmsSender",
]
