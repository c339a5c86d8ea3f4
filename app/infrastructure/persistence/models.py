"""Persistence records for notifications and user profiles."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class NotificationRecord(BaseModel):
    """One in-app notification row.

    Attributes:
        id: Generated row id (None until the store assigns one)
        user_id: Recipient user profile id
        type: Notification type tag
        title: Rendered title
        message: Rendered message body
        data: Template data plus the rendered action URL
        created_at: Insert timestamp (UTC)
    """

    id: Optional[str] = None
    user_id: str
    type: str
    title: str
    message: str
    data: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class UserProfile(BaseModel):
    """User profile fields the dispatcher reads.

    Attributes:
        id: User profile primary key (not the auth provider id)
        email: Contact email, if known
        phone: Contact phone in E.164 format, if known
        notification_preferences: Raw per-channel opt-ins as stored;
            missing keys fall back to the dispatcher defaults
        vendor_tiers: Vendor subscription tier per vertical
            (e.g. {"food_trucks": "pro"})
    """

    id: str
    email: Optional[str] = None
    phone: Optional[str] = None
    notification_preferences: Optional[Dict[str, Any]] = None
    vendor_tiers: Dict[str, str] = Field(default_factory=dict)
