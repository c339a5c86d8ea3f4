"""Notification dispatch feature settings."""

from typing import List

from pydantic import Field, field_validator

from infrastructure.configuration.base import FeatureSettings


class NotificationSettings(FeatureSettings):
    """Configuration for the notification dispatcher and its channel senders.

    Environment Variables:
        DEFAULT_VERTICAL: Vertical used for action links when the caller
            supplies none (default: farmers_market)
        EMAIL_FROM_ADDRESS: Sender address used when building outbound email
        SMS_MAX_LENGTH: Maximum SMS body length before truncation
        TIER_GATED_VERTICALS: Comma-separated verticals whose vendor tier
            restricts the channels a notification may use
        BATCH_PREFETCH_PROFILES: Fetch all recipient profiles in one store
            call before a batch send

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        vertical = settings.notifications.DEFAULT_VERTICAL
        ```
    """

    DEFAULT_VERTICAL: str = Field(default="farmers_market", alias="DEFAULT_VERTICAL")
    EMAIL_FROM_ADDRESS: str = Field(
        default="noreply@mail.farmersmarketing.app", alias="EMAIL_FROM_ADDRESS"
    )
    SMS_MAX_LENGTH: int = Field(default=1600, alias="SMS_MAX_LENGTH")
    TIER_GATED_VERTICALS: str = Field(
        default="food_trucks", alias="TIER_GATED_VERTICALS"
    )
    BATCH_PREFETCH_PROFILES: bool = Field(
        default=True, alias="BATCH_PREFETCH_PROFILES"
    )

    @field_validator("SMS_MAX_LENGTH")
    @classmethod
    def validate_sms_max_length(cls, v: int) -> int:
        """SMS bodies need room for at least the truncation marker."""
        if v < 4:
            raise ValueError(f"SMS_MAX_LENGTH must be at least 4: {v}")
        return v

    @property
    def tier_gated_verticals(self) -> List[str]:
        """Verticals where vendor tier restricts notification channels."""
        return [v.strip() for v in self.TIER_GATED_VERTICALS.split(",") if v.strip()]
