"""Recipient preference resolution.

Resolves, for one recipient of one send:
- channel opt-ins (stored preferences merged over the defaults)
- contact points (caller-supplied first, profile second)
- vendor tier for tier-gated verticals

Preference lookup never fails a send. Any store error, missing profile or
malformed stored preferences falls back to DEFAULT_PREFERENCES.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError

from infrastructure.logging import get_module_logger
from infrastructure.notifications.models import (
    DEFAULT_PREFERENCES,
    NotificationChannel,
    SendOptions,
    UserPreferences,
)
from infrastructure.persistence import ProfileStore, UserProfile

logger = get_module_logger()

# Channels each vendor tier may use on tier-gated verticals
TIER_NOTIFICATION_CHANNELS: Dict[str, Tuple[NotificationChannel, ...]] = {
    "free": (NotificationChannel.IN_APP,),
    "basic": (NotificationChannel.IN_APP,),
    "pro": (
        NotificationChannel.IN_APP,
        NotificationChannel.PUSH,
        NotificationChannel.EMAIL,
    ),
    "boss": (
        NotificationChannel.IN_APP,
        NotificationChannel.PUSH,
        NotificationChannel.EMAIL,
        NotificationChannel.SMS,
    ),
}


@dataclass(frozen=True)
class RecipientContext:
    """Everything the dispatcher needs to know about one recipient."""

    preferences: UserPreferences = field(default_factory=lambda: DEFAULT_PREFERENCES)
    email: Optional[str] = None
    phone: Optional[str] = None
    tier: Optional[str] = None


def should_send_channel(
    channel: NotificationChannel, preferences: UserPreferences
) -> bool:
    """Per-channel opt-in check. In-app is never gated."""
    if channel == NotificationChannel.IN_APP:
        return True
    if channel == NotificationChannel.EMAIL:
        return preferences.email_order_updates
    if channel == NotificationChannel.SMS:
        return preferences.sms_order_updates
    if channel == NotificationChannel.PUSH:
        return preferences.push_enabled
    return False


def channels_for_tier(tier: str) -> Tuple[NotificationChannel, ...]:
    """Allowed channels for a vendor tier. Unknown tiers behave as free."""
    return TIER_NOTIFICATION_CHANNELS.get(
        (tier or "").lower(), TIER_NOTIFICATION_CHANNELS["free"]
    )


def filter_channels_for_tier(
    channels: Iterable[NotificationChannel], tier: Optional[str]
) -> List[NotificationChannel]:
    """Drop channels the tier does not include, preserving order.

    A recipient without a tier (None or empty) is not gated.
    """
    channels = list(channels)
    if not tier:
        return channels
    allowed = channels_for_tier(tier)
    return [ch for ch in channels if ch in allowed]


def merge_preferences(stored: Optional[dict]) -> UserPreferences:
    """Overlay stored preferences on the defaults.

    Unknown keys are ignored; values that do not validate discard the whole
    stored record in favour of the defaults.
    """
    if not stored:
        return DEFAULT_PREFERENCES
    try:
        return UserPreferences.model_validate(
            {**DEFAULT_PREFERENCES.model_dump(), **stored}
        )
    except ValidationError as e:
        logger.warning(
            "stored_preferences_invalid",
            error=str(e),
            keys=sorted(stored.keys()),
        )
        return DEFAULT_PREFERENCES


class PreferenceResolver:
    """Builds a RecipientContext from the profile store.

    Attributes:
        profile_store: Source of user profiles
        tier_gated_verticals: Verticals where vendor tier restricts channels
    """

    def __init__(
        self,
        profile_store: ProfileStore,
        tier_gated_verticals: Optional[List[str]] = None,
    ):
        self.profile_store = profile_store
        self.tier_gated_verticals = list(tier_gated_verticals or [])

    async def resolve(
        self,
        user_id: str,
        options: SendOptions,
        vertical: str,
        profile: Optional[UserProfile] = None,
        prefetched: bool = False,
    ) -> RecipientContext:
        """Resolve the recipient context for one send.

        Args:
            user_id: Recipient user profile id.
            options: Caller-supplied options (contact points win over profile).
            vertical: Effective vertical of the send.
            profile: Profile already fetched by the caller (batch sends).
            prefetched: True when `profile` came from a batch pre-fetch, in
                which case None means "no profile" and the store is not
                queried again.

        Returns:
            RecipientContext; defaults when the profile is unavailable.
        """
        if profile is None and not prefetched:
            profile = await self._fetch_profile(user_id)

        if profile is None:
            return RecipientContext(
                preferences=DEFAULT_PREFERENCES,
                email=options.user_email,
                phone=options.user_phone,
            )

        tier = None
        if vertical in self.tier_gated_verticals:
            tier = profile.vendor_tiers.get(vertical)

        return RecipientContext(
            preferences=merge_preferences(profile.notification_preferences),
            email=options.user_email or profile.email,
            phone=options.user_phone or profile.phone,
            tier=tier,
        )

    async def prefetch(self, user_ids: List[str]) -> Optional[Dict[str, UserProfile]]:
        """Fetch profiles for a batch in one store call.

        Returns:
            Dict of user id -> profile, or None if the batch fetch failed and
            each send should resolve its own profile.
        """
        try:
            result = await self.profile_store.get_profiles(user_ids)
        except Exception as e:
            logger.warning(
                "profile_prefetch_failed",
                user_count=len(user_ids),
                error=str(e),
                exc_info=True,
            )
            return None

        if not result.is_success:
            logger.warning(
                "profile_prefetch_failed",
                user_count=len(user_ids),
                error=result.message,
                error_code=result.error_code,
            )
            return None

        return dict(result.data or {})

    async def _fetch_profile(self, user_id: str) -> Optional[UserProfile]:
        try:
            result = await self.profile_store.get_profile(user_id)
        except Exception as e:
            logger.warning(
                "preference_fetch_failed",
                user_id=user_id,
                error=str(e),
                exc_info=True,
            )
            return None

        if not result.is_success:
            logger.info(
                "preference_fetch_defaulted",
                user_id=user_id,
                status=result.status.value,
                reason=result.message,
            )
            return None

        return result.data
