"""In-memory store implementations.

Process-local, for single-instance deployments, local development and
tests. Rows are kept in insertion order.
"""

import uuid
from typing import Dict, List, Optional

import structlog
from infrastructure.operations import OperationResult
from infrastructure.persistence.models import NotificationRecord, UserProfile
from infrastructure.persistence.stores import NotificationStore, ProfileStore

logger = structlog.get_logger()


class InMemoryNotificationStore(NotificationStore):
    """Notification store holding rows in a list."""

    def __init__(self):
        self._records: List[NotificationRecord] = []

    async def insert_notification(self, record: NotificationRecord) -> OperationResult:
        stored = record.model_copy(update={"id": str(uuid.uuid4())})
        self._records.append(stored)
        logger.debug(
            "notification_row_inserted",
            notification_id=stored.id,
            user_id=stored.user_id,
            type=stored.type,
        )
        return OperationResult.success(
            data={"id": stored.id}, message="Notification row inserted"
        )

    @property
    def records(self) -> List[NotificationRecord]:
        """Copy of all inserted rows."""
        return list(self._records)

    def records_for_user(self, user_id: str) -> List[NotificationRecord]:
        return [r for r in self._records if r.user_id == user_id]


class InMemoryProfileStore(ProfileStore):
    """Profile store backed by a dict keyed by user profile id."""

    def __init__(self, profiles: Optional[List[UserProfile]] = None):
        self._profiles: Dict[str, UserProfile] = {
            p.id: p for p in (profiles or [])
        }

    def upsert(self, profile: UserProfile) -> None:
        self._profiles[profile.id] = profile

    async def get_profile(self, user_id: str) -> OperationResult:
        profile = self._profiles.get(user_id)
        if profile is None:
            return OperationResult.not_found(f"No profile for user {user_id}")
        return OperationResult.success(data=profile)

    async def get_profiles(self, user_ids: List[str]) -> OperationResult:
        found = {
            user_id: self._profiles[user_id]
            for user_id in user_ids
            if user_id in self._profiles
        }
        return OperationResult.success(
            data=found, message=f"Found {len(found)}/{len(user_ids)} profiles"
        )
