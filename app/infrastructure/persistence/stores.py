"""Store abstract base classes."""

from abc import ABC, abstractmethod
from typing import List

from infrastructure.operations import OperationResult
from infrastructure.persistence.models import NotificationRecord


class NotificationStore(ABC):
    """Write side of the in-app notifications table."""

    @abstractmethod
    async def insert_notification(self, record: NotificationRecord) -> OperationResult:
        """Insert one notification row.

        Args:
            record: Row to insert; `id` is ignored and generated by the store.

        Returns:
            OperationResult with data {"id": <generated id>} on success.
        """
        pass


class ProfileStore(ABC):
    """Read side of the user profile table."""

    @abstractmethod
    async def get_profile(self, user_id: str) -> OperationResult:
        """Fetch one profile by user profile id.

        Returns:
            OperationResult with a UserProfile in `data`, or NOT_FOUND.
        """
        pass

    @abstractmethod
    async def get_profiles(self, user_ids: List[str]) -> OperationResult:
        """Fetch several profiles in one call.

        Returns:
            OperationResult with a dict of user id -> UserProfile in `data`.
            Ids with no profile are absent from the dict.
        """
        pass
