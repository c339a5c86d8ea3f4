"""Persistence layer for the notification subsystem.

Provides the two collaborators the dispatcher depends on:
- NotificationStore: writes in-app notification rows
- ProfileStore: reads user profiles (preferences, contact points, tiers)

In-memory implementations back the default service wiring and tests; a
relational or document store satisfies the same interfaces.
"""

from infrastructure.persistence.models import NotificationRecord, UserProfile
from infrastructure.persistence.stores import NotificationStore, ProfileStore
from infrastructure.persistence.memory import (
    InMemoryNotificationStore,
    InMemoryProfileStore,
)

__all__ = [
    "NotificationRecord",
    "UserProfile",
    "NotificationStore",
    "ProfileStore",
    "InMemoryNotificationStore",
    "InMemoryProfileStore",
]
