"""Fixtures for channel sender tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from infrastructure.operations import OperationResult
from infrastructure.persistence import NotificationStore
from tests.factories.notifications import make_outbound_message


@pytest.fixture
def outbound_message():
    """Rendered order_ready message with email and phone resolved."""
    return make_outbound_message()


@pytest.fixture
def failing_store():
    """Notification store whose insert returns a transient error."""
    store = MagicMock(spec=NotificationStore)
    store.insert_notification = AsyncMock(
        return_value=OperationResult.transient_error(
            "Database unavailable", error_code="DB_UNAVAILABLE"
        )
    )
    return store


@pytest.fixture
def raising_store():
    """Notification store whose insert raises."""
    store = MagicMock(spec=NotificationStore)
    store.insert_notification = AsyncMock(side_effect=ConnectionError("reset by peer"))
    return store
