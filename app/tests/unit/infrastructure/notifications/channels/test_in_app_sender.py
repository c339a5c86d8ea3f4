"""Unit tests for InAppSender."""

import pytest

from infrastructure.notifications.channels.in_app import InAppSender
from infrastructure.notifications.models import NotificationChannel


@pytest.mark.unit
class TestInAppSender:
    """Tests for InAppSender implementation."""

    @pytest.fixture
    def sender(self, notification_store):
        return InAppSender(notification_store)

    def test_channel(self, sender):
        """Channel returns in_app."""
        assert sender.channel == NotificationChannel.IN_APP

    @pytest.mark.asyncio
    async def test_send_inserts_row(self, sender, notification_store, outbound_message):
        """A send inserts one row carrying the rendered content."""
        result = await sender.send(outbound_message)

        assert result.success is True
        assert result.skipped is False
        rows = notification_store.records
        assert len(rows) == 1
        assert rows[0].user_id == "user-1"
        assert rows[0].type == "order_ready"
        assert rows[0].title == "Order Ready for Pickup"
        assert rows[0].message == outbound_message.message
        assert result.message_id == rows[0].id

    @pytest.mark.asyncio
    async def test_row_data_includes_action_url(
        self, sender, notification_store, outbound_message
    ):
        """Stored data is the template data plus the action URL."""
        await sender.send(outbound_message)

        data = notification_store.records[0].data
        assert data["orderNumber"] == "FM-1001"
        assert data["actionUrl"] == "/farmers_market/buyer/orders"

    @pytest.mark.asyncio
    async def test_repeated_sends_create_separate_rows(
        self, sender, notification_store, outbound_message
    ):
        """No de-duplication: each send is a new row with a new id."""
        first = await sender.send(outbound_message)
        second = await sender.send(outbound_message)

        assert first.message_id != second.message_id
        assert len(notification_store.records) == 2

    @pytest.mark.asyncio
    async def test_store_error_becomes_failed_result(
        self, failing_store, outbound_message
    ):
        """A store error result is reported as a failed channel result."""
        sender = InAppSender(failing_store)

        result = await sender.send(outbound_message)

        assert result.success is False
        assert result.error == "Database unavailable"
        assert result.message_id is None

    @pytest.mark.asyncio
    async def test_store_exception_becomes_failed_result(
        self, raising_store, outbound_message
    ):
        """An exception from the store does not escape the sender."""
        sender = InAppSender(raising_store)

        result = await sender.send(outbound_message)

        assert result.success is False
        assert "reset by peer" in result.error

    def test_health_check(self, sender):
        result = sender.health_check()

        assert result.is_success
        assert result.data["store"] == "InMemoryNotificationStore"
