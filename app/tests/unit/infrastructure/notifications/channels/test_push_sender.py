"""Unit tests for PushSender."""

import pytest

from infrastructure.notifications.channels.push import PushSender, build_push_payload
from infrastructure.notifications.models import NotificationChannel
from tests.factories.notifications import make_outbound_message


@pytest.mark.unit
class TestPushSender:
    """Tests for PushSender implementation."""

    @pytest.fixture
    def sender(self, notification_settings):
        return PushSender(settings=notification_settings)

    def test_channel(self, sender):
        assert sender.channel == NotificationChannel.PUSH

    def test_payload(self):
        message = make_outbound_message(
            title="New Order Received",
            message="A customer placed order #FM-1001.",
            action_url="/food_trucks/vendor/dashboard",
        )

        assert build_push_payload(message) == {
            "title": "New Order Received",
            "body": "A customer placed order #FM-1001.",
            "url": "/food_trucks/vendor/dashboard",
            "tag": "notification",
        }

    @pytest.mark.asyncio
    async def test_send_is_skipped_until_integrated(self, sender, outbound_message):
        result = await sender.send(outbound_message)

        assert result.channel == NotificationChannel.PUSH
        assert result.success is True
        assert result.skipped is True
        assert result.reason == "push service not integrated"

    def test_health_check(self, sender):
        result = sender.health_check()

        assert result.is_success
        assert result.data == {"integrated": False}
