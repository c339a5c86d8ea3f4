"""Unit tests for notification models."""

import pytest
from pydantic import ValidationError

from infrastructure.notifications.models import (
    DEFAULT_PREFERENCES,
    ChannelResult,
    NotificationChannel,
    NotificationResult,
    NotificationTemplateData,
    NotificationType,
    UserPreferences,
)


@pytest.mark.unit
class TestNotificationType:
    def test_closed_set_of_types(self):
        assert len(NotificationType) == 28

    def test_string_values(self):
        assert NotificationType("order_ready") is NotificationType.ORDER_READY
        assert NotificationType.PAYOUT_FAILED.value == "payout_failed"


@pytest.mark.unit
class TestNotificationTemplateData:
    def test_accepts_camel_case(self):
        data = NotificationTemplateData.model_validate(
            {"orderNumber": "FM-1", "amountCents": 2500}
        )

        assert data.order_number == "FM-1"
        assert data.amount_cents == 2500

    def test_accepts_snake_case(self):
        data = NotificationTemplateData(order_number="FM-1")

        assert data.order_number == "FM-1"

    def test_keeps_unknown_fields(self):
        data = NotificationTemplateData.model_validate({"boothNumber": "12"})

        assert data.to_record_data() == {"boothNumber": "12"}

    def test_to_record_data_is_camel_case_without_nones(self):
        data = NotificationTemplateData(order_number="FM-1", vendor_name="Green Acres")

        assert data.to_record_data() == {
            "orderNumber": "FM-1",
            "vendorName": "Green Acres",
        }

    def test_numbers_accepted_for_text_fields(self):
        data = NotificationTemplateData.model_validate(
            {"orderNumber": 12345, "orderId": 7}
        )

        assert data.order_number == "12345"
        assert data.order_id == "7"

    def test_fractional_amount_accepted(self):
        data = NotificationTemplateData.model_validate({"amountCents": 1999.5})

        assert data.amount_cents == 1999.5

    def test_integer_amount_kept_as_int(self):
        data = NotificationTemplateData.model_validate({"amountCents": 2500})

        assert data.to_record_data() == {"amountCents": 2500}
        assert isinstance(data.amount_cents, int)

    def test_rejects_wrong_types(self):
        with pytest.raises(ValidationError):
            NotificationTemplateData.model_validate({"amountCents": "lots"})

    def test_is_frozen(self):
        data = NotificationTemplateData(order_number="FM-1")

        with pytest.raises(ValidationError):
            data.order_number = "FM-2"


@pytest.mark.unit
class TestUserPreferences:
    def test_defaults(self):
        assert DEFAULT_PREFERENCES.email_order_updates is True
        assert DEFAULT_PREFERENCES.email_marketing is False
        assert DEFAULT_PREFERENCES.sms_order_updates is False
        assert DEFAULT_PREFERENCES.sms_marketing is False
        assert DEFAULT_PREFERENCES.push_enabled is False

    def test_ignores_unknown_keys(self):
        prefs = UserPreferences.model_validate({"push_enabled": True, "fax": True})

        assert prefs.push_enabled is True
        assert not hasattr(prefs, "fax")


@pytest.mark.unit
class TestChannelResult:
    def test_sent(self):
        result = ChannelResult.sent(NotificationChannel.IN_APP, message_id="n-1")

        assert result.success is True
        assert result.skipped is False
        assert result.message_id == "n-1"

    def test_failed(self):
        result = ChannelResult.failed(NotificationChannel.EMAIL, "bounced")

        assert result.success is False
        assert result.error == "bounced"

    def test_skip_is_not_an_error(self):
        result = ChannelResult.skip(NotificationChannel.SMS, "opted out")

        assert result.success is True
        assert result.skipped is True
        assert result.reason == "opted out"
        assert result.error is None


@pytest.mark.unit
class TestNotificationResult:
    def test_for_channel(self):
        push = ChannelResult.skip(NotificationChannel.PUSH, "off")
        in_app = ChannelResult.sent(NotificationChannel.IN_APP, "n-1")
        result = NotificationResult(
            notification_type="order_ready", channels=[push, in_app]
        )

        assert result.for_channel(NotificationChannel.IN_APP) is in_app
        assert result.for_channel(NotificationChannel.SMS) is None

    def test_delivered_channels_excludes_skips_and_failures(self):
        result = NotificationResult(
            notification_type="order_cancelled_by_vendor",
            channels=[
                ChannelResult.skip(NotificationChannel.SMS, "off"),
                ChannelResult.failed(NotificationChannel.EMAIL, "bounced"),
                ChannelResult.sent(NotificationChannel.IN_APP, "n-1"),
            ],
        )

        assert result.delivered_channels == [NotificationChannel.IN_APP]
