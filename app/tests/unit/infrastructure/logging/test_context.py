"""Unit tests for infrastructure.logging.context module.

Tests cover:
- bind_notification_context() context manager
- get_correlation_id()
- clear_notification_context()
- Context isolation across concurrent sends
"""

import asyncio
import uuid

import pytest
import structlog
from infrastructure.logging.context import (
    bind_notification_context,
    clear_notification_context,
    get_correlation_id,
)


@pytest.fixture(autouse=True)
def clean_context():
    clear_notification_context()
    yield
    clear_notification_context()


@pytest.mark.unit
class TestBindNotificationContext:
    """Test suite for bind_notification_context context manager."""

    def test_auto_generates_correlation_id(self):
        """Correlation ID is auto-generated if not provided."""
        with bind_notification_context(user_id="u1"):
            correlation_id = get_correlation_id()
            assert correlation_id is not None
            uuid.UUID(correlation_id)

    def test_uses_provided_correlation_id(self):
        with bind_notification_context(correlation_id="batch-42"):
            assert get_correlation_id() == "batch-42"

    def test_binds_send_fields(self):
        with bind_notification_context(
            user_id="u1", notification_type="order_ready", vertical="fireworks"
        ):
            ctx = structlog.contextvars.get_contextvars()
            assert ctx["user_id"] == "u1"
            assert ctx["notification_type"] == "order_ready"
            assert ctx["vertical"] == "fireworks"

    def test_omits_none_fields(self):
        with bind_notification_context(user_id="u1"):
            ctx = structlog.contextvars.get_contextvars()
            assert "notification_type" not in ctx
            assert "vertical" not in ctx

    def test_binds_extra_context(self):
        with bind_notification_context(batch_size=3):
            assert structlog.contextvars.get_contextvars()["batch_size"] == 3

    def test_context_removed_after_block(self):
        with bind_notification_context(user_id="u1"):
            pass

        assert get_correlation_id() is None
        assert "user_id" not in structlog.contextvars.get_contextvars()

    def test_nested_blocks_restore_outer_values(self):
        with bind_notification_context(user_id="outer", correlation_id="c-outer"):
            with bind_notification_context(user_id="inner", correlation_id="c-inner"):
                assert get_correlation_id() == "c-inner"
            assert get_correlation_id() == "c-outer"
            assert structlog.contextvars.get_contextvars()["user_id"] == "outer"

    def test_context_removed_after_exception(self):
        with pytest.raises(ValueError):
            with bind_notification_context(user_id="u1"):
                raise ValueError("boom")

        assert "user_id" not in structlog.contextvars.get_contextvars()

    @pytest.mark.asyncio
    async def test_concurrent_sends_isolated(self):
        """Each task sees only its own bound user id."""
        seen = {}

        async def send(user_id):
            with bind_notification_context(user_id=user_id):
                await asyncio.sleep(0)
                seen[user_id] = structlog.contextvars.get_contextvars()["user_id"]

        await asyncio.gather(send("u1"), send("u2"), send("u3"))

        assert seen == {"u1": "u1", "u2": "u2", "u3": "u3"}


@pytest.mark.unit
class TestClearNotificationContext:
    def test_clears_everything(self):
        structlog.contextvars.bind_contextvars(user_id="u1", correlation_id="c1")

        clear_notification_context()

        assert structlog.contextvars.get_contextvars() == {}
