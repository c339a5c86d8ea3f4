"""Context binding for structured logging.

Binds notification-scoped context (recipient, notification type, vertical)
to every log entry emitted while one send is in flight. Context lives in
structlog's contextvars, so concurrent sends in one event loop each see
their own values.

Usage:
    from infrastructure.logging import bind_notification_context

    with bind_notification_context(user_id="u1", notification_type="order_ready"):
        logger.info("dispatching")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Optional, Any, Generator
import structlog


@contextmanager
def bind_notification_context(
    user_id: Optional[str] = None,
    notification_type: Optional[str] = None,
    vertical: Optional[str] = None,
    correlation_id: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind notification-scoped context to all logs within the block.

    Args:
        user_id: Recipient user profile id.
        notification_type: Notification type tag being sent.
        vertical: Marketplace vertical the notification belongs to.
        correlation_id: Identifier shared by all logs of one send.
            Auto-generated if not provided.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        None - context is bound to structlog's context vars.
    """
    context: dict[str, Any] = {
        "correlation_id": correlation_id or str(uuid.uuid4()),
    }

    if user_id is not None:
        context["user_id"] = user_id

    if notification_type is not None:
        context["notification_type"] = notification_type

    if vertical is not None:
        context["vertical"] = vertical

    context.update(extra_context)

    tokens = structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.reset_contextvars(**tokens)


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context."""
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")


def clear_notification_context() -> None:
    """Clear all bound context from the logging context."""
    structlog.contextvars.clear_contextvars()
