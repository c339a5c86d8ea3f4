"""Custom log processors for structured logging.

Notification logs routinely carry recipient contact points (email
addresses, phone numbers) and rendered message bodies. The processors here
keep both out of log output in full.

Usage:
    from infrastructure.logging.formatters import mask_contact_points
"""

from typing import Any


def add_app_info(app_name: str, app_version: str = "unknown"):
    """Create a processor that adds application info to log entries.

    Args:
        app_name: Name of the application.
        app_version: Version string for the application.

    Returns:
        A structlog processor function.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict["app_name"] = app_name
        event_dict["app_version"] = app_version
        return event_dict

    return processor


# Key fragments whose values identify how to reach a recipient
CONTACT_PATTERNS = frozenset(
    {
        "email",
        "phone",
        "recipient",
        "endpoint",
        "p256dh",
        "auth",
        "api_key",
        "secret",
        "token",
    }
)


def _mask(value: str) -> str:
    """Keep a short prefix so masked values stay distinguishable in logs."""
    if "@" in value:
        local, _, domain = value.partition("@")
        return f"{local[:1]}***@{domain}"
    if len(value) > 4:
        return f"***{value[-4:]}"
    return "***"


def mask_contact_points(additional_patterns: frozenset[str] | None = None):
    """Create a processor that masks recipient contact points.

    Keys containing any of CONTACT_PATTERNS (case-insensitive) have their
    string values partially masked: `jane@example.com` becomes
    `j***@example.com` and `+15555551234` becomes `***1234`.

    Args:
        additional_patterns: Extra key fragments to treat as contact points.

    Returns:
        A structlog processor function.

    Example:
        configure_logging(
            extra_processors=[mask_contact_points(frozenset({"address"}))]
        )
    """
    patterns = CONTACT_PATTERNS
    if additional_patterns:
        patterns = patterns | additional_patterns

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        masked_dict = {}
        for key, value in event_dict.items():
            key_lower = key.lower()
            if isinstance(value, str) and any(p in key_lower for p in patterns):
                masked_dict[key] = _mask(value)
            else:
                masked_dict[key] = value
        return masked_dict

    return processor


def truncate_large_values(max_length: int = 500):
    """Create a processor that truncates overly large string values.

    Rendered message bodies and email HTML can be long; this keeps a single
    log entry bounded.

    Args:
        max_length: Maximum string length before truncation.

    Returns:
        A structlog processor function.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = (
                    value[:max_length] + f"...[truncated, {len(value)} chars total]"
                )
        return event_dict

    return processor
