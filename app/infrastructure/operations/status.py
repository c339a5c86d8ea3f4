"""Operation status enumeration."""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for store and provider operations.

    Attributes:
        SUCCESS: Operation completed successfully
        TRANSIENT_ERROR: Store or provider temporarily unavailable
        PERMANENT_ERROR: Rejected write, invalid input, misconfiguration
        NOT_FOUND: Requested record does not exist
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    NOT_FOUND = "not_found"
