"""Operation result types and status enums.

Standardized result types returned by the persistence stores and channel
health checks of the notification subsystem.
"""

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
]
