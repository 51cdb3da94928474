"""Operation result types and status enums.

Standardized result types for calls to external collaborators, including
the status enum, the result dataclass and HTTP error classifiers.
"""

from infrastructure.operations.classifiers import (
    classify_http_response,
    classify_request_error,
)
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
    "classify_http_response",
    "classify_request_error",
]
