"""Operation status enumeration.

Status codes used to classify the outcome of calls to external
collaborators (the remote translator, the translation backend of the proxy)
so callers can decide between reporting, retrying and skipping.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        TRANSIENT_ERROR: Retryable error (network, timeout, rate limit, 5xx)
        PERMANENT_ERROR: Non-retryable error (bad request, malformed response)
        UNAUTHORIZED: Credentials rejected by the remote service
        NOT_FOUND: Remote endpoint not found
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
