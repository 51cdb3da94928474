"""Error classifiers for HTTP calls.

Converts ``requests`` exceptions and non-2xx responses into standardized
OperationResult objects so every HTTP collaborator reports failures the
same way.

Usage:
    from infrastructure.operations.classifiers import (
        classify_http_response,
        classify_request_error,
    )

    try:
        response = session.post(url, json=payload, timeout=30)
    except requests.RequestException as exc:
        return classify_request_error(exc)
    if not response.ok:
        return classify_http_response(response)
"""

from typing import Any, Optional

import requests

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

DEFAULT_RETRY_AFTER = 60


def _retry_after_seconds(response: requests.Response) -> Optional[int]:
    header_value = response.headers.get("Retry-After")
    if not header_value:
        return None
    try:
        return int(header_value)
    except (ValueError, TypeError):
        return DEFAULT_RETRY_AFTER


def extract_error_message(response: requests.Response) -> str:
    """Best-effort human-readable error from a failed response.

    Looks for ``error``, ``message`` or ``errors[0].message`` in a JSON body
    and falls back to ``HTTP <status>: <reason>``.
    """
    fallback = f"HTTP {response.status_code}: {response.reason or ''}".strip()
    try:
        body: Any = response.json()
    except ValueError:
        return fallback

    if isinstance(body, dict):
        if isinstance(body.get("error"), str):
            return body["error"]
        if isinstance(body.get("message"), str):
            return body["message"]
        errors = body.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            message = errors[0].get("message")
            if isinstance(message, str):
                return message
    return fallback


def classify_http_response(response: requests.Response) -> OperationResult:
    """Classify a non-2xx response into an OperationResult.

    Status Code Mapping:
    - 401/403: UNAUTHORIZED
    - 404: NOT_FOUND
    - 429: TRANSIENT_ERROR with retry_after
    - 5xx: TRANSIENT_ERROR (retry_after when the server sends one)
    - other 4xx: PERMANENT_ERROR
    """
    status_code = response.status_code
    message = extract_error_message(response)
    error_code = f"HTTP_{status_code}"

    if status_code in (401, 403):
        return OperationResult.error(
            OperationStatus.UNAUTHORIZED, message, error_code=error_code
        )

    if status_code == 404:
        return OperationResult.error(
            OperationStatus.NOT_FOUND, message, error_code=error_code
        )

    if status_code == 429:
        return OperationResult.transient_error(
            message,
            error_code="RATE_LIMITED",
            retry_after=_retry_after_seconds(response) or DEFAULT_RETRY_AFTER,
        )

    if 500 <= status_code < 600:
        return OperationResult.transient_error(
            message,
            error_code=error_code,
            retry_after=_retry_after_seconds(response),
        )

    if 400 <= status_code < 500:
        return OperationResult.permanent_error(message, error_code=error_code)

    return OperationResult.transient_error(
        f"Unexpected status code: {status_code}", error_code=error_code
    )


def classify_request_error(exc: Exception) -> OperationResult:
    """Classify an exception raised while sending a request.

    Timeouts and connection failures are transient; anything else raised by
    ``requests`` (invalid URL, too many redirects, ...) is permanent.
    """
    if isinstance(exc, requests.Timeout):
        return OperationResult.transient_error(
            f"Request timeout: {exc}", error_code="TIMEOUT"
        )

    if isinstance(exc, requests.ConnectionError):
        return OperationResult.transient_error(
            f"Connection error: {exc}", error_code="CONNECTION_ERROR"
        )

    return OperationResult.permanent_error(
        f"Request failed: {type(exc).__name__}: {exc}",
        error_code="REQUEST_ERROR",
    )
