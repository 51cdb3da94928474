"""HTTP client for the remote translation service.

The service takes a translation tree and a target language and returns the
same tree with its leaves translated:

    POST <url>
    {"data": {...}, "targetLanguage": "fr", "apiToken": "...", "accountId": "..."}

    200 {"translatedData": {...}, ...}

Any other status, or a body without a valid ``translatedData`` tree, is a
failure. Failures are returned as OperationResult values, never raised.

Usage:
    from infrastructure.i18n.client import RemoteTranslator

    translator = RemoteTranslator(credentials={"apiToken": t, "accountId": a})
    result = translator.translate({"welcome": "Welcome"}, "fr")
    if result.is_success:
        tree = result.data
"""

import time
from typing import Any, Dict, Optional

import requests

from core.config import DEFAULT_TRANSLATOR_URL, TranslatorSettings
from core.logging import get_module_logger
from infrastructure.i18n.exceptions import MalformedTreeError
from infrastructure.i18n.tree import TranslationTree, count_leaves, validate_tree
from infrastructure.operations import (
    OperationResult,
    classify_http_response,
    classify_request_error,
)

logger = get_module_logger()


class RemoteTranslator:
    """Client for the JSON-in/JSON-out translation service.

    One blocking request per call. Transient failures (timeouts, connection
    errors, 429 and 5xx) are retried up to ``max_retries`` times with linear
    backoff. A Retry-After sent by the server raises the delay, which is
    always capped at ``max_backoff``.

    Attributes:
        url: Translation endpoint.
        credentials: Extra body fields identifying the caller.
        timeout: Request timeout in seconds.
        max_retries: Additional attempts after a transient failure.
        backoff: Base delay in seconds between attempts.
    """

    def __init__(
        self,
        credentials: Dict[str, str],
        url: str = DEFAULT_TRANSLATOR_URL,
        timeout: int = 60,
        max_retries: int = 0,
        backoff: float = 2.0,
        max_backoff: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.url = url
        self.credentials = dict(credentials)
        self.timeout = timeout
        self.max_retries = max(0, max_retries)
        self.backoff = backoff
        self.max_backoff = max_backoff
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "User-Agent": "Tradux/1.0",
                "Content-Type": "application/json",
                "Accept": "application/json",
            }
        )
        self._logger = logger.bind(url=url)

    @classmethod
    def from_settings(
        cls, settings: TranslatorSettings, session: Optional[requests.Session] = None
    ) -> "RemoteTranslator":
        """Build a client from TranslatorSettings."""
        return cls(
            credentials=settings.credentials,
            url=settings.URL,
            timeout=settings.TIMEOUT_SECONDS,
            max_retries=settings.MAX_RETRIES,
            backoff=settings.RETRY_BACKOFF_SECONDS,
            session=session,
        )

    def translate(self, data: TranslationTree, target_language: str) -> OperationResult:
        """Translate every leaf of ``data`` into ``target_language``.

        Args:
            data: Translation tree to translate.
            target_language: Language code to translate into.

        Returns:
            OperationResult whose data is the translated tree on success.
        """
        log = self._logger.bind(
            language=target_language, leaf_count=count_leaves(data)
        )
        attempt = 0

        while True:
            attempt += 1
            log.debug("translation_request", attempt=attempt)
            result = self._send(data, target_language)

            if result.is_success or not result.is_transient:
                break
            if attempt > self.max_retries:
                log.warning(
                    "translation_retries_exhausted",
                    attempts=attempt,
                    error=result.message,
                )
                break

            delay = self._delay(attempt, result.retry_after)
            log.warning(
                "translation_retry_scheduled",
                attempt=attempt,
                delay_seconds=delay,
                error_code=result.error_code,
            )
            time.sleep(delay)

        if result.is_success:
            log.info("translation_received", attempts=attempt)
        else:
            log.error(
                "translation_request_failed",
                status=result.status.value,
                error_code=result.error_code,
                error=result.message,
            )
        return result

    def _delay(self, attempt: int, retry_after: Optional[int]) -> float:
        delay = self.backoff * attempt
        if retry_after is not None:
            delay = max(delay, float(retry_after))
        return min(delay, self.max_backoff)

    def _send(self, data: TranslationTree, target_language: str) -> OperationResult:
        payload: Dict[str, Any] = {
            "data": data,
            "targetLanguage": target_language,
            **self.credentials,
        }

        try:
            response = self._session.post(self.url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            return classify_request_error(e)

        if not 200 <= response.status_code < 300:
            return classify_http_response(response)

        return self._parse_body(response)

    def _parse_body(self, response: requests.Response) -> OperationResult:
        try:
            body = response.json()
        except ValueError:
            return OperationResult.permanent_error(
                "Translation service returned a non-JSON body",
                error_code="MALFORMED_RESPONSE",
            )

        if not isinstance(body, dict) or "translatedData" not in body:
            return OperationResult.permanent_error(
                "Translation service response has no translatedData",
                error_code="MALFORMED_RESPONSE",
            )

        translated = body["translatedData"]
        try:
            validate_tree(translated)
        except MalformedTreeError as e:
            return OperationResult.permanent_error(
                f"translatedData is not a translation tree: {e}",
                error_code="MALFORMED_RESPONSE",
            )

        return OperationResult.success(data=translated, message="translated")

    def close(self) -> None:
        self._session.close()
