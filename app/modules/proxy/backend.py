"""Per-string translation backend used by the proxy.

Sends one string at a time to the Cloudflare Workers AI ``run`` endpoint of
a translation model and walks translation trees leaf by leaf.
"""

from typing import Any, Optional

import requests

from core.config import ProxySettings
from core.logging import get_module_logger
from infrastructure.operations import (
    OperationResult,
    classify_http_response,
    classify_request_error,
)

logger = get_module_logger()


def is_template(text: str) -> bool:
    """Strings holding ``{{placeholders}}`` are left untranslated."""
    return "{{" in text and "}}" in text


class CloudflareAITranslator:
    """Translate strings with a Workers AI translation model.

    Attributes:
        api_token: Caller's Cloudflare API token.
        account_id: Caller's Cloudflare account id.
        source_language: Language name the model translates from.
    """

    def __init__(
        self,
        api_token: str,
        account_id: str,
        settings: Optional[ProxySettings] = None,
        session: Optional[requests.Session] = None,
    ):
        settings = settings or ProxySettings()
        self.api_token = api_token
        self.account_id = account_id
        self.source_language = settings.SOURCE_LANGUAGE
        self.timeout = settings.TIMEOUT_SECONDS
        self.url = (
            f"{settings.API_BASE_URL.rstrip('/')}/accounts/{account_id}"
            f"/ai/run/{settings.AI_MODEL}"
        )
        self._session = session or requests.Session()

    def translate_text(self, text: str, target_language: str) -> OperationResult:
        """Translate one string; data is the translated text on success."""
        try:
            response = self._session.post(
                self.url,
                headers={
                    "Authorization": f"Bearer {self.api_token}",
                    "Content-Type": "application/json",
                },
                json={
                    "text": text,
                    "source_lang": self.source_language,
                    "target_lang": target_language,
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            return classify_request_error(e)

        if not response.ok:
            return classify_http_response(response)

        try:
            body = response.json()
        except ValueError:
            return OperationResult.permanent_error(
                "Translation model returned a non-JSON body",
                error_code="MALFORMED_RESPONSE",
            )

        result = body.get("result") if isinstance(body, dict) else None
        translated = result.get("translated_text") if isinstance(result, dict) else None
        return OperationResult.success(data=translated or text)

    def translate_value(self, value: Any, target_language: str) -> Any:
        """Translate every string in ``value``.

        Dicts and lists are walked recursively; template strings and
        non-string scalars are returned unchanged. A string whose
        translation fails keeps its original text.
        """
        if isinstance(value, str):
            if is_template(value):
                return value
            result = self.translate_text(value, target_language)
            if not result.is_success:
                logger.warning(
                    "string_translation_failed",
                    language=target_language,
                    error_code=result.error_code,
                    error=result.message,
                )
                return value
            return result.data

        if isinstance(value, list):
            return [self.translate_value(item, target_language) for item in value]

        if isinstance(value, dict):
            return {
                key: self.translate_value(item, target_language)
                for key, item in value.items()
            }

        return value
