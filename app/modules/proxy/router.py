"""Translation proxy endpoints.

POST /api/translate-json
    {"data": {...}, "targetLanguage": "fr", "apiToken": "...", "accountId": "..."}
    -> {"success": true, "translatedData": {...}, "originalLanguage": "english",
        "targetLanguage": "fr"}
"""

from typing import Callable

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from core.config import settings
from core.logging import get_module_logger
from modules.proxy.backend import CloudflareAITranslator

logger = get_module_logger()
router = APIRouter(tags=["Translation"])

REQUIRED_PARAMETERS = ("data", "targetLanguage", "apiToken", "accountId")

TranslatorFactory = Callable[[str, str], CloudflareAITranslator]


def default_translator_factory(api_token: str, account_id: str) -> CloudflareAITranslator:
    return CloudflareAITranslator(api_token, account_id, settings=settings.proxy)


def get_translator_factory() -> TranslatorFactory:
    """Overridable through app.dependency_overrides in tests."""
    return default_translator_factory


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"success": False, "error": message}, status_code=status_code)


@router.post("/api/translate-json")
async def translate_json(
    request: Request,
    factory: TranslatorFactory = Depends(get_translator_factory),
):
    """Translate every string of a JSON document."""
    try:
        body = await request.json()
    except ValueError:
        return _error(400, "Request body must be JSON")

    if not isinstance(body, dict) or not all(body.get(p) for p in REQUIRED_PARAMETERS):
        return _error(
            400,
            "Missing required parameters: data, targetLanguage, apiToken, or accountId",
        )

    translator = factory(body["apiToken"], body["accountId"])
    target_language = body["targetLanguage"]

    logger.info("proxy_translation_requested", language=target_language)
    try:
        translated = await run_in_threadpool(
            translator.translate_value, body["data"], target_language
        )
    except Exception as e:  # pylint: disable=broad-except
        logger.exception("proxy_translation_failed", language=target_language)
        return _error(500, str(e))

    return {
        "success": True,
        "translatedData": translated,
        "originalLanguage": translator.source_language,
        "targetLanguage": target_language,
    }


@router.api_route(
    "/api/translate-json", methods=["GET", "PUT", "PATCH", "DELETE"]
)
def translate_json_method_not_allowed():
    return _error(405, "Method not allowed")


@router.options("/api/translate-json")
def translate_json_options():
    return Response(status_code=200)


@router.api_route(
    "/api/{path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
)
def api_info(path: str):  # pylint: disable=unused-argument
    """Describe the available endpoints."""
    return {
        "name": "Cloudflare AI Translation Proxy API",
        "endpoints": ["/api/translate-json"],
    }
