"""Tests for the translation proxy endpoints."""

import pytest
from fastapi.testclient import TestClient

from modules.proxy.app import create_app
from modules.proxy.router import get_translator_factory


class StubBackend:
    source_language = "english"

    def __init__(self, api_token, account_id, fail=False):
        self.api_token = api_token
        self.account_id = account_id
        self.fail = fail

    def translate_value(self, value, target_language):
        if self.fail:
            raise RuntimeError("model unavailable")
        return {key: f"[{target_language}] {text}" for key, text in value.items()}


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app):
    app.dependency_overrides[get_translator_factory] = lambda: StubBackend
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def valid_body(**overrides):
    body = {
        "data": {"welcome": "Welcome"},
        "targetLanguage": "fr",
        "apiToken": "token",
        "accountId": "account",
    }
    body.update(overrides)
    return body


@pytest.mark.unit
class TestTranslateJson:
    def test_translates_document(self, client):
        response = client.post("/api/translate-json", json=valid_body())

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "translatedData": {"welcome": "[fr] Welcome"},
            "originalLanguage": "english",
            "targetLanguage": "fr",
        }

    @pytest.mark.parametrize("missing", ["data", "targetLanguage", "apiToken", "accountId"])
    def test_missing_parameter(self, client, missing):
        body = valid_body()
        del body[missing]

        response = client.post("/api/translate-json", json=body)

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert "Missing required parameters" in response.json()["error"]

    def test_invalid_json(self, client):
        response = client.post(
            "/api/translate-json",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Request body must be JSON"}

    def test_backend_exception_is_500(self, app, client):
        app.dependency_overrides[get_translator_factory] = lambda: (
            lambda token, account: StubBackend(token, account, fail=True)
        )

        response = client.post("/api/translate-json", json=valid_body())

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "model unavailable"}

    @pytest.mark.parametrize("method", ["get", "put", "delete"])
    def test_other_methods_not_allowed(self, client, method):
        response = getattr(client, method)("/api/translate-json")
        assert response.status_code == 405
        assert response.json() == {"success": False, "error": "Method not allowed"}

    def test_cors_preflight(self, client):
        response = client.options(
            "/api/translate-json",
            headers={
                "Origin": "https://example.com",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.unit
def test_api_info(client):
    response = client.get("/api/anything")
    assert response.status_code == 200
    assert response.json()["endpoints"] == ["/api/translate-json"]


@pytest.mark.unit
@pytest.mark.parametrize("method", ["get", "post", "put", "patch", "delete"])
def test_api_info_answers_any_method(client, method):
    response = getattr(client, method)("/api/other")
    assert response.status_code == 200
    assert response.json() == {
        "name": "Cloudflare AI Translation Proxy API",
        "endpoints": ["/api/translate-json"],
    }


@pytest.mark.unit
def test_translate_route_takes_precedence_over_info(client):
    response = client.put("/api/translate-json")
    assert response.status_code == 405
