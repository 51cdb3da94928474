"""Tests for infrastructure.i18n.client module."""

# pylint: disable=protected-access

from unittest.mock import MagicMock, patch

import pytest
import requests

from core.config import TranslatorSettings
from infrastructure.i18n import RemoteTranslator
from infrastructure.operations import OperationStatus

CREDENTIALS = {"apiToken": "token-123", "accountId": "account-456"}


def make_response(status_code=200, json_data=None, headers=None, reason="OK"):
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.reason = reason
    response.headers = headers or {}
    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def session():
    mock_session = MagicMock(spec=requests.Session)
    mock_session.headers = {}
    return mock_session


@pytest.fixture
def translator(session):
    return RemoteTranslator(CREDENTIALS, url="https://translate.test/api", session=session)


@pytest.mark.unit
class TestRemoteTranslatorRequest:
    def test_posts_data_language_and_credentials(self, translator, session):
        session.post.return_value = make_response(json_data={"translatedData": {"a": "un"}})

        translator.translate({"a": "one"}, "fr")

        session.post.assert_called_once_with(
            "https://translate.test/api",
            json={
                "data": {"a": "one"},
                "targetLanguage": "fr",
                "apiToken": "token-123",
                "accountId": "account-456",
            },
            timeout=60,
        )

    def test_sets_json_headers(self, translator, session):
        assert session.headers["Content-Type"] == "application/json"

    def test_success_returns_translated_tree(self, translator, session):
        session.post.return_value = make_response(
            json_data={"success": True, "translatedData": {"a": {"b": "deux"}}}
        )

        result = translator.translate({"a": {"b": "two"}}, "fr")

        assert result.is_success
        assert result.data == {"a": {"b": "deux"}}

    def test_from_settings(self, session):
        settings = TranslatorSettings(
            CLOUDFLARE_API_TOKEN="t",
            CLOUDFLARE_ACCOUNT_ID="a",
            TRANSLATOR_URL="https://custom.test/translate",
            TRANSLATOR_TIMEOUT_SECONDS=5,
            TRANSLATOR_MAX_RETRIES=3,
        )
        client = RemoteTranslator.from_settings(settings, session=session)

        assert client.url == "https://custom.test/translate"
        assert client.credentials == {"apiToken": "t", "accountId": "a"}
        assert client.timeout == 5
        assert client.max_retries == 3


@pytest.mark.unit
class TestRemoteTranslatorFailures:
    def test_missing_translated_data_is_failure(self, translator, session):
        session.post.return_value = make_response(json_data={"success": True})

        result = translator.translate({"a": "one"}, "fr")

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == "MALFORMED_RESPONSE"

    def test_non_tree_translated_data_is_failure(self, translator, session):
        session.post.return_value = make_response(json_data={"translatedData": ["un"]})

        result = translator.translate({"a": "one"}, "fr")

        assert not result.is_success
        assert result.error_code == "MALFORMED_RESPONSE"

    def test_non_json_body_is_failure(self, translator, session):
        session.post.return_value = make_response(json_data=ValueError("no json"))

        result = translator.translate({"a": "one"}, "fr")

        assert result.error_code == "MALFORMED_RESPONSE"

    def test_bad_request_is_permanent(self, translator, session):
        session.post.return_value = make_response(
            status_code=400,
            json_data={"success": False, "error": "Missing required parameters"},
            reason="Bad Request",
        )

        result = translator.translate({"a": "one"}, "fr")

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.message == "Missing required parameters"
        assert session.post.call_count == 1

    def test_unauthorized(self, translator, session):
        session.post.return_value = make_response(status_code=401, json_data={})

        result = translator.translate({"a": "one"}, "fr")

        assert result.status == OperationStatus.UNAUTHORIZED

    def test_server_error_is_transient(self, translator, session):
        session.post.return_value = make_response(status_code=500, json_data={})

        result = translator.translate({"a": "one"}, "fr")

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.error_code == "HTTP_500"

    def test_timeout_is_transient(self, translator, session):
        session.post.side_effect = requests.Timeout("read timed out")

        result = translator.translate({"a": "one"}, "fr")

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.error_code == "TIMEOUT"

    def test_connection_error_is_transient(self, translator, session):
        session.post.side_effect = requests.ConnectionError("refused")

        result = translator.translate({"a": "one"}, "fr")

        assert result.error_code == "CONNECTION_ERROR"


@pytest.mark.unit
class TestRemoteTranslatorRetries:
    @pytest.fixture
    def retrying(self, session):
        return RemoteTranslator(
            CREDENTIALS,
            url="https://translate.test/api",
            max_retries=2,
            backoff=1.0,
            session=session,
        )

    @patch("infrastructure.i18n.client.time.sleep")
    def test_retries_transient_then_succeeds(self, mock_sleep, retrying, session):
        session.post.side_effect = [
            requests.ConnectionError("refused"),
            make_response(json_data={"translatedData": {"a": "un"}}),
        ]

        result = retrying.translate({"a": "one"}, "fr")

        assert result.is_success
        assert session.post.call_count == 2
        mock_sleep.assert_called_once_with(1.0)

    @patch("infrastructure.i18n.client.time.sleep")
    def test_gives_up_after_max_retries(self, mock_sleep, retrying, session):
        session.post.return_value = make_response(status_code=503, json_data={})

        result = retrying.translate({"a": "one"}, "fr")

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert session.post.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1.0, 2.0]

    @patch("infrastructure.i18n.client.time.sleep")
    def test_honors_retry_after_with_cap(self, mock_sleep, retrying, session):
        session.post.side_effect = [
            make_response(status_code=429, json_data={}, headers={"Retry-After": "120"}),
            make_response(json_data={"translatedData": {"a": "un"}}),
        ]

        result = retrying.translate({"a": "one"}, "fr")

        assert result.is_success
        mock_sleep.assert_called_once_with(30.0)

    @patch("infrastructure.i18n.client.time.sleep")
    def test_permanent_errors_are_not_retried(self, mock_sleep, retrying, session):
        session.post.return_value = make_response(status_code=404, json_data={})

        result = retrying.translate({"a": "one"}, "fr")

        assert result.status == OperationStatus.NOT_FOUND
        assert session.post.call_count == 1
        mock_sleep.assert_not_called()

    def test_no_retries_by_default(self, translator, session):
        session.post.side_effect = requests.Timeout("slow")

        translator.translate({"a": "one"}, "fr")

        assert session.post.call_count == 1
