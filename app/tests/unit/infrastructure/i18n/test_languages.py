"""Tests for infrastructure.i18n.languages module."""

import pytest

from infrastructure.i18n.languages import (
    LanguageOption,
    is_valid_language_code,
    parse_languages,
)


@pytest.mark.unit
class TestParseLanguages:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("fr", ["fr"]),
            ("es,fr,de", ["es", "fr", "de"]),
            ("es, fr  de", ["es", "fr", "de"]),
            (["es,", "fr", "de"], ["es", "fr", "de"]),
            (["es", "fr", "es"], ["es", "fr"]),
            ("", []),
            ([" , ", ""], []),
        ],
    )
    def test_parse(self, value, expected):
        assert parse_languages(value) == expected

    def test_keeps_first_seen_order(self):
        assert parse_languages(["pt", "de,pt", "ar"]) == ["pt", "de", "ar"]


@pytest.mark.unit
class TestLanguageCodes:
    @pytest.mark.parametrize("code", ["en", "fr", "pt"])
    def test_valid(self, code):
        assert is_valid_language_code(code)

    @pytest.mark.parametrize("code", ["EN", "eng", "pt-BR", "e", "", None, 12])
    def test_invalid(self, code):
        assert not is_valid_language_code(code)

    def test_option_display_name(self):
        assert LanguageOption.from_code("es") == LanguageOption(name="Spanish", value="es")

    def test_option_unknown_code(self):
        assert LanguageOption.from_code("tlh").name == "tlh"
