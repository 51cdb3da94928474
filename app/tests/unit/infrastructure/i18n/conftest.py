"""Feature-level fixtures for translation sync tests."""

import pytest

from infrastructure.i18n import JSONLanguageStore, TranslationOrchestrator


@pytest.fixture
def json_store(i18n_dir):
    """JSON store over a directory holding en.json."""
    return JSONLanguageStore(i18n_dir)


@pytest.fixture
def orchestrator(memory_store, fake_translator):
    return TranslationOrchestrator(memory_store, fake_translator, default_language="en")
