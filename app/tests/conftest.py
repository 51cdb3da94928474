import json

import pytest

from infrastructure.i18n import InMemoryLanguageStore, JSONLanguageStore
from tests.factories.i18n import FakeTranslator, make_source_tree


@pytest.fixture
def source_tree():
    return make_source_tree()


@pytest.fixture
def fake_translator():
    return FakeTranslator()


@pytest.fixture
def memory_store(source_tree):
    """In-memory store holding only the default language."""
    return InMemoryLanguageStore({"en": source_tree})


@pytest.fixture
def i18n_dir(tmp_path, source_tree):
    """Records directory on disk with en.json."""
    directory = tmp_path / "i18n"
    JSONLanguageStore(directory).save("en", source_tree)
    return directory


@pytest.fixture
def project_dir(tmp_path, i18n_dir):
    """Project root with tradux.config.json pointing at ./i18n."""
    config = {
        "i18nPath": "./i18n",
        "defaultLanguage": "en",
        "availableLanguages": ["en"],
        "theme": "dark",
    }
    (tmp_path / "tradux.config.json").write_text(json.dumps(config), encoding="utf-8")
    return tmp_path
