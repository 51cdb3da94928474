"""Runtime translation context.

Holds the current language and its loaded tree for an application that
displays translated text. State lives on an explicit I18nContext object
with an initialize/reset lifecycle; nothing happens at import time.

Usage:
    from infrastructure.i18n import I18nContext, JSONLanguageStore

    context = I18nContext(JSONLanguageStore("public/i18n"), default_language="en")
    context.initialize()
    context.t("navigation.home")        # "Home"
    context.set_language("fr")          # True if fr.json exists
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence, Union

from core.logging import get_module_logger
from infrastructure.i18n.languages import LanguageOption
from infrastructure.i18n.store import LanguageStore
from infrastructure.i18n.tree import KeyPath, TranslationTree, get_by_path

logger = get_module_logger()

FALLBACK_LANGUAGE = "en"


class LanguagePreference(ABC):
    """Where the user's chosen language is remembered between runs."""

    @abstractmethod
    def get(self) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, language: str) -> None:
        pass


class InMemoryPreference(LanguagePreference):
    """Preference kept for the lifetime of the object."""

    def __init__(self, language: Optional[str] = None):
        self.language = language

    def get(self) -> Optional[str]:
        return self.language

    def set(self, language: str) -> None:
        self.language = language


class FilePreference(LanguagePreference):
    """Preference stored in a small JSON file, ``{"language": "fr"}``."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def get(self) -> Optional[str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning("language_preference_unreadable", path=str(self.path), error=str(e))
            return None

        language = data.get("language") if isinstance(data, dict) else None
        return language if isinstance(language, str) and language else None

    def set(self, language: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"language": language}), encoding="utf-8")


class I18nContext:
    """Current language and translations for one application.

    Attributes:
        store: Where language records are read from.
        default_language: Language used when no preference is saved.
        fallback_language: Last language tried before an empty tree.
        preference: Optional remembered user choice.
        available: Language codes offered to users; defaults to the store's.
    """

    def __init__(
        self,
        store: LanguageStore,
        default_language: str,
        fallback_language: str = FALLBACK_LANGUAGE,
        preference: Optional[LanguagePreference] = None,
        available: Optional[Sequence[str]] = None,
    ):
        self.store = store
        self.default_language = default_language
        self.fallback_language = fallback_language
        self.preference = preference
        self.available = list(available) if available is not None else None
        self.reset()

    @property
    def current_language(self) -> Optional[str]:
        return self._current_language

    @property
    def translations(self) -> TranslationTree:
        return self._translations

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> str:
        """Load the preferred language, falling back when it has no record.

        Tries the saved preference (or the default language), then the
        default language, then the fallback language. When none can be
        loaded the context holds an empty tree.

        Returns:
            The language that ended up current.
        """
        requested = (self.preference.get() if self.preference else None) or self.default_language

        candidates: List[str] = []
        for language in (requested, self.default_language, self.fallback_language):
            if language and language not in candidates:
                candidates.append(language)

        for language in candidates:
            tree = self.store.load(language)
            if tree is not None:
                if language != requested:
                    logger.info(
                        "language_fallback_used",
                        requested_language=requested,
                        language=language,
                    )
                self._current_language = language
                self._translations = tree
                break
        else:
            logger.warning("no_language_record_loaded", tried=candidates)
            self._current_language = requested
            self._translations = {}

        self._initialized = True
        return self._current_language

    def set_language(self, language: str) -> bool:
        """Switch to ``language`` and remember the choice.

        Returns:
            False, leaving the context unchanged, if it has no record.
        """
        tree = self.store.load(language)
        if tree is None:
            logger.warning("language_not_found", language=language)
            return False

        self._current_language = language
        self._translations = tree
        self._initialized = True
        if self.preference:
            self.preference.set(language)
        logger.info("language_changed", language=language)
        return True

    def t(self, path: KeyPath, default: str = "") -> str:
        """Translated text at ``path``, or ``default`` if absent."""
        if not self._initialized:
            self.initialize()
        return get_by_path(self._translations, path, default)

    def available_languages(self) -> List[LanguageOption]:
        """Languages offered to users, with display names."""
        codes = self.available if self.available is not None else self.store.languages()
        return [LanguageOption.from_code(code) for code in codes if code]

    def reset(self) -> None:
        """Forget the loaded language; the next lookup reinitializes."""
        self._current_language: Optional[str] = None
        self._translations: TranslationTree = {}
        self._initialized = False
