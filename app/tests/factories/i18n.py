"""Test data factories for the translation sync system.

Provides deterministic builders for:
- Source and target translation trees
- A scripted translator standing in for the remote service
"""

from typing import Dict, List, Optional, Tuple

from infrastructure.i18n.tree import TranslationTree
from infrastructure.operations import OperationResult


def make_source_tree() -> TranslationTree:
    """Default-language tree used across tests."""
    return {
        "navigation": {
            "home": "Home",
            "about": "About Us",
            "services": "Our Services",
        },
        "welcome": "Welcome to my website!",
    }


def make_target_tree() -> TranslationTree:
    """French tree that lacks "navigation.services" and has a stale key."""
    return {
        "navigation": {
            "home": "Accueil",
            "about": "À propos",
        },
        "welcome": "Bienvenue sur mon site !",
        "footer": "Pied de page",
    }


def make_translated_tree(tree: TranslationTree, language: str) -> TranslationTree:
    """Fake translation: every leaf becomes "[<lang>] <text>"."""
    return {
        key: make_translated_tree(value, language)
        if isinstance(value, dict)
        else f"[{language}] {value}"
        for key, value in tree.items()
    }


class FakeTranslator:
    """Scripted stand-in for RemoteTranslator.

    Translates with make_translated_tree unless a response is scripted for
    the language. Every call is recorded in ``calls``.
    """

    def __init__(self, responses: Optional[Dict[str, OperationResult]] = None):
        self.responses = dict(responses or {})
        self.calls: List[Tuple[TranslationTree, str]] = []

    def translate(self, data: TranslationTree, target_language: str) -> OperationResult:
        self.calls.append((data, target_language))
        if target_language in self.responses:
            return self.responses[target_language]
        return OperationResult.success(data=make_translated_tree(data, target_language))

    @property
    def languages(self) -> List[str]:
        return [language for _, language in self.calls]
