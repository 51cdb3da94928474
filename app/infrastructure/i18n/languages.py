"""Language codes, display names and argument parsing."""

import re
from dataclasses import dataclass
from typing import Iterable, List, Union

LANGUAGE_CODE_PATTERN = re.compile(r"^[a-z]{2}$")

LANGUAGE_NAMES = {
    "ar": "Arabic",
    "bg": "Bulgarian",
    "bn": "Bengali",
    "cs": "Czech",
    "da": "Danish",
    "de": "German",
    "el": "Greek",
    "en": "English",
    "es": "Spanish",
    "fa": "Persian",
    "fi": "Finnish",
    "fr": "French",
    "he": "Hebrew",
    "hi": "Hindi",
    "hu": "Hungarian",
    "id": "Indonesian",
    "it": "Italian",
    "ja": "Japanese",
    "ko": "Korean",
    "ms": "Malay",
    "nl": "Dutch",
    "no": "Norwegian",
    "pl": "Polish",
    "pt": "Portuguese",
    "ro": "Romanian",
    "ru": "Russian",
    "sk": "Slovak",
    "sv": "Swedish",
    "th": "Thai",
    "tr": "Turkish",
    "uk": "Ukrainian",
    "vi": "Vietnamese",
    "zh": "Chinese",
}


@dataclass(frozen=True)
class LanguageOption:
    """A language offered to end users.

    Attributes:
        name: Display name (e.g., "French").
        value: Language code (e.g., "fr").
    """

    name: str
    value: str

    @classmethod
    def from_code(cls, code: str) -> "LanguageOption":
        """Build an option, displaying unknown codes as the code itself."""
        return cls(name=LANGUAGE_NAMES.get(code, code), value=code)


def is_valid_language_code(code: object) -> bool:
    """Two lowercase ASCII letters, e.g. "en", "pt"."""
    return isinstance(code, str) and bool(LANGUAGE_CODE_PATTERN.match(code))


def parse_languages(languages: Union[str, Iterable[str]]) -> List[str]:
    """Normalize a language list from user input.

    Accepts a single string or several argv fragments, separated by commas
    and/or whitespace. Empty entries are dropped and duplicates removed
    keeping first-seen order.

    Example:
        >>> parse_languages(["es,", "fr", "es"])
        ['es', 'fr']
    """
    if isinstance(languages, str):
        languages = [languages]

    seen: List[str] = []
    for fragment in languages:
        for code in re.split(r"[,\s]+", fragment or ""):
            code = code.strip()
            if code and code not in seen:
                seen.append(code)
    return seen
