"""Language record stores.

Defines the contract for persisting one translation tree per language and
provides file-based and in-memory implementations. The orchestrator only
talks to the LanguageStore interface.
"""

import json
import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Union

from core.logging import get_module_logger
from infrastructure.i18n.exceptions import InvalidLanguageCodeError, MalformedTreeError
from infrastructure.i18n.models import StoreFormat
from infrastructure.i18n.tree import TranslationTree, validate_tree

logger = get_module_logger()


class LanguageStore(ABC):
    """Abstract base for language record stores.

    Implementations are key-value stores keyed by language code. ``load``
    returns None both for absent and for unreadable records so that callers
    can treat a corrupt record as missing.
    """

    @abstractmethod
    def exists(self, language: str) -> bool:
        """Check whether a record is persisted for ``language``."""
        pass

    @abstractmethod
    def load(self, language: str) -> Optional[TranslationTree]:
        """Load the tree for ``language``.

        Returns:
            The translation tree, or None if absent or malformed.
        """
        pass

    @abstractmethod
    def save(self, language: str, tree: TranslationTree) -> None:
        """Persist ``tree`` as the full record for ``language``.

        Raises:
            MalformedTreeError: If ``tree`` is not a translation tree.
            OSError: If the record cannot be written.
        """
        pass

    @abstractmethod
    def languages(self) -> List[str]:
        """Sorted language codes of all persisted records."""
        pass


class FileLanguageStore(LanguageStore):
    """Base for stores keeping one file per language in a directory.

    Subclasses define the file extension and the text encoding of a tree.
    Writes go to a temporary file in the same directory which then replaces
    the record, so a record is never left half-written.

    Attributes:
        directory: Directory holding the record files.
    """

    extension: str = ""
    _UNSAFE_CHARACTERS = re.compile(r"[/\\\x00]")

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def path_for(self, language: str) -> Path:
        """Record file for ``language``.

        Raises:
            InvalidLanguageCodeError: If the code would address a file
                outside ``directory``.
        """
        if (
            not language
            or language.startswith(".")
            or self._UNSAFE_CHARACTERS.search(language)
        ):
            raise InvalidLanguageCodeError(language)
        return self.directory / f"{language}{self.extension}"

    @abstractmethod
    def _decode(self, text: str) -> object:
        pass

    @abstractmethod
    def _encode(self, tree: TranslationTree) -> str:
        pass

    def exists(self, language: str) -> bool:
        return self.path_for(language).is_file()

    def load(self, language: str) -> Optional[TranslationTree]:
        path = self.path_for(language)
        if not path.is_file():
            return None

        try:
            data = self._decode(path.read_text(encoding="utf-8"))
            validate_tree(data)
        except (OSError, ValueError) as e:
            # MalformedTreeError and JSONDecodeError are both ValueErrors
            logger.warning(
                "language_record_unreadable",
                language=language,
                file=str(path),
                error=str(e),
            )
            return None

        return data

    def save(self, language: str, tree: TranslationTree) -> None:
        validate_tree(tree)
        path = self.path_for(language)
        self.directory.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=self.directory, prefix=f".{language}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(self._encode(tree))
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        logger.debug("language_record_saved", language=language, file=str(path))

    def languages(self) -> List[str]:
        if not self.directory.is_dir():
            return []
        return sorted(
            p.stem
            for p in self.directory.glob(f"*{self.extension}")
            if p.is_file() and not p.name.startswith(".")
        )


class JSONLanguageStore(FileLanguageStore):
    """Records stored as ``<lang>.json`` files."""

    extension = ".json"

    def _decode(self, text: str) -> object:
        return json.loads(text)

    def _encode(self, tree: TranslationTree) -> str:
        return json.dumps(tree, indent=2, ensure_ascii=False) + "\n"


class JSModuleLanguageStore(FileLanguageStore):
    """Records stored as ES modules: ``export const language = {...};``.

    The object literal must be JSON-compatible, which is what this store
    writes. Hand-written modules using JS-only syntax (unquoted keys,
    trailing commas, comments) are reported as malformed.
    """

    extension = ".js"
    _MODULE_PATTERN = re.compile(
        r"^\s*export\s+const\s+language\s*=\s*(?P<body>.*?)\s*;?\s*$", re.DOTALL
    )

    def _decode(self, text: str) -> object:
        match = self._MODULE_PATTERN.match(text)
        if not match:
            raise MalformedTreeError("Expected 'export const language = {...}'")
        return json.loads(match.group("body"))

    def _encode(self, tree: TranslationTree) -> str:
        body = json.dumps(tree, indent=2, ensure_ascii=False)
        return f"export const language = {body};\n"


class InMemoryLanguageStore(LanguageStore):
    """Dict-backed store, used for embedding and tests.

    Records are copied on the way in and out.
    """

    def __init__(self, records: Optional[Dict[str, TranslationTree]] = None):
        self.records: Dict[str, TranslationTree] = {}
        for language, tree in (records or {}).items():
            self.records[language] = json.loads(json.dumps(tree))

    def exists(self, language: str) -> bool:
        return language in self.records

    def load(self, language: str) -> Optional[TranslationTree]:
        tree = self.records.get(language)
        if tree is None:
            return None
        try:
            validate_tree(tree)
        except MalformedTreeError as e:
            logger.warning("language_record_unreadable", language=language, error=str(e))
            return None
        return json.loads(json.dumps(tree))

    def save(self, language: str, tree: TranslationTree) -> None:
        validate_tree(tree)
        self.records[language] = json.loads(json.dumps(tree))

    def languages(self) -> List[str]:
        return sorted(self.records)


def create_store(
    directory: Union[str, Path], fmt: Union[StoreFormat, str] = StoreFormat.JSON
) -> FileLanguageStore:
    """Create the file store matching ``fmt``.

    Raises:
        ValueError: If ``fmt`` is not a known StoreFormat.
    """
    fmt = StoreFormat(fmt)
    if fmt == StoreFormat.JS:
        return JSModuleLanguageStore(directory)
    return JSONLanguageStore(directory)
