"""i18n system - translation file synchronization.

Keeps per-language translation trees structurally in sync with the default
language, translating missing content through a remote service.

Main components:
- tree: structural diff, merge, prune and lookup over translation trees
- store: LanguageStore contract with JSON, JS module and in-memory stores
- client: RemoteTranslator HTTP client for the translation service
- orchestrator: TranslationOrchestrator create and update workflows
- project / registry: configuration file handling and registry refresh
- context: I18nContext for reading translations at runtime
"""

from infrastructure.i18n.client import RemoteTranslator
from infrastructure.i18n.context import (
    FilePreference,
    I18nContext,
    InMemoryPreference,
    LanguagePreference,
)
from infrastructure.i18n.exceptions import (
    ConfigurationError,
    I18nError,
    InvalidLanguageCodeError,
    MalformedTreeError,
    SourceLanguageError,
)
from infrastructure.i18n.languages import LanguageOption, parse_languages
from infrastructure.i18n.models import (
    BatchResult,
    LanguageOutcome,
    LanguageResult,
    ProjectConfig,
    StoreFormat,
)
from infrastructure.i18n.orchestrator import TranslationOrchestrator
from infrastructure.i18n.registry import refresh_available_languages
from infrastructure.i18n.store import (
    InMemoryLanguageStore,
    JSModuleLanguageStore,
    JSONLanguageStore,
    LanguageStore,
    create_store,
)
from infrastructure.i18n.tree import (
    deep_merge,
    find_missing_content,
    find_obsolete_keys,
    find_obsolete_paths,
    get_by_path,
    remove_keys,
    validate_tree,
)

__all__ = [
    "BatchResult",
    "ConfigurationError",
    "FilePreference",
    "I18nContext",
    "I18nError",
    "InMemoryLanguageStore",
    "InMemoryPreference",
    "InvalidLanguageCodeError",
    "JSModuleLanguageStore",
    "JSONLanguageStore",
    "LanguageOption",
    "LanguageOutcome",
    "LanguagePreference",
    "LanguageResult",
    "LanguageStore",
    "MalformedTreeError",
    "ProjectConfig",
    "RemoteTranslator",
    "SourceLanguageError",
    "StoreFormat",
    "TranslationOrchestrator",
    "create_store",
    "deep_merge",
    "find_missing_content",
    "find_obsolete_keys",
    "find_obsolete_paths",
    "get_by_path",
    "parse_languages",
    "refresh_available_languages",
    "remove_keys",
    "validate_tree",
]
