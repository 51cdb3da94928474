"""Translation sync models.

Defines the project configuration model and the per-language and per-batch
result types reported by the orchestrator.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from infrastructure.operations import OperationResult


class StoreFormat(str, Enum):
    """On-disk format of language records."""

    JSON = "json"
    JS = "js"


class ProjectConfig(BaseModel):
    """Contents of the project configuration file (tradux.config.json).

    Unknown keys are kept so that rewriting the file (registry refresh)
    never drops user settings.

    Attributes:
        i18n_path: Directory holding one record per language.
        default_language: Authoritative source language.
        available_languages: Registry of persisted languages.
        format: Record file format.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    i18n_path: str = Field(default="./i18n", alias="i18nPath")
    default_language: str = Field(default="en", alias="defaultLanguage")
    available_languages: List[str] = Field(
        default_factory=list, alias="availableLanguages"
    )
    format: StoreFormat = StoreFormat.JSON

    @field_validator("i18n_path", "default_language")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    def to_file_dict(self) -> Dict[str, Any]:
        """Serialize with the file's camelCase keys.

        Only values that were read from the file or assigned since are
        written, so defaults such as ``format`` never appear on their own.
        """
        data = self.model_dump(by_alias=True, mode="json", exclude_unset=True)
        for key, value in (self.model_extra or {}).items():
            data.setdefault(key, value)
        return data


class LanguageOutcome(str, Enum):
    """Terminal state of one language in a batch."""

    CREATED = "created"
    UPDATED = "updated"
    UP_TO_DATE = "up_to_date"
    SKIPPED_EXISTS = "skipped_exists"
    SKIPPED_DEFAULT = "skipped_default"
    FAILED = "failed"


@dataclass
class LanguageResult:
    """Outcome of processing one language.

    Attributes:
        language: Language code.
        outcome: Terminal LanguageOutcome.
        message: Human-friendly summary.
        content_added: Missing content was translated and merged.
        content_removed: Obsolete keys were pruned.
        obsolete_keys: Dotted key paths that were pruned.
        error: Failed translator call, when outcome is FAILED.
    """

    language: str
    outcome: LanguageOutcome
    message: str = ""
    content_added: bool = False
    content_removed: bool = False
    obsolete_keys: List[str] = field(default_factory=list)
    error: Optional[OperationResult] = None

    @property
    def is_failure(self) -> bool:
        return self.outcome == LanguageOutcome.FAILED

    @property
    def changes(self) -> List[str]:
        """Descriptions of the changes applied by an update."""
        described = []
        if self.content_added:
            described.append("added missing content")
        if self.content_removed:
            described.append("removed obsolete content")
        return described


@dataclass
class BatchResult:
    """Ordered results of a translate or update batch."""

    results: List[LanguageResult] = field(default_factory=list)

    def add(self, result: LanguageResult) -> LanguageResult:
        self.results.append(result)
        return result

    @property
    def registry_stale(self) -> bool:
        """True when a language record was created during the batch."""
        return any(r.outcome == LanguageOutcome.CREATED for r in self.results)

    @property
    def failed(self) -> List[LanguageResult]:
        return [r for r in self.results if r.is_failure]

    @property
    def succeeded(self) -> List[LanguageResult]:
        return [r for r in self.results if not r.is_failure]

    def by_outcome(self, outcome: LanguageOutcome) -> List[str]:
        """Language codes that ended in ``outcome``."""
        return [r.language for r in self.results if r.outcome == outcome]

    def get(self, language: str) -> Optional[LanguageResult]:
        for result in self.results:
            if result.language == language:
                return result
        return None
