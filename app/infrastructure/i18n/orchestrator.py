"""Translation orchestrator.

Sequences load-source, diff, remote translation, merge/prune and persist
for a batch of languages. Two workflows are provided:

- translate: create records for languages that have none yet.
- update: bring existing records back in line with the source language,
  translating only what is missing and pruning what is obsolete.

Languages are processed one at a time in the order given. A failure for one
language is reported in its LanguageResult and never stops the batch; only
an unavailable source language aborts, before any network call.
"""

from typing import Callable, Iterable, List, Optional, Protocol, Union

from core.logging import get_module_logger
from infrastructure.i18n.exceptions import (
    InvalidLanguageCodeError,
    MalformedTreeError,
    SourceLanguageError,
)
from infrastructure.i18n.languages import is_valid_language_code, parse_languages
from infrastructure.i18n.models import BatchResult, LanguageOutcome, LanguageResult
from infrastructure.i18n.store import LanguageStore
from infrastructure.i18n.tree import (
    PATH_SEPARATOR,
    TranslationTree,
    deep_merge,
    find_missing_content,
    find_obsolete_paths,
    is_tree,
    remove_keys,
)
from infrastructure.operations import OperationResult

logger = get_module_logger()


class TreeTranslator(Protocol):
    """Anything that can translate a tree, e.g. RemoteTranslator."""

    def translate(self, data: TranslationTree, target_language: str) -> OperationResult:
        ...


class TranslationOrchestrator:
    """Drives the create and update workflows over a LanguageStore.

    Attributes:
        store: Persisted language records.
        translator: Remote translator collaborator.
        default_language: Code of the authoritative source language.
    """

    def __init__(
        self,
        store: LanguageStore,
        translator: TreeTranslator,
        default_language: str,
    ):
        self.store = store
        self.translator = translator
        self.default_language = default_language

    def load_source(self) -> TranslationTree:
        """Read the source tree fresh from the store.

        Raises:
            SourceLanguageError: If the record is absent or unreadable.
        """
        try:
            found = self.store.exists(self.default_language)
        except InvalidLanguageCodeError as e:
            raise SourceLanguageError(self.default_language, str(e)) from e

        if not found:
            logger.error("source_language_not_found", language=self.default_language)
            raise SourceLanguageError(self.default_language, "record not found")

        source = self.store.load(self.default_language)
        if source is None:
            logger.error("source_language_unreadable", language=self.default_language)
            raise SourceLanguageError(self.default_language, "record is unreadable")

        return source

    def translate(self, languages: Union[str, Iterable[str]]) -> BatchResult:
        """Create records for each requested language.

        Raises:
            SourceLanguageError: Before any per-language work.
        """
        codes = self._prepare(languages)
        logger.info("translation_batch_started", languages=codes)
        source = self.load_source()

        batch = BatchResult()
        for language in codes:
            batch.add(self._guarded(self.translate_language, language, source))

        self._log_batch("translation_batch_completed", batch)
        return batch

    def update(self, languages: Union[str, Iterable[str]]) -> BatchResult:
        """Synchronize each requested language with the source language.

        Raises:
            SourceLanguageError: Before any per-language work.
        """
        codes = self._prepare(languages)
        logger.info(
            "update_batch_started",
            languages=codes,
            base_language=self.default_language,
        )
        source = self.load_source()

        batch = BatchResult()
        for language in codes:
            batch.add(self._guarded(self.update_language, language, source))

        self._log_batch("update_batch_completed", batch)
        return batch

    def translate_language(self, language: str, source: TranslationTree) -> LanguageResult:
        """Create flow for one language."""
        if self.store.exists(language):
            logger.warning("translation_skipped_existing", language=language)
            return LanguageResult(
                language,
                LanguageOutcome.SKIPPED_EXISTS,
                message=f"Skipping existing translation: {language}",
            )

        return self._create(language, source)

    def update_language(self, language: str, source: TranslationTree) -> LanguageResult:
        """Update flow for one language."""
        if language == self.default_language:
            logger.warning("update_skipped_default_language", language=language)
            return LanguageResult(
                language,
                LanguageOutcome.SKIPPED_DEFAULT,
                message=f"Skipping {language} - cannot update the default language",
            )

        if not self.store.exists(language):
            logger.info("update_target_missing_creating", language=language)
            return self._create(language, source)

        existing = self.store.load(language)
        if existing is None:
            logger.warning("update_target_unreadable_recreating", language=language)
            return self._create(language, source)

        missing = find_missing_content(source, existing)
        obsolete_paths = find_obsolete_paths(source, existing)
        obsolete = [PATH_SEPARATOR.join(path) for path in obsolete_paths]

        if not missing and not obsolete:
            logger.info("language_up_to_date", language=language)
            return LanguageResult(
                language,
                LanguageOutcome.UP_TO_DATE,
                message=f"{language} is already up to date",
            )

        updated = existing
        if obsolete:
            updated = remove_keys(updated, obsolete_paths)
            logger.info("obsolete_keys_removed", language=language, keys=obsolete)

        if missing:
            logger.info(
                "missing_content_found",
                language=language,
                top_level_keys=sorted(missing),
            )
            response = self._request(missing, language)
            if not response.is_success:
                return self._failed(language, response)
            updated = deep_merge(updated, response.data)

        result = LanguageResult(
            language,
            LanguageOutcome.UPDATED,
            content_added=bool(missing),
            content_removed=bool(obsolete),
            obsolete_keys=obsolete,
        )
        result.message = f"Updated {language} ({' and '.join(result.changes)})"

        failure = self._persist(language, updated)
        if failure is not None:
            return failure

        logger.info("language_updated", language=language, changes=result.changes)
        return result

    def _create(self, language: str, source: TranslationTree) -> LanguageResult:
        logger.info("translation_started", language=language)
        response = self._request(source, language)
        if not response.is_success:
            return self._failed(language, response)

        failure = self._persist(language, response.data)
        if failure is not None:
            return failure

        logger.info("translation_completed", language=language)
        return LanguageResult(
            language,
            LanguageOutcome.CREATED,
            message=f"Translation completed: {language}",
        )

    def _request(self, data: TranslationTree, language: str) -> OperationResult:
        response = self.translator.translate(data, language)
        if response.is_success and not is_tree(response.data):
            return OperationResult.permanent_error(
                "Translator returned a value that is not a translation tree",
                error_code="MALFORMED_RESPONSE",
            )
        return response

    def _persist(self, language: str, tree: TranslationTree) -> Optional[LanguageResult]:
        try:
            self.store.save(language, tree)
        except (OSError, MalformedTreeError) as e:
            logger.error("language_record_write_failed", language=language, error=str(e))
            return LanguageResult(
                language,
                LanguageOutcome.FAILED,
                message=f"Failed to write {language}: {e}",
                error=OperationResult.permanent_error(str(e), error_code="WRITE_FAILED"),
            )
        return None

    def _guarded(
        self,
        flow: Callable[[str, TranslationTree], LanguageResult],
        language: str,
        source: TranslationTree,
    ) -> LanguageResult:
        try:
            return flow(language, source)
        except InvalidLanguageCodeError as e:
            logger.error("language_code_rejected", language=language, error=str(e))
            return LanguageResult(
                language,
                LanguageOutcome.FAILED,
                message=f"Failed to process {language}: {e}",
                error=OperationResult.permanent_error(
                    str(e), error_code="INVALID_LANGUAGE"
                ),
            )

    def _failed(self, language: str, response: OperationResult) -> LanguageResult:
        logger.error(
            "language_translation_failed",
            language=language,
            error=response.message,
            error_code=response.error_code,
        )
        return LanguageResult(
            language,
            LanguageOutcome.FAILED,
            message=f"Failed to translate {language}: {response.message}",
            error=response,
        )

    def _prepare(self, languages: Union[str, Iterable[str]]) -> List[str]:
        codes = parse_languages(languages)
        for code in codes:
            if not is_valid_language_code(code):
                logger.warning("unconventional_language_code", language=code)
        return codes

    def _log_batch(self, event: str, batch: BatchResult) -> None:
        logger.info(
            event,
            **{
                outcome.value: batch.by_outcome(outcome)
                for outcome in LanguageOutcome
                if batch.by_outcome(outcome)
            },
        )
