"""Command handlers behind the tradux CLI.

Each handler returns a process exit status. Per-language failures do not
change the status; only missing configuration, missing credentials or an
unavailable source language do.
"""

from pathlib import Path
from typing import Callable, List, Optional, Tuple

from core.config import Settings, TranslatorSettings
from core.logging import get_module_logger
from infrastructure.i18n import (
    BatchResult,
    I18nError,
    LanguageOption,
    LanguageOutcome,
    ProjectConfig,
    RemoteTranslator,
    TranslationOrchestrator,
    refresh_available_languages,
)
from infrastructure.i18n.orchestrator import TreeTranslator
from infrastructure.i18n.project import (
    CONFIG_FILENAME,
    init_project,
    load_project_config,
    store_for,
)

logger = get_module_logger()

TranslatorFactory = Callable[[TranslatorSettings], TreeTranslator]

OUTCOME_LABELS = {
    LanguageOutcome.CREATED: "created",
    LanguageOutcome.UPDATED: "updated",
    LanguageOutcome.UP_TO_DATE: "up to date",
    LanguageOutcome.SKIPPED_EXISTS: "skipped (exists)",
    LanguageOutcome.SKIPPED_DEFAULT: "skipped (default language)",
    LanguageOutcome.FAILED: "failed",
}


class TranslationCommandError(I18nError):
    """A precondition of a command is not met; reported once, exit 1."""

    pass


def _config_path(root: Path, settings: Settings) -> Path:
    return root / (settings.CONFIG_FILENAME or CONFIG_FILENAME)


def require_config(root: Path, settings: Settings) -> ProjectConfig:
    config = load_project_config(_config_path(root, settings))
    if config is None:
        raise TranslationCommandError(
            "Configuration file not found! Run 'tradux init' to get started."
        )
    return config


def require_credentials(root: Path, settings: Settings) -> None:
    if not settings.translator.has_credentials:
        raise TranslationCommandError(
            "Missing Cloudflare credentials. Set CLOUDFLARE_API_TOKEN and "
            "CLOUDFLARE_ACCOUNT_ID as environment variables or in "
            f"{root / '.env'}"
        )


def build_orchestrator(
    root: Path,
    settings: Settings,
    translator_factory: TranslatorFactory = RemoteTranslator.from_settings,
) -> Tuple[TranslationOrchestrator, ProjectConfig]:
    """Wire the orchestrator for the project rooted at ``root``.

    Raises:
        TranslationCommandError: Missing configuration or credentials.
        ConfigurationError: Invalid configuration file.
    """
    config = require_config(root, settings)
    require_credentials(root, settings)
    orchestrator = TranslationOrchestrator(
        store=store_for(config, root),
        translator=translator_factory(settings.translator),
        default_language=config.default_language,
    )
    return orchestrator, config


def report(batch: BatchResult) -> None:
    """Print one line per language."""
    for result in batch.results:
        print(f"  {result.language}: {OUTCOME_LABELS[result.outcome]} - {result.message}")
    if batch.failed:
        print(f"{len(batch.failed)} of {len(batch.results)} language(s) failed")


def _finish(root: Path, settings: Settings, orchestrator: TranslationOrchestrator, batch: BatchResult) -> None:
    if batch.registry_stale:
        refresh_available_languages(_config_path(root, settings), orchestrator.store)
    report(batch)


def run_translate(
    root: Path,
    settings: Settings,
    languages: List[str],
    translator_factory: TranslatorFactory = RemoteTranslator.from_settings,
) -> int:
    """Create records for ``languages``."""
    if not languages:
        print("No languages given. Usage: tradux -t es,pt,fr")
        return 1

    try:
        orchestrator, _ = build_orchestrator(root, settings, translator_factory)
        batch = orchestrator.translate(languages)
    except I18nError as e:
        logger.error("translation_command_failed", error=str(e))
        print(f"Translation failed: {e}")
        return 1

    _finish(root, settings, orchestrator, batch)
    print("Translation process completed")
    return 0


def run_update(
    root: Path,
    settings: Settings,
    languages: Optional[List[str]] = None,
    translator_factory: TranslatorFactory = RemoteTranslator.from_settings,
) -> int:
    """Update ``languages``, or every persisted language when none given."""
    try:
        orchestrator, config = build_orchestrator(root, settings, translator_factory)

        if not languages:
            languages = [
                code
                for code in orchestrator.store.languages()
                if code != config.default_language
            ]
            if not languages:
                print(
                    "No languages to update. Only the default language "
                    "file exists or no language files were found."
                )
                return 0
            names = ", ".join(LanguageOption.from_code(code).name for code in languages)
            print(f"Will update existing languages: {names}")

        print(f"Base language: {config.default_language}")
        batch = orchestrator.update(languages)
    except I18nError as e:
        logger.error("update_command_failed", error=str(e))
        print(f"Update failed: {e}")
        return 1

    _finish(root, settings, orchestrator, batch)
    print("Language update process completed")
    return 0


def run_init(root: Path, settings: Optional[Settings] = None) -> int:
    """Scaffold the project configuration."""
    config_path = _config_path(root, settings) if settings else None
    result = init_project(root, config_path=config_path)
    if not result.created:
        print(f"Configuration file already exists at '{result.config_path}'")
        return 0

    if result.sample_created:
        print(f"No 'i18n' folder found. Created one at '{result.i18n_path}' with a sample en.json")
    print(f"Configuration file created at '{result.config_path}'")
    print("You can now use the tradux CLI!")
    return 0


def is_configured(root: Path, settings: Settings) -> bool:
    return _config_path(root, settings).is_file()
