"""Translation file commands (init, translate, update)."""

from modules.translations.commands import (
    TranslationCommandError,
    build_orchestrator,
    run_init,
    run_translate,
    run_update,
)

__all__ = [
    "TranslationCommandError",
    "build_orchestrator",
    "run_init",
    "run_translate",
    "run_update",
]
