"""Language registry refresh.

The registry is the ``availableLanguages`` list of the project
configuration. The orchestrator only reports that it may be stale
(BatchResult.registry_stale); callers refresh it from the records that are
actually persisted.
"""

from pathlib import Path
from typing import List, Optional, Union

from core.logging import get_module_logger
from infrastructure.i18n.exceptions import ConfigurationError
from infrastructure.i18n.project import load_project_config, write_project_config
from infrastructure.i18n.store import LanguageStore

logger = get_module_logger()


def refresh_available_languages(
    config_path: Union[str, Path], store: LanguageStore
) -> Optional[List[str]]:
    """Rewrite ``availableLanguages`` with the store's sorted language codes.

    Other keys of the configuration file are preserved. Failures are logged
    and swallowed: a stale registry never fails a batch.

    Returns:
        The new registry, or None when the file is absent or the refresh
        failed.
    """
    try:
        config = load_project_config(config_path)
        if config is None:
            logger.debug("registry_refresh_skipped_no_config", config_path=str(config_path))
            return None

        languages = store.languages()
        config.available_languages = languages
        write_project_config(config_path, config)
    except (ConfigurationError, OSError) as e:
        logger.warning("registry_refresh_failed", config_path=str(config_path), error=str(e))
        return None

    logger.info("registry_refreshed", available_languages=languages)
    return languages
