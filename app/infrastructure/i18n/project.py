"""Project configuration file handling and scaffolding.

The project configuration lives in ``tradux.config.json`` at the project
root:

    {
        "i18nPath": "./public/i18n",
        "defaultLanguage": "en",
        "availableLanguages": ["en", "fr"]
    }
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from core.logging import get_module_logger
from infrastructure.i18n.exceptions import ConfigurationError
from infrastructure.i18n.models import ProjectConfig
from infrastructure.i18n.store import FileLanguageStore, create_store

logger = get_module_logger()

CONFIG_FILENAME = "tradux.config.json"

# Public paths first so the records can be served to browsers as-is
COMMON_I18N_PATHS = ("public/i18n", "i18n", "src/i18n", "app/i18n")

SAMPLE_TRANSLATION = {
    "navigation": {
        "home": "Home",
        "about": "About Us",
        "services": "Our Services",
    },
    "welcome": "Welcome to my website!",
}


def load_project_config(config_path: Union[str, Path]) -> Optional[ProjectConfig]:
    """Load the project configuration.

    Returns:
        ProjectConfig, or None if the file does not exist.

    Raises:
        ConfigurationError: If the file is not valid JSON or misses required
            values.
    """
    path = Path(config_path)
    if not path.is_file():
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Error loading config {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Invalid configuration in {path}: expected an object")

    for required in ("i18nPath", "defaultLanguage"):
        if not data.get(required):
            raise ConfigurationError(
                f"Invalid configuration in {path}: missing required value '{required}'"
            )

    try:
        return ProjectConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {path}: {e}") from e


def write_project_config(config_path: Union[str, Path], config: ProjectConfig) -> None:
    """Write the configuration file with 4-space indentation."""
    Path(config_path).write_text(
        json.dumps(config.to_file_dict(), indent=4, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )


def resolve_i18n_path(config: ProjectConfig, root: Union[str, Path]) -> Path:
    """Absolute records directory; relative paths are taken from ``root``."""
    i18n_path = Path(config.i18n_path)
    if i18n_path.is_absolute():
        return i18n_path
    return (Path(root) / i18n_path).resolve()


def store_for(config: ProjectConfig, root: Union[str, Path]) -> FileLanguageStore:
    """Language store for the project described by ``config``."""
    return create_store(resolve_i18n_path(config, root), config.format)


def find_i18n_directory(root: Union[str, Path]) -> Optional[Path]:
    """Look for an existing i18n directory.

    Checks the common locations first, then ``<subdir>/i18n`` for each
    direct subdirectory in name order.
    """
    root = Path(root)
    for candidate in COMMON_I18N_PATHS:
        path = root / candidate
        if path.is_dir():
            return path

    for subdir in sorted(p for p in root.iterdir() if p.is_dir()):
        path = subdir / "i18n"
        if path.is_dir():
            return path

    return None


@dataclass
class InitResult:
    """What ``init_project`` did.

    Attributes:
        config_path: Location of the configuration file.
        created: False when a configuration already existed.
        i18n_path: Records directory referenced by the configuration.
        sample_created: A sample default-language record was written.
    """

    config_path: Path
    created: bool
    i18n_path: Optional[Path] = None
    sample_created: bool = False


def init_project(
    root: Union[str, Path],
    default_language: str = "en",
    config_path: Optional[Union[str, Path]] = None,
) -> InitResult:
    """Create the project configuration, scaffolding an i18n directory.

    Does nothing if the configuration file already exists. When no i18n
    directory is found, ``public/i18n`` is created with a sample record for
    the default language. ``config_path`` defaults to
    ``<root>/tradux.config.json``.
    """
    root = Path(root)
    config_path = Path(config_path) if config_path else root / CONFIG_FILENAME

    if config_path.exists():
        logger.info("project_config_exists", config_path=str(config_path))
        return InitResult(config_path=config_path, created=False)

    sample_created = False
    i18n_path = find_i18n_directory(root)
    if i18n_path is None:
        i18n_path = root / "public" / "i18n"
        logger.info("i18n_directory_created", i18n_path=str(i18n_path))
        create_store(i18n_path).save(default_language, SAMPLE_TRANSLATION)
        sample_created = True

    relative = i18n_path.relative_to(root).as_posix()
    config = ProjectConfig(
        i18n_path=f"./{relative}",
        default_language=default_language,
        available_languages=create_store(i18n_path).languages(),
    )
    write_project_config(config_path, config)

    logger.info(
        "project_config_created",
        config_path=str(config_path),
        i18n_path=config.i18n_path,
    )
    return InitResult(
        config_path=config_path,
        created=True,
        i18n_path=i18n_path,
        sample_created=sample_created,
    )
