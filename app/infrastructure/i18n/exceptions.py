"""Custom exceptions for the translation sync system.

Per-language failures while talking to the translation service are not
exceptions; they are reported as OperationResult values. The exceptions
below cover problems that stop a whole batch or reject invalid input.
"""

from typing import Optional


class I18nError(Exception):
    """Base exception for all translation sync errors.

    Example:
        try:
            orchestrator.update(["fr"])
        except I18nError as e:
            logger.error("update_failed", error=str(e))
    """

    pass


class ConfigurationError(I18nError):
    """Raised when the project configuration file is missing required
    values or cannot be parsed."""

    pass


class SourceLanguageError(I18nError):
    """Raised when the default language record cannot be loaded.

    Fatal to a batch: nothing can be diffed or translated without it.
    """

    def __init__(self, language: str, reason: str):
        self.language = language
        self.reason = reason
        super().__init__(f"Source language '{language}' unavailable: {reason}")


class MalformedTreeError(I18nError, ValueError):
    """Raised when a value is not a valid translation tree.

    Attributes:
        path: Dotted key path of the offending node, None for the root.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        location = f" at '{path}'" if path else ""
        super().__init__(f"{message}{location}")


class InvalidLanguageCodeError(I18nError, ValueError):
    """Raised when a language code cannot name a record file.

    Codes that are empty, start with a dot or contain a path separator
    would address a file outside the records directory.
    """

    def __init__(self, language: str):
        self.language = language
        super().__init__(f"Invalid language code '{language}'")
