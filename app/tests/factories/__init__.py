"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    FakeTranslator,
    make_source_tree,
    make_target_tree,
    make_translated_tree,
)

__all__ = [
    "FakeTranslator",
    "make_source_tree",
    "make_target_tree",
    "make_translated_tree",
]
