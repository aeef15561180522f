"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    make_locale_descriptor,
    make_registry,
    make_resource_bundle,
    make_resources,
)

__all__ = [
    "make_locale_descriptor",
    "make_registry",
    "make_resource_bundle",
    "make_resources",
]
