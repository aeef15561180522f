"""Feature-level fixtures for locale engine tests.

Provides in-memory resource sources, a gated source for exercising
overlapping locale switches, and a ready-made session.
"""

import asyncio
from collections import defaultdict
from typing import Any, Dict, List

import pytest
import yaml

from localization.i18n import (
    InMemoryResourceSource,
    LocaleSession,
    ResourceLoader,
    ResourceSource,
    TranslationCache,
    TranslationMetrics,
)
from localization.persistence import InMemoryKeyValueBackend, PreferenceStore
from tests.factories.i18n import NAMESPACES


class GatedResourceSource(ResourceSource):
    """Resource source whose fetches block until their locale is released.

    Each locale has its own gate; ``release(locale)`` lets every pending
    and future fetch for that locale complete.
    """

    def __init__(self, resources: Dict[str, Dict[str, Dict[str, Any]]]):
        self.resources = resources
        self.gates: Dict[str, asyncio.Event] = defaultdict(asyncio.Event)
        self.calls: List[tuple] = []

    def release(self, locale: str) -> None:
        self.gates[locale].set()

    async def fetch(self, locale: str, namespace: str) -> Dict[str, Any]:
        self.calls.append((locale, namespace))
        await self.gates[locale].wait()
        try:
            return self.resources[locale][namespace]
        except KeyError as e:
            raise FileNotFoundError(f"No resource for {locale}/{namespace}") from e


class CountingResourceSource(InMemoryResourceSource):
    """In-memory source that records every fetch."""

    def __init__(self, resources):
        super().__init__(resources)
        self.calls: List[tuple] = []

    async def fetch(self, locale: str, namespace: str) -> Dict[str, Any]:
        self.calls.append((locale, namespace))
        return await super().fetch(locale, namespace)


@pytest.fixture
def namespaces():
    return NAMESPACES


@pytest.fixture
def memory_source(sample_resources):
    return CountingResourceSource(sample_resources)


@pytest.fixture
def loader(memory_source, registry, namespaces):
    return ResourceLoader(memory_source, registry, namespaces)


@pytest.fixture
def preference_backend():
    return InMemoryKeyValueBackend()


@pytest.fixture
def preferences(preference_backend, registry):
    return PreferenceStore(preference_backend, registry=registry)


@pytest.fixture
def metrics():
    return TranslationMetrics()


@pytest.fixture
def session(loader, registry, preferences, metrics):
    """Session over the sample resources, not yet loaded."""
    return LocaleSession(
        loader=loader,
        registry=registry,
        cache=TranslationCache(max_size=100),
        preferences=preferences,
        metrics=metrics,
    )


@pytest.fixture
def gated_source(sample_resources):
    return GatedResourceSource(sample_resources)


@pytest.fixture
def gated_session(gated_source, registry, namespaces):
    """Session whose loads only finish when the test releases them."""
    return LocaleSession(
        loader=ResourceLoader(gated_source, registry, namespaces),
        registry=registry,
    )


@pytest.fixture
def resources_dir(tmp_path, sample_resources):
    """Directory tree <locale>/<namespace>.yml written from the sample resources."""
    for locale, namespace_trees in sample_resources.items():
        locale_dir = tmp_path / locale
        locale_dir.mkdir()
        for namespace, tree in namespace_trees.items():
            with open(locale_dir / f"{namespace}.yml", "w", encoding="utf-8") as f:
                yaml.safe_dump(tree, f, allow_unicode=True)
    return tmp_path
