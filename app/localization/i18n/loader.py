"""Translation resource sources and the locale bundle loader.

A ResourceSource fetches one namespace tree for one locale. The
ResourceLoader fans those fetches out in parallel, isolates per-namespace
failures and substitutes the default locale when nothing could be loaded.
"""

import asyncio
import copy
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import yaml

from localization.i18n.models import ResourceBundle
from localization.i18n.registry import LocaleRegistry
from localization.logging import get_module_logger

logger = get_module_logger()

RESOURCE_SUFFIXES = (".yml", ".yaml", ".json")


class ResourceSource(ABC):
    """Abstract base for translation resource sources.

    Implementations must not cache results: the session owns caching.
    """

    @abstractmethod
    async def fetch(self, locale: str, namespace: str) -> Dict[str, Any]:
        """Fetch the translation tree for one namespace of one locale.

        Args:
            locale: Locale code (e.g., "en").
            namespace: Namespace name (e.g., "common").

        Returns:
            Nested dict of translation strings.

        Raises:
            FileNotFoundError: If no resource exists for locale/namespace.
            ValueError: If the resource cannot be parsed.
        """
        pass


class FileResourceSource(ResourceSource):
    """Loads ``<resources_dir>/<locale>/<namespace>.(yml|yaml|json)`` files.

    Files are parsed with ``yaml.safe_load``, which also accepts JSON.
    Reads happen in a worker thread so the event loop is never blocked.

    Attributes:
        resources_dir: Directory holding one sub-directory per locale.
    """

    def __init__(self, resources_dir: Path):
        self.resources_dir = Path(resources_dir)

        if not self.resources_dir.exists():
            raise ValueError(f"Resources directory not found: {self.resources_dir}")

        logger.info("initialized_file_resource_source", resources_dir=str(self.resources_dir))

    async def fetch(self, locale: str, namespace: str) -> Dict[str, Any]:
        return await asyncio.to_thread(self._read, locale, namespace)

    def _resolve_file(self, locale: str, namespace: str) -> Path:
        locale_dir = self.resources_dir / locale
        for suffix in RESOURCE_SUFFIXES:
            candidate = locale_dir / f"{namespace}{suffix}"
            if candidate.is_file():
                return candidate
        raise FileNotFoundError(
            f"No resource file for {locale}/{namespace} in {self.resources_dir}"
        )

    def _read(self, locale: str, namespace: str) -> Dict[str, Any]:
        resource_file = self._resolve_file(locale, namespace)
        try:
            with open(resource_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse {resource_file}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping in {resource_file}, got {type(data).__name__}")
        return data


class InMemoryResourceSource(ResourceSource):
    """Serves resources from an in-process mapping.

    Useful for bundled assets and tests. A missing locale or namespace
    raises FileNotFoundError just like a missing file would.

    Attributes:
        resources: Mapping {locale: {namespace: tree}}.
    """

    def __init__(self, resources: Optional[Dict[str, Dict[str, Dict[str, Any]]]] = None):
        self.resources = resources or {}

    async def fetch(self, locale: str, namespace: str) -> Dict[str, Any]:
        try:
            tree = self.resources[locale][namespace]
        except KeyError as e:
            raise FileNotFoundError(f"No resource for {locale}/{namespace}") from e
        # Hand out a copy so callers never share mutable state with the source
        return copy.deepcopy(tree)


class ResourceLoader:
    """Loads complete resource bundles for a locale.

    Fetches every namespace concurrently. A failed namespace becomes an
    empty tree. When every namespace fails, the default locale is loaded
    instead; when even that fails, an all-empty bundle is returned so the
    UI degrades to raw keys.

    Attributes:
        source: ResourceSource used for the individual fetches.
        namespaces: Namespaces that make up a bundle.
        default_locale: Locale substituted on total failure.
    """

    def __init__(
        self,
        source: ResourceSource,
        registry: LocaleRegistry,
        namespaces: Sequence[str],
        default_locale: Optional[str] = None,
    ):
        self.source = source
        self.registry = registry
        self.namespaces = tuple(namespaces)
        self.default_locale = default_locale or registry.default.code

    async def load(self, locale: str) -> ResourceBundle:
        """Load every namespace of ``locale``.

        Args:
            locale: Locale code to load.

        Returns:
            ResourceBundle. ``bundle.is_fallback`` is True when the default
            locale was substituted.
        """
        trees = await asyncio.gather(
            *(self._fetch_namespace(locale, namespace) for namespace in self.namespaces)
        )

        namespaces: Dict[str, Dict[str, Any]] = {}
        failed = []
        for namespace, tree in zip(self.namespaces, trees):
            if tree is None:
                failed.append(namespace)
                namespaces[namespace] = {}
            else:
                namespaces[namespace] = tree

        if self.namespaces and len(failed) == len(self.namespaces):
            return await self._load_fallback(locale)

        logger.info(
            "loaded_locale_bundle",
            locale=locale,
            namespace_count=len(self.namespaces),
            failed_namespaces=failed,
        )
        return ResourceBundle(
            locale=locale,
            requested_locale=locale,
            namespaces=namespaces,
            failed_namespaces=tuple(failed),
        )

    async def _load_fallback(self, locale: str) -> ResourceBundle:
        if locale != self.default_locale:
            logger.warning(
                "locale_load_failed",
                locale=locale,
                fallback_locale=self.default_locale,
            )
            bundle = await self.load(self.default_locale)
            bundle.requested_locale = locale
            return bundle

        logger.error("default_locale_load_failed", locale=locale)
        return ResourceBundle.empty(locale, self.namespaces)

    async def _fetch_namespace(self, locale: str, namespace: str) -> Optional[Dict[str, Any]]:
        try:
            tree = await self.source.fetch(locale, namespace)
        except Exception as e:
            logger.warning(
                "namespace_load_failed",
                locale=locale,
                namespace=namespace,
                error=str(e),
            )
            return None

        if not isinstance(tree, dict):
            logger.warning(
                "invalid_namespace_format",
                locale=locale,
                namespace=namespace,
                expected="dict",
            )
            return None
        return tree

