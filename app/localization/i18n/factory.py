"""Factory functions for creating i18n components.

Wires a LocaleSession from the application settings.
"""

import asyncio
from pathlib import Path
from typing import Optional, Sequence

from localization.configuration import Settings, settings as default_settings
from localization.i18n.cache import TranslationCache
from localization.i18n.interpolation import Interpolator
from localization.i18n.loader import FileResourceSource, ResourceLoader, ResourceSource
from localization.i18n.metrics import TranslationMetrics
from localization.i18n.plural import PluralRules
from localization.i18n.registry import LocaleRegistry
from localization.i18n.session import LocaleSession
from localization.logging import get_module_logger
from localization.persistence import (
    InMemoryKeyValueBackend,
    JSONFileKeyValueBackend,
    KeyValueBackend,
    NullKeyValueBackend,
    PreferenceStore,
)

logger = get_module_logger()


def default_resources_dir() -> Path:
    """The ``locales`` directory shipped next to the package."""
    # This file is at .../app/localization/i18n/factory.py
    return Path(__file__).resolve().parents[2] / "locales"


def create_preference_backend(config: Optional[Settings] = None) -> KeyValueBackend:
    """Backend selected by ``PREFERENCE_BACKEND``.

    Raises:
        ValueError: If the configured backend is unknown.
    """
    config = config or default_settings
    backend = config.preferences.backend
    if backend == "file":
        return JSONFileKeyValueBackend(config.preferences.file_path)
    if backend == "memory":
        return InMemoryKeyValueBackend()
    if backend == "none":
        return NullKeyValueBackend()
    raise ValueError(f"Unknown preference backend: {backend}")


def create_locale_session(
    config: Optional[Settings] = None,
    source: Optional[ResourceSource] = None,
    registry: Optional[LocaleRegistry] = None,
    preferences: Optional[PreferenceStore] = None,
    metrics: Optional[TranslationMetrics] = None,
) -> LocaleSession:
    """Create and configure a LocaleSession.

    If no source is provided, translation files are read from
    ``I18N_RESOURCES_DIR`` or, when unset, the bundled ``app/locales``.

    Args:
        config: Settings to build from (default: the settings singleton)
        source: ResourceSource to load bundles from
        registry: Supported locales (default: the built-in registry)
        preferences: PreferenceStore (default: backend from settings)
        metrics: TranslationMetrics to record into

    Returns:
        LocaleSession: Configured session, not yet initialized

    Raises:
        ValueError: If the resources directory does not exist

    Usage:
        session = create_locale_session()
        await session.initialize()
        session.translate("common.greeting", {"name": "Ana"})
    """
    config = config or default_settings
    i18n = config.i18n
    registry = registry or LocaleRegistry(default_code=i18n.default_locale)

    if source is None:
        source = FileResourceSource(i18n.resources_dir or default_resources_dir())

    if preferences is None:
        preferences = PreferenceStore(
            backend=create_preference_backend(config),
            registry=registry,
            storage_key=config.preferences.storage_key,
        )

    loader = ResourceLoader(
        source=source,
        registry=registry,
        namespaces=i18n.namespaces,
        default_locale=i18n.default_locale,
    )
    session = LocaleSession(
        loader=loader,
        registry=registry,
        cache=TranslationCache(max_size=i18n.cache_max_size),
        plural_rules=PluralRules(),
        interpolator=Interpolator(
            registry,
            prefix=i18n.interpolation_prefix,
            suffix=i18n.interpolation_suffix,
        ),
        preferences=preferences,
        metrics=metrics,
        missing_format=i18n.missing_format,
        log_missing=i18n.log_missing,
        plural_separator=i18n.plural_separator,
    )

    logger.info(
        "locale_session_created",
        default_locale=i18n.default_locale,
        namespace_count=len(i18n.namespaces),
        cache_max_size=i18n.cache_max_size,
    )
    return session


async def start_locale_session(
    config: Optional[Settings] = None,
    locale: Optional[str] = None,
    preferred_languages: Optional[Sequence[str]] = None,
    **kwargs,
) -> LocaleSession:
    """Create a session, load its starting locale and warm the preload locales.

    Args:
        config: Settings to build from (default: the settings singleton)
        locale: Starting locale (default: stored preference, preferred
            languages, system, default)
        preferred_languages: Host language tags, most preferred first
        **kwargs: Forwarded to create_locale_session

    Returns:
        LocaleSession: Initialized session
    """
    config = config or default_settings
    session = create_locale_session(config=config, **kwargs)
    await session.initialize(locale, preferred_languages)

    preload = [code for code in config.i18n.preload_locales if code != session.current_locale]
    if preload:
        await asyncio.gather(*(session.preload(code) for code in preload))
    return session
