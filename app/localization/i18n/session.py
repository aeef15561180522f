"""Reactive locale session.

Owns the current locale, the loaded bundle and the translation cache, and
exposes the synchronous translate API used by the UI layer. Locale switches
are asynchronous; the latest request always wins.
"""

import inspect
import time
from datetime import date, datetime
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from localization.i18n.cache import CachedTemplate, TranslationCache
from localization.i18n.formatting import LocaleFormatter, Numeric
from localization.i18n.interpolation import Interpolator
from localization.i18n.loader import ResourceLoader
from localization.i18n.metrics import TranslationMetrics
from localization.i18n.models import (
    LoadState,
    LocaleDescriptor,
    PluralCategory,
    ResourceBundle,
)
from localization.i18n.plural import PluralRules
from localization.i18n.registry import LocaleRegistry
from localization.i18n.resolvers import LocaleResolver, resolve_key
from localization.logging import bind_locale_context, get_module_logger
from localization.persistence.preferences import PreferenceStore

logger = get_module_logger()

ChangeHandler = Callable[[str], Union[None, Awaitable[None]]]
TranslationParams = Mapping[str, Any]


class LocaleSession:
    """Orchestrates locale state, resource loading and translation.

    ``translate``, ``translate_plural`` and ``exists`` are synchronous and
    never raise; missing keys render as the configured placeholder, which
    contains the key itself.

    Attributes:
        registry: Supported locales.
        loader: ResourceLoader used for every locale switch.
        cache: Resolved templates for the current locale.
        metrics: Cache hit/miss and timing counters.
    """

    def __init__(
        self,
        loader: ResourceLoader,
        registry: LocaleRegistry,
        cache: Optional[TranslationCache] = None,
        plural_rules: Optional[PluralRules] = None,
        interpolator: Optional[Interpolator] = None,
        preferences: Optional[PreferenceStore] = None,
        formatter: Optional[LocaleFormatter] = None,
        metrics: Optional[TranslationMetrics] = None,
        missing_format: str = "{{key}}",
        log_missing: bool = False,
        plural_separator: str = "_",
        initial_locale: Optional[str] = None,
    ):
        self.loader = loader
        self.registry = registry
        self.cache = cache if cache is not None else TranslationCache()
        self.plural_rules = plural_rules if plural_rules is not None else PluralRules()
        self.interpolator = interpolator if interpolator is not None else Interpolator(registry)
        self.preferences = preferences
        self.formatter = formatter if formatter is not None else LocaleFormatter(registry)
        self.metrics = metrics if metrics is not None else TranslationMetrics()
        self.missing_format = missing_format
        self.log_missing = log_missing
        self.plural_separator = plural_separator
        self.locale_resolver = LocaleResolver(registry)

        self._current_locale = initial_locale or registry.default.code
        self._bundle: Optional[ResourceBundle] = None
        self._preloaded: Dict[str, ResourceBundle] = {}
        self._handlers: List[ChangeHandler] = []
        self._generation = 0
        self._state = LoadState.IDLE

    @property
    def current_locale(self) -> str:
        return self._current_locale

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def bundle(self) -> Optional[ResourceBundle]:
        return self._bundle

    async def initialize(
        self,
        locale: Optional[str] = None,
        preferred_languages: Optional[Sequence[str]] = None,
    ) -> None:
        """Load the starting locale.

        Uses ``locale`` when given, otherwise the stored preference, then the
        first supported entry of ``preferred_languages``, then the system
        locale, then the default locale.
        """
        if locale is None:
            stored = self.preferences.load() if self.preferences is not None else None
            locale = self.locale_resolver.initial_locale(stored, preferred_languages)
        await self.set_locale(locale)

    def translate(self, key: str, params: Optional[TranslationParams] = None) -> str:
        """Translated, interpolated text for ``key`` in the current locale."""
        started = time.perf_counter()
        locale = self._current_locale
        try:
            template, _ = self._template(locale, key)
            return self.interpolator.interpolate(template, params, locale)
        except Exception as e:
            logger.error("translation_failed", key=key, locale=locale, error=str(e))
            return self._missing_placeholder(key)
        finally:
            self.metrics.record_translation_time(time.perf_counter() - started)

    def translate_plural(
        self,
        key: str,
        count: Numeric,
        params: Optional[TranslationParams] = None,
    ) -> str:
        """Plural-aware translation of ``key`` for ``count``.

        Tries ``key_<category>``, then ``key_other``, then ``key`` itself.
        ``count`` is available to the template as ``{{count}}``.
        """
        started = time.perf_counter()
        locale = self._current_locale
        try:
            values: Dict[str, Any] = {**(params or {}), "count": count}
            category = self.plural_rules.select_category(count, locale)
            candidates = [f"{key}{self.plural_separator}{category.value}"]
            if category is not PluralCategory.OTHER:
                candidates.append(f"{key}{self.plural_separator}{PluralCategory.OTHER.value}")

            template = None
            for candidate in candidates:
                resolved, found = self._template(locale, candidate)
                if found:
                    template = resolved
                    break
            if template is None:
                template, _ = self._template(locale, key)
            return self.interpolator.interpolate(template, values, locale)
        except Exception as e:
            logger.error("plural_translation_failed", key=key, locale=locale, error=str(e))
            return self._missing_placeholder(key)
        finally:
            self.metrics.record_translation_time(time.perf_counter() - started)

    def exists(self, key: str) -> bool:
        """True if ``key`` resolves to a string in the loaded bundle."""
        try:
            return resolve_key(self._bundle, key) is not None
        except Exception as e:
            logger.error("translation_exists_check_failed", key=key, error=str(e))
            return False

    async def set_locale(self, code: str) -> None:
        """Switch to ``code`` and load its bundle.

        The cache is cleared and the current locale updated before anything
        is awaited. If a newer switch starts while this one is loading, this
        load's result is discarded and no handlers are notified for it.
        """
        target = self._normalize(code)
        self._generation += 1
        generation = self._generation

        with bind_locale_context(target, generation=generation):
            await self._switch(target, generation)

    async def _switch(self, target: str, generation: int) -> None:
        self._current_locale = target
        self.cache.clear()
        self._state = LoadState.LOADING
        if self.preferences is not None:
            self.preferences.save(target)

        bundle = self._take_preloaded(target)
        if bundle is None:
            try:
                bundle = await self.loader.load(target)
            except Exception as e:
                logger.error("locale_load_crashed", locale=target, error=str(e))
                bundle = ResourceBundle.empty(
                    self.registry.default.code,
                    self.loader.namespaces,
                    requested_locale=target,
                )

        if generation != self._generation:
            logger.info(
                "discarded_stale_locale_load",
                locale=target,
                current_locale=self._current_locale,
            )
            return

        self._bundle = bundle
        self._preloaded.pop(target, None)
        self.cache.clear()
        self._state = LoadState.FALLBACK_LOADED if bundle.is_fallback else LoadState.LOADED
        logger.info(
            "locale_changed",
            locale=target,
            bundle_locale=bundle.locale,
            state=self._state.value,
        )

        await self._notify(target, generation)
        if generation == self._generation:
            self._state = LoadState.IDLE

    def on_locale_change(self, handler: ChangeHandler) -> Callable[[], None]:
        """Register ``handler`` for completed locale changes.

        Returns:
            Function that unregisters the handler; safe to call repeatedly.
        """
        if handler not in self._handlers:
            self._handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    async def preload(self, code: str) -> None:
        """Load ``code`` into a preload slot without switching to it.

        The next ``set_locale`` for the same locale consumes the preloaded
        bundle instead of fetching again. A bundle for the locale that is
        already current is not kept, and a committed switch drops any slot
        left for its locale.
        """
        target = self._normalize(code)
        try:
            bundle = await self.loader.load(target)
        except Exception as e:
            logger.warning("failed_to_preload_locale", locale=target, error=str(e))
            return
        if target == self._current_locale:
            logger.info("skipped_preload_of_current_locale", locale=target)
            return
        self._preloaded[target] = bundle
        logger.info("preloaded_locale", locale=target, bundle_locale=bundle.locale)

    def scoped(self, namespace: str) -> "ScopedTranslator":
        """Translator view whose keys are relative to ``namespace``."""
        return ScopedTranslator(self, namespace)

    def clear_cache(self) -> None:
        self.cache.clear()

    def is_rtl(self, code: Optional[str] = None) -> bool:
        return self.registry.is_right_to_left(code or self._current_locale)

    def describe(self, code: Optional[str] = None) -> LocaleDescriptor:
        return self.registry.describe(code or self._current_locale)

    def supported_locales(self) -> List[LocaleDescriptor]:
        return self.registry.list_locales()

    def format_date(self, value: Union[date, datetime], format: str = "long") -> str:
        return self.formatter.format_date(value, self._current_locale, format=format)

    def format_number(self, value: Numeric) -> str:
        return self.formatter.format_number(value, self._current_locale)

    def format_currency(self, amount: Numeric, currency: Optional[str] = None) -> str:
        return self.formatter.format_currency(amount, self._current_locale, currency=currency)

    def format_relative_time(self, value: Numeric, unit: str) -> str:
        return self.formatter.format_relative_time(value, unit, self._current_locale)

    def _template(self, locale: str, key: str) -> Tuple[str, bool]:
        """Uninterpolated template for ``key`` and whether it was found."""
        placeholder = self._missing_placeholder(key)
        cached = self.cache.get(locale, key)
        if cached is not None:
            self.metrics.record_cache_hit()
            return cached.template, cached.found

        self.metrics.record_cache_miss()
        if self._bundle is None:
            # Nothing loaded yet; not cached so the first bundle is used once it lands
            return key, False

        template = resolve_key(self._bundle, key)
        found = template is not None
        if not found:
            if self.log_missing:
                logger.warning("missing_translation", key=key, locale=locale)
            template = placeholder

        self.cache.set(locale, key, CachedTemplate(template, found))
        return template, found

    def _missing_placeholder(self, key: str) -> str:
        return self.missing_format.replace("{{key}}", str(key))

    def _normalize(self, code: str) -> str:
        if self.registry.is_supported(code):
            return code
        return self.locale_resolver.resolve_from_string(code)

    def _take_preloaded(self, code: str) -> Optional[ResourceBundle]:
        return self._preloaded.pop(code, None)

    async def _notify(self, code: str, generation: int) -> None:
        for handler in list(self._handlers):
            if generation != self._generation:
                logger.info("superseded_locale_notification", locale=code)
                return
            try:
                result = handler(code)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(
                    "locale_change_handler_failed",
                    handler=getattr(handler, "__name__", "unknown"),
                    locale=code,
                    error=str(e),
                )


class ScopedTranslator:
    """Session view that prefixes every key with a namespace.

    Example:
        common = session.scoped("common")
        common.translate("greeting", {"name": "Ana"})  # -> "Hello, Ana"
    """

    def __init__(self, session: LocaleSession, namespace: str):
        self.session = session
        self.namespace = namespace

    @property
    def locale(self) -> str:
        return self.session.current_locale

    def _qualify(self, key: str) -> str:
        return f"{self.namespace}.{key}"

    def translate(self, key: str, params: Optional[TranslationParams] = None) -> str:
        return self.session.translate(self._qualify(key), params)

    def translate_plural(
        self,
        key: str,
        count: Numeric,
        params: Optional[TranslationParams] = None,
    ) -> str:
        return self.session.translate_plural(self._qualify(key), count, params)

    def exists(self, key: str) -> bool:
        return self.session.exists(self._qualify(key))
