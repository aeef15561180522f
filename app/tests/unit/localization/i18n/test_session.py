"""Tests for localization.i18n.session module."""

# pylint: disable=protected-access

import asyncio
from datetime import date
from unittest.mock import MagicMock, patch

import pytest

from localization.i18n import (
    InMemoryResourceSource,
    LoadState,
    LocaleSession,
    ResourceLoader,
    TranslationCache,
)
from localization.i18n.interpolation import PDF, RLE
from localization.persistence.preferences import DEFAULT_STORAGE_KEY


class TestTranslate:
    """Tests for LocaleSession.translate."""

    @pytest.mark.asyncio
    async def test_translate_with_params(self, session):
        """Templates are resolved and interpolated."""
        await session.set_locale("en")
        assert session.translate("common.greeting", {"name": "Ana"}) == "Hello, Ana"
        assert session.translate("pages.library.title") == "Library"

    @pytest.mark.asyncio
    async def test_missing_key_renders_key(self, session):
        """Missing keys render as the key itself."""
        await session.set_locale("en")
        assert session.translate("common.does_not_exist") == "common.does_not_exist"
        assert session.translate("common.actions") == "common.actions"

    @pytest.mark.asyncio
    async def test_missing_key_uses_configured_format(self, loader, registry):
        """The missing placeholder format is configurable."""
        session = LocaleSession(loader, registry, missing_format="[missing: {{key}}]")
        await session.set_locale("en")
        assert session.translate("errors.nope") == "[missing: errors.nope]"

    def test_translate_before_load_returns_key(self, session):
        """Before any bundle is loaded translate returns the key."""
        assert session.translate("common.welcome") == "common.welcome"
        assert len(session.cache) == 0

    @pytest.mark.asyncio
    async def test_translate_never_raises(self, session):
        """A failing interpolator degrades to the missing placeholder."""
        await session.set_locale("en")
        session.interpolator = MagicMock()
        session.interpolator.interpolate.side_effect = RuntimeError("boom")
        assert session.translate("common.welcome") == "common.welcome"
        assert session.translate_plural("common.items", 2) == "common.items"

    @pytest.mark.asyncio
    async def test_placeholder_left_when_param_missing(self, session):
        """Unsupplied placeholders remain in the output."""
        await session.set_locale("en")
        assert session.translate("common.greeting") == "Hello, {{name}}"
        assert session.translate("common.greeting", {"name": None}) == "Hello, {{name}}"

    @pytest.mark.asyncio
    async def test_rtl_output_is_embedded(self, session):
        """Arabic output is wrapped in RLE/PDF, including missing keys."""
        await session.set_locale("ar")
        assert session.translate("common.greeting", {"name": "Ana"}) == f"{RLE}مرحبا، Ana{PDF}"
        missing = session.translate("common.nope")
        assert "common.nope" in missing
        assert session.is_rtl()

    @pytest.mark.asyncio
    async def test_exists(self, session):
        """exists reports only string leaves of the loaded bundle."""
        assert session.exists("common.welcome") is False
        await session.set_locale("en")
        assert session.exists("common.welcome") is True
        assert session.exists("common.actions") is False
        assert session.exists("common") is False


class TestTranslatePlural:
    """Tests for LocaleSession.translate_plural."""

    @pytest.mark.asyncio
    async def test_english_one_and_other(self, session):
        """English selects _one or _other and exposes count."""
        await session.set_locale("en")
        assert session.translate_plural("common.items", 1) == "1 item"
        assert session.translate_plural("common.items", 0) == "0 items"
        assert session.translate_plural("common.items", 7) == "7 items"

    @pytest.mark.asyncio
    async def test_falls_back_to_other_form(self, session):
        """Without the selected form, the _other form is used."""
        await session.set_locale("en")
        assert session.translate_plural("common.books", 1) == "1 books"

    @pytest.mark.asyncio
    async def test_falls_back_to_base_key(self, session):
        """Without any plural form, the base key is used."""
        await session.set_locale("en")
        assert session.translate_plural("common.pages", 3) == "3 pages"

    @pytest.mark.asyncio
    async def test_missing_plural_renders_base_key(self, session):
        """Nothing found at all renders the base key."""
        await session.set_locale("en")
        assert session.translate_plural("common.widgets", 2) == "common.widgets"

    @pytest.mark.asyncio
    async def test_arabic_forms(self, session):
        """Arabic picks among its six forms."""
        await session.set_locale("ar")
        assert session.translate_plural("common.items", 0) == f"{RLE}لا عناصر{PDF}"
        assert session.translate_plural("common.items", 2) == f"{RLE}عنصران{PDF}"
        assert session.translate_plural("common.items", 5) == f"{RLE}5 عناصر{PDF}"
        assert session.translate_plural("common.items", 11) == f"{RLE}11 عنصرًا{PDF}"

    @pytest.mark.asyncio
    async def test_count_param_overrides_caller_value(self, session):
        """The count argument always wins over a count param."""
        await session.set_locale("en")
        assert session.translate_plural("common.items", 2, {"count": 99}) == "2 items"


class TestSetLocale:
    """Tests for LocaleSession.set_locale."""

    @pytest.mark.asyncio
    async def test_switch_changes_output(self, session):
        """Switching locale changes translations."""
        await session.set_locale("en")
        assert session.translate("common.welcome") == "Welcome"
        await session.set_locale("es")
        assert session.current_locale == "es"
        assert session.translate("common.welcome") == "Bienvenido"
        assert session.state is LoadState.IDLE

    @pytest.mark.asyncio
    async def test_switch_clears_cache(self, session):
        """No template cached for the old locale survives a switch."""
        await session.set_locale("en")
        session.translate("common.welcome")
        assert len(session.cache) == 1
        await session.set_locale("es")
        assert len(session.cache) == 0

    @pytest.mark.asyncio
    async def test_fallback_locale_serves_default_content(self, session):
        """A locale with no resources is served by the default locale."""
        await session.set_locale("fr")
        assert session.current_locale == "fr"
        assert session.bundle.is_fallback
        assert session.bundle.locale == "en"
        assert session.translate("common.welcome") == "Welcome"

    @pytest.mark.asyncio
    async def test_partial_locale_keeps_missing_keys_visible(self, session):
        """Keys absent from a partially translated locale show the key."""
        await session.set_locale("es")
        assert session.translate("errors.generic") == "errors.generic"

    @pytest.mark.asyncio
    async def test_unsupported_codes_are_negotiated(self, session):
        """Region tags map to their language; unknown tags to the default."""
        await session.set_locale("es-MX")
        assert session.current_locale == "es"
        await session.set_locale("ko")
        assert session.current_locale == "en"

    @pytest.mark.asyncio
    async def test_loader_crash_degrades_to_keys(self, registry, namespaces):
        """A loader that raises leaves an empty bundle."""
        loader = MagicMock(spec=ResourceLoader)
        loader.namespaces = namespaces
        loader.load.side_effect = RuntimeError("disk on fire")
        session = LocaleSession(loader, registry)

        await session.set_locale("es")

        assert session.current_locale == "es"
        assert session.bundle.is_fallback
        assert session.translate("common.welcome") == "common.welcome"

    @pytest.mark.asyncio
    async def test_switch_persists_preference(self, session, preference_backend):
        """The selected locale is stored."""
        await session.set_locale("ja")
        assert preference_backend.get(DEFAULT_STORAGE_KEY) == "ja"


class TestInitialize:
    """Tests for LocaleSession.initialize."""

    @pytest.mark.asyncio
    async def test_explicit_locale(self, session):
        """An explicit locale is loaded directly."""
        await session.initialize("es")
        assert session.current_locale == "es"

    @pytest.mark.asyncio
    async def test_stored_preference(self, session, preference_backend):
        """The stored preference is restored."""
        preference_backend.set(DEFAULT_STORAGE_KEY, "ar")
        await session.initialize()
        assert session.current_locale == "ar"

    @pytest.mark.asyncio
    async def test_system_locale(self, session):
        """Without a preference, the system locale is used."""
        with patch("localization.i18n.resolvers.default_locale", return_value="es_ES.UTF-8"):
            await session.initialize()
        assert session.current_locale == "es"

    @pytest.mark.asyncio
    async def test_default_locale(self, session):
        """Without preference or system locale, the default is used."""
        with patch("localization.i18n.resolvers.default_locale", return_value=None):
            await session.initialize()
        assert session.current_locale == "en"

    @pytest.mark.asyncio
    async def test_preferred_languages(self, session):
        """Preferred languages are used before the system locale."""
        with patch("localization.i18n.resolvers.default_locale", return_value="fr_FR"):
            await session.initialize(preferred_languages=["ko-KR", "es-MX"])
        assert session.current_locale == "es"

    @pytest.mark.asyncio
    async def test_stored_preference_beats_preferred_languages(self, session, preference_backend):
        """A stored preference wins over preferred languages."""
        preference_backend.set(DEFAULT_STORAGE_KEY, "ar")
        await session.initialize(preferred_languages=["es"])
        assert session.current_locale == "ar"


class TestLocaleChangeHandlers:
    """Tests for on_locale_change."""

    @pytest.mark.asyncio
    async def test_handlers_receive_code(self, session):
        """Sync and async handlers are called with the new code."""
        seen = []

        async def async_handler(code):
            seen.append(("async", code))

        session.on_locale_change(lambda code: seen.append(("sync", code)))
        session.on_locale_change(async_handler)
        await session.set_locale("es")

        assert seen == [("sync", "es"), ("async", "es")]

    @pytest.mark.asyncio
    async def test_handlers_see_committed_state(self, session):
        """Handlers run after the bundle is committed."""
        seen = []
        session.on_locale_change(lambda code: seen.append(session.translate("common.welcome")))
        await session.set_locale("es")
        assert seen == ["Bienvenido"]

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_block_others(self, session):
        """An exception in one handler is isolated."""
        seen = []

        def broken(code):
            raise RuntimeError("handler bug")

        session.on_locale_change(broken)
        session.on_locale_change(seen.append)
        await session.set_locale("es")

        assert seen == ["es"]
        assert session.current_locale == "es"

    @pytest.mark.asyncio
    async def test_unsubscribe_is_idempotent(self, session):
        """Unsubscribed handlers are not called; unsubscribing twice is safe."""
        seen = []
        unsubscribe = session.on_locale_change(seen.append)
        await session.set_locale("es")
        unsubscribe()
        unsubscribe()
        await session.set_locale("en")
        assert seen == ["es"]


class TestPreload:
    """Tests for LocaleSession.preload."""

    @pytest.mark.asyncio
    async def test_preloaded_bundle_is_used(self, session, memory_source, namespaces):
        """set_locale consumes the preloaded bundle without fetching again."""
        await session.set_locale("en")
        await session.preload("es")
        fetches = len(memory_source.calls)

        assert session.current_locale == "en"
        await session.set_locale("es")

        assert len(memory_source.calls) == fetches
        assert session.translate("common.welcome") == "Bienvenido"

    @pytest.mark.asyncio
    async def test_preloads_are_kept_per_locale(self, session, memory_source):
        """Preloading a second locale keeps the first."""
        await session.preload("es")
        await session.preload("ar")
        fetches = len(memory_source.calls)

        await session.set_locale("es")
        await session.set_locale("ar")

        assert len(memory_source.calls) == fetches

    @pytest.mark.asyncio
    async def test_preload_is_consumed_once(self, session, memory_source, namespaces):
        """A preloaded bundle is only used by the next switch."""
        await session.preload("es")
        await session.set_locale("es")
        await session.set_locale("en")
        fetches = len(memory_source.calls)
        await session.set_locale("es")
        assert len(memory_source.calls) == fetches + len(namespaces)

    @pytest.mark.asyncio
    async def test_preload_of_current_locale_is_not_kept(self, session, memory_source, namespaces):
        """A preload for the locale already shown is dropped."""
        await session.set_locale("es")
        await session.preload("es")
        assert "es" not in session._preloaded

        await session.set_locale("en")
        fetches = len(memory_source.calls)
        await session.set_locale("es")
        assert len(memory_source.calls) == fetches + len(namespaces)

    @pytest.mark.asyncio
    async def test_preload_landing_during_switch_is_not_kept(self, session):
        """A preload that finishes while its locale is being switched to is dropped."""
        await session.set_locale("en")
        switch = asyncio.create_task(session.set_locale("es"))
        await session.preload("es")
        await switch
        assert session.current_locale == "es"
        assert "es" not in session._preloaded


class TestSessionExtras:
    """Tests for metrics, scoping and formatting helpers."""

    @pytest.mark.asyncio
    async def test_cache_hit_and_miss_metrics(self, session, metrics):
        """Repeated lookups are served from the cache."""
        await session.set_locale("en")
        session.translate("common.welcome")
        session.translate("common.welcome")

        snapshot = metrics.snapshot()
        assert snapshot.cache_misses == 1
        assert snapshot.cache_hits == 1
        assert snapshot.cache_hit_rate == 50.0

    @pytest.mark.asyncio
    async def test_missing_keys_are_cached(self, session, metrics):
        """A missing key is only resolved once."""
        await session.set_locale("en")
        session.translate("common.nope")
        session.translate("common.nope")
        assert metrics.cache_misses == 1

    @pytest.mark.asyncio
    async def test_scoped_translator(self, session):
        """Scoped keys are prefixed with the namespace."""
        await session.set_locale("en")
        common = session.scoped("common")
        assert common.translate("actions.save") == "Save"
        assert common.translate_plural("items", 2) == "2 items"
        assert common.exists("welcome")
        assert common.locale == "en"

    @pytest.mark.asyncio
    async def test_formatting_follows_current_locale(self, session):
        """Formatting helpers use the current locale."""
        await session.set_locale("es")
        assert session.format_date(date(2024, 3, 5)) == "5 de marzo de 2024"
        assert "€" in session.format_currency(10)
        await session.set_locale("en")
        assert session.format_number(1234.5) == "1,234.5"
        assert session.format_relative_time(-2, "day") == "2 days ago"

    def test_describe_and_supported_locales(self, session):
        """Registry lookups are exposed on the session."""
        assert session.describe().code == "en"
        assert session.describe("ar").is_rtl
        assert len(session.supported_locales()) == 12

    @pytest.mark.asyncio
    async def test_clear_cache(self, session):
        """clear_cache empties the cache."""
        await session.set_locale("en")
        session.translate("common.welcome")
        session.clear_cache()
        assert len(session.cache) == 0


class TestSessionCache:
    """Tests for the session's use of its translation cache."""

    @pytest.mark.asyncio
    async def test_injected_cache_evicts_oldest(self, loader, registry, metrics):
        """A full cache drops the first resolved key, which then resolves again."""
        cache = TranslationCache(max_size=2)
        session = LocaleSession(loader, registry, cache=cache, metrics=metrics)
        await session.set_locale("en")

        session.translate("common.welcome")
        session.translate("common.greeting", {"name": "Ana"})
        session.translate("pages.library.title")

        assert session.cache is cache
        assert len(cache) == 2
        assert ("en", "common.welcome") not in cache
        assert ("en", "pages.library.title") in cache

        misses = metrics.cache_misses
        assert session.translate("common.welcome") == "Welcome"
        assert metrics.cache_misses == misses + 1

    @pytest.mark.asyncio
    async def test_cached_plural_form_matching_its_key(self, registry, metrics):
        """A found template equal to its own key is still a hit on the second lookup."""
        source = InMemoryResourceSource(
            {"en": {"common": {"tag_other": "common.tag_other", "tag": "base"}}}
        )
        session = LocaleSession(
            ResourceLoader(source, registry, ("common",)),
            registry,
            metrics=metrics,
        )
        await session.set_locale("en")

        assert session.translate_plural("common.tag", 3) == "common.tag_other"
        assert session.translate_plural("common.tag", 3) == "common.tag_other"
        assert metrics.cache_hits == 1
