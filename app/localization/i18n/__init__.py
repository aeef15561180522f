"""i18n engine - locale and translation management.

Loads, caches, resolves, pluralizes and interpolates translated text, and
propagates locale switches to registered handlers.

Main components:
- models: LocaleDescriptor, ResourceBundle, TranslationKey, PluralCategory, LoadState
- registry: LocaleRegistry of supported locales
- loader: ResourceSource implementations and the async ResourceLoader
- cache: TranslationCache with insertion-order eviction
- resolvers: key resolution plus LocaleResolver and LanguageNegotiator
- plural: PluralRules backed by CLDR data with two-way overrides
- interpolation: Interpolator with right-to-left embedding
- formatting: LocaleFormatter for dates, numbers and currencies
- session: LocaleSession orchestrator and ScopedTranslator
- coverage: translation coverage reports
- factory: create_locale_session / start_locale_session
"""

from localization.i18n.cache import CachedTemplate, TranslationCache
from localization.i18n.coverage import (
    TranslationReport,
    TranslationStats,
    calculate_translation_coverage,
    generate_translation_report,
    get_language_stats,
    validate_translation_key,
)
from localization.i18n.factory import create_locale_session, start_locale_session
from localization.i18n.formatting import LocaleFormatter
from localization.i18n.interpolation import Interpolator
from localization.i18n.loader import (
    FileResourceSource,
    InMemoryResourceSource,
    ResourceLoader,
    ResourceSource,
)
from localization.i18n.metrics import MetricsSnapshot, TranslationMetrics
from localization.i18n.models import (
    LoadState,
    LocaleDescriptor,
    PluralCategory,
    ResourceBundle,
    TextDirection,
    TranslationKey,
)
from localization.i18n.plural import PluralRules
from localization.i18n.registry import LocaleRegistry
from localization.i18n.resolvers import LanguageNegotiator, LocaleResolver, resolve
from localization.i18n.session import LocaleSession, ScopedTranslator

__all__ = [
    "LocaleDescriptor",
    "TextDirection",
    "PluralCategory",
    "LoadState",
    "ResourceBundle",
    "TranslationKey",
    "LocaleRegistry",
    "ResourceSource",
    "FileResourceSource",
    "InMemoryResourceSource",
    "ResourceLoader",
    "CachedTemplate",
    "TranslationCache",
    "resolve",
    "LocaleResolver",
    "LanguageNegotiator",
    "PluralRules",
    "Interpolator",
    "LocaleFormatter",
    "TranslationMetrics",
    "MetricsSnapshot",
    "LocaleSession",
    "ScopedTranslator",
    "TranslationStats",
    "TranslationReport",
    "calculate_translation_coverage",
    "get_language_stats",
    "generate_translation_report",
    "validate_translation_key",
    "create_locale_session",
    "start_locale_session",
]
