"""Translation coverage reporting.

Compares each locale's keys against a base locale to find gaps that
translators still need to fill.
"""

import asyncio
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List

from localization.i18n.loader import ResourceLoader
from localization.i18n.models import ResourceBundle
from localization.i18n.registry import LocaleRegistry
from localization.i18n.resolvers import flatten_keys
from localization.logging import get_module_logger

logger = get_module_logger()

# namespace.section.key, each segment camelCase starting lowercase
KEY_PATTERN = re.compile(r"^[a-z][a-zA-Z]*(\.[a-z][a-zA-Z]*)*$")

LOW_COVERAGE_THRESHOLD = 80
MANY_MISSING_THRESHOLD = 50


@dataclass
class TranslationStats:
    """Coverage of one locale against the base locale."""

    total_keys: int
    translated_keys: int
    missing_keys: List[str] = field(default_factory=list)
    coverage: int = 0
    last_updated: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


@dataclass
class TranslationReport:
    """Coverage across every supported locale."""

    total_languages: int
    average_coverage: int
    missing_translations: int
    languages: Dict[str, TranslationStats]
    recommendations: List[str]


def validate_translation_key(key: str) -> bool:
    """True if ``key`` looks like "namespace.key" or "namespace.section.key"."""
    return bool(KEY_PATTERN.match(key))


def bundle_keys(bundle: ResourceBundle) -> List[str]:
    """Every fully qualified leaf key in ``bundle``."""
    keys: List[str] = []
    for namespace, tree in bundle.namespaces.items():
        keys.extend(flatten_keys(tree, namespace))
    return keys


async def calculate_translation_coverage(
    loader: ResourceLoader,
    locale: str,
    base_locale: str = "en",
) -> TranslationStats:
    """Coverage of ``locale`` relative to ``base_locale``.

    A locale that could only be served through the default-locale fallback
    counts as having no translations.
    """
    base_bundle, target_bundle = await asyncio.gather(
        loader.load(base_locale),
        loader.load(locale),
    )

    base_keys = bundle_keys(base_bundle)
    target_keys = set() if target_bundle.is_fallback else set(bundle_keys(target_bundle))

    missing = [key for key in base_keys if key not in target_keys]
    translated = len(base_keys) - len(missing)
    coverage = round(translated / len(base_keys) * 100) if base_keys else 0

    logger.info(
        "calculated_translation_coverage",
        locale=locale,
        base_locale=base_locale,
        coverage=coverage,
        missing_count=len(missing),
    )
    return TranslationStats(
        total_keys=len(base_keys),
        translated_keys=translated,
        missing_keys=missing,
        coverage=coverage,
    )


async def get_language_stats(
    loader: ResourceLoader,
    registry: LocaleRegistry,
) -> Dict[str, TranslationStats]:
    """Coverage of every registered locale against the default locale."""
    base_locale = registry.default.code
    stats: Dict[str, TranslationStats] = {}
    for code in registry.codes():
        stats[code] = await calculate_translation_coverage(loader, code, base_locale)
    return stats


async def generate_translation_report(
    loader: ResourceLoader,
    registry: LocaleRegistry,
) -> TranslationReport:
    """Summary of coverage with recommendations for weak locales."""
    stats = await get_language_stats(loader, registry)

    total_languages = len(stats)
    average = sum(s.coverage for s in stats.values()) / total_languages if total_languages else 0
    missing_translations = sum(len(s.missing_keys) for s in stats.values())

    recommendations = []
    for code, locale_stats in stats.items():
        if locale_stats.coverage < LOW_COVERAGE_THRESHOLD:
            recommendations.append(
                f"{code}: Needs attention ({locale_stats.coverage}% coverage)"
            )
        if len(locale_stats.missing_keys) > MANY_MISSING_THRESHOLD:
            recommendations.append(
                f"{code}: Many missing translations ({len(locale_stats.missing_keys)} keys)"
            )

    return TranslationReport(
        total_languages=total_languages,
        average_coverage=round(average),
        missing_translations=missing_translations,
        languages=stats,
        recommendations=recommendations,
    )
