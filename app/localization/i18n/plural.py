"""Plural category selection.

Uses the CLDR plural rules shipped with Babel. Locales in the override
table, and any locale Babel cannot resolve, use the two-way rule:
``one`` for exactly 1, ``other`` for everything else.
"""

from functools import lru_cache
from numbers import Number
from typing import FrozenSet, Iterable, Optional

from babel.core import Locale as BabelLocale
from babel.core import UnknownLocaleError

from localization.i18n.models import PluralCategory
from localization.logging import get_module_logger

logger = get_module_logger()

# Quechua, Maori and Navajo; not verified against CLDR data
TWO_WAY_OVERRIDES: FrozenSet[str] = frozenset({"qu", "mi", "nv"})


def two_way_category(count: Number) -> PluralCategory:
    return PluralCategory.ONE if count == 1 else PluralCategory.OTHER


@lru_cache(maxsize=64)
def _babel_locale(locale: str) -> BabelLocale:
    return BabelLocale.parse(locale.replace("-", "_"))


class PluralRules:
    """Selects the plural category for a count in a locale.

    Attributes:
        overrides: Locale codes forced onto the two-way rule.
    """

    def __init__(self, overrides: Optional[Iterable[str]] = None):
        self.overrides = frozenset(TWO_WAY_OVERRIDES if overrides is None else overrides)

    def select_category(self, count: Number, locale: str) -> PluralCategory:
        """Plural category of ``count`` in ``locale``. Never raises."""
        if not locale or locale in self.overrides:
            return two_way_category(count)

        try:
            return PluralCategory(_babel_locale(locale).plural_form(count))
        except (UnknownLocaleError, ValueError, TypeError) as e:
            logger.debug("plural_rules_unavailable", locale=locale, error=str(e))
            return two_way_category(count)

    def plural_key(
        self,
        key: str,
        count: Number,
        locale: str,
        separator: str = "_",
    ) -> str:
        """``key`` suffixed with the plural category (e.g., "items_one")."""
        return f"{key}{separator}{self.select_category(count, locale).value}"
