"""Locale-aware date, number, currency and relative-time formatting.

Thin wrappers over Babel. Locale codes Babel has no CLDR data for are
formatted with the registry's default locale instead.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional, Union

from babel.core import Locale as BabelLocale
from babel.core import UnknownLocaleError
from babel.dates import format_date as babel_format_date
from babel.dates import format_timedelta
from babel.numbers import format_currency as babel_format_currency
from babel.numbers import format_decimal

from localization.i18n.registry import LocaleRegistry
from localization.logging import get_module_logger

logger = get_module_logger()

Numeric = Union[int, float, Decimal]

UNIT_SECONDS = {
    "second": 1,
    "minute": 60,
    "hour": 3600,
    "day": 86400,
    "week": 7 * 86400,
    "month": 30 * 86400,
    "year": 365 * 86400,
}


class LocaleFormatter:
    """Formats values for a locale code from the registry."""

    def __init__(self, registry: LocaleRegistry):
        self.registry = registry

    def babel_locale(self, locale: str) -> BabelLocale:
        """Babel locale for ``locale``, or for the default locale if unknown."""
        try:
            return BabelLocale.parse(locale.replace("-", "_"))
        except (UnknownLocaleError, ValueError):
            logger.debug("babel_locale_unavailable", locale=locale)
            return BabelLocale.parse(self.registry.default.code)

    def format_date(
        self,
        value: Union[date, datetime],
        locale: str,
        format: str = "long",
    ) -> str:
        return babel_format_date(value, format=format, locale=self.babel_locale(locale))

    def format_number(self, value: Numeric, locale: str) -> str:
        return format_decimal(value, locale=self.babel_locale(locale))

    def format_currency(
        self,
        amount: Numeric,
        locale: str,
        currency: Optional[str] = None,
    ) -> str:
        """Format ``amount``; currency defaults to the locale's own currency."""
        currency_code = currency or self.registry.describe(locale).currency
        return babel_format_currency(amount, currency_code, locale=self.babel_locale(locale))

    def format_relative_time(self, value: Numeric, unit: str, locale: str) -> str:
        """Format an offset such as (-3, "day") as "3 days ago".

        Raises:
            ValueError: If ``unit`` is not one of UNIT_SECONDS.
        """
        if unit not in UNIT_SECONDS:
            raise ValueError(f"Unsupported relative time unit: {unit}")
        delta = timedelta(seconds=float(value) * UNIT_SECONDS[unit])
        return format_timedelta(
            delta,
            granularity=unit,
            add_direction=True,
            locale=self.babel_locale(locale),
        )
