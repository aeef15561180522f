"""Static catalog of supported locales."""

from typing import Dict, Iterable, List, Optional

from localization.i18n.models import LocaleDescriptor, TextDirection

DEFAULT_LOCALE_CODE = "en"

SUPPORTED_LOCALES = (
    LocaleDescriptor("en", "English", "English", flag="🇺🇸", currency="USD"),
    LocaleDescriptor("es", "Spanish", "Español", flag="🇪🇸", currency="EUR"),
    LocaleDescriptor("fr", "French", "Français", flag="🇫🇷", currency="EUR"),
    LocaleDescriptor("pt", "Portuguese", "Português", flag="🇵🇹", currency="BRL"),
    LocaleDescriptor("de", "German", "Deutsch", flag="🇩🇪", currency="EUR"),
    LocaleDescriptor("it", "Italian", "Italiano", flag="🇮🇹", currency="EUR"),
    LocaleDescriptor("zh", "Chinese", "中文", flag="🇨🇳", currency="CNY"),
    LocaleDescriptor("ja", "Japanese", "日本語", flag="🇯🇵", currency="JPY"),
    LocaleDescriptor(
        "ar",
        "Arabic",
        "العربية",
        text_direction=TextDirection.RTL,
        flag="🇸🇦",
        currency="SAR",
    ),
    LocaleDescriptor("qu", "Quechua", "Runa Simi", flag="🇵🇪", currency="PEN"),
    LocaleDescriptor("mi", "Maori", "Te Reo Māori", flag="🇳🇿", currency="NZD"),
    LocaleDescriptor("nv", "Navajo", "Diné Bizaad", flag="🇺🇸", currency="USD"),
)


class LocaleRegistry:
    """Read-only lookup over the supported locale descriptors.

    Unknown codes never raise: ``describe`` answers with the default
    descriptor instead.

    Attributes:
        default: Descriptor returned for unknown codes.
    """

    def __init__(
        self,
        descriptors: Iterable[LocaleDescriptor] = SUPPORTED_LOCALES,
        default_code: str = DEFAULT_LOCALE_CODE,
    ):
        self._descriptors: Dict[str, LocaleDescriptor] = {
            descriptor.code: descriptor for descriptor in descriptors
        }
        if default_code not in self._descriptors:
            raise ValueError(f"Default locale {default_code} is not registered")
        self.default = self._descriptors[default_code]

    def list_locales(self) -> List[LocaleDescriptor]:
        """All descriptors, in registration order."""
        return list(self._descriptors.values())

    def codes(self) -> List[str]:
        return list(self._descriptors)

    def is_supported(self, code: Optional[str]) -> bool:
        return code in self._descriptors

    def describe(self, code: Optional[str]) -> LocaleDescriptor:
        """Descriptor for ``code``, or the default descriptor if unknown."""
        return self._descriptors.get(code, self.default)

    def is_right_to_left(self, code: Optional[str]) -> bool:
        return self.describe(code).is_rtl

    def __contains__(self, code: object) -> bool:
        return code in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)
