"""Translation models for the locale engine.

Defines the core data structures shared by the registry, loader, resolver
and session.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple


class TextDirection(str, Enum):
    """Writing direction of a locale."""

    LTR = "ltr"
    RTL = "rtl"


class PluralCategory(str, Enum):
    """CLDR plural categories."""

    ZERO = "zero"
    ONE = "one"
    TWO = "two"
    FEW = "few"
    MANY = "many"
    OTHER = "other"


class LoadState(str, Enum):
    """Lifecycle of a single locale switch."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FALLBACK_LOADED = "fallback_loaded"


@dataclass(frozen=True)
class LocaleDescriptor:
    """Metadata for a supported locale.

    Attributes:
        code: Language identifier (e.g., "en", "ar").
        display_name: English name of the language.
        native_name: Name of the language in the language itself.
        text_direction: Writing direction.
        flag: Flag emoji shown in language pickers.
        currency: Default ISO 4217 currency code for the locale.
    """

    code: str
    display_name: str
    native_name: str
    text_direction: TextDirection = TextDirection.LTR
    flag: str = ""
    currency: str = "USD"

    @property
    def is_rtl(self) -> bool:
        return self.text_direction is TextDirection.RTL


@dataclass(frozen=True)
class TranslationKey:
    """A fully qualified translation key.

    Keys are "<namespace>.<path>" where path may itself be dotted
    (e.g., "pages.library.title").

    Attributes:
        namespace: Top-level namespace (e.g., "common", "errors").
        path: Dot-separated path inside the namespace tree.
    """

    namespace: str
    path: str

    def __str__(self) -> str:
        return f"{self.namespace}.{self.path}" if self.path else self.namespace

    @classmethod
    def from_string(cls, key_string: str) -> "TranslationKey":
        """Split a full key on its first dot.

        A key without a dot yields an empty path, which never resolves.
        """
        namespace, _, path = key_string.partition(".")
        return cls(namespace=namespace, path=path)


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class ResourceBundle:
    """All namespace trees loaded for one locale.

    Attributes:
        locale: Locale whose content the bundle actually holds.
        requested_locale: Locale that was asked for. Differs from ``locale``
            when the default locale was substituted.
        namespaces: Mapping of namespace name to nested string tree.
        failed_namespaces: Namespaces whose fetch failed and were replaced
            by an empty tree.
        loaded_at: ISO 8601 timestamp of when loading finished.
    """

    locale: str
    requested_locale: str
    namespaces: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    failed_namespaces: Tuple[str, ...] = ()
    loaded_at: Optional[str] = field(default_factory=_utcnow)

    @property
    def is_fallback(self) -> bool:
        return self.locale != self.requested_locale

    def get_namespace(self, namespace: str) -> Optional[Dict[str, Any]]:
        return self.namespaces.get(namespace)

    @classmethod
    def empty(
        cls,
        locale: str,
        namespaces: Iterable[str],
        requested_locale: Optional[str] = None,
    ) -> "ResourceBundle":
        """Bundle with every namespace present but empty."""
        names = tuple(namespaces)
        return cls(
            locale=locale,
            requested_locale=requested_locale or locale,
            namespaces={name: {} for name in names},
            failed_namespaces=names,
        )
