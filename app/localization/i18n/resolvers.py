"""Resolution logic for translation keys and locale tags.

Key resolution walks a dot-delimited path through a namespace tree. Locale
resolution maps arbitrary language tags (HTTP headers, system settings,
stored preferences) onto the supported locale codes.
"""

from typing import Any, List, Mapping, Optional, Sequence

from babel.core import default_locale

from localization.i18n.models import ResourceBundle, TranslationKey
from localization.i18n.registry import LocaleRegistry
from localization.logging import get_module_logger

logger = get_module_logger()


def resolve_path(tree: Any, path: str) -> Optional[str]:
    """Walk ``path`` through a nested tree.

    Returns the terminal value only if it is a string. A missing segment,
    a non-mapping at an intermediate step, or a non-string leaf yields None.
    """
    current = tree
    for segment in path.split("."):
        if isinstance(current, Mapping) and segment in current:
            current = current[segment]
        else:
            return None
    return current if isinstance(current, str) else None


def resolve(bundle: Optional[ResourceBundle], namespace: str, path: str) -> Optional[str]:
    """Raw template for ``namespace``/``path`` in ``bundle``, or None."""
    if bundle is None:
        return None
    tree = bundle.get_namespace(namespace)
    if tree is None:
        return None
    return resolve_path(tree, path)


def resolve_key(bundle: Optional[ResourceBundle], key: str) -> Optional[str]:
    """Resolve a fully qualified "<namespace>.<path>" key."""
    translation_key = TranslationKey.from_string(key)
    if not translation_key.path:
        return None
    return resolve(bundle, translation_key.namespace, translation_key.path)


def flatten_keys(tree: Mapping[str, Any], prefix: str = "") -> List[str]:
    """Fully qualified keys of every leaf under ``tree``."""
    keys = []
    for name, value in tree.items():
        full_key = f"{prefix}.{name}" if prefix else str(name)
        if isinstance(value, Mapping):
            keys.extend(flatten_keys(value, full_key))
        else:
            keys.append(full_key)
    return keys


def _normalize_tag(tag: str) -> str:
    return tag.strip().replace("_", "-").split(".")[0].lower()


class LocaleResolver:
    """Resolves language tags onto supported locale codes.

    Fallback chain used by ``initial_locale``:
    1. Stored preference
    2. Preferred languages of the host environment
    3. System locale
    4. Default locale
    """

    def __init__(self, registry: LocaleRegistry):
        self.registry = registry
        self.log = logger.bind(default_locale=registry.default.code)

    def match(self, tag: Optional[str]) -> Optional[str]:
        """Supported code for ``tag`` or None.

        Tries an exact match first, then a language-only match
        ("pt-BR" -> "pt", "en_US.UTF-8" -> "en").
        """
        if not tag:
            return None
        return LanguageNegotiator.find_best_match([_normalize_tag(tag)], self.registry.codes())

    def resolve_from_string(self, tag: Optional[str]) -> str:
        """Supported code for ``tag``, or the default code."""
        matched = self.match(tag)
        if matched is None:
            self.log.warning("unsupported_locale_tag", tag=tag)
            return self.registry.default.code
        return matched

    def resolve_preferred(self, languages: Optional[Sequence[str]]) -> Optional[str]:
        """Best supported code for a user's ordered language list.

        ``languages`` is most-preferred first, as reported by the host
        environment (e.g. ["pt-BR", "en-US"]). Wildcards are ignored.
        """
        ordered = [_normalize_tag(tag) for tag in languages or () if tag and tag.strip() != "*"]
        if not ordered:
            return None
        matched = LanguageNegotiator.find_best_match(ordered, self.registry.codes())
        if matched is None:
            self.log.info("no_matching_preferred_language", languages=list(languages))
        return matched

    def detect_system_locale(self) -> Optional[str]:
        """Supported code for the process locale (LANGUAGE/LC_ALL/LC_MESSAGES/LANG)."""
        try:
            system_tag = default_locale()
        except ValueError as e:
            self.log.warning("system_locale_detection_failed", error=str(e))
            return None
        return self.match(system_tag)

    def initial_locale(
        self,
        stored: Optional[str] = None,
        preferred: Optional[Sequence[str]] = None,
    ) -> str:
        """Locale a new session should start in."""
        candidates = (
            lambda: self.match(stored),
            lambda: self.resolve_preferred(preferred),
            self.detect_system_locale,
        )
        for candidate in candidates:
            code = candidate()
            if code is not None:
                return code
        return self.registry.default.code


class LanguageNegotiator:
    """Performs language negotiation between requested and available tags.

    Implements RFC 4647 style lookup: exact match first, then a
    language-only match (e.g., "pt-br" matches "pt").
    """

    @staticmethod
    def matches_language(requested: str, available: str, strict: bool = False) -> bool:
        """Check if the available tag satisfies the requested one.

        Args:
            requested: Requested language tag (e.g., "en-us").
            available: Available language tag (e.g., "en").
            strict: If True, requires exact match.
        """
        if requested.lower() == available.lower():
            return True

        if strict:
            return False

        requested_lang = requested.split("-")[0].lower()
        available_lang = available.split("-")[0].lower()
        return requested_lang == available_lang

    @staticmethod
    def find_best_match(
        requested: List[str],
        available: List[str],
        default: Optional[str] = None,
    ) -> Optional[str]:
        """Best available tag for the requested tags in preference order."""
        for req_lang in requested:
            for avail_lang in available:
                if LanguageNegotiator.matches_language(req_lang, avail_lang, strict=True):
                    return avail_lang

            for avail_lang in available:
                if LanguageNegotiator.matches_language(req_lang, avail_lang, strict=False):
                    return avail_lang

        return default
