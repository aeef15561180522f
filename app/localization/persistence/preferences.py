"""Persistence of the user's chosen locale."""

from typing import TYPE_CHECKING, Optional

from localization.logging import get_module_logger
from localization.persistence.backends import KeyValueBackend

if TYPE_CHECKING:
    from localization.i18n.registry import LocaleRegistry

logger = get_module_logger()

DEFAULT_STORAGE_KEY = "allibrary_selected_language"


class PreferenceStore:
    """Saves and restores the selected locale code.

    Backend failures are logged and swallowed: an unavailable store behaves
    like an empty one so startup never fails because of persistence.

    Attributes:
        backend: KeyValueBackend the code is written to.
        storage_key: Key the code is stored under.
    """

    def __init__(
        self,
        backend: KeyValueBackend,
        registry: Optional["LocaleRegistry"] = None,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ):
        self.backend = backend
        self.registry = registry
        self.storage_key = storage_key

    def save(self, code: str) -> None:
        try:
            self.backend.set(self.storage_key, code)
        except Exception as e:
            logger.warning(
                "failed_to_save_locale_preference",
                locale=code,
                error=str(e),
            )

    def load(self) -> Optional[str]:
        """Stored locale code, or None if absent, unsupported or unreadable."""
        try:
            stored = self.backend.get(self.storage_key)
        except Exception as e:
            logger.warning("failed_to_load_locale_preference", error=str(e))
            return None

        if not stored:
            return None
        if self.registry is not None and not self.registry.is_supported(stored):
            logger.info("ignored_unsupported_locale_preference", locale=stored)
            return None
        return stored
