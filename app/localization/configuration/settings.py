"""Locale engine configuration settings - main aggregator."""

from pydantic_settings import BaseSettings

from localization.configuration.base import BASE_MODEL_CONFIG
from localization.configuration.i18n import I18nSettings
from localization.configuration.preferences import PreferenceSettings


class Settings(BaseSettings):
    """Locale engine configuration settings - main aggregator.

    Aggregates the domain-specific settings into a single configuration object:

    - **i18n**: translation engine behavior (default locale, namespaces, cache)
    - **preferences**: persistence of the user's locale choice

    Environment Variables:
        PREFIX: Environment prefix; empty means production
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Example:
        ```python
        from localization.configuration import settings

        default_locale = settings.i18n.default_locale
        storage_key = settings.preferences.storage_key

        if settings.is_production:
            # Production-specific logic...
        ```
    """

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    i18n: I18nSettings
    preferences: PreferenceSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            "i18n": I18nSettings,
            "preferences": PreferenceSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = BASE_MODEL_CONFIG


# Create the singleton settings instance
settings = Settings()
