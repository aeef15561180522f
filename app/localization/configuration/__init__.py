"""Configuration module - public API.

Provides centralized configuration management for the locale engine using
Pydantic BaseSettings with domain-based organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Translation engine settings class
    PreferenceSettings: Preference persistence settings class

Example:
    ```python
    from localization.configuration import settings

    default_locale = settings.i18n.default_locale
    backend = settings.preferences.backend
    ```
"""

from localization.configuration.i18n import I18nSettings
from localization.configuration.preferences import PreferenceSettings
from localization.configuration.settings import Settings, settings

__all__ = ["Settings", "settings", "I18nSettings", "PreferenceSettings"]
