"""Translation engine feature settings."""

from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator

from localization.configuration.base import FeatureSettings

DEFAULT_NAMESPACES = [
    "common",
    "pages",
    "components",
    "cultural",
    "errors",
    "validation",
    "navigation",
    "accessibility",
]


class I18nSettings(FeatureSettings):
    """Translation engine configuration.

    Controls which locale the session falls back to, which namespaces make up
    a bundle, how large the translation cache may grow and how missing keys
    and placeholders are rendered.

    Environment Variables:
        I18N_DEFAULT_LOCALE: Locale substituted when a load fails (default: en)
        I18N_NAMESPACES: JSON list of namespaces loaded per locale
        I18N_CACHE_MAX_SIZE: Maximum cached templates (default: 1000)
        I18N_MISSING_FORMAT: Placeholder for missing keys (default: {{key}})
        I18N_LOG_MISSING: Log every missing key (default: False)
        I18N_PLURAL_SEPARATOR: Joins a key and its plural category (default: _)
        I18N_INTERPOLATION_PREFIX: Placeholder opening token (default: {{)
        I18N_INTERPOLATION_SUFFIX: Placeholder closing token (default: }})
        I18N_RESOURCES_DIR: Directory of translation files (default: app/locales)
        I18N_PRELOAD_LOCALES: JSON list of locales warmed on startup

    Example:
        ```python
        from localization.configuration import settings

        max_size = settings.i18n.cache_max_size
        namespaces = settings.i18n.namespaces
        ```
    """

    default_locale: str = Field(
        default="en",
        alias="I18N_DEFAULT_LOCALE",
        description="Locale used when the requested locale cannot be loaded",
    )
    namespaces: List[str] = Field(
        default_factory=lambda: list(DEFAULT_NAMESPACES),
        alias="I18N_NAMESPACES",
        description="Namespaces fetched in parallel for every locale",
    )
    cache_max_size: int = Field(
        default=1000,
        alias="I18N_CACHE_MAX_SIZE",
        ge=1,
        description="Maximum number of resolved templates kept in memory",
    )
    missing_format: str = Field(
        default="{{key}}",
        alias="I18N_MISSING_FORMAT",
        description="Placeholder rendered for missing keys; {{key}} is replaced by the key",
    )
    log_missing: bool = Field(
        default=False,
        alias="I18N_LOG_MISSING",
        description="Emit a warning for every missing translation key",
    )
    plural_separator: str = Field(
        default="_",
        alias="I18N_PLURAL_SEPARATOR",
        description="Separator between a key and its plural category",
    )
    interpolation_prefix: str = Field(
        default="{{",
        alias="I18N_INTERPOLATION_PREFIX",
        description="Opening token of an interpolation placeholder",
    )
    interpolation_suffix: str = Field(
        default="}}",
        alias="I18N_INTERPOLATION_SUFFIX",
        description="Closing token of an interpolation placeholder",
    )
    resources_dir: Optional[Path] = Field(
        default=None,
        alias="I18N_RESOURCES_DIR",
        description="Directory containing <locale>/<namespace>.yml files",
    )
    preload_locales: List[str] = Field(
        default_factory=list,
        alias="I18N_PRELOAD_LOCALES",
        description="Secondary locales warmed when the session initializes",
    )

    @field_validator("default_locale", mode="before")
    @classmethod
    def _normalize_default_locale(cls, v: str) -> str:
        """Lowercase the locale code and drop surrounding whitespace."""
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("namespaces", mode="after")
    @classmethod
    def _validate_namespaces(cls, v: List[str]) -> List[str]:
        """Require at least one namespace and drop duplicates, keeping order."""
        unique = list(dict.fromkeys(name.strip() for name in v if name.strip()))
        if not unique:
            raise ValueError("I18N_NAMESPACES must name at least one namespace")
        return unique

    @field_validator("plural_separator", "interpolation_prefix", "interpolation_suffix")
    @classmethod
    def _require_token(cls, v: str) -> str:
        if not v:
            raise ValueError("Separator and interpolation tokens must not be empty")
        return v
