"""Shared base classes for the settings modules.

Every settings class reads the process environment and an optional
``.env`` file, matches variable names case-sensitively and ignores
variables it does not declare.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_MODEL_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    case_sensitive=True,
    extra="ignore",
)


class FeatureSettings(BaseSettings):
    """Base class for settings that shape translation behavior."""

    model_config = BASE_MODEL_CONFIG


class InfrastructureSettings(BaseSettings):
    """Base class for settings of supporting services such as preference storage."""

    model_config = BASE_MODEL_CONFIG
