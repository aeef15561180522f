"""Locale preference persistence settings."""

from pathlib import Path

from pydantic import Field, field_validator

from localization.configuration.base import InfrastructureSettings

PREFERENCE_BACKENDS = ("file", "memory", "none")


class PreferenceSettings(InfrastructureSettings):
    """Where the user's chosen locale is remembered between sessions.

    Environment Variables:
        PREFERENCE_BACKEND: 'file', 'memory' or 'none' (default: file)
        PREFERENCE_STORAGE_KEY: Key the locale code is stored under
        PREFERENCE_FILE_PATH: JSON file used by the 'file' backend

    Backends:
        - file: JSON document on local disk (desktop default)
        - memory: process-local dict (tests, ephemeral sessions)
        - none: nothing is persisted, load() always reports no preference
    """

    backend: str = Field(
        default="file",
        alias="PREFERENCE_BACKEND",
        description="Preference backend: 'file', 'memory', or 'none'",
    )
    storage_key: str = Field(
        default="allibrary_selected_language",
        alias="PREFERENCE_STORAGE_KEY",
        description="Key under which the selected locale code is stored",
    )
    file_path: Path = Field(
        default=Path("~/.config/allibrary/preferences.json"),
        alias="PREFERENCE_FILE_PATH",
        description="Location of the JSON preferences document",
    )

    @field_validator("backend", mode="before")
    @classmethod
    def _validate_backend(cls, v: str) -> str:
        """Accept the backend name in any case."""
        backend = str(v).strip().lower()
        if backend not in PREFERENCE_BACKENDS:
            raise ValueError(
                f"PREFERENCE_BACKEND must be one of {', '.join(PREFERENCE_BACKENDS)}, got {v!r}"
            )
        return backend
