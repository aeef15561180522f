"""Persistence of user state between sessions.

Main components:
- backends: KeyValueBackend plus null, in-memory and JSON file implementations
- preferences: PreferenceStore for the selected locale
"""

from localization.persistence.backends import (
    InMemoryKeyValueBackend,
    JSONFileKeyValueBackend,
    KeyValueBackend,
    NullKeyValueBackend,
)
from localization.persistence.preferences import PreferenceStore

__all__ = [
    "KeyValueBackend",
    "NullKeyValueBackend",
    "InMemoryKeyValueBackend",
    "JSONFileKeyValueBackend",
    "PreferenceStore",
]
