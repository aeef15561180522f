"""Key-value backends for small pieces of persisted user state."""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from threading import Lock
from typing import Dict, Optional

from localization.logging import get_module_logger

logger = get_module_logger()


class KeyValueBackend(ABC):
    """Abstract base class for string key-value persistence.

    Implementations may raise on I/O problems; callers that must not fail
    (such as the PreferenceStore) are responsible for handling errors.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Stored value for ``key`` or None."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""
        pass


class NullKeyValueBackend(KeyValueBackend):
    """Backend for non-persistent environments: stores nothing."""

    def get(self, key: str) -> Optional[str]:
        return None

    def set(self, key: str, value: str) -> None:
        return None


class InMemoryKeyValueBackend(KeyValueBackend):
    """Process-local backend (tests, ephemeral sessions)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JSONFileKeyValueBackend(KeyValueBackend):
    """Stores all keys in one JSON document on disk.

    Writes go to a temporary file in the same directory which then replaces
    the document, so a crash never leaves a half-written file behind.

    Attributes:
        path: Location of the JSON document.
    """

    def __init__(self, path: Path):
        self.path = Path(path).expanduser()
        self._lock = Lock()

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {self.path}")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read_all()
            data[key] = value
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                os.unlink(tmp_name)
                raise
        logger.debug("persisted_preference", path=str(self.path), key=key)
