"""Bounded cache of resolved translation templates."""

from typing import Any, Dict, NamedTuple, Optional, Tuple


class CachedTemplate(NamedTuple):
    """Cache entry: the template and whether the key resolved in the bundle."""

    template: str
    found: bool


class TranslationCache:
    """Maps (locale, key) to a resolved, uninterpolated template entry.

    When full, the oldest inserted entry is evicted; reads do not refresh
    an entry's position. There is no time-to-live: entries only disappear
    through eviction or ``clear()``.

    Attributes:
        max_size: Maximum number of entries held at once.
    """

    def __init__(self, max_size: int = 1000):
        if max_size < 1:
            raise ValueError(f"Cache max_size must be at least 1, got {max_size}")
        self.max_size = max_size
        # dict preserves insertion order, which doubles as the eviction queue
        self._entries: Dict[Tuple[str, str], Any] = {}
        self._evictions = 0

    def get(self, locale: str, key: str) -> Optional[Any]:
        return self._entries.get((locale, key))

    def set(self, locale: str, key: str, value: Any) -> None:
        entry_key = (locale, key)
        if entry_key not in self._entries and len(self._entries) >= self.max_size:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            self._evictions += 1
        self._entries[entry_key] = value

    def clear(self) -> None:
        self._entries.clear()

    def get_stats(self) -> Dict[str, Any]:
        """Size, capacity and eviction count."""
        return {
            "size": len(self._entries),
            "max_size": self.max_size,
            "evictions": self._evictions,
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_key: object) -> bool:
        return entry_key in self._entries
