"""Translation performance counters."""

from collections import deque
from dataclasses import dataclass
from typing import Deque

MAX_TIMING_SAMPLES = 100


@dataclass(frozen=True)
class MetricsSnapshot:
    """Point-in-time view of the translation counters.

    Attributes:
        cache_hits: Lookups served from the translation cache.
        cache_misses: Lookups that had to resolve against the bundle.
        cache_hit_rate: Hits as a percentage of all lookups (0-100).
        avg_translation_time_ms: Mean duration of the recent translations.
    """

    cache_hits: int
    cache_misses: int
    cache_hit_rate: float
    avg_translation_time_ms: float


class TranslationMetrics:
    """Counts cache hits/misses and keeps the last 100 translation timings."""

    def __init__(self):
        self.cache_hits = 0
        self.cache_misses = 0
        self._timings: Deque[float] = deque(maxlen=MAX_TIMING_SAMPLES)

    def record_cache_hit(self) -> None:
        self.cache_hits += 1

    def record_cache_miss(self) -> None:
        self.cache_misses += 1

    def record_translation_time(self, duration_seconds: float) -> None:
        self._timings.append(duration_seconds)

    def snapshot(self) -> MetricsSnapshot:
        lookups = self.cache_hits + self.cache_misses
        hit_rate = (self.cache_hits / lookups) * 100 if lookups else 0.0
        avg_ms = (sum(self._timings) / len(self._timings)) * 1000 if self._timings else 0.0
        return MetricsSnapshot(
            cache_hits=self.cache_hits,
            cache_misses=self.cache_misses,
            cache_hit_rate=round(hit_rate, 2),
            avg_translation_time_ms=round(avg_ms, 3),
        )

    def reset(self) -> None:
        self.cache_hits = 0
        self.cache_misses = 0
        self._timings.clear()
