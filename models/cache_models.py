"""Models for the translation result cache and the rate limiter state."""

from __future__ import annotations

from dataclasses import dataclass

__all__: list[str] = [
    "CacheStatistics",
    "RateLimitState",
]


@dataclass
class CacheStatistics:
    """Cache usage statistics.

    Attributes:
        total_entries (int): Entries currently held.
        capacity (int): Maximum number of entries.
        hits (int): Lookups that found an entry.
        misses (int): Lookups that found nothing.
        evictions (int): Entries dropped to make room for new ones.
    """

    total_entries: int = 0
    capacity: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_ratio(self) -> float:
        lookups: int = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0


@dataclass
class RateLimitState:
    """Shared admission state for all outbound provider calls.

    Times are monotonic seconds. A cooldown_until in the past means no cooldown is active.

    Attributes:
        last_request_at (float): When the last admitted call started (-inf before the first call).
        consecutive_errors (int): Provider failures since the last success.
        cooldown_until (float): End of the current rate-limit cooldown.
    """

    last_request_at: float = float("-inf")
    consecutive_errors: int = 0
    cooldown_until: float = float("-inf")
