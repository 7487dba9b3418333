"""Translation cache manager.

Keeps successful translation results in memory, keyed by language pair and text prefix.
The cache is bounded; when full, the entry inserted earliest is evicted. Entries never expire.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from models.cache_models import CacheStatistics
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from models.config_models import Config
    from models.translation_models import TranslationResult

__all__: list[str] = ["TranslationCacheManager"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class TranslationCacheManager:
    """Bounded in-memory cache of translation results with first-in-first-out eviction.

    Results are stored and returned by reference, so a hit hands back the very object that was
    stored. Overwriting an existing key keeps its original insertion position.

    Attributes:
        DEFAULT_MAX_ENTRIES (ClassVar[int]): Capacity when none is configured.
        DEFAULT_KEY_TEXT_LENGTH (ClassVar[int]): Number of leading characters of the text used in the key.
    """

    DEFAULT_MAX_ENTRIES: ClassVar[int] = 1000
    DEFAULT_KEY_TEXT_LENGTH: ClassVar[int] = 100

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        key_text_length: int = DEFAULT_KEY_TEXT_LENGTH,
    ) -> None:
        if max_entries < 1:
            msg: str = f"Cache capacity must be at least 1 (got {max_entries})"
            raise ValueError(msg)
        self.max_entries: int = max_entries
        self.key_text_length: int = key_text_length
        # dict preserves insertion order, so the first key is always the oldest.
        self._entries: dict[str, TranslationResult] = {}
        self._hits: int = 0
        self._misses: int = 0
        self._evictions: int = 0
        logger.debug("TranslationCacheManager instance created (capacity: %d)", max_entries)

    @classmethod
    def from_config(cls, config: Config) -> TranslationCacheManager:
        return cls(max_entries=config.CACHE.MAX_ENTRIES, key_text_length=config.CACHE.KEY_TEXT_LENGTH)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def build_cache_key(self, content: str, src_lang: str, tgt_lang: str) -> str:
        """Build the cache key for a translation.

        Only the first key_text_length characters of the text take part, so texts sharing that
        prefix share one entry.
        """
        return f"{src_lang}_{tgt_lang}_{content[: self.key_text_length]}"

    def get(self, key: str) -> TranslationResult | None:
        entry: TranslationResult | None = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None
        self._hits += 1
        logger.debug("Translation cache hit: '%s'", key[:50])
        return entry

    def put(self, key: str, value: TranslationResult) -> None:
        """Store a result, evicting the oldest entry if the cache is full."""
        if key in self._entries:
            self._entries[key] = value
            logger.debug("Translation cache entry replaced: '%s'", key[:50])
            return

        if len(self._entries) >= self.max_entries:
            oldest: str = next(iter(self._entries))
            del self._entries[oldest]
            self._evictions += 1
            logger.debug("Translation cache entry evicted: '%s'", oldest[:50])

        self._entries[key] = value
        logger.debug("Translation cache entry stored: '%s' (%d/%d)", key[:50], len(self._entries), self.max_entries)

    def keys(self) -> list[str]:
        """Return the keys from oldest to newest."""
        return list(self._entries)

    def clear(self) -> None:
        count: int = len(self._entries)
        self._entries.clear()
        logger.info("Translation cache cleared (%d entries removed)", count)

    def statistics(self) -> CacheStatistics:
        return CacheStatistics(
            total_entries=len(self._entries),
            capacity=self.max_entries,
            hits=self._hits,
            misses=self._misses,
            evictions=self._evictions,
        )
