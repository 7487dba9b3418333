"""Translation cache package.

Provides the bounded in-memory cache of translation results.
"""

from __future__ import annotations

from core.cache.manager import TranslationCacheManager

__all__: list[str] = ["TranslationCacheManager"]
