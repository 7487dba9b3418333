"""Data models for the translation gateway.

This package contains dataclass definitions for configuration, translation requests and results,
cache statistics and rate limiter state.
"""

from __future__ import annotations

from models.cache_models import CacheStatistics, RateLimitState
from models.config_models import Config
from models.translation_models import EndpointRotation, TranslationRequest, TranslationResult

__all__: list[str] = [
    "CacheStatistics",
    "Config",
    "EndpointRotation",
    "RateLimitState",
    "TranslationRequest",
    "TranslationResult",
]
