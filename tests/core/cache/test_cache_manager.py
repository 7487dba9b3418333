"""Unit tests for core.cache.manager module."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from core.cache.manager import TranslationCacheManager
from models.cache_models import CacheStatistics
from models.translation_models import TranslationResult


def _result(text: str) -> TranslationResult:
    return TranslationResult.succeeded(text=text, service="Lingva")


def test_build_cache_key_uses_languages_and_text_prefix() -> None:
    cache = TranslationCacheManager()

    assert cache.build_cache_key("hello", "auto", "ru") == "auto_ru_hello"


def test_build_cache_key_truncates_text_to_prefix() -> None:
    cache = TranslationCacheManager()
    long_a: str = "a" * 100 + "tail one"
    long_b: str = "a" * 100 + "tail two"

    key_a: str = cache.build_cache_key(long_a, "en", "ru")

    assert key_a == "en_ru_" + "a" * 100
    assert key_a == cache.build_cache_key(long_b, "en", "ru")


def test_get_returns_stored_object_identity() -> None:
    cache = TranslationCacheManager()
    result: TranslationResult = _result("привет")

    cache.put("auto_ru_hello", result)

    assert cache.get("auto_ru_hello") is result
    assert "auto_ru_hello" in cache
    assert len(cache) == 1


def test_get_missing_key_returns_none() -> None:
    cache = TranslationCacheManager()

    assert cache.get("auto_ru_missing") is None


def test_fifo_eviction_trace() -> None:
    cache = TranslationCacheManager(max_entries=3)

    for name in ("k1", "k2", "k3"):
        cache.put(name, _result(name))
    assert cache.keys() == ["k1", "k2", "k3"]

    # Reading does not refresh position.
    assert cache.get("k1") is not None

    cache.put("k4", _result("k4"))
    assert cache.keys() == ["k2", "k3", "k4"]

    cache.put("k5", _result("k5"))
    assert cache.keys() == ["k3", "k4", "k5"]
    assert cache.statistics().evictions == 2


def test_default_capacity_is_bounded_at_one_thousand() -> None:
    cache = TranslationCacheManager()

    for i in range(1005):
        cache.put(f"auto_ru_{i}", _result(str(i)))

    assert len(cache) == 1000
    assert "auto_ru_0" not in cache
    assert "auto_ru_4" not in cache
    assert "auto_ru_5" in cache
    assert "auto_ru_1004" in cache


def test_put_existing_key_overwrites_in_place_without_eviction() -> None:
    cache = TranslationCacheManager(max_entries=2)
    cache.put("k1", _result("old"))
    cache.put("k2", _result("k2"))
    replacement: TranslationResult = _result("new")

    cache.put("k1", replacement)

    assert cache.keys() == ["k1", "k2"]
    assert cache.get("k1") is replacement
    assert cache.statistics().evictions == 0


def test_statistics_and_clear() -> None:
    cache = TranslationCacheManager(max_entries=10)
    cache.put("k1", _result("k1"))
    cache.get("k1")
    cache.get("k2")

    stats: CacheStatistics = cache.statistics()

    assert stats.total_entries == 1
    assert stats.capacity == 10
    assert (stats.hits, stats.misses) == (1, 1)
    assert stats.hit_ratio == pytest.approx(0.5)

    cache.clear()
    assert len(cache) == 0


def test_zero_capacity_is_rejected() -> None:
    with pytest.raises(ValueError, match="at least 1"):
        TranslationCacheManager(max_entries=0)


def test_from_config_reads_cache_section() -> None:
    config: Any = SimpleNamespace(CACHE=SimpleNamespace(MAX_ENTRIES=5, KEY_TEXT_LENGTH=3))

    cache = TranslationCacheManager.from_config(config)

    assert cache.max_entries == 5
    assert cache.build_cache_key("hello", "en", "ru") == "en_ru_hel"
