from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from core.trans.engines import trans_google as trans_google_module
from core.trans.interface import (
    EngineUnavailableError,
    Result,
    TranslateExceptionError,
    TranslateTransportError,
    TranslationRateLimitError,
)


class DummyTranslator:
    error: Exception | None = None

    def __init__(self, url_suffix: str, timeout: float) -> None:
        self.url_suffix: str = url_suffix
        self.timeout: float = timeout
        self.closed = False
        self.calls: list[tuple[str, str, str | None]] = []

    async def translate(self, content: str, tgt_lang: str, src_lang: str | None) -> trans_google_module.TextResult:
        self.calls.append((content, tgt_lang, src_lang))
        if type(self).error is not None:
            raise type(self).error
        return trans_google_module.TextResult("привет", "en", metadata={"engine": "google"})

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def patch_translator(monkeypatch: pytest.MonkeyPatch) -> None:
    DummyTranslator.error = None
    monkeypatch.setattr(trans_google_module, "AsyncTranslator", DummyTranslator)


@pytest.fixture
def config() -> Any:
    return SimpleNamespace(TRANSLATION=SimpleNamespace(GOOGLE_SUFFIX="co.jp", TIMEOUT=7.0))


def test_initialize_sets_attributes_without_loading(config: Any) -> None:
    engine = trans_google_module.GoogleTranslation()

    engine.initialize(config)

    assert engine.engine_name == "Google"
    assert engine.loads_in_background is True
    assert engine.is_available is False
    with pytest.raises(EngineUnavailableError):
        _ = engine._inst


@pytest.mark.asyncio
async def test_load_makes_engine_available(config: Any) -> None:
    engine = trans_google_module.GoogleTranslation()
    engine.initialize(config)

    await engine.load()

    assert engine.is_available is True
    assert isinstance(engine._inst, DummyTranslator)
    assert (engine._inst.url_suffix, engine._inst.timeout) == ("co.jp", 7.0)


@pytest.mark.asyncio
async def test_load_failure_raises_runtime_error(monkeypatch: pytest.MonkeyPatch, config: Any) -> None:
    def broken(*args: Any, **kwargs: Any) -> None:
        _ = args, kwargs
        msg = "bad suffix"
        raise ValueError(msg)

    monkeypatch.setattr(trans_google_module, "AsyncTranslator", broken)
    engine = trans_google_module.GoogleTranslation()
    engine.initialize(config)

    with pytest.raises(RuntimeError):
        await engine.load()
    assert engine.is_available is False


@pytest.mark.asyncio
async def test_translation_returns_result(config: Any) -> None:
    engine = trans_google_module.GoogleTranslation()
    engine.initialize(config)
    await engine.load()

    result: Result = await engine.translation("hello", tgt_lang="ru", src_lang="auto")

    assert result.text == "привет"
    assert result.detected_source_lang == "en"


@pytest.mark.asyncio
async def test_translation_before_load_is_unavailable(config: Any) -> None:
    engine = trans_google_module.GoogleTranslation()
    engine.initialize(config)

    with pytest.raises(EngineUnavailableError):
        await engine.translation("hello", tgt_lang="ru")


@pytest.mark.asyncio
async def test_too_many_requests_maps_to_rate_limit(config: Any) -> None:
    DummyTranslator.error = trans_google_module.HTTPTooManyRequests("HTTP 429 Too Many Requests")
    engine = trans_google_module.GoogleTranslation()
    engine.initialize(config)
    await engine.load()

    with pytest.raises(TranslationRateLimitError, match="Too Many Requests") as excinfo:
        await engine.translation("hello", tgt_lang="ru")
    assert engine.is_rate_limit_error(excinfo.value) is True


@pytest.mark.asyncio
async def test_other_google_errors_map_to_translate_exception(config: Any) -> None:
    DummyTranslator.error = trans_google_module.GoogleError("unknown response format")
    engine = trans_google_module.GoogleTranslation()
    engine.initialize(config)
    await engine.load()

    with pytest.raises(TranslateExceptionError) as excinfo:
        await engine.translation("hello", tgt_lang="ru")
    assert not isinstance(excinfo.value, TranslationRateLimitError)
    assert engine.is_rate_limit_error(excinfo.value) is False


@pytest.mark.asyncio
async def test_connection_failure_is_not_a_rate_limit(config: Any) -> None:
    DummyTranslator.error = trans_google_module.HTTPConnectionError(
        "Could not connect to https://translate.google.co.jp:429"
    )
    engine = trans_google_module.GoogleTranslation()
    engine.initialize(config)
    await engine.load()

    with pytest.raises(TranslateTransportError, match="could not be reached") as excinfo:
        await engine.translation("hello", tgt_lang="ru")
    assert engine.is_rate_limit_error(excinfo.value) is False

@pytest.mark.asyncio
async def test_close_closes_loaded_translator(config: Any) -> None:
    engine = trans_google_module.GoogleTranslation()
    engine.initialize(config)
    await engine.load()
    translator = engine._inst

    await engine.close()

    assert translator.closed is True
    assert engine.is_available is False
