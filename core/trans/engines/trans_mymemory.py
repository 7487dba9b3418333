"""MyMemory translation provider.

MyMemory requires an explicit source language and rejects identical source and target codes.
When the caller asks for auto-detection, the source is guessed from the script of the text:
Han characters mean Chinese, Cyrillic means Russian, anything else is treated as English.
This is a coarse heuristic, not language identification, and is kept deliberately narrow.

API:
    GET https://api.mymemory.translated.net/get?q={text}&langpair={source}|{target}
    -> {"responseStatus": 200, "responseData": {"translatedText": "..."}, "responseDetails": "..."}
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from core.trans.interface import (
    EngineAttributes,
    Result,
    TransInterface,
    TranslateExceptionError,
    TranslateTransportError,
    TranslationRateLimitError,
)
from handlers.async_comm import AsyncCommError, AsyncHttp
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from handlers.async_comm import HttpResponse
    from models.config_models import Config

__all__: list[str] = ["MyMemoryTranslation"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

HAN_PATTERN: Final[re.Pattern[str]] = re.compile(r"[\u4e00-\u9fff]")
CYRILLIC_PATTERN: Final[re.Pattern[str]] = re.compile(r"[\u0400-\u04ff]")

SAME_LANGUAGE_SERVICE: Final[str] = "MyMemory (same language)"


class MyMemoryTranslation(TransInterface):
    def __init__(self, http: AsyncHttp | None = None) -> None:
        super().__init__()
        self._http: AsyncHttp | None = http
        self.url: str = ""

    @property
    def http(self) -> AsyncHttp:
        if self._http is None:
            msg = "The MyMemory HTTP client is not initialised"
            raise TranslateExceptionError(msg)
        return self._http

    @property
    def is_available(self) -> bool:
        return bool(self.url)

    @staticmethod
    def fetch_engine_name() -> str:
        return "mymemory"

    def initialize(self, config: Config) -> None:
        logger.debug("'%s' Initialization start", self.__class__.__name__)
        self.engine_attributes = EngineAttributes(name="MyMemory")
        self.url = config.TRANSLATION.MYMEMORY_URL
        if self._http is None:
            self._http = AsyncHttp(timeout=config.TRANSLATION.TIMEOUT)

    @staticmethod
    def guess_source_language(content: str) -> str:
        if HAN_PATTERN.search(content):
            return "zh-CN"
        if CYRILLIC_PATTERN.search(content):
            return "ru"
        return "en"

    @classmethod
    def resolve_source_language(cls, content: str, tgt_lang: str, src_lang: str) -> str:
        """Return the source code to send, guessing it when auto or equal to the target."""
        if not src_lang or src_lang == "auto" or src_lang == tgt_lang:
            guessed: str = cls.guess_source_language(content)
            logger.debug("Guessed source language '%s' (requested '%s')", guessed, src_lang)
            return guessed
        return src_lang

    async def translation(self, content: str, tgt_lang: str, src_lang: str = "auto") -> Result:
        logger.debug("'content': '%s', 'src_lang': '%s', 'tgt_lang': '%s'", content, src_lang, tgt_lang)
        source: str = self.resolve_source_language(content, tgt_lang, src_lang)

        if source == tgt_lang:
            logger.info("Source and target are both '%s'; returning the text unchanged", source)
            return Result(text=content, service=SAME_LANGUAGE_SERVICE, metadata={"type": "same language"})

        try:
            response: HttpResponse = await self.http.get(
                url=self.url, params={"q": content, "langpair": f"{source}|{tgt_lang}"}
            )
        except AsyncCommError as err:
            msg: str = f"MyMemory request failed: {err}"
            raise TranslateTransportError(msg) from err
        except UnicodeEncodeError as err:
            msg = f"MyMemory cannot encode the text: {err.reason}"
            raise TranslateExceptionError(msg) from err

        result: Result = self._build_result(response)
        logger.info("translation completed (%s > %s)", source, tgt_lang)
        return result

    def _build_result(self, response: HttpResponse) -> Result:
        if response.status == 429:
            msg = "MyMemory: HTTP 429 Too Many Requests"
            raise TranslationRateLimitError(msg)
        if not response.ok:
            msg = f"MyMemory: HTTP {response.status} {response.reason or ''}".rstrip()
            raise TranslateExceptionError(msg)
        if not response.is_json or not isinstance(response.data, dict):
            msg = "MyMemory returned a malformed response"
            raise TranslateExceptionError(msg)

        data: dict = response.data
        try:
            status = int(data.get("responseStatus", 0))
        except (TypeError, ValueError):
            status = 0

        if status != 200:
            details: str = str(data.get("responseDetails") or "MyMemory translation failed")
            if status == 429:
                raise TranslationRateLimitError(details)
            raise TranslateExceptionError(details)

        response_data = data.get("responseData")
        translated = response_data.get("translatedText") if isinstance(response_data, dict) else None
        if not isinstance(translated, str):
            msg = "MyMemory response has no translated text"
            raise TranslateExceptionError(msg)
        return Result(text=translated)

    async def close(self) -> None:
        if self._http is not None:
            await self._http.close()
        logger.info("'%s' process termination", self.__class__.__name__)
