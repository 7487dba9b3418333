"""Lingva Translate provider.

Lingva is an open-source Google Translate front end published on several mirrors. The provider
tries each mirror in turn, starting from the one that answered last time.

API:
    GET {instance}/api/v1/{source}/{target}/{text}
    -> {"translation": "...", "info": {"detectedSource": "en", ...}}
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final
from urllib.parse import quote

from core.trans.interface import (
    EngineAttributes,
    Result,
    TransInterface,
    TranslateExceptionError,
    TranslateTransportError,
    TranslationRateLimitError,
)
from handlers.async_comm import AsyncCommError, AsyncHttp
from models.translation_models import EndpointRotation
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from handlers.async_comm import HttpResponse
    from models.config_models import Config

__all__: list[str] = ["LingvaTranslation"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

# Characters left unescaped, matching JavaScript's encodeURIComponent.
_PATH_SAFE: Final[str] = "!~*'()"

# Lingva only knows the bare code for simplified Chinese.
_TARGET_CODE_MAP: Final[dict[str, str]] = {"zh-CN": "zh"}


class LingvaTranslation(TransInterface):
    def __init__(self, http: AsyncHttp | None = None) -> None:
        super().__init__()
        self._http: AsyncHttp | None = http
        self.__rotation: EndpointRotation | None = None

    @property
    def rotation(self) -> EndpointRotation:
        if self.__rotation is None:
            msg = "The Lingva instance list is not initialised"
            raise TranslateExceptionError(msg)
        return self.__rotation

    @property
    def http(self) -> AsyncHttp:
        if self._http is None:
            msg = "The Lingva HTTP client is not initialised"
            raise TranslateExceptionError(msg)
        return self._http

    @property
    def is_available(self) -> bool:
        return self.__rotation is not None

    @staticmethod
    def fetch_engine_name() -> str:
        return "lingva"

    def initialize(self, config: Config) -> None:
        logger.debug("'%s' Initialization start", self.__class__.__name__)
        instances: list[str] = [url.rstrip("/") for url in config.TRANSLATION.LINGVA_INSTANCES]
        try:
            self.__rotation = EndpointRotation(name="Lingva", endpoints=instances)
        except ValueError as err:
            msg = "an error occurred in instance creation"
            raise RuntimeError(msg) from err

        self.engine_attributes = EngineAttributes(name="Lingva", endpoint_count=len(instances))
        if self._http is None:
            self._http = AsyncHttp(timeout=config.TRANSLATION.TIMEOUT)

    @staticmethod
    def build_path(content: str, tgt_lang: str, src_lang: str) -> str:
        """Build the API path for one request.

        Raises:
            UnicodeEncodeError: If the text cannot be encoded as UTF-8 (e.g. lone surrogates).
        """
        source: str = src_lang or "auto"
        target: str = _TARGET_CODE_MAP.get(tgt_lang, tgt_lang)
        return (
            f"/api/v1/{quote(source, safe=_PATH_SAFE)}/"
            f"{quote(target, safe=_PATH_SAFE)}/{quote(content, safe=_PATH_SAFE)}"
        )

    @classmethod
    def build_url(cls, base_url: str, content: str, tgt_lang: str, src_lang: str) -> str:
        return base_url + cls.build_path(content, tgt_lang, src_lang)

    async def translation(self, content: str, tgt_lang: str, src_lang: str = "auto") -> Result:
        """Translate through the first Lingva mirror that answers.

        Mirrors are tried from the sticky position onwards. The mirror that succeeds becomes the
        starting point for the next request.

        Raises:
            TranslationRateLimitError: If the last mirror tried answered with HTTP 429.
            TranslateExceptionError: If every mirror failed or the text cannot be encoded.
        """
        logger.debug("'content': '%s', 'src_lang': '%s', 'tgt_lang': '%s'", content, src_lang, tgt_lang)
        try:
            path: str = self.build_path(content, tgt_lang, src_lang)
        except UnicodeEncodeError as err:
            msg = f"Lingva cannot encode the text: {err.reason}"
            raise TranslateExceptionError(msg) from err

        last_error: TranslateExceptionError | None = None
        for index, base_url in self.rotation.iter_from_current():
            try:
                response: HttpResponse = await self.http.get(url=base_url + path)
                result: Result = self._build_result(response, base_url)
            except AsyncCommError as err:
                last_error = TranslateTransportError(f"Lingva instance {base_url} failed: {err}")
            except TranslateExceptionError as err:
                last_error = err
            else:
                if index != self.rotation.current_index:
                    logger.info("Lingva switched to instance %d (%s)", index, base_url)
                self.rotation.mark_success(index)
                logger.info("translation completed (%s > %s)", src_lang, tgt_lang)
                return result

            logger.info("Lingva instance %d failed: %s", index, last_error)

        if last_error is None:
            last_error = TranslateExceptionError("All Lingva instances failed")
        raise last_error

    def _build_result(self, response: HttpResponse, base_url: str) -> Result:
        if response.status == 429:
            msg: str = f"HTTP 429 Too Many Requests from {base_url}"
            raise TranslationRateLimitError(msg)
        if not response.ok:
            msg = f"HTTP {response.status} {response.reason or ''}".rstrip() + f" from {base_url}"
            raise TranslateExceptionError(msg)
        if not response.is_json or not isinstance(response.data, dict):
            msg = f"Malformed response from {base_url}"
            raise TranslateExceptionError(msg)

        translation = response.data.get("translation")
        if not isinstance(translation, str) or not translation:
            msg = f"Empty translation from {base_url}"
            raise TranslateExceptionError(msg)

        info = response.data.get("info")
        detected: str | None = info.get("detectedSource") if isinstance(info, dict) else None
        return Result(text=translation, detected_source_lang=detected or None, metadata={"instance": base_url})

    async def close(self) -> None:
        if self._http is not None:
            await self._http.close()
        logger.info("'%s' process termination", self.__class__.__name__)
