"""Google Translate fallback provider.

The provider is the last link of the chain. Its client is built by load(), which the gateway
schedules in the background at start-up; until that completes the provider reports itself
unavailable and the chain skips it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.trans.engines.async_google_translate import (
    AsyncTranslator,
    GoogleError,
    HTTPConnectionError,
    HTTPTimeoutError,
    HTTPTooManyRequests,
    TextResult,
)
from core.trans.interface import (
    EngineAttributes,
    EngineUnavailableError,
    Result,
    TransInterface,
    TranslateExceptionError,
    TranslateTransportError,
    TranslationRateLimitError,
)
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from models.config_models import Config

__all__: list[str] = ["GoogleTranslation"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class GoogleTranslation(TransInterface):
    def __init__(self) -> None:
        super().__init__()
        self.__inst: AsyncTranslator | None = None
        self._url_suffix: str = "com"
        self._timeout: float = 10.0

    @property
    def _inst(self) -> AsyncTranslator:
        if self.__inst is None:
            msg = "The google instance is not loaded yet"
            raise EngineUnavailableError(msg)
        return self.__inst

    @_inst.setter
    def _inst(self, inst: AsyncTranslator | None) -> None:
        self.__inst = inst
        logger.debug("'%s': 'set instance'", self.__class__.__name__)

    @property
    def is_available(self) -> bool:
        return self.__inst is not None

    @staticmethod
    def fetch_engine_name() -> str:
        return "google"

    def initialize(self, config: Config) -> None:
        logger.debug("'%s' Initialization start", self.__class__.__name__)
        self.engine_attributes = EngineAttributes(name="Google", loads_in_background=True)
        self._url_suffix = config.TRANSLATION.GOOGLE_SUFFIX
        self._timeout = config.TRANSLATION.TIMEOUT

    async def load(self) -> None:
        """Build the web client. Must run inside the event loop that will use it."""
        if self.__inst is not None:
            return
        try:
            self._inst = AsyncTranslator(url_suffix=self._url_suffix, timeout=self._timeout)
        except (AttributeError, ValueError) as err:
            logger.critical(err)
            msg = "an error occurred in instance creation"
            raise RuntimeError(msg) from err
        logger.info("Google Translate fallback loaded")

    async def translation(self, content: str, tgt_lang: str, src_lang: str = "auto") -> Result:
        logger.debug("'content': '%s', 'src_lang': '%s', 'tgt_lang': '%s'", content, src_lang, tgt_lang)

        try:
            result: TextResult = await self._inst.translate(content, tgt_lang, src_lang)
        except HTTPTooManyRequests as err:
            logger.error(err)
            msg = f"Google: Too Many Requests ({err})"
            raise TranslationRateLimitError(msg) from err
        except (HTTPConnectionError, HTTPTimeoutError) as err:
            logger.error(err)
            msg = f"Google could not be reached: {err}"
            raise TranslateTransportError(msg) from err
        except GoogleError as err:
            logger.error(err)
            msg = f"an anomaly occurred during translation at Google: {err}"
            raise TranslateExceptionError(msg) from err

        logger.info("translation completed (%s > %s)", src_lang, tgt_lang)
        return Result(text=result.text, detected_source_lang=result.detected_source_lang, metadata=result.metadata)

    async def close(self) -> None:
        if self.__inst is not None:
            await self.__inst.close()
            self.__inst = None
        logger.info("'%s' process termination", self.__class__.__name__)
