"""Public entry point of the translation gateway.

TranslationGateway owns all mutable translation state for one process: the shared rate limiter,
the result cache, the request queue and the provider chain. Hosts construct one instance, start
it, and call translate() for each request.
"""

from __future__ import annotations

import asyncio
import contextlib
import time
from typing import TYPE_CHECKING, Self

from core.cache.manager import TranslationCacheManager
from core.trans.interface import AllProvidersFailedError, CooldownActiveError, EmptyInputError
from core.trans.manager import TransManager
from core.trans.rate_limiter import RateLimiter
from core.trans.request_queue import TranslationRequestQueue
from models.translation_models import TranslationRequest, TranslationResult
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Awaitable, Callable

    from models.config_models import Config

__all__: list[str] = ["TranslationGateway"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

SHUTTING_DOWN_MESSAGE: str = "Translation service is shutting down"


class TranslationGateway:
    """Cache lookup, serialized queueing and provider fallback behind one translate() call.

    Args:
        config (Config): Application configuration.
        trans_manager (TransManager | None): Provider chain. Built from config when omitted.
        cache (TranslationCacheManager | None): Result cache. Built from config when omitted.
        clock (Callable[[], float]): Monotonic clock for the rate limiter.
        sleep (Callable[[float], Awaitable[None]]): Sleep used for every delay the gateway makes.
    """

    def __init__(
        self,
        config: Config,
        *,
        trans_manager: TransManager | None = None,
        cache: TranslationCacheManager | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.config: Config = config
        if trans_manager is None:
            rate_limiter: RateLimiter = RateLimiter.from_config(config.RATE_LIMIT, clock=clock, sleep=sleep)
            trans_manager = TransManager(config, rate_limiter, sleep=sleep)
        self.trans_manager: TransManager = trans_manager
        if cache is None:
            cache = TranslationCacheManager.from_config(config)
        self.cache: TranslationCacheManager = cache
        self.queue: TranslationRequestQueue = TranslationRequestQueue(
            self._handle_request, pacing_delay=config.QUEUE.PACING_DELAY, sleep=sleep
        )
        self._load_task: asyncio.Task[None] | None = None
        self._started: bool = False
        logger.debug("TranslationGateway instance created")

    @property
    def rate_limiter(self) -> RateLimiter:
        return self.trans_manager.rate_limiter

    @property
    def is_started(self) -> bool:
        return self._started

    async def __aenter__(self) -> Self:
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        _ = exc_type, exc_val, exc_tb
        await self.close()

    async def start(self) -> None:
        """Initialize the engines and start loading the background ones."""
        if self._started:
            return
        logger.info("TranslationGateway start")
        self.trans_manager.initialize()
        self._load_task = asyncio.create_task(
            self.trans_manager.load_background_engines(), name="translation-engine-loader"
        )
        self._started = True
        logger.info("Translation engines: %s", self.trans_manager.fetch_engine_names())

    async def wait_until_loaded(self) -> None:
        """Wait for the background engine loading started by start()."""
        if self._load_task is not None:
            await self._load_task

    async def close(self) -> None:
        """Resolve queued requests as shutting down, wait for the active one and release engines."""
        logger.info("TranslationGateway termination process started")
        await self.queue.close(self._shutting_down_result)
        if self._load_task is not None and not self._load_task.done():
            self._load_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._load_task
        self._load_task = None
        if self._started:
            await self.trans_manager.shutdown_engines()
        self._started = False
        logger.info("TranslationGateway termination process completed")

    def normalize(self, text: str | None, source_lang: str | None, target_lang: str | None) -> tuple[str, str, str]:
        """Trim the text and fill in default languages.

        Raises:
            EmptyInputError: If the text is empty after trimming.
        """
        content: str = (text or "").strip()
        if not content:
            raise EmptyInputError
        return content, source_lang or "auto", target_lang or self.config.TRANSLATION.TARGET_LANGUAGE

    def cache_key(self, request: TranslationRequest) -> str:
        return self.cache.build_cache_key(request.content, request.src_lang, request.tgt_lang)

    async def translate(
        self, text: str | None, source_lang: str | None = "auto", target_lang: str | None = None
    ) -> TranslationResult:
        """Translate text, answering from the cache when possible.

        Args:
            text (str | None): Text to translate. Surrounding whitespace is ignored.
            source_lang (str | None): Source language code; empty means "auto".
            target_lang (str | None): Target language code; empty means the configured default.

        Returns:
            TranslationResult: Never raises for translation failures; they are returned as results.
        """
        try:
            content, src_lang, tgt_lang = self.normalize(text, source_lang, target_lang)
        except EmptyInputError as err:
            logger.debug("Empty input, translation skipped")
            return TranslationResult.failed(str(err), "EmptyInput")

        # Cache hits and refusals never create a request or its future.
        cached: TranslationResult | None = self.cache.get(self.cache.build_cache_key(content, src_lang, tgt_lang))
        if cached is not None:
            return cached

        if self.queue.is_closed:
            logger.debug("Request refused at shutdown: '%s'", content[:50])
            return TranslationResult.failed(SHUTTING_DOWN_MESSAGE, "ShuttingDown")

        if not self._started:
            await self.start()

        return await self.queue.enqueue(TranslationRequest(content=content, src_lang=src_lang, tgt_lang=tgt_lang))

    async def _handle_request(self, request: TranslationRequest) -> TranslationResult:
        key: str = self.cache_key(request)
        if key in self.cache:
            cached: TranslationResult | None = self.cache.get(key)
            if cached is not None:
                logger.debug("Request answered from cache while queued")
                return cached

        try:
            result = await self.trans_manager.translate(request.content, request.src_lang, request.tgt_lang)
        except CooldownActiveError as err:
            return TranslationResult.failed(str(err), "CooldownActive", retry_after=err.remaining_seconds)
        except AllProvidersFailedError as err:
            return TranslationResult.failed(str(err), "AllProvidersFailed")
        except Exception as err:  # noqa: BLE001 - callers only ever receive results
            logger.error("Translation chain failed unexpectedly: %r", err)
            msg: str = f"Translation failed unexpectedly ({type(err).__name__})"
            return TranslationResult.failed(msg, "AllProvidersFailed")

        translation: TranslationResult = TranslationResult.succeeded(
            text=result.text or "",
            service=result.service or "",
            detected_lang=result.detected_source_lang,
        )
        self.cache.put(key, translation)
        logger.debug("Translation finished in %.3f sec", time.monotonic() - request.submitted_at)
        return translation

    @staticmethod
    def _shutting_down_result(request: TranslationRequest) -> TranslationResult:
        logger.debug("Request dropped at shutdown: '%s'", request.content[:50])
        return TranslationResult.failed(SHUTTING_DOWN_MESSAGE, "ShuttingDown")
