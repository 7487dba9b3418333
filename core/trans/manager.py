from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from core.trans.engines import (
    GoogleTranslation,  # noqa: F401
    LingvaTranslation,  # noqa: F401
    MyMemoryTranslation,  # noqa: F401
)
from core.trans.interface import (
    AllProvidersFailedError,
    EngineUnavailableError,
    Result,
    TransInterface,
    TranslateExceptionError,
)
from core.trans.rate_limiter import RateLimiter
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Awaitable, Callable

    from models.config_models import Config


__all__: list[str] = ["TransManager"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class TransManager:
    """Ordered fallback chain over the configured translation engines.

    Engines are tried in configuration order. Each one is admitted through the shared RateLimiter,
    and a failure is recorded there before the chain waits and moves to the next engine.

    Attributes:
        config (Config): Application configuration.
        rate_limiter (RateLimiter): Admission control shared by every engine.
    """

    def __init__(
        self,
        config: Config,
        rate_limiter: RateLimiter | None = None,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize the TransManager with the given configuration.

        Args:
            config (Config): The configuration object containing translation engine settings.
            rate_limiter (RateLimiter | None): Shared limiter. Built from config.RATE_LIMIT when omitted.
            sleep (Callable[[float], Awaitable[None]]): Sleep used for the delay between engines.
        """
        self.config: Config = config
        self.rate_limiter: RateLimiter = rate_limiter or RateLimiter.from_config(config.RATE_LIMIT)
        self._sleep: Callable[[float], Awaitable[None]] = sleep
        self._trans_instance: dict[str, TransInterface] = {}
        logger.debug("Registered translation engines: %s", TransInterface.registered)

    def initialize(self) -> None:
        """Initialize translation engines based on the configuration."""
        logger.info("TransManager initialization started")

        for _name in self.config.TRANSLATION.ENGINE:
            _cls: type[TransInterface] | None = TransInterface.registered.get(_name)
            if _cls is None:
                logger.critical("Translation class not found: '%s'", _name)
                continue
            try:
                self.add_engine(_name, _cls())
            except RuntimeError as err:
                logger.critical("RuntimeError in '%s' translation setup: %s", _name, err)
            except TranslateExceptionError as err:
                logger.critical("Exception in '%s' translation setup: %s", _name, err)

    def add_engine(self, name: str, instance: TransInterface) -> None:
        """Initialize an engine and append it to the end of the chain."""
        instance.initialize(self.config)
        self._trans_instance[name] = instance
        logger.info("Translation engine initialized: '%s'", name)
        logger.debug("Engine attributes: %s", instance.engine_attributes)

    def fetch_engine_names(self) -> list[str]:
        """Get the configuration names of the engines in chain order."""
        return list(self._trans_instance)

    @property
    def engines(self) -> list[TransInterface]:
        return list(self._trans_instance.values())

    async def load_background_engines(self) -> None:
        """Finish loading the engines that become usable only after load().

        A failed load is logged and leaves that engine unavailable; the chain keeps working without it.
        """
        for _name, _inst in self._trans_instance.items():
            if not _inst.loads_in_background:
                continue
            try:
                await _inst.load()
            except (RuntimeError, TranslateExceptionError) as err:
                logger.error("Failed to load translation engine '%s': %s", _name, err)
            else:
                logger.info("Translation engine loaded: '%s'", _name)

    async def translate(self, content: str, src_lang: str, tgt_lang: str) -> Result:
        """Translate through the first engine that succeeds.

        Args:
            content (str): Trimmed, non-empty text.
            src_lang (str): Source language code or "auto".
            tgt_lang (str): Target language code.

        Returns:
            Result: The engine's result with `service` set to the display name that produced it.

        Raises:
            CooldownActiveError: If admission is refused. The remaining engines are not tried.
            AllProvidersFailedError: If every engine failed or none was available.
        """
        last_error: Exception | None = None

        for _name, _inst in self._trans_instance.items():
            if not _inst.is_available:
                logger.debug("Skipping unavailable translation engine: '%s'", _name)
                continue

            await self.rate_limiter.admit()

            try:
                logger.debug("Using translation engine '%s'. Source: '%s', Target: '%s'", _name, src_lang, tgt_lang)
                result: Result = await _inst.translation(content=content, tgt_lang=tgt_lang, src_lang=src_lang)
            except EngineUnavailableError as err:
                logger.debug("Translation engine '%s' became unavailable: %s", _name, err)
                continue
            except TranslateExceptionError as err:
                last_error = err
                await self._record_failure(_name, err, is_rate_limited=_inst.is_rate_limit_error(err))
                continue
            except Exception as err:  # noqa: BLE001 - isolate engine failures
                last_error = TranslateExceptionError(f"{_inst.engine_name} failed unexpectedly ({type(err).__name__})")
                logger.error("Unexpected error from translation engine '%s': %r", _name, err)
                await self._record_failure(_name, last_error, is_rate_limited=False)
                continue

            self.rate_limiter.record_success()
            if result.service is None:
                result.service = _inst.engine_name
            logger.info("Translation succeeded with '%s'", result.service)
            return result

        logger.error("All translation engines failed. Last error: %s", last_error)
        raise AllProvidersFailedError(last_error)

    async def _record_failure(self, name: str, err: Exception, *, is_rate_limited: bool) -> None:
        self.rate_limiter.record_failure(is_rate_limit_signal=is_rate_limited)
        if is_rate_limited:
            logger.warning("Translation rate limit detected at '%s': %s", name, err)
            delay: float = self.config.RATE_LIMIT.RETRY_DELAY
        else:
            logger.error("Translation failed at '%s': %s", name, err)
            delay = self.config.RATE_LIMIT.FAILOVER_DELAY
        await self._sleep(delay)

    async def shutdown_engines(self) -> None:
        """Shut down all translation engines."""
        logger.info("Class '%s' termination process started.", self.__class__.__name__)
        for _inst in self._trans_instance.values():
            await _inst.close()
        logger.info("Class '%s' termination process completed.", self.__class__.__name__)
