"""Admission control for outbound provider calls.

A single RateLimiter is shared by every provider. It spaces calls by a randomised delay that
grows exponentially with consecutive failures, and refuses all calls for a fixed cooldown after a
provider reports rate limiting.

States:
    Normal:   no failures since the last success, no cooldown.
    Backoff:  consecutive_errors > 0; delay is multiplied by 2 ** consecutive_errors.
    Cooldown: admission raises CooldownActiveError until cooldown_until has passed.
"""

from __future__ import annotations

import asyncio
import random
import time
from typing import TYPE_CHECKING, Final

from core.trans.interface import CooldownActiveError
from models.cache_models import RateLimitState
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Awaitable, Callable

    from models.config_models import RateLimit

__all__: list[str] = ["RateLimiter"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

DEFAULT_MIN_DELAY_SEC: Final[float] = 1.0
DEFAULT_MAX_DELAY_SEC: Final[float] = 3.0
DEFAULT_MAX_BACKOFF_SEC: Final[float] = 10.0
DEFAULT_COOLDOWN_SEC: Final[float] = 60.0
COOLDOWN_LOG_INTERVAL_SEC: Final[float] = 5.0


class RateLimiter:
    """Spacing, backoff and cooldown for provider calls.

    The clock, sleep and random source are injectable so that tests can drive time.
    """

    def __init__(
        self,
        *,
        min_delay: float = DEFAULT_MIN_DELAY_SEC,
        max_delay: float = DEFAULT_MAX_DELAY_SEC,
        max_backoff_delay: float = DEFAULT_MAX_BACKOFF_SEC,
        cooldown: float = DEFAULT_COOLDOWN_SEC,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        uniform: Callable[[float, float], float] = random.uniform,
    ) -> None:
        self.min_delay: float = min_delay
        self.max_delay: float = max_delay
        self.max_backoff_delay: float = max_backoff_delay
        self.cooldown: float = cooldown
        self._clock: Callable[[], float] = clock
        self._sleep: Callable[[float], Awaitable[None]] = sleep
        self._uniform: Callable[[float, float], float] = uniform
        self.state: RateLimitState = RateLimitState()
        self._last_cooldown_log: float | None = None

    @classmethod
    def from_config(
        cls,
        settings: RateLimit,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> RateLimiter:
        return cls(
            min_delay=settings.MIN_DELAY,
            max_delay=settings.MAX_DELAY,
            max_backoff_delay=settings.MAX_BACKOFF_DELAY,
            cooldown=settings.COOLDOWN,
            clock=clock,
            sleep=sleep,
        )

    @property
    def consecutive_errors(self) -> int:
        return self.state.consecutive_errors

    def cooldown_remaining(self) -> float:
        """Seconds until the cooldown ends, or 0.0 when none is active."""
        return max(0.0, self.state.cooldown_until - self._clock())

    def in_cooldown(self) -> bool:
        return self._clock() < self.state.cooldown_until

    def compute_delay(self) -> float:
        """Draw the minimum spacing required before the next call.

        A base delay is drawn uniformly from [min_delay, max_delay]. With failures pending it is
        multiplied by 2 ** consecutive_errors and capped at max_backoff_delay.
        """
        delay: float = self._uniform(self.min_delay, self.max_delay)
        if self.state.consecutive_errors > 0:
            delay = min(delay * (2**self.state.consecutive_errors), self.max_backoff_delay)
        return delay

    async def admit(self) -> None:
        """Wait until the next provider call may start.

        Raises:
            CooldownActiveError: If a rate-limit cooldown is running. No waiting is done.
        """
        now: float = self._clock()
        if now < self.state.cooldown_until:
            remaining: float = self.state.cooldown_until - now
            self._log_cooldown(now, remaining)
            raise CooldownActiveError(remaining)

        delay: float = self.compute_delay()
        elapsed: float = now - self.state.last_request_at
        if elapsed < delay:
            wait_time: float = delay - elapsed
            logger.debug("Rate limiting: waiting %.3f sec before next request", wait_time)
            await self._sleep(wait_time)

        self.state.last_request_at = self._clock()

    def record_success(self) -> None:
        if self.state.consecutive_errors:
            logger.info("Provider call succeeded; clearing %d consecutive error(s)", self.state.consecutive_errors)
        self.state.consecutive_errors = 0

    def record_failure(self, *, is_rate_limit_signal: bool) -> None:
        """Count a failed provider call and start a cooldown if it was rate limiting."""
        self.state.consecutive_errors += 1
        if is_rate_limit_signal:
            self.state.cooldown_until = self._clock() + self.cooldown
            self._last_cooldown_log = None
            logger.warning("Rate limit detected. Entering cooldown for %.0f seconds", self.cooldown)
        else:
            logger.debug("Provider failure recorded (consecutive errors: %d)", self.state.consecutive_errors)

    def _log_cooldown(self, now: float, remaining: float) -> None:
        if self._last_cooldown_log is None or now - self._last_cooldown_log >= COOLDOWN_LOG_INTERVAL_SEC:
            logger.warning("Translation temporarily throttled (%.1f sec remaining).", remaining)
            self._last_cooldown_log = now
