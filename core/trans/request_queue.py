"""Single-flight FIFO queue for translation requests.

Every request that misses the cache passes through one TranslationRequestQueue, which hands
requests to its handler one at a time and waits a fixed pacing delay after each. At most one
handler call, and so at most one provider call, is active at any instant.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Final, TypeAlias

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Awaitable, Callable

    from models.translation_models import TranslationRequest, TranslationResult

__all__: list[str] = ["QueueClosedError", "TranslationRequestQueue"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

DEFAULT_PACING_DELAY_SEC: Final[float] = 0.2

RequestHandler: TypeAlias = "Callable[[TranslationRequest], Awaitable[TranslationResult]]"
CloseCallback: TypeAlias = (
    "Callable[[TranslationRequest], TranslationResult] | Callable[[TranslationRequest], Awaitable[TranslationResult]]"
)


class QueueClosedError(RuntimeError):
    """A request was enqueued after close()."""


class TranslationRequestQueue:
    """FIFO serializer with a single drain task.

    The drain task is started by the first enqueue, serves requests until the queue is empty and
    then exits. The next enqueue starts a new one; an enqueue while a drain is running only adds
    to the queue.
    """

    def __init__(
        self,
        handler: RequestHandler,
        *,
        pacing_delay: float = DEFAULT_PACING_DELAY_SEC,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._handler: RequestHandler = handler
        self.pacing_delay: float = pacing_delay
        self._sleep: Callable[[float], Awaitable[None]] = sleep
        self._queue: asyncio.Queue[TranslationRequest] = asyncio.Queue()
        self._drain_task: asyncio.Task[None] | None = None
        self._closed: bool = False

    def __len__(self) -> int:
        return self._queue.qsize()

    @property
    def is_draining(self) -> bool:
        return self._drain_task is not None and not self._drain_task.done()

    @property
    def is_closed(self) -> bool:
        return self._closed

    def enqueue(self, request: TranslationRequest) -> asyncio.Future[TranslationResult]:
        """Add a request and make sure the drain task is running.

        Returns:
            asyncio.Future[TranslationResult]: The request's future, resolved by the drain task.

        Raises:
            QueueClosedError: If close() has been called.
        """
        if self._closed:
            msg = "The translation queue is closed"
            raise QueueClosedError(msg)

        self._queue.put_nowait(request)
        logger.debug("Request queued (pending: %d)", self._queue.qsize())
        if not self.is_draining:
            self._drain_task = asyncio.create_task(self._drain(), name="translation-queue-drain")
        return request.future

    async def _drain(self) -> None:
        logger.debug("Queue drain started")
        while not self._queue.empty():
            request: TranslationRequest = self._queue.get_nowait()
            await self._serve(request)
            await self._sleep(self.pacing_delay)
        logger.debug("Queue drain finished")

    async def _serve(self, request: TranslationRequest) -> None:
        if request.future.done():
            return
        try:
            result: TranslationResult = await self._handler(request)
        except Exception as err:  # noqa: BLE001
            logger.error("Translation request handler failed: %r", err)
            if not request.future.done():
                request.future.set_exception(err)
        else:
            if not request.future.done():
                request.future.set_result(result)

    async def close(self, callback: CloseCallback | None = None) -> None:
        """Stop accepting requests, resolve the pending ones and wait for the active drain.

        Args:
            callback (CloseCallback | None): Builds the result given to each request that never
                reached the handler. The callback can be synchronous or asynchronous. Without one,
                pending futures are cancelled.
        """
        logger.info("Closing translation queue")
        self._closed = True
        while not self._queue.empty():
            try:
                request: TranslationRequest = self._queue.get_nowait()
            except asyncio.QueueEmpty:
                break
            if request.future.done():
                continue
            if callback is None:
                request.future.cancel()
                continue
            try:
                result = callback(request)
                if asyncio.iscoroutine(result):
                    result = await result
            except Exception as err:  # noqa: BLE001
                logger.error("Callback error for request %r: %r", request, err)
                result = err
            if request.future.done():
                continue
            if isinstance(result, Exception):
                request.future.set_exception(result)
            else:
                request.future.set_result(result)

        if self._drain_task is not None:
            await self._drain_task
            self._drain_task = None
        logger.info("Translation queue closed")
