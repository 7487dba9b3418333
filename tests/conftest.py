"""Shared fakes for driving time and HTTP without real waiting or network access."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import pytest

from handlers.async_comm import HttpResponse

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping


class FakeClock:
    """Monotonic clock whose sleep advances time instantly."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now: float = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += max(0.0, seconds)
        # Let other tasks run, as a real sleep would.
        await asyncio.sleep(0)


class FakeHttp:
    """Stand-in for AsyncHttp that answers from a responder function.

    The responder receives (url, params) and returns an HttpResponse or raises.
    Every call is recorded with the fake clock time at which it started.
    """

    def __init__(self, responder: Callable[[str, Mapping[str, str] | None], HttpResponse], clock: FakeClock) -> None:
        self.responder = responder
        self.clock: FakeClock = clock
        self.calls: list[tuple[float, str, Mapping[str, str] | None]] = []
        self.active: int = 0
        self.max_active: int = 0
        self.closed: bool = False

    async def get(
        self, *, url: str, params: Mapping[str, str] | None = None, total_timeout: float | None = None
    ) -> HttpResponse:
        _ = total_timeout
        self.calls.append((self.clock.now, url, params))
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await self.clock.sleep(0.05)
            return self.responder(url, params)
        finally:
            self.active -= 1

    async def close(self) -> None:
        self.closed = True


def json_response(data: Any, status: int = 200) -> HttpResponse:
    return HttpResponse(status=status, reason="OK" if status == 200 else "Error", data=data, is_json=True)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
