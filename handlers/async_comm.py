"""Asynchronous HTTP communication used by the translation providers.

The `AsyncHttp` class wraps one aiohttp session with browser-like default headers.
Responses are returned with their status so that each provider can decide what counts as
success; only transport problems (timeouts, refused or reset connections) raise.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Final, Literal, NamedTuple, Self
from urllib.parse import urlsplit

import aiohttp
from aiohttp.client import ClientSession

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Mapping


__all__: list[str] = ["AsyncCommError", "AsyncCommTimeoutError", "AsyncHttp", "HttpResponse"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

HTTPMethod = Literal["GET", "POST"]

CONNECT_TIMEOUT: Final[float] = 1.0
DEFAULT_TIMEOUT: Final[float] = 10.0

DEFAULT_HEADERS: Final[dict[str, str]] = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
    ),
    "Accept": "application/json",
}


class HttpResponse(NamedTuple):
    """Status and decoded body of an HTTP response.

    Attributes:
        status (int): HTTP status code.
        reason (str | None): HTTP reason phrase.
        data (Any): JSON-decoded body, or the raw text when the body is not valid JSON.
        is_json (bool): Whether `data` came from a successful JSON decode.
    """

    status: int
    reason: str | None
    data: Any
    is_json: bool

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class AsyncHttp:
    """Asynchronous HTTP client for JSON web APIs.

    The aiohttp session is created lazily on first use because it must be bound to
    a running event loop.
    """

    def __init__(self, *, headers: Mapping[str, str] | None = None, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.__session: ClientSession | None = None
        self.headers: dict[str, str] = {**DEFAULT_HEADERS, **(headers or {})}
        self.timeout: float = timeout
        logger.debug("%s created (timeout=%s)", self.__class__.__name__, timeout)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        _ = exc_type, exc_val, exc_tb
        await self.close()

    @property
    def session(self) -> ClientSession:
        """Get the current aiohttp session, creating a new one if none is open."""
        if self.__session is None or self.__session.closed:
            self.__session = ClientSession(headers=self.headers)
            logger.debug("%s session initialized", self.__class__.__name__)
        return self.__session

    @property
    def is_open(self) -> bool:
        return self.__session is not None and not self.__session.closed

    async def close(self) -> None:
        """Close the aiohttp session if it is open."""
        if self.__session is not None and not self.__session.closed:
            await self.__session.close()
            logger.debug("%s session closed", self.__class__.__name__)
        self.__session = None

    async def get(
        self,
        *,
        url: str,
        params: Mapping[str, str] | None = None,
        total_timeout: float | None = None,
    ) -> HttpResponse:
        """Perform an asynchronous HTTP GET request.

        Args:
            url (str): The URL to request.
            params (Mapping[str, str] | None): Query string parameters.
            total_timeout (float | None): Total timeout in seconds. Defaults to the client timeout.

        Returns:
            HttpResponse: Status and decoded body.

        Raises:
            AsyncCommTimeoutError: If the server does not answer in time.
            AsyncCommError: If the connection fails.
        """
        return await self._request("GET", url=url, params=params, total_timeout=total_timeout)

    async def post(
        self,
        *,
        url: str,
        data: str | None = None,
        headers: Mapping[str, str] | None = None,
        total_timeout: float | None = None,
    ) -> HttpResponse:
        """Perform an asynchronous HTTP POST request with a pre-encoded body.

        Raises:
            AsyncCommTimeoutError: If the server does not answer in time.
            AsyncCommError: If the connection fails.
        """
        return await self._request("POST", url=url, data=data, headers=headers, total_timeout=total_timeout)

    @staticmethod
    def _build_timeout(total_timeout: float) -> aiohttp.ClientTimeout:
        if total_timeout <= 0:
            return aiohttp.ClientTimeout(total=None)
        if total_timeout < CONNECT_TIMEOUT:
            # A connect timeout longer than the total would never apply.
            return aiohttp.ClientTimeout(total=total_timeout)
        return aiohttp.ClientTimeout(connect=CONNECT_TIMEOUT, total=total_timeout)

    @staticmethod
    def origin(url: str) -> str:
        """Return scheme and host of a URL; error messages never carry the path or query."""
        parts = urlsplit(url)
        return f"{parts.scheme}://{parts.netloc}" if parts.netloc else "<unknown host>"

    @staticmethod
    def decode_body(body: str) -> tuple[Any, bool]:
        """Decode a response body as JSON, returning the raw text when that fails."""
        try:
            return json.loads(body), True
        except (json.JSONDecodeError, ValueError):
            return body, False

    async def _request(
        self,
        method: HTTPMethod,
        *,
        url: str,
        total_timeout: float | None,
        **kwargs: Any,
    ) -> HttpResponse:
        timeout: float = self.timeout if total_timeout is None else total_timeout
        origin: str = self.origin(url)
        logger.debug("[%s] url=%s timeout=%s kwargs=%s", method, url, timeout, kwargs)

        try:
            async with self.session.request(
                method=method,
                url=url,
                timeout=self._build_timeout(timeout),
                **kwargs,
            ) as resp:
                body: str = await resp.text(errors="replace")
                data, is_json = self.decode_body(body)
                return HttpResponse(status=resp.status, reason=resp.reason, data=data, is_json=is_json)

        except TimeoutError as err:
            logger.debug(err)
            msg = f"Request timeout ({timeout}s) for {origin}"
            raise AsyncCommTimeoutError(msg) from err
        except ConnectionResetError as err:
            logger.debug(err)
            msg = f"The connection to {origin} has been reset."
            raise AsyncCommError(msg) from err
        except aiohttp.ClientConnectorError as err:
            logger.debug(err)
            msg = f"Could not connect to {origin}: {err}"
            raise AsyncCommError(msg) from err
        except aiohttp.ClientError as err:
            logger.debug(err)
            msg = f"HTTP request to {origin} failed: {type(err).__name__}"
            raise AsyncCommError(msg) from err


class AsyncCommError(Exception):
    """Base class for asynchronous communication errors."""


class AsyncCommTimeoutError(AsyncCommError):
    """An asynchronous communication operation timed out."""
