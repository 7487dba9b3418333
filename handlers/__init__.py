"""Network communication helpers for the translation gateway.

This package provides the asynchronous HTTP client shared by the HTTP-based translation providers.
"""

from handlers.async_comm import AsyncCommError, AsyncCommTimeoutError, AsyncHttp, HttpResponse

__all__: list[str] = [
    "AsyncCommError",
    "AsyncCommTimeoutError",
    "AsyncHttp",
    "HttpResponse",
]
