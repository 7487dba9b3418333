"""Translation engine management and interfaces.

This package provides the provider fallback chain, its shared rate limiter and the single-flight
request queue, with pluggable engine implementations behind TransInterface.
"""

from core.trans.interface import (
    AllProvidersFailedError,
    CooldownActiveError,
    EmptyInputError,
    EngineUnavailableError,
    GatewayError,
    Result,
    TransInterface,
    TranslateExceptionError,
    TranslateTransportError,
    TranslationRateLimitError,
)
from core.trans.manager import TransManager
from core.trans.rate_limiter import RateLimiter
from core.trans.request_queue import TranslationRequestQueue

__all__: list[str] = [
    "AllProvidersFailedError",
    "CooldownActiveError",
    "EmptyInputError",
    "EngineUnavailableError",
    "GatewayError",
    "RateLimiter",
    "Result",
    "TransInterface",
    "TransManager",
    "TranslateExceptionError",
    "TranslateTransportError",
    "TranslationRateLimitError",
    "TranslationRequestQueue",
]
