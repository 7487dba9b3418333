"""Core components of the translation gateway.

This package contains the gateway entry point, the provider fallback chain with its rate limiter
and request queue, and the translation result cache.
"""

from core.gateway import TranslationGateway
from core.version import VERSION

__all__: list[str] = [
    "VERSION",
    "TranslationGateway",
]
