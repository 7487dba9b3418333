"""This module defines the abstract base class for translation providers and the gateway's exceptions.

It includes the Result data class returned by providers, the provider-level exceptions that the
fallback chain absorbs, and the gateway-level exceptions that reach the caller.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Final

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from models.config_models import Config

__all__: list[str] = [
    "AllProvidersFailedError",
    "CooldownActiveError",
    "EmptyInputError",
    "EngineAttributes",
    "EngineUnavailableError",
    "GatewayError",
    "Result",
    "TransInterface",
    "TranslateExceptionError",
    "TranslateTransportError",
    "TranslationRateLimitError",
    "is_rate_limit_message",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

RATE_LIMIT_PHRASES: Final[tuple[str, ...]] = ("too many requests", "429", "rate limit")


def is_rate_limit_message(message: str) -> bool:
    """Check whether an error message reports rate limiting.

    Matches "Too Many Requests" (any case), "429" and "rate limit".
    """
    lowered: str = message.lower()
    return any(phrase in lowered for phrase in RATE_LIMIT_PHRASES)


@dataclass
class EngineAttributes:
    """Engine-specific capabilities and behavior flags.

    Attributes:
        name (str): Display name reported to callers as the result's service.
        endpoint_count (int): Number of mirrors the engine can fail over between.
        loads_in_background (bool): Whether the engine becomes usable only after load() completes.
    """

    name: str
    endpoint_count: int = 1
    loads_in_background: bool = False


@dataclass
class Result:
    """Data class for provider results.

    Attributes:
        text (str | None): Translated text. None if translation fails.
        detected_source_lang (str | None): Source language reported by the provider.
        service (str | None): Overrides the engine display name when set (e.g. same-language no-op).
        metadata (dict[str, str] | None): Engine-specific metadata (e.g. the endpoint that answered).
    """

    text: str | None = None
    detected_source_lang: str | None = None
    service: str | None = None
    metadata: dict[str, str] | None = None

    def __str__(self) -> str:
        if self.text is None:
            return ""
        return self.text


class TranslateExceptionError(Exception):
    """A provider or one of its endpoints failed to translate."""


class TranslationRateLimitError(TranslateExceptionError):
    """The provider refused the request because of rate limiting."""


class TranslateTransportError(TranslateExceptionError):
    """An endpoint could not be reached (connection, timeout). Never a rate-limit signal."""


class EngineUnavailableError(TranslateExceptionError):
    """The provider is not ready (e.g. still loading) and must be skipped."""


class GatewayError(Exception):
    """Base class for failures that reach the gateway caller."""


class EmptyInputError(GatewayError):
    """The text to translate is empty after trimming."""

    def __init__(self, msg: str = "Empty text") -> None:
        super().__init__(msg)


class CooldownActiveError(GatewayError):
    """Provider admission was refused because a rate-limit cooldown is running.

    Attributes:
        remaining_seconds (int): Whole seconds, rounded up, until the cooldown ends.
    """

    def __init__(self, remaining: float) -> None:
        self.remaining_seconds: int = max(1, math.ceil(remaining))
        super().__init__(f"Rate limit cooldown active. Please wait {self.remaining_seconds} seconds.")


class AllProvidersFailedError(GatewayError):
    """Every provider in the chain failed.

    Attributes:
        last_error (Exception | None): The failure of the last provider tried.
    """

    def __init__(self, last_error: Exception | None = None) -> None:
        self.last_error: Exception | None = last_error
        msg: str = str(last_error) if last_error is not None and str(last_error) else "All translation services failed"
        super().__init__(msg)


class TransInterface(ABC):
    """Abstract base class for translation providers.

    Subclasses register themselves under fetch_engine_name() so that the chain can build
    its provider list from configuration.

    Attributes:
        registered (ClassVar[dict[str, type[TransInterface]]]): Registered provider classes by name.
    """

    registered: ClassVar[dict[str, type[TransInterface]]] = {}

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        if not hasattr(cls, "fetch_engine_name") or not callable(cls.fetch_engine_name):
            msg = "Subclasses of TransInterface must implement the static method fetch_engine_name()."
            raise TypeError(msg)

        if getattr(cls.fetch_engine_name, "__isabstractmethod__", False):
            return
        name = cls.fetch_engine_name()
        if not isinstance(name, str) or name == "":
            return  # Nameless engines (e.g. test doubles) are allowed but not registered.

        if name in cls.registered:
            msg: str = f"A translation engine with the name '{name}' is already registered."
            raise ValueError(msg)

        cls.registered[name] = cls

    def __init__(self) -> None:
        self._engine_attributes: EngineAttributes | None = None

    @property
    def engine_attributes(self) -> EngineAttributes:
        if self._engine_attributes is None:
            msg = "Engine attributes have not been set."
            raise RuntimeError(msg)
        return self._engine_attributes

    @engine_attributes.setter
    def engine_attributes(self, attributes: EngineAttributes) -> None:
        if self._engine_attributes is not None:
            msg = "Engine attributes can only be set once during initialization."
            raise RuntimeError(msg)
        self._engine_attributes = attributes

    @property
    def engine_name(self) -> str:
        """Display name of the provider."""
        return self.engine_attributes.name

    @property
    def loads_in_background(self) -> bool:
        return self.engine_attributes.loads_in_background

    def is_rate_limit_error(self, err: Exception) -> bool:
        """Check if the given exception indicates rate limiting.

        Args:
            err (Exception): Exception raised during translation.

        Returns:
            bool: True for TranslationRateLimitError or a message that reports rate limiting.
                Transport failures are never rate limiting, whatever their message says.
        """
        if isinstance(err, TranslationRateLimitError):
            return True
        if isinstance(err, TranslateTransportError):
            return False
        return is_rate_limit_message(str(err))

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Check if the provider can be tried right now."""
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def fetch_engine_name() -> str:
        """Fetch the distinguished (configuration) name of the provider.

        Called during class registration in __init_subclass__, so the implementation must be
        available at subclass definition time.
        """
        raise NotImplementedError

    @abstractmethod
    def initialize(self, config: Config) -> None:
        """Initialize the provider from configuration. Must not perform network I/O."""
        raise NotImplementedError

    async def load(self) -> None:
        """Finish any asynchronous setup. Providers that need none keep this no-op."""
        return

    @abstractmethod
    async def translation(self, content: str, tgt_lang: str, src_lang: str = "auto") -> Result:
        """Translate input text to the target language.

        Args:
            content (str): Text to be translated.
            tgt_lang (str): Target language code.
            src_lang (str): Source language code, or "auto".

        Returns:
            Result: Translation result with translated text.

        Raises:
            TranslationRateLimitError: If the request is rate-limited by the provider.
            TranslateExceptionError: If translation fails.
        """
        raise NotImplementedError

    @abstractmethod
    async def close(self) -> None:
        """Release network resources held by the provider."""
        raise NotImplementedError
