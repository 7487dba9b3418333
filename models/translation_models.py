"""Models for translation requests, results and provider endpoint rotation.

TranslationResult is what callers of the gateway receive; it converts to the camelCase
dictionary consumed by the host layer through dataclasses_json.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any, Literal, TypeAlias

from dataclasses_json import LetterCase, config, dataclass_json

__all__: list[str] = [
    "EndpointRotation",
    "ErrorType",
    "TranslationRequest",
    "TranslationResult",
]

ErrorType: TypeAlias = Literal["EmptyInput", "CooldownActive", "AllProvidersFailed", "ShuttingDown"]


def _is_none(value: Any) -> bool:
    return value is None


def _optional() -> Any:
    return field(default=None, metadata=config(exclude=_is_none))


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class TranslationResult:
    """Outcome of one gateway translation.

    The same instance is stored in the cache and handed to every caller that hits it,
    so it is immutable.

    Attributes:
        success (bool): Whether a provider produced a translation.
        text (str | None): Translated text.
        service (str | None): Display name of the provider that produced the text.
        detected_lang (str | None): Source language reported by the provider, if any.
        error (str | None): Human-readable failure message.
        error_type (ErrorType | None): Failure category, used by hosts to pick how to report it.
        retry_after (int | None): Seconds until the rate-limit cooldown ends.
    """

    success: bool
    text: str | None = _optional()
    service: str | None = _optional()
    detected_lang: str | None = _optional()
    error: str | None = _optional()
    error_type: ErrorType | None = _optional()
    retry_after: int | None = _optional()

    @classmethod
    def succeeded(cls, text: str, service: str, detected_lang: str | None = None) -> TranslationResult:
        return cls(success=True, text=text, service=service, detected_lang=detected_lang)

    @classmethod
    def failed(cls, error: str, error_type: ErrorType, *, retry_after: int | None = None) -> TranslationResult:
        return cls(success=False, error=error, error_type=error_type, retry_after=retry_after)

    @property
    def is_rate_limited(self) -> bool:
        return self.error_type == "CooldownActive"

    def to_wire(self) -> dict[str, Any]:
        """Return the host-facing dictionary, omitting unset fields."""
        return self.to_dict()  # type: ignore[attr-defined]


@dataclass
class TranslationRequest:
    """A translation waiting in, or being served by, the request queue.

    Attributes:
        content (str): Trimmed, non-empty text.
        src_lang (str): Source language code or "auto".
        tgt_lang (str): Target language code.
        submitted_at (float): Monotonic time of submission.
        future (asyncio.Future[TranslationResult]): Resolved exactly once by the queue.
    """

    content: str
    src_lang: str
    tgt_lang: str
    submitted_at: float = field(default_factory=time.monotonic)
    future: asyncio.Future[TranslationResult] = field(
        default_factory=lambda: asyncio.get_running_loop().create_future(), repr=False
    )


@dataclass
class EndpointRotation:
    """Ordered mirrors of one provider with a sticky starting position.

    Attributes:
        name (str): Provider name, for logging.
        endpoints (list[str]): Base URLs in priority order.
        current_index (int): Endpoint tried first on the next request.
    """

    name: str
    endpoints: list[str]
    current_index: int = 0

    def __post_init__(self) -> None:
        if not self.endpoints:
            msg: str = f"'{self.name}' needs at least one endpoint"
            raise ValueError(msg)
        self.current_index %= len(self.endpoints)

    def iter_from_current(self) -> list[tuple[int, str]]:
        """Return (index, endpoint) pairs starting at the sticky position and wrapping around."""
        count: int = len(self.endpoints)
        return [
            ((self.current_index + offset) % count, self.endpoints[(self.current_index + offset) % count])
            for offset in range(count)
        ]

    def mark_success(self, index: int) -> None:
        self.current_index = index
