"""Configuration data models for the translation gateway.

Each dataclass mirrors one section of the INI file. Field defaults double as the type hints
that the loader uses to coerce the raw INI strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field

__all__: list[str] = [
    "Cache",
    "Config",
    "General",
    "Queue",
    "RateLimit",
    "Translation",
]

DEFAULT_LINGVA_INSTANCES: list[str] = [
    "https://lingva.ml",
    "https://translate.plausibility.cloud",
    "https://lingva.garuber.dev",
]


@dataclass
class General:
    DEBUG: bool = False
    LOG_FILE: str = ""
    LOG_LEVEL: str = "INFO"


@dataclass
class Translation:
    ENGINE: list[str] = field(default_factory=lambda: ["lingva", "mymemory", "google"])
    TARGET_LANGUAGE: str = "ru"
    TIMEOUT: float = 10.0
    LINGVA_INSTANCES: list[str] = field(default_factory=lambda: list(DEFAULT_LINGVA_INSTANCES))
    MYMEMORY_URL: str = "https://api.mymemory.translated.net/get"
    GOOGLE_SUFFIX: str = "com"


@dataclass
class RateLimit:
    MIN_DELAY: float = 1.0
    MAX_DELAY: float = 3.0
    MAX_BACKOFF_DELAY: float = 10.0
    COOLDOWN: float = 60.0
    RETRY_DELAY: float = 5.0
    FAILOVER_DELAY: float = 0.5


@dataclass
class Queue:
    PACING_DELAY: float = 0.2


@dataclass
class Cache:
    MAX_ENTRIES: int = 1000
    KEY_TEXT_LENGTH: int = 100


@dataclass
class Config:
    GENERAL: General = field(default_factory=General)
    TRANSLATION: Translation = field(default_factory=Translation)
    RATE_LIMIT: RateLimit = field(default_factory=RateLimit)
    QUEUE: Queue = field(default_factory=Queue)
    CACHE: Cache = field(default_factory=Cache)
