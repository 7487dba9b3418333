"""Translation engine implementations.

This package contains the concrete TransInterface providers used by the fallback chain, in their
default order: Lingva (multi-mirror), MyMemory and the Google Translate web endpoint.
Importing the package registers every provider under its configuration name.

Modules:
- LingvaTranslation: Lingva Translate mirrors with sticky failover.
- MyMemoryTranslation: MyMemory translation memory API.
- GoogleTranslation: Google Translate fallback, loaded in the background.
- AsyncTranslator: Asynchronous client for the Google Translate web endpoint.
"""

from core.trans.engines.async_google_translate import (
    AsyncTranslator,
    GoogleError,
    HTTPConnectionError,
    HTTPError,
    HTTPTimeoutError,
    HTTPTooManyRequests,
    InvalidLanguageCodeError,
    ResponseFormatError,
    TextResult,
)
from core.trans.engines.const_google import DEFAULT_SERVICE_URLS, LANGUAGES
from core.trans.engines.trans_google import GoogleTranslation
from core.trans.engines.trans_lingva import LingvaTranslation
from core.trans.engines.trans_mymemory import MyMemoryTranslation

__all__: list[str] = [
    "DEFAULT_SERVICE_URLS",
    "LANGUAGES",
    "AsyncTranslator",
    "GoogleError",
    "GoogleTranslation",
    "HTTPConnectionError",
    "HTTPError",
    "HTTPTimeoutError",
    "HTTPTooManyRequests",
    "InvalidLanguageCodeError",
    "LingvaTranslation",
    "MyMemoryTranslation",
    "ResponseFormatError",
    "TextResult",
]
