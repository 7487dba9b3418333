"""Minimal asynchronous client for the Google Translate web endpoint.

The client speaks the batchexecute RPC used by translate.google.* pages. The format is not
documented and can change without notice; anything unexpected raises ResponseFormatError.
"""

from __future__ import annotations

import json
import re
from json import JSONDecodeError
from typing import TYPE_CHECKING, Any, Final
from urllib.parse import quote

from core.trans.engines.const_google import DEFAULT_SERVICE_URLS, LANGUAGES
from handlers.async_comm import AsyncCommError, AsyncCommTimeoutError, AsyncHttp
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from handlers.async_comm import HttpResponse

__all__: list[str] = [
    "AsyncTranslator",
    "GoogleError",
    "HTTPConnectionError",
    "HTTPError",
    "HTTPTimeoutError",
    "HTTPTooManyRequests",
    "InvalidLanguageCodeError",
    "ResponseFormatError",
    "TextResult",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

RPC_ID: Final[str] = "MkEWBc"
MAX_TEXT_LENGTH: Final[int] = 5000
URL_SUFFIX_DEFAULT: Final[str] = "com"
URLS_SUFFIX: Final[frozenset[str]] = frozenset(
    match.group(1) for url in DEFAULT_SERVICE_URLS if (match := re.match(r"translate\.google\.(.+)", url))
)


class GoogleError(Exception):
    pass


class ResponseFormatError(GoogleError):
    """The response did not have the expected batchexecute layout."""


class InvalidLanguageCodeError(GoogleError):
    """A language code outside LANGUAGES was passed with code_sensitive enabled."""


class HTTPConnectionError(GoogleError):
    pass


class HTTPTimeoutError(GoogleError):
    pass


class HTTPError(GoogleError):
    """HTTP 3xx/4xx/5xx other than 429."""


class HTTPTooManyRequests(GoogleError):
    """HTTP 429 Too Many Requests."""


class TextResult:
    def __init__(self, text: str, detected_source_lang: str | None, *, metadata: dict[str, str] | None = None) -> None:
        self.text: str = text
        self.detected_source_lang: str | None = detected_source_lang
        self.metadata: dict[str, str] | None = metadata

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return (
            f"<TextResult text={self.text} detected_source_lang={self.detected_source_lang} metadata={self.metadata}>"
        )


class AsyncTranslator:
    def __init__(
        self,
        url_suffix: str = URL_SUFFIX_DEFAULT,
        timeout: float = 10.0,
        *,
        http: AsyncHttp | None = None,
        code_sensitive: bool = False,
    ) -> None:
        if url_suffix not in URLS_SUFFIX:
            logger.warning("Unknown Google domain suffix '%s'; using '%s'", url_suffix, URL_SUFFIX_DEFAULT)
            url_suffix = URL_SUFFIX_DEFAULT
        self.url_suffix: str = url_suffix
        self.url: str = f"https://translate.google.{self.url_suffix}/_/TranslateWebserverUi/data/batchexecute"
        self.timeout: float = timeout
        self.code_sensitive: bool = code_sensitive
        self._http: AsyncHttp = http if http is not None else AsyncHttp(timeout=timeout)

    async def close(self) -> None:
        logger.debug("'%s': 'termination process'", self.__class__.__name__)
        await self._http.close()

    @staticmethod
    def _package_rpc(text: str, lang_src: str, lang_tgt: str) -> str:
        parameter: list[Any] = [[text.strip(), lang_src, lang_tgt, True], [1]]
        rpc: list[Any] = [[[RPC_ID, json.dumps(parameter, separators=(",", ":")), None, "generic"]]]
        return f"f.req={quote(json.dumps(rpc, separators=(',', ':')))}&"

    @staticmethod
    def check_langcode(lang: str, *, sensitive: bool = False) -> str:
        """Normalise a language code to the casing Google expects, or "auto" if unknown."""
        for code in LANGUAGES:
            if lang.lower() == code.lower():
                return code
        if sensitive:
            msg: str = f"Invalid language code passed ({lang})"
            raise InvalidLanguageCodeError(msg)
        return "auto"

    def _build_headers(self) -> dict[str, str]:
        return {
            "Referer": f"https://translate.google.{self.url_suffix}/",
            "Content-Type": "application/x-www-form-urlencoded;charset=utf-8",
        }

    async def translate(self, text: str, lang_tgt: str, lang_src: str | None = "auto") -> TextResult:
        if not text:
            msg = "No characters to translate"
            raise GoogleError(msg)
        if len(text) >= MAX_TEXT_LENGTH:
            msg = f"Can only translate less than {MAX_TEXT_LENGTH} characters"
            raise GoogleError(msg)

        src: str = self.check_langcode(lang_src or "auto", sensitive=self.code_sensitive)
        tgt: str = self.check_langcode(lang_tgt, sensitive=self.code_sensitive)

        try:
            response: HttpResponse = await self._http.post(
                url=self.url,
                data=self._package_rpc(text, src, tgt),
                headers=self._build_headers(),
                total_timeout=self.timeout,
            )
        except AsyncCommTimeoutError as err:
            raise HTTPTimeoutError(str(err)) from err
        except AsyncCommError as err:
            raise HTTPConnectionError(str(err)) from err

        if response.status == 429:
            msg = f"HTTP 429 Too Many Requests from {self.url}"
            raise HTTPTooManyRequests(msg)
        if not response.ok:
            msg = f"HTTP {response.status} {response.reason or ''}".rstrip() + f" from {self.url}"
            raise HTTPError(msg)

        return self.parse_response(str(response.data))

    @classmethod
    def parse_response(cls, body: str) -> TextResult:
        """Extract the translation from a batchexecute response body.

        The body starts with an anti-XSSI prefix; the payload line is the one naming the RPC.
        Its third element is itself a JSON document of the form
        [[detected, ...], [[[_, _, _, _, _, sentences]], tgt, _, detected]].
        """
        for line in body.splitlines():
            if RPC_ID not in line:
                continue

            logger.debug(line)
            try:
                decoded: Any = json.loads(json.loads(line)[0][2])
                detected_lang: str | None = decoded[1][3]
                trans_info: Any = decoded[1][0]
            except JSONDecodeError as err:
                msg = "failed to decode response"
                raise ResponseFormatError(msg) from err
            except (IndexError, KeyError, TypeError) as err:
                msg = "invalid response format"
                raise ResponseFormatError(msg) from err

            return TextResult(cls._join_sentences(trans_info), detected_lang, metadata={"engine": "google"})

        msg = "unknown response format"
        raise ResponseFormatError(msg)

    @staticmethod
    def _join_sentences(trans_info: Any) -> str:
        try:
            if len(trans_info) > 1:
                # Alternative translations (e.g. gendered forms) arrive as separate entries.
                return " ".join(str(entry[0]) for entry in trans_info)
            if len(trans_info[0]) > 5 and trans_info[0][5]:
                return " ".join(sentence[0].strip() for sentence in trans_info[0][5]).strip()
            # URLs and very short inputs come back as a single plain string.
            return str(trans_info[0][0])
        except (IndexError, KeyError, TypeError) as err:
            msg = "Invalid response format for sentences"
            raise ResponseFormatError(msg) from err
