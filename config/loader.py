"""Reads transgate.ini into a typed Config.

Every INI value is coerced to the type of the matching Config field default; list settings
are written as Python literals. Command-line overrides are applied before validation so that
an override is checked like any other value.
"""

from __future__ import annotations

import ast
import configparser
from dataclasses import fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

from core.trans.engines import (
    GoogleTranslation,  # noqa: F401
    LingvaTranslation,  # noqa: F401
    MyMemoryTranslation,  # noqa: F401
)
from core.trans.interface import TransInterface
from models.config_models import Config
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable

__all__: list[str] = [
    "Config",
    "ConfigFileNotFoundError",
    "ConfigFormatError",
    "ConfigLoader",
    "ConfigLoaderError",
    "ConfigTypeError",
    "ConfigValueError",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

NON_NEGATIVE_SETTINGS: tuple[tuple[str, str], ...] = (
    ("RATE_LIMIT", "MIN_DELAY"),
    ("RATE_LIMIT", "MAX_DELAY"),
    ("RATE_LIMIT", "MAX_BACKOFF_DELAY"),
    ("RATE_LIMIT", "COOLDOWN"),
    ("RATE_LIMIT", "RETRY_DELAY"),
    ("RATE_LIMIT", "FAILOVER_DELAY"),
    ("QUEUE", "PACING_DELAY"),
)
POSITIVE_SETTINGS: tuple[tuple[str, str], ...] = (
    ("TRANSLATION", "TIMEOUT"),
    ("CACHE", "MAX_ENTRIES"),
    ("CACHE", "KEY_TEXT_LENGTH"),
)


class ConfigLoaderError(Exception):
    """Base class for configuration problems."""


class ConfigFileNotFoundError(ConfigLoaderError):
    """No file exists at the configured path."""


class ConfigFormatError(ConfigLoaderError):
    """The file or one of its values could not be parsed."""


class ConfigValueError(ConfigFormatError):
    """A value parsed but is out of range or malformed."""


class ConfigTypeError(ConfigFormatError):
    """A value parsed to a type the setting does not accept."""


class ConfigLoader:
    """Load transgate.ini, apply overrides and validate the result.

    Args:
        config_filename (str): Path of the INI file.
        script_name (str): Name of the running script, quoted in the missing-file message.
        **args: Command-line overrides; 'target' replaces the target language, 'debug' forces debug mode.

    Raises:
        ConfigFileNotFoundError: If the file does not exist.
        ConfigFormatError: If the file is malformed or a value is invalid.
    """

    def __init__(self, *, config_filename: str, script_name: str, **args) -> None:
        if not Path(config_filename).exists():
            msg: str = (
                f"Configuration file '{config_filename}' not found. "
                f"Please create '{config_filename}' in the same directory as '{script_name}'."
            )
            raise ConfigFileNotFoundError(msg)

        parser = configparser.ConfigParser()
        try:
            parser.read(config_filename, encoding="utf-8")
        except configparser.Error as err:
            msg = f"Failed to parse configuration file '{config_filename}': {err}"
            raise ConfigFormatError(msg) from None

        self.config = Config()
        self._load_sections(parser)
        if args.get("target"):
            self.config.TRANSLATION.TARGET_LANGUAGE = args["target"]
        if args.get("debug"):
            self.config.GENERAL.DEBUG = True
        self._validate()

    def _load_sections(self, parser: configparser.ConfigParser) -> None:
        coercer = _ValueCoercer(parser)
        for section_field in fields(self.config):
            section_name: str = section_field.name
            section: Any = getattr(self.config, section_name)
            if not parser.has_section(section_name):
                logger.debug("Section '%s' not in file; using defaults", section_name)
                continue
            for option in fields(section):
                if not parser.has_option(section_name, option.name):
                    continue
                value: Any = coercer.coerce(section_name, option.name, getattr(section, option.name))
                setattr(section, option.name, value)
                logger.debug("%s.%s = %r", section_name, option.name, value)

    def _setting(self, section_name: str, key_name: str) -> Any:
        return getattr(getattr(self.config, section_name), key_name)

    def _validate(self) -> None:
        """Check engine names, language, mirrors, delays, timeout and cache limits.

        Raises:
            ConfigFormatError: If any setting is invalid.
        """
        try:
            self._check_engines()
            self._require(
                isinstance(self.config.TRANSLATION.TARGET_LANGUAGE, str)
                and bool(self.config.TRANSLATION.TARGET_LANGUAGE.strip()),
                "'TRANSLATION.TARGET_LANGUAGE' must be a non-empty string",
            )
            instances: Any = self.config.TRANSLATION.LINGVA_INSTANCES
            self._require(
                isinstance(instances, list) and bool(instances) and all(isinstance(v, str) and v for v in instances),
                "'TRANSLATION.LINGVA_INSTANCES' must be a non-empty list of strings",
            )
            for section_name, key_name in NON_NEGATIVE_SETTINGS:
                value = self._setting(section_name, key_name)
                self._require(value >= 0, f"'{section_name}.{key_name}' must not be negative: {value}")
            for section_name, key_name in POSITIVE_SETTINGS:
                value = self._setting(section_name, key_name)
                self._require(value > 0, f"'{section_name}.{key_name}' must be greater than zero: {value}")
            rate_limit = self.config.RATE_LIMIT
            self._require(
                rate_limit.MIN_DELAY <= rate_limit.MAX_DELAY,
                f"'RATE_LIMIT.MIN_DELAY' ({rate_limit.MIN_DELAY}) is greater than "
                f"'RATE_LIMIT.MAX_DELAY' ({rate_limit.MAX_DELAY})",
            )
        except (AttributeError, TypeError) as err:
            msg: str = f"Invalid configuration value: {err}"
            raise ConfigFormatError(msg) from None

    @staticmethod
    def _require(condition: bool, msg: str) -> None:
        if not condition:
            raise ConfigValueError(msg)

    def _check_engines(self) -> None:
        """Normalise ENGINE to a list and warn about names no provider registers under.

        Raises:
            ConfigTypeError: If ENGINE is neither a string nor a list.
        """
        engines: Any = self.config.TRANSLATION.ENGINE
        if isinstance(engines, str):
            engines = [engines]
            self.config.TRANSLATION.ENGINE = engines
        if not isinstance(engines, list):
            msg: str = f"Unsupported type used for 'TRANSLATION.ENGINE': {type(engines)}"
            raise ConfigTypeError(msg)

        for name in engines:
            if name not in TransInterface.registered:
                logger.warning("Unknown value '%s' is set for 'TRANSLATION.ENGINE'", name)


class _ValueCoercer:
    """Turns raw INI strings into the type of a setting's default value."""

    def __init__(self, parser: configparser.ConfigParser) -> None:
        self.parser: configparser.ConfigParser = parser
        self._scalar: dict[type, Callable[[str, str], Any]] = {
            bool: self.parser.getboolean,
            int: lambda section, key: int(float(self._raw(section, key))),
            float: lambda section, key: float(self._raw(section, key)),
            str: lambda section, key: self._raw(section, key),
        }

    @staticmethod
    def _unquote(value: str) -> str:
        value = value.strip()
        for quote in ("'", '"'):
            value = value.removeprefix(quote).removesuffix(quote)
        return value

    def _raw(self, section: str, key: str) -> str:
        return self._unquote(self.parser.get(section, key))

    def coerce(self, section: str, key: str, default: Any) -> Any:
        """Parse one option using the type of its default.

        Scalars are converted directly; anything else (lists) goes through ast.literal_eval.

        Raises:
            ConfigValueError: If the text cannot be converted.
            ConfigTypeError: If conversion fails on a type mismatch.
            ConfigFormatError: If a literal has invalid syntax.
        """
        convert: Callable[[str, str], Any] | None = self._scalar.get(type(default))
        if convert is not None:
            try:
                return convert(section, key)
            except ValueError as err:
                msg = f"Invalid value for {section}.{key}: {err}"
                raise ConfigValueError(msg) from err
            except TypeError as err:
                msg = f"Invalid value for {section}.{key}: {err}"
                raise ConfigTypeError(msg) from err

        text: str = self.parser.get(section, key)
        try:
            return ast.literal_eval(text)
        except ValueError as err:
            msg = f"Invalid literal for {section}.{key}: {text}"
            raise ConfigValueError(msg) from err
        except SyntaxError as err:
            msg = f"Invalid literal for {section}.{key}: {text}"
            raise ConfigFormatError(msg) from err
