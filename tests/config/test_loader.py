from __future__ import annotations

import logging
from textwrap import dedent
from typing import TYPE_CHECKING

import pytest

from config.loader import (
    ConfigFileNotFoundError,
    ConfigFormatError,
    ConfigLoader,
    ConfigTypeError,
    ConfigValueError,
)
from core.trans.interface import TransInterface

if TYPE_CHECKING:
    from pathlib import Path


def _write_ini(tmp_path: Path, content: str) -> Path:
    ini_path: Path = tmp_path / "transgate.ini"
    ini_path.write_text(dedent(content), encoding="utf-8")
    return ini_path


def test_config_loader_raises_for_missing_file(tmp_path: Path) -> None:
    ini_path: Path = tmp_path / "missing.ini"
    with pytest.raises(ConfigFileNotFoundError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_empty_file_keeps_defaults(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(tmp_path, "")

    config = ConfigLoader(config_filename=str(ini_path), script_name="test").config

    assert config.TRANSLATION.ENGINE == ["lingva", "mymemory", "google"]
    assert config.TRANSLATION.TARGET_LANGUAGE == "ru"
    assert config.TRANSLATION.LINGVA_INSTANCES[0] == "https://lingva.ml"
    assert config.RATE_LIMIT.COOLDOWN == 60.0
    assert config.QUEUE.PACING_DELAY == 0.2
    assert config.CACHE.MAX_ENTRIES == 1000


def test_values_are_coerced_to_default_types(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [GENERAL]
        DEBUG = True
        LOG_FILE = "transgate.log"

        [TRANSLATION]
        ENGINE = ["mymemory", "lingva"]
        TARGET_LANGUAGE = "de"
        TIMEOUT = 5
        LINGVA_INSTANCES = ["https://lingva.example"]

        [RATE_LIMIT]
        MIN_DELAY = 0.5
        MAX_DELAY = "2"

        [CACHE]
        MAX_ENTRIES = 50
        """,
    )

    config = ConfigLoader(config_filename=str(ini_path), script_name="test").config

    assert config.GENERAL.DEBUG is True
    assert config.GENERAL.LOG_FILE == "transgate.log"
    assert config.TRANSLATION.ENGINE == ["mymemory", "lingva"]
    assert config.TRANSLATION.TARGET_LANGUAGE == "de"
    assert config.TRANSLATION.TIMEOUT == 5.0
    assert isinstance(config.TRANSLATION.TIMEOUT, float)
    assert config.TRANSLATION.LINGVA_INSTANCES == ["https://lingva.example"]
    assert (config.RATE_LIMIT.MIN_DELAY, config.RATE_LIMIT.MAX_DELAY) == (0.5, 2.0)
    assert config.CACHE.MAX_ENTRIES == 50


def test_command_line_overrides(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [GENERAL]
        DEBUG = False

        [TRANSLATION]
        TARGET_LANGUAGE = "de"
        """,
    )

    config = ConfigLoader(config_filename=str(ini_path), script_name="test", target="ja", debug=True).config

    assert config.TRANSLATION.TARGET_LANGUAGE == "ja"
    assert config.GENERAL.DEBUG is True


def test_single_engine_string_becomes_list(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [TRANSLATION]
        ENGINE = "lingva"
        """,
    )

    config = ConfigLoader(config_filename=str(ini_path), script_name="test").config

    assert config.TRANSLATION.ENGINE == ["lingva"]


def test_unknown_engine_is_warned(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING)
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [TRANSLATION]
        ENGINE = ["lingva", "yandex"]
        """,
    )

    config = ConfigLoader(config_filename=str(ini_path), script_name="test").config

    assert config.TRANSLATION.ENGINE == ["lingva", "yandex"]
    assert any("Unknown value 'yandex'" in rec.message for rec in caplog.records)


class _RegisteredElsewhere(TransInterface):
    @staticmethod
    def fetch_engine_name() -> str:
        return "test_loader_registered"


def test_registered_engine_is_not_warned(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING)
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [TRANSLATION]
        ENGINE = ["test_loader_registered", "mymemory"]
        """,
    )

    config = ConfigLoader(config_filename=str(ini_path), script_name="test").config

    assert config.TRANSLATION.ENGINE == ["test_loader_registered", "mymemory"]
    assert not any("Unknown value" in rec.message for rec in caplog.records)


def test_engine_of_wrong_type_is_rejected(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [TRANSLATION]
        ENGINE = 42
        """,
    )

    with pytest.raises(ConfigTypeError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


@pytest.mark.parametrize(
    ("section", "content"),
    [
        ("RATE_LIMIT", "MIN_DELAY = -1"),
        ("RATE_LIMIT", "COOLDOWN = -60"),
        ("QUEUE", "PACING_DELAY = -0.2"),
        ("CACHE", "MAX_ENTRIES = 0"),
        ("TRANSLATION", "TARGET_LANGUAGE = ''"),
        ("TRANSLATION", "LINGVA_INSTANCES = []"),
        ("TRANSLATION", "TIMEOUT = 0"),
    ],
)
def test_invalid_values_are_rejected(tmp_path: Path, section: str, content: str) -> None:
    ini_path: Path = _write_ini(tmp_path, f"[{section}]\n{content}\n")

    with pytest.raises(ConfigValueError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_min_delay_above_max_delay_is_rejected(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [RATE_LIMIT]
        MIN_DELAY = 4.0
        MAX_DELAY = 3.0
        """,
    )

    with pytest.raises(ConfigValueError, match="MIN_DELAY"):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_non_numeric_value_is_rejected(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [QUEUE]
        PACING_DELAY = fast
        """,
    )

    with pytest.raises(ConfigValueError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_invalid_literal_is_a_format_error(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [TRANSLATION]
        ENGINE = ["lingva",
        """,
    )

    with pytest.raises(ConfigFormatError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_malformed_file_is_a_format_error(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(tmp_path, "DEBUG = True\n")

    with pytest.raises(ConfigFormatError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")
