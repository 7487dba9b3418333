from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

import translate_text
from models.translation_models import TranslationResult

if TYPE_CHECKING:
    import argparse
    from pathlib import Path

    from models.config_models import Config


@pytest.fixture
def ini_file(tmp_path: Path) -> Path:
    path: Path = tmp_path / "transgate.ini"
    path.write_text('[TRANSLATION]\nTARGET_LANGUAGE = "de"\n', encoding="utf-8")
    return path


def _patch_run(monkeypatch: pytest.MonkeyPatch, result: TranslationResult, seen: list[tuple[Config, str]]) -> None:
    async def fake_run(config: Config, args: argparse.Namespace) -> TranslationResult:
        seen.append((config, args.text))
        return result

    monkeypatch.setattr(translate_text, "run", fake_run)
    monkeypatch.setattr(translate_text, "setup_logging", lambda config: None)


def test_parse_arguments_defaults() -> None:
    args = translate_text.parse_arguments(["hello"])

    assert args.text == "hello"
    assert args.source == "auto"
    assert args.target is None
    assert args.config == "transgate.ini"
    assert args.debug is False


def test_parse_arguments_languages() -> None:
    args = translate_text.parse_arguments(["--from", "en", "--to", "ru", "--debug", "hello"])

    assert (args.source, args.target, args.debug) == ("en", "ru", True)


def test_parse_arguments_error_exits_with_config_status(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        translate_text.parse_arguments([])

    assert excinfo.value.code == translate_text.EXIT_CONFIG_ERROR
    assert "usage" in capsys.readouterr().err


def test_main_reports_missing_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code: int = translate_text.main(["hello", "--config", str(tmp_path / "missing.ini")])

    assert code == translate_text.EXIT_CONFIG_ERROR
    assert "Failed to load configuration file" in capsys.readouterr().err


def test_main_prints_success_as_json(
    monkeypatch: pytest.MonkeyPatch, ini_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    seen: list[tuple[Config, str]] = []
    _patch_run(monkeypatch, TranslationResult.succeeded("hallo", "Lingva"), seen)

    code: int = translate_text.main(["hello", "--config", str(ini_file)])

    assert code == translate_text.EXIT_SUCCESS
    assert json.loads(capsys.readouterr().out) == {"success": True, "text": "hallo", "service": "Lingva"}
    config, text = seen[0]
    assert text == "hello"
    assert config.TRANSLATION.TARGET_LANGUAGE == "de"


def test_main_target_override_and_failure_status(
    monkeypatch: pytest.MonkeyPatch, ini_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    seen: list[tuple[Config, str]] = []
    _patch_run(monkeypatch, TranslationResult.failed("HTTP 500", "AllProvidersFailed"), seen)

    code: int = translate_text.main(["hello", "--to", "ja", "--config", str(ini_file)])

    assert code == translate_text.EXIT_TRANSLATION_FAILED
    assert json.loads(capsys.readouterr().out)["errorType"] == "AllProvidersFailed"
    assert seen[0][0].TRANSLATION.TARGET_LANGUAGE == "ja"
