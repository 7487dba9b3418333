import logging

import pytest

from utils.logger_utils import LoggerUtils


@pytest.fixture
def fresh_logging(monkeypatch: pytest.MonkeyPatch):
    root = logging.getLogger("TransGateTest")
    warnings_logger = logging.getLogger("py.warnings")
    saved = (list(root.handlers), list(warnings_logger.handlers), root.level)
    monkeypatch.setattr(LoggerUtils, "_namespace", "TransGateTest")
    monkeypatch.setattr(LoggerUtils, "_configured", False)
    yield root
    root.handlers[:] = saved[0]
    warnings_logger.handlers[:] = saved[1]
    root.setLevel(saved[2])
    logging.captureWarnings(False)


def test_get_logger_is_placed_under_namespace() -> None:
    assert LoggerUtils.get_logger("core.gateway").name == "TransGate.core.gateway"


def test_get_logger_without_name_returns_namespace_root() -> None:
    assert LoggerUtils.get_logger().name == "TransGate"


def test_configure_attaches_handlers_once(fresh_logging: logging.Logger) -> None:
    LoggerUtils.configure("", "DEBUG", use_null_console=True)
    LoggerUtils.configure("", "WARNING", use_null_console=True)

    assert len(fresh_logging.handlers) == 1
    assert isinstance(fresh_logging.handlers[0], logging.NullHandler)
    assert LoggerUtils.get_level().name == "WARNING"


def test_configure_writes_debug_records_to_file(fresh_logging: logging.Logger, tmp_path) -> None:
    log_file = tmp_path / "transgate.log"
    LoggerUtils.configure(log_file, "DEBUG", use_null_console=True)

    LoggerUtils.get_logger("tests").debug("queued %d requests", 3)
    for handler in fresh_logging.handlers:
        handler.flush()

    assert "queued 3 requests" in log_file.read_text(encoding="utf-8")
    for handler in fresh_logging.handlers:
        handler.close()


def test_unknown_level_falls_back_to_info(fresh_logging: logging.Logger) -> None:
    LoggerUtils.configure("", "VERBOSE", use_null_console=True)

    assert LoggerUtils.get_level() == (logging.getLevelName(logging.INFO), logging.INFO)


def test_namespace_is_fixed_after_configure(fresh_logging: logging.Logger) -> None:
    _ = fresh_logging
    LoggerUtils.configure("", use_null_console=True)

    with pytest.raises(RuntimeError):
        LoggerUtils.set_namespace("Other")
