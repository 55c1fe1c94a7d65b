"""
Тесты настройки логирования.

Проверяет:
- LogConfig.from_dict (секция logging в config.yaml)
- HumanFormatter / JSONFormatter
- Handlers после setup_logging_from_config
"""

import json
import logging
import logging.handlers
from io import StringIO

import pytest

from mac_search.core.logging import (
    HumanFormatter,
    JSONFormatter,
    LogConfig,
    RotationType,
    setup_logging,
    setup_logging_from_config,
)


def make_record(msg="Test message", level=logging.INFO, **extra):
    record = logging.LogRecord(
        name="mac_search.test",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.unit
class TestLogConfig:
    """Тесты LogConfig."""

    def test_defaults(self):
        config = LogConfig()

        assert config.level == logging.WARNING
        assert config.console is True
        assert config.file_path is None
        assert config.rotation == RotationType.SIZE

    def test_from_dict(self):
        config = LogConfig.from_dict({
            "level": "debug",
            "json_format": True,
            "file_path": "logs/app.log",
            "rotation": "time",
            "when": "H",
        })

        assert config.level == logging.DEBUG
        assert config.json_format is True
        assert config.file_path == "logs/app.log"
        assert config.rotation == RotationType.TIME
        assert config.when == "H"

    def test_from_empty_dict(self):
        config = LogConfig.from_dict({})
        assert config.level == logging.WARNING
        assert config.max_bytes == 10 * 1024 * 1024


@pytest.mark.unit
class TestFormatters:
    """Тесты форматтеров."""

    def test_human_basic(self):
        output = HumanFormatter().format(make_record())

        assert " - INFO     - Test message" in output

    def test_human_extra_fields(self):
        output = HumanFormatter().format(make_record(device="sw1", oid="1.3.6.1"))
        assert output.endswith("Test message (device=sw1, oid=1.3.6.1)")

    def test_json(self):
        data = json.loads(JSONFormatter().format(make_record("Привет", device="sw1")))

        assert data["level"] == "INFO"
        assert data["message"] == "Привет"
        assert data["logger"] == "mac_search.test"
        assert data["device"] == "sw1"
        assert "lineno" not in data


@pytest.mark.unit
class TestSetup:
    """Тесты setup_logging_from_config / setup_logging."""

    def test_console_only(self, restore_logging):
        stream = StringIO()
        setup_logging_from_config(LogConfig(level=logging.INFO), stream=stream)

        logging.getLogger("mac_search.test").info("hello", extra={"device": "sw1"})
        logging.getLogger("mac_search.test").debug("hidden")

        assert len(restore_logging.handlers) == 1
        assert "hello (device=sw1)" in stream.getvalue()
        assert "hidden" not in stream.getvalue()

    def test_default_level_hides_info(self, restore_logging):
        stream = StringIO()
        setup_logging_from_config(LogConfig(), stream=stream)

        logging.getLogger("mac_search.test").info("collected")
        assert stream.getvalue() == ""

    def test_file_handler_size_rotation(self, restore_logging, tmp_path):
        log_file = tmp_path / "logs" / "app.log"
        setup_logging_from_config(
            LogConfig(console=False, file_path=str(log_file), json_format=True),
        )

        handlers = restore_logging.handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.handlers.RotatingFileHandler)
        assert isinstance(handlers[0].formatter, JSONFormatter)
        assert log_file.parent.exists()

    def test_file_handler_time_rotation(self, restore_logging, tmp_path):
        setup_logging_from_config(LogConfig(
            console=False,
            file_path=str(tmp_path / "app.log"),
            rotation=RotationType.TIME,
        ))
        assert isinstance(restore_logging.handlers[0], logging.handlers.TimedRotatingFileHandler)

    def test_file_handler_no_rotation(self, restore_logging, tmp_path):
        setup_logging_from_config(LogConfig(
            console=False,
            file_path=str(tmp_path / "app.log"),
            rotation=RotationType.NONE,
        ))
        handler = restore_logging.handlers[0]
        assert type(handler) is logging.FileHandler

    def test_setup_logging_json(self, restore_logging):
        stream = StringIO()
        setup_logging(json_format=True, level=logging.INFO, stream=stream)

        logging.getLogger("mac_search.test").info("json line")
        assert json.loads(stream.getvalue())["message"] == "json line"
