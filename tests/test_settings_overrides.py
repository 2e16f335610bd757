from __future__ import annotations

import logging

import pytest

from logging_config import ContextualFormatter
from settings import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch) -> None:
    for name in ("SENSOR_SERIAL_PORT", "SENSOR_PROCESS_EVERY", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.serial_port == "/dev/ttyUSB0"
    assert settings.process_every == 5
    assert settings.log_level == "INFO"


def test_environment_overrides_apply(monkeypatch) -> None:
    monkeypatch.setenv("SENSOR_SERIAL_PORT", "/dev/ttyACM0")
    monkeypatch.setenv("SENSOR_SERIAL_BAUDRATE", "9600")
    monkeypatch.setenv("SENSOR_SERIAL_TIMEOUT", "0.25")
    monkeypatch.setenv("SENSOR_STARTUP_DELAY", "0")
    monkeypatch.setenv("SENSOR_PROCESS_EVERY", "0")
    monkeypatch.setenv("SENSOR_FRAME_DELIMITER", ",")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.serial_port == "/dev/ttyACM0"
    assert settings.baudrate == 9600
    assert settings.serial_timeout == 0.25
    assert settings.startup_delay == 0.0
    assert settings.process_every == 0
    assert settings.frame_delimiter == ","
    assert settings.log_level == "DEBUG"


def test_invalid_values_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("SENSOR_SERIAL_BAUDRATE", "fast")
    monkeypatch.setenv("SENSOR_SERIAL_TIMEOUT", "-1")
    monkeypatch.setenv("SENSOR_PROCESS_EVERY", "-3")
    monkeypatch.setenv("SENSOR_SERIAL_PORT", "   ")

    settings = get_settings()

    assert settings.baudrate == 115200
    assert settings.serial_timeout == 1.0
    assert settings.process_every == 5
    assert settings.serial_port == "/dev/ttyUSB0"


def test_formatter_appends_context() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")
    record = logging.LogRecord("models.sensors", logging.INFO, __file__, 1, "Reading accepted", None, None)
    record.sensor = "T-001"
    record.value = 25.0

    assert formatter.format(record) == "Reading accepted | sensor=T-001 value=25.0"
