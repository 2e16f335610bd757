from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


_SERIAL_PORT_ENV = "SENSOR_SERIAL_PORT"
_BAUDRATE_ENV = "SENSOR_SERIAL_BAUDRATE"
_SERIAL_TIMEOUT_ENV = "SENSOR_SERIAL_TIMEOUT"
_STARTUP_DELAY_ENV = "SENSOR_STARTUP_DELAY"
_PROCESS_EVERY_ENV = "SENSOR_PROCESS_EVERY"
_DELIMITER_ENV = "SENSOR_FRAME_DELIMITER"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    serial_port: str
    baudrate: int
    serial_timeout: float
    startup_delay: float
    process_every: int
    frame_delimiter: str
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_int_env(name: str, default: int, minimum: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed >= minimum else default


def _read_float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed >= 0 else default


def _read_log_level(default: str) -> str:
    return _read_str_env(_LOG_LEVEL_ENV, default).upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        serial_port=_read_str_env(_SERIAL_PORT_ENV, "/dev/ttyUSB0"),
        baudrate=_read_int_env(_BAUDRATE_ENV, 115200, minimum=1),
        serial_timeout=_read_float_env(_SERIAL_TIMEOUT_ENV, 1.0),
        startup_delay=_read_float_env(_STARTUP_DELAY_ENV, 2.0),
        process_every=_read_int_env(_PROCESS_EVERY_ENV, 5, minimum=0),
        frame_delimiter=_read_str_env(_DELIMITER_ENV, ";"),
        log_level=_read_log_level("INFO"),
    )
