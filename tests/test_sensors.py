"""Unit tests for the sensor variants."""

from __future__ import annotations

import logging

import pytest

from models.errors import InvalidSensorNameError, UnknownSensorKindError
from models.reports import SensorKind
from models.sensors import SENSOR_TYPES, PressureSensor, TemperatureSensor, build_sensor


def _temperature(*raw: str) -> TemperatureSensor:
    sensor = TemperatureSensor("T-001")
    for text in raw:
        sensor.ingest_text(text)
    return sensor


def _pressure(*raw: str) -> PressureSensor:
    sensor = PressureSensor("P-001")
    for text in raw:
        sensor.ingest_text(text)
    return sensor


def test_temperature_process_drops_lowest_before_averaging() -> None:
    sensor = _temperature("30.0", "10.0", "20.0")

    report = sensor.process()

    assert report.mean == 25.0
    assert report.dropped_value == 10.0
    assert report.reading_count == 2
    assert sensor.history.values() == (30.0, 20.0)


def test_temperature_process_is_not_idempotent() -> None:
    sensor = _temperature("30.0", "10.0", "20.0")

    first = sensor.process()
    second = sensor.process()

    assert second.reading_count == first.reading_count - 1
    assert second.mean == 30.0


def test_pressure_process_is_idempotent() -> None:
    sensor = _pressure("100", "200")

    first = sensor.process()
    second = sensor.process()

    assert first.mean == 150
    assert second == first
    assert len(sensor.history) == 2


def test_malformed_temperature_reading_is_recorded_as_zero(caplog) -> None:
    sensor = TemperatureSensor("T-001")

    with caplog.at_level(logging.WARNING, logger="models.sensors"):
        value = sensor.ingest_text("abc")
    report = sensor.process()

    assert value == 0.0
    assert sensor.history.values() == (0.0,)
    assert report.mean == 0.0
    assert report.dropped_value is None
    assert "Malformed reading recorded as zero" in caplog.text


def test_partial_pressure_reading_is_recorded_as_zero() -> None:
    sensor = _pressure("12abc", "7.5")

    assert sensor.history.values() == (0, 0)


def test_process_on_empty_history_reports_no_mean() -> None:
    for sensor in (TemperatureSensor("T-009"), PressureSensor("P-009")):
        report = sensor.process()

        assert report.mean is None
        assert report.reading_count == 0


def test_describe_tags_kind_and_name() -> None:
    assert TemperatureSensor("T-001").describe() == "[TemperatureSensor] ID=T-001"
    assert PressureSensor("P-001").describe() == "[PressureSensor] ID=P-001"


def test_build_sensor_dispatches_on_tag() -> None:
    assert isinstance(build_sensor("T", "a"), TemperatureSensor)
    assert isinstance(build_sensor("P", "b"), PressureSensor)
    with pytest.raises(UnknownSensorKindError):
        build_sensor("X", "c")


def test_every_kind_has_a_sensor_class() -> None:
    assert set(SENSOR_TYPES) == set(SensorKind)
    for kind, sensor_type in SENSOR_TYPES.items():
        assert sensor_type.kind is kind


@pytest.mark.parametrize("name", ["", "   "])
def test_empty_names_are_rejected(name: str) -> None:
    with pytest.raises(InvalidSensorNameError):
        TemperatureSensor(name)
