"""Unit tests for the sensor registry."""

from __future__ import annotations

import pytest

from models.errors import DuplicateSensorError, UnknownSensorKindError
from models.sensors import PressureSensor, TemperatureSensor
from services.registry import EMPTY_REGISTRY_LINE, SensorRegistry


@pytest.fixture()
def registry() -> SensorRegistry:
    return SensorRegistry()


def test_describe_all_on_empty_registry_returns_indicator(registry: SensorRegistry) -> None:
    assert registry.describe_all() == [EMPTY_REGISTRY_LINE]


def test_find_by_name_returns_inserted_sensor(registry: SensorRegistry) -> None:
    sensor = TemperatureSensor("T-001")
    registry.insert(sensor)

    assert registry.find_by_name("T-001") is sensor
    assert registry.find_by_name("T-404") is None
    assert "T-001" in registry


def test_insert_rejects_duplicate_names(registry: SensorRegistry) -> None:
    original = TemperatureSensor("S-1")
    registry.insert(original)

    with pytest.raises(DuplicateSensorError):
        registry.insert(PressureSensor("S-1"))

    assert registry.find_by_name("S-1") is original
    assert len(registry) == 1


def test_process_all_follows_insertion_order(registry: SensorRegistry) -> None:
    registry.create("P", "P-001")
    registry.create("T", "T-001")
    registry.find_by_name("P-001").ingest_text("100")
    registry.find_by_name("P-001").ingest_text("200")
    for raw in ("30.0", "10.0", "20.0"):
        registry.find_by_name("T-001").ingest_text(raw)

    reports = registry.process_all()

    assert [report.sensor for report in reports] == ["P-001", "T-001"]
    assert [report.mean for report in reports] == [150, 25.0]


def test_describe_all_lists_every_sensor(registry: SensorRegistry) -> None:
    registry.create("T", "T-001")
    registry.create("P", "P-001")

    assert registry.describe_all() == [
        "[TemperatureSensor] ID=T-001",
        "[PressureSensor] ID=P-001",
    ]
    assert [sensor.name for sensor in registry] == ["T-001", "P-001"]


def test_create_with_unknown_kind_has_no_side_effect(registry: SensorRegistry) -> None:
    with pytest.raises(UnknownSensorKindError):
        registry.create("Z", "Z-001")

    assert len(registry) == 0
