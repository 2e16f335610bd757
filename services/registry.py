"""Insertion-ordered registry of uniquely named sensors."""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional

from models.errors import DuplicateSensorError
from models.reports import ProcessReport
from models.sensors import Sensor, build_sensor

logger = logging.getLogger(__name__)

EMPTY_REGISTRY_LINE = "Registry is empty."


class SensorRegistry:
    """Owns every registered sensor; iteration follows insertion order."""

    def __init__(self) -> None:
        self._sensors: Dict[str, Sensor] = {}

    def __len__(self) -> int:
        return len(self._sensors)

    def __iter__(self) -> Iterator[Sensor]:
        return iter(list(self._sensors.values()))

    def __contains__(self, name: object) -> bool:
        return name in self._sensors

    def insert(self, sensor: Sensor) -> None:
        if sensor.name in self._sensors:
            raise DuplicateSensorError(sensor.name)
        self._sensors[sensor.name] = sensor

    def find_by_name(self, name: str) -> Optional[Sensor]:
        return self._sensors.get(name)

    def create(self, tag: str, name: str) -> Sensor:
        """Build a sensor from its kind tag and register it."""
        sensor = build_sensor(tag, name)
        self.insert(sensor)
        logger.info("Sensor created", extra={"sensor": name, "kind": sensor.kind.name})
        return sensor

    def process_all(self) -> List[ProcessReport]:
        logger.debug("Running processing pass over %d sensors", len(self._sensors))
        return [sensor.process() for sensor in self._sensors.values()]

    def describe_all(self) -> List[str]:
        if not self._sensors:
            return [EMPTY_REGISTRY_LINE]
        return [sensor.describe() for sensor in self._sensors.values()]
