"""Named instruments that own a typed reading history."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import ClassVar, Dict, Type, Union

from models.errors import InvalidSensorNameError, UnknownSensorKindError
from models.history import FLOAT32, INT32, NumericType, ReadingHistory
from models.reports import ProcessReport, SensorKind

logger = logging.getLogger(__name__)

Number = Union[int, float]


class Sensor(ABC):
    """A named instrument whose behavior is fixed by its kind."""

    kind: ClassVar[SensorKind]
    numeric: ClassVar[NumericType]

    def __init__(self, name: str) -> None:
        if not name or not name.strip():
            raise InvalidSensorNameError("Sensor name must not be empty.")
        self._name = name
        self._history: ReadingHistory = ReadingHistory(self.numeric)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, readings={len(self._history)})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def history(self) -> ReadingHistory:
        return self._history

    def ingest_text(self, raw: str) -> Number:
        """Parse ``raw`` and append it; malformed text is recorded as zero."""
        try:
            value = self.numeric.parse(raw)
        except ValueError:
            value = self.numeric.zero
            logger.warning(
                "Malformed reading recorded as zero",
                extra={"sensor": self._name, "raw_value": raw, "reason": self.numeric.name},
            )
        self._history.append(value)
        logger.info(
            "Reading accepted",
            extra={"sensor": self._name, "kind": self.kind.name, "value": value},
        )
        return value

    @abstractmethod
    def process(self) -> ProcessReport:
        ...

    def describe(self) -> str:
        return f"[{type(self).__name__}] ID={self._name}"

    def _empty_report(self) -> ProcessReport:
        logger.info("No readings to process", extra={"sensor": self._name, "kind": self.kind.name})
        return ProcessReport(sensor=self._name, kind=self.kind, reading_count=0)


class TemperatureSensor(Sensor):
    """Float readings; processing drops the lowest reading before averaging.

    Processing mutates the history, so two passes without a new reading in
    between average over different sets of values.
    """

    kind = SensorKind.temperature
    numeric = FLOAT32

    def process(self) -> ProcessReport:
        if self._history.is_empty():
            return self._empty_report()
        dropped = self._history.remove_smallest()
        mean = self._history.mean()
        logger.info(
            "Temperature mean after dropping lowest reading",
            extra={
                "sensor": self._name,
                "mean": mean,
                "dropped_value": dropped,
                "reading_count": len(self._history),
            },
        )
        return ProcessReport(
            sensor=self._name,
            kind=self.kind,
            reading_count=len(self._history),
            mean=mean,
            dropped_value=dropped,
        )


class PressureSensor(Sensor):
    """Integer readings averaged with truncating division."""

    kind = SensorKind.pressure
    numeric = INT32

    def process(self) -> ProcessReport:
        if self._history.is_empty():
            return self._empty_report()
        mean = self._history.mean()
        logger.info(
            "Pressure mean",
            extra={"sensor": self._name, "mean": mean, "reading_count": len(self._history)},
        )
        return ProcessReport(
            sensor=self._name,
            kind=self.kind,
            reading_count=len(self._history),
            mean=mean,
        )


SENSOR_TYPES: Dict[SensorKind, Type[Sensor]] = {
    SensorKind.temperature: TemperatureSensor,
    SensorKind.pressure: PressureSensor,
}


def resolve_kind(tag: str) -> SensorKind:
    try:
        return SensorKind(tag)
    except ValueError:
        raise UnknownSensorKindError(tag) from None


def build_sensor(tag: str, name: str) -> Sensor:
    """Construct the sensor variant matching a one-character kind tag."""
    return SENSOR_TYPES[resolve_kind(tag)](name)
