"""Exceptions raised by the sensor registry and its collaborators."""

from __future__ import annotations


class UnknownSensorKindError(ValueError):
    """Raised when a kind tag does not name a supported sensor kind."""

    def __init__(self, tag: str) -> None:
        super().__init__(f"Unknown sensor kind {tag!r}; expected 'T' or 'P'.")
        self.tag = tag


class DuplicateSensorError(ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Sensor {name!r} is already registered.")
        self.name = name


class SensorNotFoundError(LookupError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Sensor {name!r} not found.")
        self.name = name


class InvalidSensorNameError(ValueError):
    pass
