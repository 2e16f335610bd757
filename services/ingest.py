"""Routing of manual actions and received frames onto the sensor registry."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Union

from models.errors import InvalidSensorNameError, SensorNotFoundError, UnknownSensorKindError
from models.reports import ProcessReport
from models.sensors import Sensor
from services.frames import Frame, parse_frame
from services.registry import SensorRegistry

logger = logging.getLogger(__name__)


@dataclass
class IngestOutcome:
    """What happened to one received frame."""

    frame: Frame
    sensor: Optional[str] = None
    value: Optional[Union[int, float]] = None
    created: bool = False
    error: Optional[str] = None
    reports: List[ProcessReport] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return self.error is None


class IngestService:
    """Front door to the registry for the CLI and the serial monitor."""

    def __init__(self, registry: Optional[SensorRegistry] = None, delimiter: str = ";") -> None:
        self.registry = registry if registry is not None else SensorRegistry()
        self.delimiter = delimiter
        self.frames_handled = 0
        self.session_frames = 0

    def add_sensor(self, kind_tag: str, name: str) -> Sensor:
        return self.registry.create(kind_tag.strip(), name.strip())

    def record_reading(self, name: str, raw: str) -> Union[int, float]:
        """Append a manually entered reading; unknown names are not created."""
        name = name.strip()
        sensor = self.registry.find_by_name(name)
        if sensor is None:
            raise SensorNotFoundError(name)
        return sensor.ingest_text(raw)

    def handle_frame(self, frame: Frame) -> IngestOutcome:
        name = frame.sensor_id.strip()
        outcome = IngestOutcome(frame=frame, sensor=name or None)
        sensor = self.registry.find_by_name(name)
        if sensor is None:
            logger.info("Unknown sensor, creating", extra={"sensor": name})
            try:
                sensor = self.registry.create(frame.kind_tag, name)
            except (UnknownSensorKindError, InvalidSensorNameError) as exc:
                logger.warning(
                    "Frame rejected",
                    extra={"frame": frame.kind_tag, "sensor": name, "reason": str(exc)},
                )
                outcome.error = str(exc)
                return outcome
            outcome.created = True
        outcome.value = sensor.ingest_text(frame.value_text)
        return outcome

    def handle_line(self, line: str) -> Optional[IngestOutcome]:
        if not line.strip():
            return None
        logger.debug("Frame received", extra={"frame": line})
        outcome = self.handle_frame(parse_frame(line, self.delimiter))
        self.frames_handled += 1
        return outcome

    def monitor(self, lines: Iterable[str], process_every: int = 0) -> Iterator[IngestOutcome]:
        """Handle each non-blank line, running a processing pass every N frames.

        The count restarts with every call; ``session_frames`` holds it.
        """
        self.session_frames = 0
        for line in lines:
            outcome = self.handle_line(line)
            if outcome is None:
                continue
            self.session_frames += 1
            if process_every > 0 and self.session_frames % process_every == 0:
                outcome.reports = self.process_all()
            yield outcome

    def process_all(self) -> List[ProcessReport]:
        return self.registry.process_all()

    def describe_all(self) -> List[str]:
        return self.registry.describe_all()
