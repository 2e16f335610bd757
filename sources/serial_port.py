"""Line-oriented reader for instruments attached to a serial port."""

from __future__ import annotations

import logging
import time
from typing import Iterator, Optional

import serial

logger = logging.getLogger(__name__)


class SerialSourceError(RuntimeError):
    """Raised when the serial line cannot be opened or read."""


class SerialLineSource:
    """Reads newline-terminated frames from a serial device (8N1, no flow control)."""

    def __init__(
        self,
        port: str,
        baudrate: int = 115200,
        timeout_s: float = 1.0,
        startup_delay_s: float = 2.0,
    ) -> None:
        self.port = port
        self.baudrate = baudrate
        self.timeout_s = timeout_s
        self.startup_delay_s = startup_delay_s
        self._serial: Optional[serial.Serial] = None

    def __enter__(self) -> "SerialLineSource":
        self.open()
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._serial is not None and self._serial.is_open

    def open(self) -> None:
        if self.is_open:
            return
        try:
            self._serial = serial.Serial(
                self.port,
                self.baudrate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                timeout=self.timeout_s,
                xonxoff=False,
                rtscts=False,
            )
            self._serial.reset_input_buffer()
        except serial.SerialException as exc:
            self._serial = None
            raise SerialSourceError(f"Could not open serial port {self.port}: {exc}") from exc
        logger.info("Serial port opened", extra={"port": self.port})

    def close(self) -> None:
        if self._serial is not None:
            self._serial.close()
            self._serial = None
            logger.info("Serial port closed", extra={"port": self.port})

    def wait_for_device(self) -> None:
        """Give a board that resets when the port opens time to boot."""
        if self.startup_delay_s > 0:
            time.sleep(self.startup_delay_s)

    def read_line(self) -> Optional[str]:
        """Return one line without its terminator, or ``None`` on timeout."""
        if self._serial is None:
            raise SerialSourceError("Serial port is not open.")
        try:
            raw = self._serial.readline()
        except serial.SerialException as exc:
            raise SerialSourceError(f"Read from {self.port} failed: {exc}") from exc
        if not raw:
            return None
        return raw.decode("utf-8", errors="ignore").strip("\r\n")

    def lines(self, max_lines: Optional[int] = None) -> Iterator[str]:
        count = 0
        while max_lines is None or count < max_lines:
            line = self.read_line()
            if not line:
                continue
            count += 1
            yield line
