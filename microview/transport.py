from __future__ import annotations

import logging
from typing import Optional, Protocol

import serial

logger = logging.getLogger(__name__)

DEFAULT_BAUD = 115200


class Transport(Protocol):
    def read(self, size: int = 1) -> bytes: ...

    def write(self, data: bytes) -> Optional[int]: ...

    def close(self) -> None: ...


class TransportError(Exception):
    """Base class for transport failures."""

    pass


class TransportOpenError(TransportError):
    """Raised when the serial port cannot be opened."""

    pass


class TransmissionError(TransportError):
    """Raised when a command could not be written to the transport."""

    pass


class SessionClosedError(Exception):
    """Raised when a closed session is used."""

    pass


def open_serial(port: str, baud: int = DEFAULT_BAUD, timeout: Optional[float] = 1.0) -> serial.Serial:
    try:
        ser = serial.Serial(port, baud, timeout=timeout)
    except (serial.SerialException, OSError, ValueError) as e:
        raise TransportOpenError(f"could not open serial port {port}: {e}") from e
    logger.info("opened serial port %s at %d baud", port, baud)
    return ser


def write_command(transport: Transport, cmd: bytes) -> None:
    """Write one command, raising TransmissionError on failure or short write."""
    try:
        written = transport.write(cmd)
    except (serial.SerialException, OSError, ValueError) as e:
        raise TransmissionError(f"write of {cmd!r} failed: {e}") from e
    # Some file-like objects return None from write()
    if written is not None and written != len(cmd):
        raise TransmissionError(f"short write: {written}/{len(cmd)} bytes of {cmd!r}")
