from __future__ import annotations

import sys
from typing import TextIO


class DryRunTransport:
    """Stand-in for the serial port: prints and records commands instead of sending them.

    Each command goes on its own line so the output reads like a device log;
    the recorded bytes in ``writes`` are exactly what a port would receive.
    """

    def __init__(self, out: TextIO | None = None, echo: bool = True) -> None:
        self.out = out if out is not None else sys.stdout
        self.echo = echo
        self.writes: list[bytes] = []
        self.closed = False

    def read(self, size: int = 1) -> bytes:
        return b""

    def write(self, data: bytes) -> int:
        if self.closed:
            raise ValueError("write to closed transport")
        self.writes.append(bytes(data))
        if self.echo:
            print(data.decode("ascii", errors="replace"), file=self.out)
        return len(data)

    def close(self) -> None:
        self.closed = True

    @property
    def data(self) -> bytes:
        return b"".join(self.writes)
