"""Remote control of a MicroView OLED module over a serial link."""

from __future__ import annotations

import logging
import time
from typing import Optional, Sequence, Tuple, Union

from PIL import Image

from . import protocol
from .config import MIN_RECOMMENDED_DELAY, SessionConfig
from .protocol import CHAR_WIDTH, HEIGHT, WIDTH, Color, Command, DrawMode
from .transport import DEFAULT_BAUD, SessionClosedError, Transport, open_serial, write_command

logger = logging.getLogger(__name__)

# Pause used by set() when nothing is written
SKIP_DELAY = 0.005

ColorValue = Union[int, float, Sequence[int]]


def _is_lit(color: ColorValue) -> bool:
    """True when the red, green and blue intensities add up to anything."""
    if isinstance(color, (int, float)):
        return color > 0
    # Grayscale with alpha ("LA") has a single intensity channel
    channels = list(color)
    rgb = channels[:3] if len(channels) >= 3 else channels[:1]
    return sum(rgb) > 0


class MicroView:
    def __init__(self, transport: Transport, config: Optional[SessionConfig] = None):
        self.config = config or SessionConfig()
        if self.config.delay < 0:
            raise ValueError("delay must be >= 0")
        if self.config.delay < MIN_RECOMMENDED_DELAY:
            logger.warning(
                "delay %.3fs is below %.3fs, the MicroView may drop commands",
                self.config.delay,
                MIN_RECOMMENDED_DELAY,
            )
        self._transport: Optional[Transport] = transport

    @classmethod
    def open(cls, port: str, config: Optional[SessionConfig] = None) -> "MicroView":
        """Open the named serial port at 115200 baud and consume the greeting."""
        cfg = config or SessionConfig()
        ser = open_serial(port, DEFAULT_BAUD, timeout=cfg.serial.timeout)

        if cfg.greeting:
            # The firmware prints its name on connect; not required for anything
            try:
                banner = ser.read(len(cfg.greeting))
                logger.debug("greeting from %s: %r", port, banner)
            except Exception as e:
                logger.debug("no greeting from %s: %s", port, e)

        try:
            return cls(ser, cfg)
        except Exception:
            ser.close()
            raise

    @property
    def delay(self) -> float:
        return self.config.delay

    @property
    def closed(self) -> bool:
        return self._transport is None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise SessionClosedError("MicroView session is closed")
        return self._transport

    def _send(self, cmd: Command, pause: float) -> None:
        transport = self._require_transport()
        logger.debug("send %r", cmd)
        write_command(transport, cmd)
        time.sleep(pause)

    def run(self, *cmds: Command) -> None:
        """Write the commands in order, pausing after each one."""
        self._require_transport()
        for cmd in cmds:
            self._send(cmd, self.config.delay)

    def draw_string(self, x: int, y: int, s: str) -> None:
        """Draw s starting at x,y, one draw_char command per character."""
        self._require_transport()
        for i, c in enumerate(s):
            # x is a single byte on the wire
            cx = (x + i * CHAR_WIDTH) & 0xFF
            self._send(protocol.draw_char(cx, y, c), self.config.delay)

    def set(self, x: int, y: int, color: ColorValue) -> None:
        """Set the pixel at x,y to WHITE when color is not black.

        Black pixels are skipped unless clear_black_pixels is enabled, in
        which case they are drawn BLACK.
        """
        if _is_lit(color):
            self._send(
                protocol.pixel_with_color_and_mode(x, y, Color.WHITE, DrawMode.NORM),
                self.config.delay,
            )
            return

        if self.config.clear_black_pixels:
            self._send(
                protocol.pixel_with_color_and_mode(x, y, Color.BLACK, DrawMode.NORM),
                self.config.delay,
            )
            return

        self._require_transport()
        time.sleep(SKIP_DELAY)

    def draw_image(self, image: Image.Image, origin: Tuple[int, int] = (0, 0)) -> None:
        """Push every pixel of image through set(), clipped to the display."""
        gray = image.convert("L")
        ox, oy = origin
        w, h = gray.size
        for iy in range(h):
            for ix in range(w):
                x, y = ox + ix, oy + iy
                if 0 <= x < WIDTH and 0 <= y < HEIGHT:
                    self.set(x, y, gray.getpixel((ix, iy)))

    # The device contents cannot be queried, so the image side of the
    # session only reports its geometry and reads back black.

    @property
    def bounds(self) -> Tuple[int, int, int, int]:
        return (0, 0, WIDTH, HEIGHT)

    @property
    def size(self) -> Tuple[int, int]:
        return (WIDTH, HEIGHT)

    @property
    def mode(self) -> str:
        return "L"

    def get_pixel(self, x: int, y: int) -> int:
        return 0

    def to_image(self) -> Image.Image:
        return Image.new(self.mode, self.size, 0)

    def close(self) -> None:
        transport = self._require_transport()
        self._transport = None
        transport.close()
        logger.info("MicroView session closed")

    def __enter__(self) -> "MicroView":
        return self

    def __exit__(self, *exc) -> None:
        if not self.closed:
            self.close()