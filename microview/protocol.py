from __future__ import annotations

from enum import IntEnum
from typing import Union

# Display size
WIDTH = 64
HEIGHT = 48

# Horizontal advance of one glyph in the device font
CHAR_WIDTH = 6

Command = bytes


class CommandId(IntEnum):
    CLEAR = 0
    INVERT = 1
    CONTRAST = 2
    DISPLAY = 3
    SETCURSOR = 4
    PIXEL = 5
    LINE = 6
    LINEH = 7
    LINEV = 8
    RECT = 9
    RECTFILL = 10
    CIRCLE = 11
    CIRCLEFILL = 12
    DRAWCHAR = 13
    DRAWBITMAP = 14  # not implemented by the firmware
    GETLCDWIDTH = 15
    GETLCDHEIGHT = 16
    SETCOLOR = 17
    SETDRAWMODE = 18


class Color(IntEnum):
    BLACK = 0
    WHITE = 1


class DrawMode(IntEnum):
    NORM = 0
    XOR = 1


class ClearMode(IntEnum):
    PAGE = 0  # screen buffer only
    ALL = 1  # GDRAM inside the controller


def _encode(cmd: CommandId, *fields: int) -> Command:
    return ",".join(str(int(f)) for f in (cmd, *fields)).encode("ascii")


def clear(mode: int) -> Command:
    """Clear the display, ALL for the controller GDRAM or PAGE for the screen buffer."""
    return _encode(CommandId.CLEAR, mode)


def invert(inv: bool) -> Command:
    """Swap WHITE and BLACK on the whole display."""
    return _encode(CommandId.INVERT, 1 if inv else 0)


def contrast(level: int) -> Command:
    # 0-255, the effect is not very obvious on the hardware
    return _encode(CommandId.CONTRAST, level)


def display() -> Command:
    """Move the screen buffer to the SSD1306 controller so it shows on the OLED."""
    return _encode(CommandId.DISPLAY)


def set_cursor(x: int, y: int) -> Command:
    return _encode(CommandId.SETCURSOR, x, y)


def pixel(x: int, y: int) -> Command:
    return _encode(CommandId.PIXEL, x, y)


def pixel_with_color_and_mode(x: int, y: int, color: int, mode: int) -> Command:
    return _encode(CommandId.PIXEL, x, y, color, mode)


def line(x0: int, y0: int, x1: int, y1: int) -> Command:
    """Line from x0,y0 to x1,y1."""
    return _encode(CommandId.LINE, x0, y0, x1, y1)


def line_with_color_and_mode(
    x0: int, y0: int, x1: int, y1: int, color: int, mode: int
) -> Command:
    return _encode(CommandId.LINE, x0, y0, x1, y1, color, mode)


def line_h(x: int, y: int, width: int) -> Command:
    """Horizontal line from x,y to x+width,y."""
    return _encode(CommandId.LINEH, x, y, width)


def line_h_with_color_and_mode(x: int, y: int, width: int, color: int, mode: int) -> Command:
    return _encode(CommandId.LINEH, x, y, width, color, mode)


def line_v(x: int, y: int, height: int) -> Command:
    """Vertical line from x,y to x,y+height."""
    return _encode(CommandId.LINEV, x, y, height)


def line_v_with_color_and_mode(x: int, y: int, height: int, color: int, mode: int) -> Command:
    return _encode(CommandId.LINEV, x, y, height, color, mode)


def rect(x: int, y: int, w: int, h: int) -> Command:
    """Rectangle outline from x,y to x+w,y+h."""
    return _encode(CommandId.RECT, x, y, w, h)


def rect_with_color_and_mode(x: int, y: int, w: int, h: int, color: int, mode: int) -> Command:
    return _encode(CommandId.RECT, x, y, w, h, color, mode)


def rect_fill(x: int, y: int, w: int, h: int) -> Command:
    return _encode(CommandId.RECTFILL, x, y, w, h)


def rect_fill_with_color_and_mode(
    x: int, y: int, w: int, h: int, color: int, mode: int
) -> Command:
    return _encode(CommandId.RECTFILL, x, y, w, h, color, mode)


def fill() -> Command:
    """Fill the whole screen with the current fore color."""
    return rect_fill(0, 0, WIDTH, HEIGHT)


def circle(x: int, y: int, radius: int) -> Command:
    return _encode(CommandId.CIRCLE, x, y, radius)


def circle_fill(x: int, y: int, radius: int) -> Command:
    return _encode(CommandId.CIRCLEFILL, x, y, radius)


def draw_char(x: int, y: int, c: Union[str, int]) -> Command:
    """Draw one character at x,y. The device receives its code point."""
    code = ord(c) if isinstance(c, str) else c
    return _encode(CommandId.DRAWCHAR, x, y, code)


def set_color(color: int) -> Command:
    # Only WHITE and BLACK exist
    return _encode(CommandId.SETCOLOR, color)


def set_draw_mode(mode: int) -> Command:
    return _encode(CommandId.SETDRAWMODE, mode)
