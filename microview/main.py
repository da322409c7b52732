from __future__ import annotations

import argparse
import logging
import sys

from PIL import Image

from . import protocol
from .config import SessionConfig, load_and_validate_config, validate_config
from .mock_transport import DryRunTransport
from .protocol import ClearMode, Command
from .session import MicroView
from .transport import TransportError

RECTANGLES: list[Command] = [
    protocol.rect_fill(5, 5, 5, 15),
    protocol.rect_fill(25, 0, 30, 15),
    protocol.rect(1, 1, 20, 40),
    protocol.rect(40, 20, 20, 20),
    protocol.rect(40, 20, 15, 15),
    protocol.rect(40, 20, 10, 10),
    protocol.rect(40, 20, 5, 5),
]

CIRCLES: list[Command] = [
    protocol.circle_fill(5, 5, 5),
    protocol.circle(1, 1, 20),
    protocol.circle(40, 20, 20),
    protocol.circle(40, 20, 15),
    protocol.circle(40, 20, 10),
    protocol.circle(40, 20, 5),
]

# Vertical distance between lines drawn by the text demo
LINE_HEIGHT = 10


def parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Remote control a MicroView OLED over serial")
    p.add_argument("--config", default=None, help="Path to YAML config")
    p.add_argument("--port", default=None, help="Serial port (overrides config)")
    p.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Seconds between commands (default: 0.05, 0.025 seems to be the minimum)",
    )
    p.add_argument("--dry-run", action="store_true", help="Print commands to stdout instead of serial")
    p.add_argument(
        "--verbose",
        action="store_true",
        help="Enable INFO-level logging (default is ERROR)",
    )

    sub = p.add_subparsers(dest="demo", required=True)
    text = sub.add_parser("text", help="Draw text, one word per line")
    text.add_argument("text", nargs="?", default="Hello From Python!")
    sub.add_parser("rectangles", help="Draw a set of rectangles")
    sub.add_parser("circles", help="Draw a set of circles")
    clear = sub.add_parser("clear", help="Clear the screen buffer")
    clear.add_argument("--all", action="store_true", help="Clear the controller GDRAM as well")
    sub.add_parser("fill", help="Fill the screen with the current color")
    image = sub.add_parser("image", help="Draw an image file pixel by pixel")
    image.add_argument("path")
    return p.parse_args(argv)


def _build_config(args: argparse.Namespace) -> SessionConfig:
    cfg = load_and_validate_config(args.config) if args.config else SessionConfig()
    if args.port:
        cfg.serial.port = args.port
    if args.delay is not None:
        cfg.delay = args.delay
    validate_config(cfg)
    return cfg


def _load_image(path: str) -> Image.Image:
    with Image.open(path) as img:
        img.load()
        return img.copy()


def _run_demo(mv: MicroView, args: argparse.Namespace, image: Image.Image | None = None) -> None:
    if args.demo == "text":
        for i, word in enumerate(args.text.split(" ")):
            mv.draw_string(0, LINE_HEIGHT * i, word)
    elif args.demo == "rectangles":
        mv.run(*RECTANGLES)
    elif args.demo == "circles":
        mv.run(*CIRCLES)
    elif args.demo == "clear":
        mv.run(protocol.clear(ClearMode.ALL if args.all else ClearMode.PAGE))
    elif args.demo == "fill":
        mv.run(protocol.fill())
    elif args.demo == "image" and image is not None:
        mv.draw_image(image)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    # Logging: minimal by default (ERROR). --verbose switches to INFO.
    lvl = logging.INFO if args.verbose else logging.ERROR
    logging.basicConfig(level=lvl, format="%(levelname)s:%(name)s:%(message)s", stream=sys.stderr)
    log = logging.getLogger(__name__)
    try:
        cfg = _build_config(args)
    except Exception as e:
        log.error("Failed to load config: %s", e)
        return 2

    image = None
    if args.demo == "image":
        try:
            image = _load_image(args.path)
        except OSError as e:
            log.error("Failed to read image %s: %s", args.path, e)
            return 2

    try:
        if args.dry_run:
            mv = MicroView(DryRunTransport(), cfg)
        else:
            mv = MicroView.open(cfg.serial.port, cfg)
    except TransportError as e:
        log.error("Serial port unavailable (%s): %s", cfg.serial.port, e)
        return 3

    try:
        with mv:
            _run_demo(mv, args, image)
            log.info("demo %s done", args.demo)
    except TransportError as e:
        log.error("Sending to %s failed: %s", cfg.serial.port, e)
        return 1
    except KeyboardInterrupt:
        return 0
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
