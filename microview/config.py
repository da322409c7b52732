from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

# Below this the MicroView starts dropping commands
MIN_RECOMMENDED_DELAY = 0.025


@dataclass
class SerialConfig:
    port: str = "/dev/ttyUSB0"
    timeout: float = 1.0


@dataclass
class SessionConfig:
    """Session settings.

    delay: seconds to wait after every command written to the device.
    greeting: banner the firmware prints on connect; consumed by MicroView.open.
    clear_black_pixels: when False (the default) MicroView.set never sends
        BLACK pixels, matching the device conversation of the Go library.
    """

    delay: float = 0.05
    greeting: str = "MicroView"
    clear_black_pixels: bool = False
    serial: SerialConfig = field(default_factory=SerialConfig)


def _as_float(val: Any, default: float) -> float:
    try:
        return float(val)
    except Exception:
        return default


def _load_yaml(path: Path) -> dict[str, Any]:
    data = yaml.safe_load(path.read_text())
    return data or {}


def load_config(path: str | Path) -> SessionConfig:
    p = Path(path)
    data = _load_yaml(p)

    serial_raw = data.get("serial", {}) or {}
    serial = SerialConfig(
        port=str(serial_raw.get("port", SerialConfig.port)),
        timeout=_as_float(serial_raw.get("timeout", SerialConfig.timeout), SerialConfig.timeout),
    )

    delay = _as_float(data.get("delay", SessionConfig.delay), SessionConfig.delay)
    greeting = data.get("greeting", SessionConfig.greeting)
    greeting = str(greeting) if greeting is not None else ""

    return SessionConfig(
        delay=delay,
        greeting=greeting,
        clear_black_pixels=bool(data.get("clear_black_pixels", False)),
        serial=serial,
    )


def validate_config(cfg: SessionConfig) -> None:
    if cfg.delay < 0:
        raise ValueError("delay must be >= 0")
    if not cfg.serial.port:
        raise ValueError("serial.port must be a non-empty string")
    if cfg.serial.timeout is not None and cfg.serial.timeout < 0:
        raise ValueError("serial.timeout must be >= 0")


def load_and_validate_config(path: str | Path) -> SessionConfig:
    cfg = load_config(path)
    validate_config(cfg)
    return cfg
