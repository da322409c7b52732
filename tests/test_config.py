from __future__ import annotations

from pathlib import Path

from microview.config import SessionConfig, load_config


def test_load_minimal_tmpfile(tmp_path: Path) -> None:
    cfg_path = tmp_path / "cfg.yaml"
    cfg_path.write_text(
        """
delay: 0.09
clear_black_pixels: true
serial:
  port: /dev/ttyACM0
  timeout: 0.5
"""
    )
    cfg = load_config(cfg_path)
    assert isinstance(cfg, SessionConfig)
    assert cfg.delay == 0.09
    assert cfg.clear_black_pixels is True
    assert cfg.greeting == "MicroView"
    assert cfg.serial.port == "/dev/ttyACM0"
    assert cfg.serial.timeout == 0.5


def test_load_empty_file_gives_defaults(tmp_path: Path) -> None:
    cfg_path = tmp_path / "cfg.yaml"
    cfg_path.write_text("")
    cfg = load_config(cfg_path)
    assert cfg == SessionConfig()
    assert cfg.serial.timeout == 1.0


def test_load_bad_numbers_fall_back(tmp_path: Path) -> None:
    cfg_path = tmp_path / "cfg.yaml"
    cfg_path.write_text(
        """
delay: soon
serial:
  timeout: never
"""
    )
    cfg = load_config(cfg_path)
    assert cfg.delay == 0.05
    assert cfg.serial.timeout == 1.0


def test_empty_greeting_is_kept(tmp_path: Path) -> None:
    cfg_path = tmp_path / "cfg.yaml"
    cfg_path.write_text('greeting: ""\n')
    assert load_config(cfg_path).greeting == ""
