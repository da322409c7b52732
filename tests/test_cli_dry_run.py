from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest
import serial
from PIL import Image

from microview.main import RECTANGLES
from microview.main import main as cli_main
from microview.mock_transport import DryRunTransport


def _run(monkeypatch, argv: list[str]) -> tuple[int, list[str]]:
    buf = io.StringIO()
    monkeypatch.setattr(sys, "stdout", buf)
    rc = cli_main(argv)
    return rc, buf.getvalue().strip().splitlines()


def test_dry_run_rectangles(monkeypatch) -> None:
    rc, out = _run(monkeypatch, ["--dry-run", "--delay", "0.025", "rectangles"])
    assert rc == 0
    assert out == [c.decode() for c in RECTANGLES]


def test_dry_run_text_one_word_per_line(monkeypatch) -> None:
    rc, out = _run(monkeypatch, ["--dry-run", "--delay", "0.025", "text", "Hi Yo"])
    assert rc == 0
    assert out == ["13,0,0,72", "13,6,0,105", "13,0,10,89", "13,6,10,111"]


def test_dry_run_uses_config_file(tmp_path: Path, monkeypatch) -> None:
    cfg_path = tmp_path / "cfg.yaml"
    cfg_path.write_text(
        """
delay: 0.025
serial:
  port: /dev/null
"""
    )
    rc, out = _run(monkeypatch, ["--config", str(cfg_path), "--dry-run", "clear", "--all"])
    assert rc == 0
    assert out == ["0,1"]


def test_dry_run_image(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "dot.png"
    img = Image.new("1", (2, 2), 0)
    img.putpixel((1, 1), 1)
    img.save(path)

    rc, out = _run(monkeypatch, ["--dry-run", "--delay", "0.025", "image", str(path)])
    assert rc == 0
    assert out == ["5,1,1,1,0"]


def test_bad_config_exits_2(monkeypatch) -> None:
    rc, out = _run(monkeypatch, ["--dry-run", "--delay", "-1", "fill"])
    assert rc == 2
    assert out == []


def test_missing_image_exits_2(tmp_path: Path, monkeypatch, caplog) -> None:
    rc, out = _run(monkeypatch, ["--dry-run", "--delay", "0.025", "image", str(tmp_path / "none.png")])
    assert rc == 2
    assert out == []
    assert "Failed to read image" in caplog.text


def test_close_error_is_not_reported_as_bad_input(monkeypatch) -> None:
    def broken_close(self) -> None:
        raise serial.SerialException("port vanished")

    monkeypatch.setattr(DryRunTransport, "close", broken_close)
    with pytest.raises(serial.SerialException):
        _run(monkeypatch, ["--dry-run", "--delay", "0.025", "fill"])
