"""Shared fixtures: synthetic RIFF/WAVE files and a headless QApplication."""

from __future__ import annotations

import os
import struct

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def chunk(chunk_id: bytes, payload: bytes) -> bytes:
    return chunk_id + struct.pack("<I", len(payload)) + payload


def fmt_payload(sample_rate: int = 44100, bit_depth: int = 16, channels: int = 2) -> bytes:
    block_align = channels * bit_depth // 8
    return struct.pack(
        "<HHIIHH", 1, channels, sample_rate, sample_rate * block_align, block_align, bit_depth,
    )


def make_wav(sample_rate: int = 44100, bit_depth: int = 16, *,
             before: tuple[bytes, ...] = (), include_fmt: bool = True,
             data: bytes = b"\x00" * 16) -> bytes:
    """Build a RIFF/WAVE byte string. *before* holds raw chunks placed ahead of fmt."""
    body = b"WAVE" + b"".join(before)
    if include_fmt:
        body += chunk(b"fmt ", fmt_payload(sample_rate, bit_depth))
    body += chunk(b"data", data)
    return b"RIFF" + struct.pack("<I", len(body)) + body


@pytest.fixture
def wav_bytes():
    return make_wav


@pytest.fixture
def write_wav(tmp_path):
    """Write a synthetic WAV file below tmp_path and return its path."""
    def _write(relpath: str, sample_rate: int = 44100, bit_depth: int = 16, **kwargs):
        path = tmp_path / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(make_wav(sample_rate, bit_depth, **kwargs))
        return path
    return _write


@pytest.fixture
def qapp():
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app
