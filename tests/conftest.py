from __future__ import annotations

import io
import struct

import pytest


def build_wave(payload, channel_count=1, sample_rate=8000, bits_per_sample=16, list_chunk=b"", riff_size=None, fmt_size=16, data_size=None):
    """Assembles a WAVE file by hand, independently of WaveWriter."""
    block_size = bits_per_sample // 8 * channel_count
    fmt = struct.pack("<HHIIHH", 1, channel_count, sample_rate, block_size * sample_rate, block_size, bits_per_sample)
    data_size = len(payload) if data_size is None else data_size
    body = (
        b"WAVE"
        + b"fmt " + struct.pack("<I", fmt_size) + fmt
        + list_chunk
        + b"data" + struct.pack("<I", data_size) + payload
    )
    riff_size = len(body) if riff_size is None else riff_size
    return b"RIFF" + struct.pack("<I", riff_size) + body


def make_chunk(chunk_id, data):
    """Builds a RIFF chunk, padded to an even length."""
    chunk = chunk_id + struct.pack("<I", len(data)) + data
    if len(data) % 2:
        chunk += b"\x00"
    return chunk


class CapturingSink(io.BytesIO):
    """BytesIO that keeps its contents after close()."""

    def __init__(self):
        super().__init__()
        self.value = None
        self.close_calls = 0

    def close(self):
        self.close_calls += 1
        if not self.closed:
            self.value = self.getvalue()
        super().close()


@pytest.fixture
def sink():
    return CapturingSink()


@pytest.fixture
def write_wave(tmp_path):
    def _write(data, name="test.wav"):
        path = tmp_path / name
        path.write_bytes(data)
        return path
    return _write


@pytest.fixture
def wave_bytes():
    return build_wave


@pytest.fixture
def chunk_bytes():
    return make_chunk
