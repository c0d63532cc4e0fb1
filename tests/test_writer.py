from __future__ import annotations

import struct

import pytest

from riffwave import InvalidWrite, Unimplemented, WaveWriter, open_reader, open_writer


def test_scenario_mono_16_bit(sink):
    writer = open_writer(sink, channel_count=1, sample_rate=8000, bits_per_sample=16)
    assert writer.write_samples16([100, -100]) == 4
    writer.close()

    data = sink.value
    assert data[0:4] == b"RIFF"
    assert struct.unpack("<I", data[4:8])[0] == len(data) - 8
    assert data[8:16] == b"WAVEfmt "
    assert struct.unpack("<I", data[16:20])[0] == 16
    assert struct.unpack("<HHIIHH", data[20:36]) == (1, 1, 8000, 16000, 2, 16)
    assert data[36:40] == b"data"
    assert struct.unpack("<I", data[40:44])[0] == 4
    assert struct.unpack("<2h", data[44:]) == (100, -100)


def test_derived_format_fields(sink):
    writer = WaveWriter(sink, 2, 44100, 16)
    assert writer.block_size == 4
    assert writer.fmt_chunk.data.bytes_per_sec == 176400


def test_sizes_filled_on_close(sink):
    writer = WaveWriter(sink, 2, 22050, 8)
    writer.write_samples8([0, 255, 128, 128, 1, 2])
    assert writer.written_samples == 3
    writer.close()

    assert writer.data_chunk.size == 6
    assert writer.riff_chunk.size == 4 + 24 + 8 + 6
    assert len(sink.value) == writer.riff_chunk.size + 8


def test_empty_file_is_valid(tmp_path):
    path = tmp_path / "empty.wav"
    WaveWriter(path, 1, 8000, 16).close()

    reader = open_reader(path)
    assert reader.num_samples == 0
    assert list(reader) == []


def test_short_write_rejected(sink):
    writer = WaveWriter(sink, 2, 8000, 16)
    with pytest.raises(InvalidWrite):
        writer.write(b"\x00\x00")
    assert writer.written_samples == 0
    assert len(writer.data_chunk.data) == 0


def test_unaligned_write_leaves_buffer_unchanged(sink):
    writer = WaveWriter(sink, 1, 8000, 16)
    writer.write(b"\x01\x00")
    with pytest.raises(InvalidWrite):
        writer.write(b"\x00\x00\x00")
    with pytest.raises(InvalidWrite):
        writer.write_samples8([1, 2, 3])
    assert bytes(writer.data_chunk.data) == b"\x01\x00"
    assert writer.written_samples == 1


def test_write_samples24_is_unimplemented(sink):
    writer = WaveWriter(sink, 1, 8000, 24)
    with pytest.raises(Unimplemented):
        writer.write_samples24([0])
    with pytest.raises(NotImplementedError):
        writer.write_samples24([])


def test_out_of_range_sample_rejected(sink):
    writer = WaveWriter(sink, 1, 8000, 16)
    with pytest.raises(struct.error):
        writer.write_samples16([40000])
    assert writer.written_samples == 0


@pytest.mark.parametrize(
    "channels, rate, bits",
    [(0, 8000, 16), (1, 0, 16), (1, 8000, 12), (1, 8000, 32)],
)
def test_invalid_format_rejected(sink, channels, rate, bits):
    with pytest.raises(ValueError):
        WaveWriter(sink, channels, rate, bits)


def test_nothing_written_before_close(sink):
    writer = WaveWriter(sink, 1, 8000, 16)
    writer.write_samples16([1, 2, 3])
    assert sink.getvalue() == b""
    writer.close()
    assert sink.closed


def test_close_twice_and_write_after_close(sink):
    writer = WaveWriter(sink, 1, 8000, 16)
    writer.close()
    writer.close()
    assert sink.close_calls == 1
    with pytest.raises(InvalidWrite):
        writer.write_samples16([1])


def test_context_manager(tmp_path):
    path = tmp_path / "ctx.wav"
    with WaveWriter(path, 1, 8000, 8) as writer:
        writer.write_samples8([128, 129])
    assert open_reader(path).read_sample_as_int() == [128]


class FailingSink:
    def __init__(self, fail_write=True, fail_close=False):
        self.fail_write = fail_write
        self.fail_close = fail_close
        self.writes = []
        self.closed = False

    def write(self, data):
        if self.fail_write and len(self.writes) == 2:
            raise OSError("disk full")
        self.writes.append(bytes(data))
        return len(data)

    def close(self):
        self.closed = True
        if self.fail_close:
            raise OSError("close failed")


def test_header_write_failure_skips_payload_and_closes():
    out = FailingSink()
    writer = WaveWriter(out, 1, 8000, 16)
    writer.write_samples16([1, 2])

    with pytest.raises(OSError, match="disk full"):
        writer.close()
    assert out.closed
    assert b"\x01\x00\x02\x00" not in out.writes


def test_write_failure_wins_over_close_failure():
    out = FailingSink(fail_write=True, fail_close=True)
    with pytest.raises(OSError, match="disk full"):
        WaveWriter(out, 1, 8000, 16).close()


def test_close_failure_reported():
    out = FailingSink(fail_write=False, fail_close=True)
    with pytest.raises(OSError, match="close failed"):
        WaveWriter(out, 1, 8000, 16).close()
    assert len(out.writes) == 6


def test_path_output_created_only_on_close(tmp_path):
    path = tmp_path / "lazy.wav"
    writer = WaveWriter(path, 1, 8000, 16)
    writer.write_samples16([1, 2])
    assert not path.exists()

    writer.close()
    assert open_reader(path).num_samples == 2


def test_failed_with_block_writes_nothing(tmp_path):
    path = tmp_path / "partial.wav"
    with pytest.raises(RuntimeError, match="interrupted"):
        with WaveWriter(path, 1, 8000, 16) as writer:
            writer.write_samples16([1, 2, 3])
            raise RuntimeError("interrupted")
    assert not path.exists()
    assert writer.closed


def test_failed_with_block_closes_file_object(sink):
    with pytest.raises(RuntimeError):
        with WaveWriter(sink, 1, 8000, 16) as writer:
            writer.write_samples16([1])
            raise RuntimeError("interrupted")
    assert sink.close_calls == 1
    assert sink.value == b""
    assert len(writer.data_chunk.data) == 0


def test_abort_then_close_is_a_no_op(sink):
    writer = WaveWriter(sink, 1, 8000, 16)
    writer.write_samples16([1])
    writer.abort()
    writer.close()
    assert sink.close_calls == 1
    assert sink.value == b""
