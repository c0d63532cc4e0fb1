# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
Chunk structures of a PCM WAVE file.

RiffChunk (12 bytes), FmtChunk (8 + 16 bytes) and the two data chunk
variants: one backed by a bounded view of the file being read, one backed by
a growable buffer for the file being written.
"""

import io
import struct
from dataclasses import dataclass, field

from .constants import (
    DATA_CHUNK_TOKEN,
    FMT_CHUNK_DATA_SIZE,
    FMT_CHUNK_TOKEN,
    RIFF_CHUNK_TOKEN,
    WAVE_FORMAT_PCM,
    WAVE_FORMAT_TYPE,
)

# wFormatTag, nChannels, nSamplesPerSec, nAvgBytesPerSec, nBlockAlign, wBitsPerSample
_FORMAT_DATA_STRUCT = struct.Struct("<HHIIHH")


@dataclass
class RiffChunk:
    id: bytes = RIFF_CHUNK_TOKEN
    size: int = 0  # whole file size - 8
    format_type: bytes = WAVE_FORMAT_TYPE


@dataclass
class FormatData:
    """
    The 16-byte PCM format record of the fmt chunk.
    """
    wave_format_type: int
    channel_count: int
    samples_per_sec: int
    bytes_per_sec: int
    block_size: int
    bits_per_sample: int

    @classmethod
    def for_pcm(cls, channel_count, samples_per_sec, bits_per_sample):
        """
        Builds a PCM format record, deriving block size and byte rate.

        Args:
            channel_count: Number of interleaved channels.
            samples_per_sec: Sampling frequency in Hz.
            bits_per_sample: Quantization depth (8, 16 or 24).

        Returns:
            A FormatData instance.
        """
        block_size = bits_per_sample // 8 * channel_count
        return cls(
            wave_format_type=WAVE_FORMAT_PCM,
            channel_count=channel_count,
            samples_per_sec=samples_per_sec,
            bytes_per_sec=block_size * samples_per_sec,
            block_size=block_size,
            bits_per_sample=bits_per_sample,
        )

    @classmethod
    def unpack(cls, data: bytes):
        return cls(*_FORMAT_DATA_STRUCT.unpack(data))

    def pack(self) -> bytes:
        return _FORMAT_DATA_STRUCT.pack(
            self.wave_format_type,
            self.channel_count,
            self.samples_per_sec,
            self.bytes_per_sec,
            self.block_size,
            self.bits_per_sample,
        )


@dataclass
class FmtChunk:
    data: FormatData
    id: bytes = FMT_CHUNK_TOKEN
    size: int = FMT_CHUNK_DATA_SIZE


class SectionReader(io.RawIOBase):
    """
    Read-only view over a fixed window of a larger buffer.

    Reads never go past the end of the window, regardless of how much of the
    underlying buffer follows it.
    """

    def __init__(self, buffer, offset, size):
        super().__init__()
        view = memoryview(buffer)
        # A declared size larger than the remaining buffer is clamped by slicing
        self._view = view[offset:offset + size]
        self._pos = 0

    @property
    def size(self):
        return len(self._view)

    def readable(self):
        return True

    def seekable(self):
        return True

    def tell(self):
        return self._pos

    def seek(self, offset, whence=io.SEEK_SET):
        if whence == io.SEEK_SET:
            pos = offset
        elif whence == io.SEEK_CUR:
            pos = self._pos + offset
        elif whence == io.SEEK_END:
            pos = self.size + offset
        else:
            raise ValueError(f"Invalid whence: {whence}")
        if pos < 0:
            raise ValueError(f"Negative seek position {pos}")
        self._pos = pos
        return self._pos

    def read(self, size=-1):
        if size is None or size < 0:
            size = max(self.size - self._pos, 0)
        data = self.read_at(self._pos, size)
        self._pos += len(data)
        return data

    def readinto(self, b):
        data = self.read(len(b))
        b[:len(data)] = data
        return len(data)

    def read_at(self, offset, size):
        """
        Reads up to `size` bytes at `offset` without moving the cursor.
        """
        if offset >= self.size:
            return b""
        return bytes(self._view[offset:offset + size])

    def remaining(self):
        return max(self.size - self._pos, 0)

    def close(self):
        if not self.closed:
            self._view.release()
        super().close()


@dataclass
class DataReaderChunk:
    size: int  # declared length of the audio data
    data: SectionReader
    id: bytes = DATA_CHUNK_TOKEN


@dataclass
class DataWriterChunk:
    id: bytes = DATA_CHUNK_TOKEN
    size: int = 0
    data: bytearray = field(default_factory=bytearray)
