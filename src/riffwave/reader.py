# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
WAVE Reader - Parses a PCM WAVE file and serves its samples one block at a time.

The whole resource is loaded into memory and its chunk chain is validated
when the reader is created:

- RIFF header at offset 0 (size must equal the file size - 8)
- fmt chunk at offset 12 (16-byte PCM record only)
- optional LIST chunk at offset 36 (skipped)
- data chunk right after it
"""

import io
import os
from pathlib import Path

from .chunks import DataReaderChunk, FmtChunk, FormatData, RiffChunk, SectionReader
from .codec import decode_block, decode_frames, normalize
from .constants import (
    CHUNK_HEADER_SIZE,
    DATA_CHUNK_BASE_OFFSET,
    DATA_CHUNK_TOKEN,
    FMT_CHUNK_DATA_SIZE,
    FMT_CHUNK_OFFSET,
    FMT_CHUNK_TOKEN,
    LIST_CHUNK_OFFSET,
    LIST_CHUNK_TOKEN,
    LIST_SIZE_BYTE,
    LIST_SIZE_MODES,
    MAX_FILE_SIZE,
    READ_CHUNK_SIZE,
    RIFF_CHUNK_TOKEN,
    WAVE_FORMAT_TYPE,
)
from .errors import EndOfStream, MalformedHeader, ResourceTooLarge, SizeMismatch
from .riff import read_exact, read_tag, read_u32


class WaveReader:
    """
    A reader for PCM WAVE files.
    """

    def __init__(self, source, list_size_mode=LIST_SIZE_BYTE, signed=True):
        """
        Opens and parses a WAVE resource.

        Args:
            source: A file path or a readable binary file object.
            list_size_mode: How the size of a LIST chunk is read
                ("byte" or "standard").
            signed: Return 16/24-bit samples as signed values.
        """
        if list_size_mode not in LIST_SIZE_MODES:
            raise ValueError(f"Unknown LIST size mode: {list_size_mode!r}")

        self.list_size_mode = list_size_mode
        self.signed = signed

        self.riff_chunk = None
        self.fmt_chunk = None
        self.data_chunk = None

        self.data_offset = 0
        self.num_samples = 0
        self.read_sample_count = 0
        self.duration_seconds = 0

        # Footprint of variable-size chunks (LIST) before the data chunk
        self.ext_chunk_size = 0

        wave_data = self._load(source)
        self.size = len(wave_data)
        self._buffer = wave_data
        self._input = io.BytesIO(wave_data)

        self._parse_riff_chunk()
        self._parse_fmt_chunk()
        self._parse_list_chunk()
        self._parse_data_chunk()

        self.num_samples = self.data_chunk.size // self.fmt_chunk.data.block_size
        self.duration_seconds = self.num_samples // self.fmt_chunk.data.samples_per_sec

    def _load(self, source):
        """
        Reads the entire resource after checking its size.
        """
        if isinstance(source, (str, os.PathLike)):
            path = Path(source)
            file_size = path.stat().st_size
            if file_size > MAX_FILE_SIZE:
                raise ResourceTooLarge(f"File is too large: {file_size} bytes")
            with open(path, "rb") as f:
                return f.read()

        # Read in bounded pieces so the ceiling is never allocated up front
        data = bytearray()
        for piece in iter(lambda: source.read(READ_CHUNK_SIZE), b""):
            data += piece
            if len(data) > MAX_FILE_SIZE:
                raise ResourceTooLarge(f"Resource is too large: more than {MAX_FILE_SIZE} bytes")
        return bytes(data)

    def _parse_riff_chunk(self):
        f = self._input
        f.seek(0)

        chunk_id = read_tag(f)
        if chunk_id != RIFF_CHUNK_TOKEN:
            raise MalformedHeader(f"File is not RIFF: {chunk_id!r}")

        chunk_size = read_u32(f)
        if chunk_size + 8 != self.size:
            raise SizeMismatch(
                f"RIFF chunk size must be the whole file size - 8 bytes, "
                f"expected({chunk_size + 8}), actual({self.size})"
            )

        format_type = read_tag(f)
        if format_type != WAVE_FORMAT_TYPE:
            raise MalformedHeader(f"File is not WAVE: {format_type!r}")

        self.riff_chunk = RiffChunk(id=chunk_id, size=chunk_size, format_type=format_type)

    def _parse_fmt_chunk(self):
        f = self._input
        f.seek(FMT_CHUNK_OFFSET)

        chunk_id = read_tag(f)
        if chunk_id != FMT_CHUNK_TOKEN:
            raise MalformedHeader(f"fmt chunk ID must be {FMT_CHUNK_TOKEN!r} but value is {chunk_id!r}")

        chunk_size = read_u32(f)
        if chunk_size != FMT_CHUNK_DATA_SIZE:
            raise SizeMismatch(f"fmt chunk size must be {FMT_CHUNK_DATA_SIZE} but value is {chunk_size}")

        data = FormatData.unpack(read_exact(f, FMT_CHUNK_DATA_SIZE, "fmt chunk data"))
        if data.block_size == 0 or data.channel_count == 0 or data.samples_per_sec == 0:
            raise MalformedHeader(
                f"fmt chunk declares block size {data.block_size} for {data.channel_count} channel(s) "
                f"at {data.samples_per_sec} Hz"
            )

        self.fmt_chunk = FmtChunk(data=data, id=chunk_id, size=chunk_size)

    def _parse_list_chunk(self):
        f = self._input
        f.seek(LIST_CHUNK_OFFSET)

        chunk_id = read_tag(f)
        if chunk_id != LIST_CHUNK_TOKEN:
            # A LIST chunk is optional
            self.ext_chunk_size = 0
            return

        if self.list_size_mode == LIST_SIZE_BYTE:
            # Only the first byte after the tag is taken as the size
            size = read_exact(f, 1, "LIST chunk size")[0]
            self.ext_chunk_size = size + CHUNK_HEADER_SIZE
        else:
            size = read_u32(f)
            self.ext_chunk_size = CHUNK_HEADER_SIZE + size + size % 2

    def _parse_data_chunk(self):
        f = self._input
        origin_of_data_chunk = f.seek(DATA_CHUNK_BASE_OFFSET + self.ext_chunk_size)

        chunk_id = read_tag(f)
        if chunk_id != DATA_CHUNK_TOKEN:
            raise MalformedHeader(f"data chunk ID must be {DATA_CHUNK_TOKEN!r} but value is {chunk_id!r}")

        chunk_size = read_u32(f)

        # Audio data follows the ID (4 bytes) and the size (4 bytes)
        self.data_offset = origin_of_data_chunk + CHUNK_HEADER_SIZE
        audio_data = SectionReader(self._buffer, self.data_offset, chunk_size)

        self.data_chunk = DataReaderChunk(size=chunk_size, data=audio_data, id=chunk_id)

    @property
    def format(self):
        return self.fmt_chunk.data

    @property
    def channel_count(self):
        return self.fmt_chunk.data.channel_count

    @property
    def sample_rate(self):
        return self.fmt_chunk.data.samples_per_sec

    @property
    def bits_per_sample(self):
        return self.fmt_chunk.data.bits_per_sample

    @property
    def block_size(self):
        return self.fmt_chunk.data.block_size

    def read(self, size=-1):
        """
        Reads raw audio data bytes from the current position.
        """
        return self.data_chunk.data.read(size)

    def read_raw_sample(self):
        """
        Reads one block (one sample for every channel).

        Returns:
            The raw block bytes.

        Raises:
            EndOfStream: If less than a full block remains.
        """
        block_size = self.block_size
        if self.data_chunk.data.remaining() < block_size:
            raise EndOfStream(f"End of audio data after {self.read_sample_count} samples")
        sample = self.read(block_size)
        self.read_sample_count += 1
        return sample

    def read_sample(self):
        """
        Reads one block and returns a normalized float per channel.
        """
        raw = self.read_raw_sample()
        bits = self.bits_per_sample
        return [normalize(value, bits) for value in decode_block(raw, self.channel_count, self.signed)]

    def read_sample_as_int(self):
        """
        Reads one block and returns an integer per channel, without normalization.
        """
        raw = self.read_raw_sample()
        return decode_block(raw, self.channel_count, self.signed)

    def read_frames(self):
        """
        Reads all remaining whole blocks at once.

        Returns:
            A numpy array of shape (frames, channels).
        """
        stream = self.data_chunk.data
        count = stream.remaining() // self.block_size
        payload = stream.read(count * self.block_size)
        self.read_sample_count += count
        return decode_frames(payload, self.bits_per_sample, self.channel_count)

    def rewind(self):
        """
        Moves back to the first sample and resets the read counter.
        """
        self.data_chunk.data.seek(0)
        self.read_sample_count = 0

    def __iter__(self):
        while True:
            try:
                yield self.read_sample()
            except EndOfStream:
                return

    def close(self):
        if self.data_chunk is not None:
            self.data_chunk.data.close()
        self._input.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def open_reader(source, list_size_mode=LIST_SIZE_BYTE, signed=True):
    """
    Opens a WAVE resource for reading.

    Raises:
        WaveError: If the resource is not a valid PCM WAVE file.
    """
    return WaveReader(source, list_size_mode=list_size_mode, signed=signed)
