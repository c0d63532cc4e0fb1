# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
WAVE Writer - Builds a PCM WAVE file from samples.

Samples are collected in memory. The chunk sizes are only known once all
samples have been written, so the whole file is emitted on close():

- RIFF header
- fmt chunk
- data chunk header followed by the buffered audio data
"""

import os
import struct

from .chunks import DataWriterChunk, FmtChunk, FormatData, RiffChunk
from .constants import CHUNK_HEADER_SIZE, SUPPORTED_BITS_PER_SAMPLE
from .errors import InvalidWrite, Unimplemented
from .riff import make_chunk_header


class WaveWriter:
    """
    A writer for PCM WAVE files.
    """

    def __init__(self, out, channel_count, sample_rate, bits_per_sample):
        """
        Initializes the WAVE writer. Nothing is written until close().

        Args:
            out: The output file path or a writable binary file object.
                A path is only opened by close(). The writer takes
                ownership of a file object and closes it.
            channel_count: Number of interleaved channels.
            sample_rate: Sampling frequency in Hz.
            bits_per_sample: Quantization depth (8, 16 or 24).
        """
        if bits_per_sample not in SUPPORTED_BITS_PER_SAMPLE:
            raise ValueError(f"Bits per sample must be one of {SUPPORTED_BITS_PER_SAMPLE}, got {bits_per_sample}")
        if channel_count < 1:
            raise ValueError(f"Channel count must be at least 1, got {channel_count}")
        if sample_rate < 1:
            raise ValueError(f"Sample rate must be at least 1, got {sample_rate}")

        self.out = out
        self.written_samples = 0
        self.closed = False

        self.riff_chunk = RiffChunk()
        self.fmt_chunk = FmtChunk(data=FormatData.for_pcm(channel_count, sample_rate, bits_per_sample))
        self.data_chunk = DataWriterChunk()

    @property
    def block_size(self):
        return self.fmt_chunk.data.block_size

    def write_samples8(self, samples):
        """
        Writes unsigned 8-bit samples (0 ~ 128 ~ 255), interleaved by channel.

        Returns:
            The number of bytes written.
        """
        return self.write(struct.pack(f"<{len(samples)}B", *samples))

    def write_samples16(self, samples):
        """
        Writes signed 16-bit samples (-32768 ~ 0 ~ 32767), interleaved by channel.

        Returns:
            The number of bytes written.
        """
        return self.write(struct.pack(f"<{len(samples)}h", *samples))

    def write_samples24(self, samples):
        raise Unimplemented("write_samples24 is not implemented")

    def write(self, data):
        """
        Appends raw audio data. Only whole blocks may be written.

        Args:
            data: Interleaved little-endian sample bytes.

        Returns:
            The number of bytes written.
        """
        if self.closed:
            raise InvalidWrite("Cannot write to a closed writer")

        block_size = self.block_size
        if len(data) < block_size:
            raise InvalidWrite(f"Writing data needs at least {block_size} bytes, got {len(data)}")
        if len(data) % block_size != 0:
            raise InvalidWrite(f"Writing data must be a multiple of {block_size} bytes, got {len(data)}")

        self.data_chunk.data += data
        self.written_samples += len(data) // block_size
        return len(data)

    def _build_header(self):
        """
        Fills in the final chunk sizes and returns the header pieces in file order.
        """
        data_size = len(self.data_chunk.data)
        self.riff_chunk.size = (
            len(self.riff_chunk.format_type)
            + (CHUNK_HEADER_SIZE + self.fmt_chunk.size)
            + (CHUNK_HEADER_SIZE + data_size)
        )
        self.data_chunk.size = data_size

        return [
            make_chunk_header(self.riff_chunk.id, self.riff_chunk.size),
            self.riff_chunk.format_type,
            make_chunk_header(self.fmt_chunk.id, self.fmt_chunk.size),
            self.fmt_chunk.data.pack(),
            make_chunk_header(self.data_chunk.id, self.data_chunk.size),
        ]

    def close(self):
        """
        Writes the complete file and closes the output.

        The output is closed even when writing fails. A write error is raised
        in preference to an error from closing the output.
        """
        if self.closed:
            return
        self.closed = True

        out = self.out
        if isinstance(out, (str, os.PathLike)):
            out = open(out, "wb")

        error = None
        try:
            for piece in self._build_header():
                out.write(piece)
            out.write(self.data_chunk.data)
        except Exception as e:
            error = e

        try:
            out.close()
        except Exception as e:
            if error is None:
                error = e

        if error is not None:
            raise error

    def abort(self):
        """
        Discards the buffered samples without writing anything.

        A path output is left untouched; a file object output is closed.
        """
        if self.closed:
            return
        self.closed = True
        self.data_chunk.data.clear()
        if not isinstance(self.out, (str, os.PathLike)):
            self.out.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None:
            self.abort()
        else:
            self.close()
        return False


def open_writer(out, channel_count, sample_rate, bits_per_sample):
    """
    Creates a WAVE writer for the given output and PCM format.
    """
    return WaveWriter(out, channel_count, sample_rate, bits_per_sample)
