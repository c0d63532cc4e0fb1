# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

from .chunks import DataReaderChunk, DataWriterChunk, FmtChunk, FormatData, RiffChunk
from .codec import bytes_to_int, normalize, to_signed
from .constants import LIST_SIZE_BYTE, LIST_SIZE_STANDARD
from .errors import (
    EndOfStream,
    InvalidWrite,
    MalformedHeader,
    ResourceTooLarge,
    SizeMismatch,
    UnexpectedEnd,
    Unimplemented,
    WaveError,
)
from .reader import WaveReader, open_reader
from .writer import WaveWriter, open_writer

__all__ = [
    "DataReaderChunk",
    "DataWriterChunk",
    "EndOfStream",
    "FmtChunk",
    "FormatData",
    "InvalidWrite",
    "LIST_SIZE_BYTE",
    "LIST_SIZE_STANDARD",
    "MalformedHeader",
    "ResourceTooLarge",
    "RiffChunk",
    "SizeMismatch",
    "UnexpectedEnd",
    "Unimplemented",
    "WaveError",
    "WaveReader",
    "WaveWriter",
    "bytes_to_int",
    "normalize",
    "open_reader",
    "open_writer",
    "to_signed"
]
