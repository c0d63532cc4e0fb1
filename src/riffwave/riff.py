# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
RIFF (Resource Interchange File Format) utility functions.
Provides functions to read chunk tags and sizes, and to create chunk headers.
"""

import struct
from typing import BinaryIO

from .errors import UnexpectedEnd


def read_exact(f: BinaryIO, size: int, what: str) -> bytes:
    """
    Reads exactly `size` bytes from a file.

    Args:
        f: The file object to read from.
        size: The number of bytes to read.
        what: A short description used in the error message.

    Returns:
        The bytes read.
    """
    data = f.read(size)
    if len(data) < size:
        raise UnexpectedEnd(f"Unexpected end of file while reading {what}.")
    return data


def read_tag(f: BinaryIO) -> bytes:
    """
    Reads a 4-byte chunk tag in literal byte order.
    """
    return read_exact(f, 4, "chunk ID")


def read_u32(f: BinaryIO) -> int:
    """
    Reads a little-endian 32-bit unsigned integer.
    """
    return struct.unpack("<I", read_exact(f, 4, "chunk size"))[0]


def make_chunk_header(chunk_id: bytes, size: int) -> bytes:
    """
    Creates a chunk header (ID followed by the little-endian size).

    Args:
        chunk_id: The 4-byte chunk ID.
        size: The declared payload size.

    Returns:
        The 8-byte header.
    """
    if len(chunk_id) != 4:
        raise ValueError("Chunk ID must be 4 bytes long.")
    return chunk_id + struct.pack("<I", size)
