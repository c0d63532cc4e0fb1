# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
WAVE Constants - Chunk tokens and fixed byte offsets of a canonical PCM WAVE file.

Defines constants used by both the reader and the writer.
"""

# Largest resource accepted by the reader (chunk sizes are 32-bit)
MAX_FILE_SIZE = 2 ** 32

# Piece size used when loading from a file object
READ_CHUNK_SIZE = 1 << 20

# Chunk tokens (literal ASCII byte order)
RIFF_CHUNK_TOKEN = b"RIFF"
WAVE_FORMAT_TYPE = b"WAVE"
FMT_CHUNK_TOKEN = b"fmt "
LIST_CHUNK_TOKEN = b"LIST"
DATA_CHUNK_TOKEN = b"data"

# Chunk header = 4-byte ID + 4-byte size
CHUNK_HEADER_SIZE = 8

# RIFF header = "RIFF" + size + "WAVE"
RIFF_CHUNK_SIZE = 12

# fmt chunk starts right after the RIFF header
FMT_CHUNK_OFFSET = 12

# Only the canonical 16-byte PCM format record is accepted
FMT_CHUNK_DATA_SIZE = 16

# RIFF header (12 bytes) + fmt chunk (24 bytes)
LIST_CHUNK_OFFSET = 36
DATA_CHUNK_BASE_OFFSET = 36

WAVE_FORMAT_PCM = 1

SUPPORTED_BITS_PER_SAMPLE = (8, 16, 24)

# How the size of an optional LIST chunk is read.
# "byte": one size byte right after the "LIST" tag (original tool behaviour)
# "standard": 4-byte little-endian chunk size, word aligned
LIST_SIZE_BYTE = "byte"
LIST_SIZE_STANDARD = "standard"
LIST_SIZE_MODES = (LIST_SIZE_BYTE, LIST_SIZE_STANDARD)
