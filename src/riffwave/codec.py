# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
Sample Codec - Conversion between raw little-endian PCM bytes and sample values.

8-bit PCM is unsigned with its zero at 128, 16-bit and 24-bit PCM are
two's-complement signed with their zero at 0.
"""

import sys

try:
    import numpy as np
except ImportError:
    print("Error: numpy library is required. Install it with: pip install numpy")
    sys.exit(1)


def bytes_to_int(b):
    """
    Interprets 1, 2 or 3 little-endian bytes as an unsigned integer.

    Args:
        b: The raw bytes of a single sample.

    Returns:
        The unsigned value, or 0 for any other byte count.
    """
    if len(b) == 1:
        # 0 ~ 128 ~ 255
        return b[0]
    elif len(b) == 2:
        return b[0] + (b[1] << 8)
    elif len(b) == 3:
        # HiRes / DVD-Audio
        return b[0] + (b[1] << 8) + (b[2] << 16)
    return 0


def to_signed(value, width):
    """
    Reinterprets an unsigned 2- or 3-byte value as two's-complement.
    1-byte values are returned as they are.
    """
    if width not in (2, 3):
        return value
    bits = width * 8
    if value >= 1 << (bits - 1):
        return value - (1 << bits)
    return value


def normalize(raw, bits_per_sample):
    """
    Scales a sample value to a float.

    8-bit: (raw - 128) / 128.0, 16-bit: raw / 32768.0.
    Other depths (24-bit) have no scaling rule and are returned unscaled.
    """
    if bits_per_sample == 8:
        return (raw - 128) / 128.0
    elif bits_per_sample == 16:
        return raw / 32768.0
    return float(raw)


def split_block(raw, channel_count):
    """
    Splits one block of interleaved sample data into per-channel byte groups.
    """
    length = len(raw) // channel_count  # bytes per channel
    return [raw[length * i:length * (i + 1)] for i in range(channel_count)]


def decode_block(raw, channel_count, signed=True):
    """
    Decodes one block into per-channel integers.

    Args:
        raw: The block bytes.
        channel_count: Number of interleaved channels.
        signed: Apply the two's-complement view to 16/24-bit samples.

    Returns:
        A list with one integer per channel.
    """
    values = []
    for segment in split_block(raw, channel_count):
        value = bytes_to_int(segment)
        if signed:
            value = to_signed(value, len(segment))
        values.append(value)
    return values


def decode_frames(payload, bits_per_sample, channel_count):
    """
    Decodes a whole interleaved PCM payload at once.

    Args:
        payload: Raw sample bytes; a trailing partial block is ignored.
        bits_per_sample: 8, 16 or 24.
        channel_count: Number of interleaved channels.

    Returns:
        A numpy array of shape (frames, channels): uint8 for 8-bit,
        int16 for 16-bit and int32 for 24-bit data.
    """
    width = bits_per_sample // 8
    block_size = width * channel_count
    usable = len(payload) - len(payload) % block_size
    payload = payload[:usable]

    if bits_per_sample == 8:
        samples = np.frombuffer(payload, dtype=np.uint8)
    elif bits_per_sample == 16:
        samples = np.frombuffer(payload, dtype="<i2")
    elif bits_per_sample == 24:
        triplets = np.frombuffer(payload, dtype=np.uint8).reshape(-1, 3).astype(np.int32)
        samples = triplets[:, 0] | (triplets[:, 1] << 8) | (triplets[:, 2] << 16)
        # Sign-extend from 24 bits
        samples = np.where(samples >= 1 << 23, samples - (1 << 24), samples).astype(np.int32)
    else:
        raise ValueError(f"Unsupported bits per sample: {bits_per_sample}")

    return samples.reshape(-1, channel_count)
