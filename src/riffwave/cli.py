# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
Command-line interface for riffwave.

Provides subcommands:
- info: read every sample of a WAVE file and show its chunk structure
- tone: write a sine tone to a WAVE file

This module exposes small entry functions that can be used as console_scripts
entry points (they must be callables taking no arguments).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np

from .constants import LIST_SIZE_BYTE, LIST_SIZE_MODES
from .errors import EndOfStream
from .reader import WaveReader
from .writer import WaveWriter


def _build_root_parser():
    p = argparse.ArgumentParser(prog="riffwave", description="riffwave command-line tool")
    sub = p.add_subparsers(dest="command", required=True)

    c_info = sub.add_parser("info", help="Read a WAVE file and show its chunks")
    c_info.add_argument("input_file", help="Input WAVE file path")
    c_info.add_argument("--list-size", choices=LIST_SIZE_MODES, default=LIST_SIZE_BYTE, help="How the LIST chunk size is read (default: byte)")

    c_tone = sub.add_parser("tone", help="Write a sine tone to a WAVE file")
    c_tone.add_argument("output_file", help="Output WAVE file path")
    c_tone.add_argument("-c", "--channels", type=int, default=1, help="Number of channels (default: 1)")
    c_tone.add_argument("-r", "--rate", type=int, default=44100, help="Sample rate in Hz (default: 44100)")
    c_tone.add_argument("-b", "--bits", type=int, choices=(8, 16), default=16, help="Bits per sample (default: 16)")
    c_tone.add_argument("--frequency", type=float, default=440.0, help="Tone frequency in Hz (default: 440)")
    c_tone.add_argument("--amplitude", type=float, default=0.1, help="Tone amplitude, 0.0-1.0 (default: 0.1)")
    c_tone.add_argument("--seconds", type=float, default=1.0, help="Tone length in seconds (default: 1)")
    c_tone.add_argument("-f", "--force", action="store_true", help="Force overwrite without confirmation")

    return p


def _info(path, list_size_mode):
    with WaveReader(path, list_size_mode=list_size_mode) as reader:
        while True:
            try:
                reader.read_sample()
            except EndOfStream as e:
                print(e)
                break

        if reader.num_samples != reader.read_sample_count:
            print(f"Declared samples: {reader.num_samples}")
            print(f"Read samples:     {reader.read_sample_count}")
        else:
            print(f"Read all {reader.read_sample_count} samples.")

        print(reader.riff_chunk)
        print(reader.fmt_chunk)
        print(f"LIST chunk size: {reader.ext_chunk_size}")
        print(f"data chunk: id={reader.data_chunk.id!r} size={reader.data_chunk.size} offset={reader.data_offset}")
        print(f"Duration: {reader.duration_seconds} s")


def make_tone(frequency, amplitude, sample_rate, seconds, bits_per_sample):
    """
    Generates a quantized sine tone.

    Returns:
        A list of sample values ready for write_samples8 / write_samples16.
    """
    length = int(sample_rate * seconds)
    t = np.arange(length) / sample_rate
    wave = amplitude * np.sin(2.0 * np.pi * frequency * t)
    if bits_per_sample == 8:
        return (np.clip(np.rint(wave * 127.0), -128, 127) + 128).astype(np.uint8).tolist()
    return np.clip(np.rint(wave * 32767.0), -32768, 32767).astype(np.int16).tolist()


def _tone(args):
    out = Path(args.output_file)
    if not 0.0 <= args.amplitude <= 1.0:
        raise ValueError(f"Amplitude must be between 0.0 and 1.0, got {args.amplitude}")

    if out.exists() and not args.force:
        response = input(f"Warning: \"{out}\" already exists. Overwrite? (y/n): ")
        if response.lower() != "y":
            print("Writing cancelled.")
            return

    tone = make_tone(args.frequency, args.amplitude, args.rate, args.seconds, args.bits)
    # Same signal on every channel
    interleaved = [value for value in tone for _ in range(args.channels)]

    print(f"Writing WAVE file: {out}")
    with WaveWriter(out, args.channels, args.rate, args.bits) as writer:
        if interleaved:
            if args.bits == 8:
                writer.write_samples8(interleaved)
            else:
                writer.write_samples16(interleaved)
    print(f"Wrote {writer.written_samples} samples.")


def main(argv=None):
    """
    Generic entry point for `python -m riffwave` or package-level CLI.

    Returns exit code (0 on success).
    """
    argv = list(argv) if argv is not None else None
    parser = _build_root_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "info":
            _info(Path(args.input_file), args.list_size)
        elif args.command == "tone":
            _tone(args)
        else:
            parser.print_help()
            return 2
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
