# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
Exception hierarchy for riffwave.

Each error also derives from the built-in exception that describes it best,
so callers may catch ValueError / EOFError as usual.
"""


class WaveError(Exception):
    """Base class for riffwave exceptions."""


class ResourceTooLarge(WaveError, ValueError):
    """Raised when a resource exceeds the maximum supported size."""


class MalformedHeader(WaveError, ValueError):
    """Raised when a chunk tag does not match the expected token."""


class SizeMismatch(WaveError, ValueError):
    """Raised when a declared chunk size disagrees with the resource."""


class UnexpectedEnd(WaveError, EOFError):
    """Raised when the resource ends in the middle of a chunk header."""


class EndOfStream(WaveError, EOFError):
    """Raised when the sample data region has been fully consumed."""


class InvalidWrite(WaveError, ValueError):
    """Raised when written data is not a whole number of blocks."""


class Unimplemented(WaveError, NotImplementedError):
    """Raised for operations this codec does not support."""
