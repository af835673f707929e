"""Error taxonomy for signal SNP scanning runs."""

from __future__ import annotations


class SignalScanError(Exception):
    """Base class for fatal scan failures."""


class InvalidInputError(SignalScanError, ValueError):
    """A required argument is missing or malformed, or the input is empty."""


class ScanIOError(SignalScanError, OSError):
    """An input or output file could not be opened, read or written."""


class NoSignalFoundError(SignalScanError):
    """No association line passed the significance threshold."""
