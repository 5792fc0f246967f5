"""Central error types used across the application."""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes, one per failure category."""

    OK = 0
    USAGE = 1
    INPUT_EXTENSION = 2
    INPUT_NAME_TOO_SHORT = 22
    INPUT_UNREADABLE = 222
    OUTPUT_EXTENSION = 3
    OUTPUT_NAME_TOO_SHORT = 33
    OUTPUT_UNWRITABLE = 233
    TRACK_FORMAT = 4
    EXCEL_EXPORT = 5


class GnssDistanceError(RuntimeError):
    """Base error for the distance calculator."""


class TrackFormatError(GnssDistanceError):
    """Raised when a track document is not an array or object of samples."""


class CommandLineError(GnssDistanceError):
    """Raised for invalid flags or unusable file paths."""

    def __init__(self, message: str, exit_code: ExitCode = ExitCode.USAGE) -> None:
        super().__init__(message)
        self.exit_code = exit_code


__all__ = [
    "ExitCode",
    "GnssDistanceError",
    "TrackFormatError",
    "CommandLineError",
]
