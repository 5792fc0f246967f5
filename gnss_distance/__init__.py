"""GNSS track distance calculator package."""

from .alignment import align
from .errors import CommandLineError, ExitCode, GnssDistanceError, TrackFormatError
from .main import main
from .models import AlignmentEntry, ReportSummary, ResultRecord, Sample, Track
from .processor import process_tracks
from .report import build_report
from .track_loader import load_track

__all__ = [
    "main",
    "align",
    "build_report",
    "load_track",
    "process_tracks",
    "AlignmentEntry",
    "ReportSummary",
    "ResultRecord",
    "Sample",
    "Track",
    "CommandLineError",
    "ExitCode",
    "GnssDistanceError",
    "TrackFormatError",
]
