"""Command-line entry point for the GNSS distance calculator.

Computes, for every sample of ``-i`` (input track), the distance from a
virtual point of ``-d`` (reference track) interpolated at the same timestamp,
and writes the records to ``-o``.
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import NoReturn, Optional, Sequence

from .config import (
    ALIGNMENT_STRATEGIES,
    ALIGNMENT_STRATEGY,
    BEARING_MODE,
    BEARING_MODES,
    MISSING_TIMESTAMP_DEFAULT,
    VERSION,
)
from .errors import CommandLineError, ExitCode, TrackFormatError
from .processor import process_tracks
from .report_writer import write_report_excel, write_report_json
from .track_loader import load_track

LOGGER = logging.getLogger(__name__)

JSON_SUFFIX = ".json"
EXCEL_SUFFIX = ".xlsx"


class _ArgumentParser(argparse.ArgumentParser):
    """Parser that raises instead of exiting so codes stay under our control."""

    def error(self, message: str) -> NoReturn:
        raise CommandLineError(message, ExitCode.USAGE)


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="gnss_distance",
        description=(
            "Compute the distance of every point in the input track from a"
            " virtual point of the reference track at the same timestamp,"
            " interpolated between the reference samples around it."
        ),
    )
    parser.add_argument(
        "-i", dest="input", required=True, help="Input (measured) track .json"
    )
    parser.add_argument(
        "-d", dest="reference", required=True, help="Reference track .json"
    )
    parser.add_argument("-o", dest="output", required=True, help="Output .json")
    parser.add_argument(
        "-a",
        dest="keep_origin",
        action="store_true",
        help="Do not filter input points at (0, 0)",
    )
    parser.add_argument(
        "--alignment",
        choices=ALIGNMENT_STRATEGIES,
        default=ALIGNMENT_STRATEGY,
        help="Bracket search: linear scan or binary search on sorted references",
    )
    parser.add_argument(
        "--bearing",
        choices=BEARING_MODES,
        default=BEARING_MODE,
        help="Angle formula (default: %(default)s)",
    )
    parser.add_argument(
        "--missing-timestamp",
        type=float,
        default=MISSING_TIMESTAMP_DEFAULT,
        help="Timestamp assigned to samples without one (default: %(default)s)",
    )
    parser.add_argument(
        "--excel",
        type=Path,
        help="Optional .xlsx workbook with the records and a summary sheet",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Python logging level",
    )
    return parser


def _setup_logging(level: str = "INFO") -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=getattr(logging, level),
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )
    else:
        logging.getLogger().setLevel(getattr(logging, level))


def _check_json_name(name: str, *, too_short: ExitCode, wrong_suffix: ExitCode) -> None:
    # A bare ".json" is not a usable file name.
    if len(name) <= len(JSON_SUFFIX):
        raise CommandLineError(f"{name} is not a valid .json file", too_short)
    if not name.endswith(JSON_SUFFIX):
        raise CommandLineError(f"{name} is not a valid .json file", wrong_suffix)


def _check_readable(name: str) -> None:
    try:
        with open(name, "rb"):
            pass
    except OSError as exc:
        raise CommandLineError(
            f"Input file {name} could not be opened: {exc.strerror or exc}",
            ExitCode.INPUT_UNREADABLE,
        ) from exc
    LOGGER.info("File %s opened", name)


def _is_writable(target: Path) -> bool:
    parent = target.parent
    if target.is_dir() or not parent.is_dir() or not os.access(parent, os.W_OK):
        return False
    return not target.exists() or os.access(target, os.W_OK)


def _check_writable(name: str) -> None:
    if not _is_writable(Path(name)):
        raise CommandLineError(
            f"Output file {name} could not be opened",
            ExitCode.OUTPUT_UNWRITABLE,
        )


def validate_excel_path(path: Path) -> None:
    """Reject an Excel target that is not ``.xlsx`` or cannot be created.

    Runs before any track is loaded so a bad ``--excel`` never follows a
    written JSON report.
    """

    if path.suffix.lower() != EXCEL_SUFFIX:
        raise CommandLineError(
            f"{path} is not a valid .xlsx file", ExitCode.EXCEL_EXPORT
        )
    if not _is_writable(path):
        raise CommandLineError(
            f"Excel file {path} could not be opened", ExitCode.EXCEL_EXPORT
        )


def validate_paths(input_name: str, reference_name: str, output_name: str) -> None:
    """Check names and access for the three files, in command-line order.

    Raises:
        CommandLineError: Carrying the exit code of the first failing check.
    """

    for name in (input_name, reference_name):
        _check_json_name(
            name,
            too_short=ExitCode.INPUT_NAME_TOO_SHORT,
            wrong_suffix=ExitCode.INPUT_EXTENSION,
        )
        _check_readable(name)
    _check_json_name(
        output_name,
        too_short=ExitCode.OUTPUT_NAME_TOO_SHORT,
        wrong_suffix=ExitCode.OUTPUT_EXTENSION,
    )
    _check_writable(output_name)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the calculator and return the process exit code."""

    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except CommandLineError as exc:
        _setup_logging()
        LOGGER.error("%s", exc)
        LOGGER.error("%s", parser.format_usage().strip())
        return exc.exit_code

    _setup_logging(args.log_level)
    LOGGER.info("GNSS distance calculator v%s", VERSION)

    try:
        validate_paths(args.input, args.reference, args.output)
        if args.excel is not None:
            validate_excel_path(args.excel)
    except CommandLineError as exc:
        LOGGER.error("%s. Quitting...", exc)
        return exc.exit_code

    try:
        primary = load_track(args.input, missing_timestamp=args.missing_timestamp)
        reference = load_track(
            args.reference, missing_timestamp=args.missing_timestamp
        )
    except TrackFormatError as exc:
        LOGGER.error("Failed to load track: %s", exc)
        return ExitCode.TRACK_FORMAT
    except OSError as exc:
        LOGGER.error("Failed to read track: %s", exc)
        return ExitCode.INPUT_UNREADABLE

    records, summary = process_tracks(
        primary,
        reference,
        filter_origin=not args.keep_origin,
        strategy=args.alignment,
        bearing=args.bearing,
    )

    try:
        write_report_json(args.output, records)
    except OSError as exc:
        LOGGER.error("Failed to write %s: %s", args.output, exc)
        return ExitCode.OUTPUT_UNWRITABLE
    LOGGER.info("Results saved to %s (records=%d)", args.output, len(records))
    if summary.mean_distance_m is not None:
        LOGGER.info(
            "Distance mean %.3f m, max %.3f m, rms %.3f m",
            summary.mean_distance_m,
            summary.max_distance_m,
            summary.rms_distance_m,
        )

    if args.excel is not None:
        try:
            write_report_excel(args.excel, records, summary)
        except (OSError, ValueError) as exc:
            LOGGER.error("Failed to write Excel report %s: %s", args.excel, exc)
            return ExitCode.EXCEL_EXPORT
    return ExitCode.OK


def run() -> None:  # pragma: no cover - console script wrapper
    raise SystemExit(int(main()))
