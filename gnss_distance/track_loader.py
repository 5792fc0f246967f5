"""Read GNSS tracks from JSON documents.

A track document is either an array of sample objects or an object whose
member values are sample objects. Object members are taken in key order,
not file order. Both shapes feed the same sample parser, so downstream code
only ever sees a :class:`~gnss_distance.models.Track`.
"""

from __future__ import annotations

import json
import logging
from os import PathLike
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Sequence

from .config import MISSING_COORDINATE_DEFAULT, MISSING_TIMESTAMP_DEFAULT
from .errors import TrackFormatError
from .models import Sample, Track

LOGGER = logging.getLogger(__name__)

PathInput = str | Path | PathLike[str]


def _coerce_number(value: Any, key: str, position: str) -> float:
    # bool is an int subclass; JSON true/false is never a coordinate.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TrackFormatError(
            f"Sample {position}: field '{key}' must be a number, got {value!r}"
        )
    return float(value)


def parse_sample(
    entry: Any,
    position: str,
    *,
    missing_timestamp: float = MISSING_TIMESTAMP_DEFAULT,
) -> Sample:
    """Build a :class:`Sample` from one JSON object, applying sentinel defaults."""

    if not isinstance(entry, Mapping):
        raise TrackFormatError(
            f"Sample {position} must be an object, got {type(entry).__name__}"
        )
    lat = entry.get("lat")
    lon = entry.get("lon")
    ts = entry.get("timestamp")
    return Sample(
        latitude=(
            MISSING_COORDINATE_DEFAULT
            if lat is None
            else _coerce_number(lat, "lat", position)
        ),
        longitude=(
            MISSING_COORDINATE_DEFAULT
            if lon is None
            else _coerce_number(lon, "lon", position)
        ),
        timestamp=(
            missing_timestamp
            if ts is None
            else _coerce_number(ts, "timestamp", position)
        ),
    )


def samples_from_array(
    document: Sequence[Any], *, missing_timestamp: float = MISSING_TIMESTAMP_DEFAULT
) -> List[Sample]:
    """Parse an array document; order follows the array."""

    return [
        parse_sample(entry, f"#{idx}", missing_timestamp=missing_timestamp)
        for idx, entry in enumerate(document)
    ]


def samples_from_mapping(
    document: Mapping[str, Any], *, missing_timestamp: float = MISSING_TIMESTAMP_DEFAULT
) -> List[Sample]:
    """Parse an object document; samples follow the lexicographic order of the keys."""

    return [
        parse_sample(entry, f"'{key}'", missing_timestamp=missing_timestamp)
        for key, entry in sorted(document.items(), key=lambda item: item[0])
    ]


def parse_track(
    document: Any,
    *,
    source: str | None = None,
    missing_timestamp: float = MISSING_TIMESTAMP_DEFAULT,
) -> Track:
    """Return a :class:`Track` from an already decoded JSON document.

    Raises:
        TrackFormatError: If the document is neither an array nor an object,
            or any sample is malformed.
    """

    samples: Iterable[Sample]
    if isinstance(document, list):
        samples = samples_from_array(document, missing_timestamp=missing_timestamp)
    elif isinstance(document, dict):
        samples = samples_from_mapping(document, missing_timestamp=missing_timestamp)
    else:
        raise TrackFormatError(
            "Track document must be a JSON array or object, "
            f"got {type(document).__name__}"
        )
    return Track(samples=list(samples), source=source)


def load_track(
    path: PathInput,
    *,
    missing_timestamp: float = MISSING_TIMESTAMP_DEFAULT,
) -> Track:
    """Load a track from a JSON file on disk.

    Args:
        path: Location of the JSON document.
        missing_timestamp: Value used for samples without a ``timestamp``.

    Returns:
        Track whose samples follow the array order, or the key order of an
        object document.

    Raises:
        TrackFormatError: If the file is not valid JSON or not a track document.
        OSError: If the file cannot be read.
    """

    file_path = Path(path)
    with open(file_path, "r", encoding="utf-8") as handle:
        try:
            document = json.load(handle)
        except json.JSONDecodeError as exc:
            raise TrackFormatError(f"{file_path} is not valid JSON: {exc}") from exc
    try:
        track = parse_track(
            document, source=str(file_path), missing_timestamp=missing_timestamp
        )
    except TrackFormatError as exc:
        raise TrackFormatError(f"{file_path}: {exc}") from exc
    LOGGER.debug("Loaded %d samples from %s", len(track), file_path)
    return track


__all__ = [
    "load_track",
    "parse_sample",
    "parse_track",
    "samples_from_array",
    "samples_from_mapping",
]
