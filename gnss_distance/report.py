"""Assemble per-sample distance records from an alignment map."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Sequence

import numpy as np

from .alignment import AlignmentMap
from .config import BEARING_MODE, ORIGIN_EPSILON
from .geometry import compute, interpolate
from .models import ReportSummary, ResultRecord, Sample, Track

LOGGER = logging.getLogger(__name__)


def is_at_origin(sample: Sample) -> bool:
    """Return True for fixes sitting on (0, 0), treated as placeholder data."""

    return abs(sample.latitude) < ORIGIN_EPSILON and abs(sample.longitude) < ORIGIN_EPSILON


def build_report(
    primary: Track,
    reference: Track,
    alignment: AlignmentMap,
    *,
    filter_origin: bool = True,
    bearing: str = BEARING_MODE,
) -> List[ResultRecord]:
    """Return one :class:`ResultRecord` per aligned primary sample.

    Entries are processed in ascending primary index order. When
    ``filter_origin`` is set, inputs at the origin are skipped and do not
    consume a counter value; counters start at 1.
    """

    records: List[ResultRecord] = []
    filtered = 0
    for primary_index in sorted(alignment):
        entry = alignment[primary_index]
        input_sample = primary[entry.primary_index]
        if filter_origin and is_at_origin(input_sample):
            filtered += 1
            continue
        prev_sample = reference[entry.prev_index]
        next_sample = reference[entry.next_index]
        interpolated = interpolate(input_sample.timestamp, prev_sample, next_sample)
        offset = compute(input_sample.latlon, interpolated, bearing=bearing)
        records.append(
            ResultRecord(
                input_sample=input_sample,
                prev_sample=prev_sample,
                next_sample=next_sample,
                interpolated=interpolated,
                distance=offset.distance,
                dst_lat=offset.dy,
                dst_lon=offset.dx,
                angle=offset.angle,
                counter=len(records) + 1,
            )
        )
    if filtered:
        LOGGER.debug("Skipped %d input samples at the origin", filtered)
    return records


def record_to_dict(record: ResultRecord) -> Dict[str, Any]:
    """Return the serialised layout of a record (key order is significant)."""

    return {
        "input_gnss_coordinate": {
            "lat": record.input_sample.latitude,
            "lon": record.input_sample.longitude,
            "timestamp": record.input_sample.timestamp,
        },
        "distance_from_gnss_coordinates": {
            "prev_lat": record.prev_sample.latitude,
            "prev_lon": record.prev_sample.longitude,
            "prev_timestamp": record.prev_sample.timestamp,
            "next_lat": record.next_sample.latitude,
            "next_lon": record.next_sample.longitude,
            "next_timestamp": record.next_sample.timestamp,
            "int_lat": record.interpolated[0],
            "int_lon": record.interpolated[1],
        },
        "distance": record.distance,
        "dst_lat": record.dst_lat,
        "dst_lon": record.dst_lon,
        "timestamp": record.timestamp,
        "counter": record.counter,
        "angle": record.angle,
    }


def flatten_record(record: ResultRecord) -> Dict[str, Any]:
    """Return a single-level row for tabular exports."""

    nested = record_to_dict(record)
    row: Dict[str, Any] = {"counter": nested["counter"]}
    for key, value in nested["input_gnss_coordinate"].items():
        row[f"input_{key}"] = value
    row.update(nested["distance_from_gnss_coordinates"])
    for key in ("distance", "dst_lat", "dst_lon", "angle"):
        row[key] = nested[key]
    return row


def summarize_report(
    records: Sequence[ResultRecord],
    *,
    primary_size: int,
    reference_size: int,
    connected_points: int,
) -> ReportSummary:
    """Aggregate distance statistics for logging and the Excel summary sheet."""

    if not records:
        return ReportSummary(
            primary_size=primary_size,
            reference_size=reference_size,
            connected_points=connected_points,
            record_count=0,
        )
    distances = np.asarray([r.distance for r in records], dtype=float)
    return ReportSummary(
        primary_size=primary_size,
        reference_size=reference_size,
        connected_points=connected_points,
        record_count=len(records),
        mean_distance_m=float(np.mean(distances)),
        max_distance_m=float(np.max(distances)),
        rms_distance_m=float(np.sqrt(np.mean(distances**2))),
    )


def summary_to_dict(summary: ReportSummary) -> Mapping[str, Any]:
    return {
        "Input Samples": summary.primary_size,
        "Reference Samples": summary.reference_size,
        "Connected Points": summary.connected_points,
        "Records": summary.record_count,
        "Mean Distance (m)": summary.mean_distance_m,
        "Max Distance (m)": summary.max_distance_m,
        "RMS Distance (m)": summary.rms_distance_m,
    }


__all__ = [
    "build_report",
    "flatten_record",
    "is_at_origin",
    "record_to_dict",
    "summarize_report",
    "summary_to_dict",
]
