"""Linear interpolation of a position between two bracketing samples."""

from __future__ import annotations

from ..config import INTERPOLATION_EPSILON
from ..models import LatLon, Sample


def linear_map(
    x: float, old_min: float, old_max: float, new_min: float, new_max: float
) -> float:
    """Map ``x`` from ``[old_min, old_max]`` onto ``[new_min, new_max]`` without clamping."""

    return (x - old_min) / (old_max - old_min) * (new_max - new_min) + new_min


def interpolate(target_ts: float, prev_sample: Sample, next_sample: Sample) -> LatLon:
    """Estimate the ``(lat, lon)`` at ``target_ts`` between two samples.

    Brackets narrower than ``INTERPOLATION_EPSILON`` return the previous
    sample's coordinates. Targets outside the bracket extrapolate.
    """

    if next_sample.timestamp - prev_sample.timestamp < INTERPOLATION_EPSILON:
        return prev_sample.latitude, prev_sample.longitude
    lat = linear_map(
        target_ts,
        prev_sample.timestamp,
        next_sample.timestamp,
        prev_sample.latitude,
        next_sample.latitude,
    )
    lon = linear_map(
        target_ts,
        prev_sample.timestamp,
        next_sample.timestamp,
        prev_sample.longitude,
        next_sample.longitude,
    )
    return lat, lon
