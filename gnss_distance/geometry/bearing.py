"""Planar distance and bearing between an input sample and its interpolated position."""

from __future__ import annotations

import math

from ..config import BEARING_MODE, BEARING_MODES, RAD_TO_DEG
from ..models import DistanceBearing, LatLon
from .projection import project


def legacy_bearing(input_point: LatLon, interpolated_point: LatLon) -> float:
    """Return the historical direction angle, in degrees, of the offset.

    Works on raw degree deltas: ``acos(dlon*|dlon| / (norm*|dlon|))``, mirrored
    to ``360 - angle`` when the interpolated point lies south of the input.
    The ratio reduces to ``dlon / norm`` so the result is measured
    counter-clockwise from east in unscaled lat/lon space. A zero longitude
    delta would divide zero by zero; it yields ``0.0``. Deltas small enough
    for the squared terms to underflow use the reduced ratio directly.
    """

    delta_lat = interpolated_point[0] - input_point[0]
    delta_lon = interpolated_point[1] - input_point[1]
    if delta_lon == 0:
        return 0.0
    norm = math.sqrt(delta_lat * delta_lat + delta_lon * delta_lon)
    denominator = norm * abs(delta_lon)
    if denominator == 0.0:
        ratio = delta_lon / math.hypot(delta_lat, delta_lon)
    else:
        ratio = delta_lon * abs(delta_lon) / denominator
    angle = RAD_TO_DEG * math.acos(max(-1.0, min(1.0, ratio)))
    if delta_lat < 0:
        angle = 360.0 - angle
    return angle


def true_bearing(input_point: LatLon, interpolated_point: LatLon) -> float:
    """Return the compass bearing (0 = north, 90 = east) towards the interpolated point."""

    x_in, y_in = project(*input_point)
    x_int, y_int = project(*interpolated_point)
    east = x_int - x_in
    north = y_int - y_in
    if east == 0 and north == 0:
        return 0.0
    return math.degrees(math.atan2(east, north)) % 360.0


_BEARINGS = {
    "legacy": legacy_bearing,
    "atan2": true_bearing,
}


def compute(
    input_point: LatLon,
    interpolated_point: LatLon,
    *,
    bearing: str = BEARING_MODE,
) -> DistanceBearing:
    """Project both points and return the distance, offsets and angle.

    Args:
        input_point: ``(lat, lon)`` of the primary sample.
        interpolated_point: ``(lat, lon)`` estimated on the reference track.
        bearing: ``"legacy"`` or ``"atan2"``; see :func:`legacy_bearing` and
            :func:`true_bearing`.

    Returns:
        :class:`DistanceBearing` where ``dx``/``dy`` are input minus
        interpolated, in metres east/north.

    Raises:
        ValueError: If ``bearing`` is not a known mode.
    """

    try:
        bearing_fn = _BEARINGS[bearing]
    except KeyError:
        raise ValueError(
            f"Unknown bearing mode {bearing!r}; expected one of {', '.join(BEARING_MODES)}"
        ) from None
    x_in, y_in = project(*input_point)
    x_int, y_int = project(*interpolated_point)
    dx = x_in - x_int
    dy = y_in - y_int
    distance = math.sqrt(dx * dx + dy * dy)
    angle = bearing_fn(input_point, interpolated_point)
    return DistanceBearing(distance=distance, dx=dx, dy=dy, angle=angle)
