"""Equirectangular projection of lat/lon degrees onto a local metric plane."""

from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from ..config import DEG_TO_RAD, GEODESIC_DEG_TO_M

MetricArray = NDArray[np.float64]


def project(lat: float, lon: float) -> Tuple[float, float]:
    """Return ``(x, y)`` metres for a lat/lon pair.

    Longitude is scaled by ``cos(lat)``; only meaningful over small extents.
    """

    y = GEODESIC_DEG_TO_M * lat
    x = GEODESIC_DEG_TO_M * math.cos(lat * DEG_TO_RAD) * lon
    return x, y


def project_points(lats: Sequence[float], lons: Sequence[float]) -> MetricArray:
    """Vectorised :func:`project`; returns an ``(n, 2)`` array of ``x, y``."""

    lat_arr = np.asarray(lats, dtype=float)
    lon_arr = np.asarray(lons, dtype=float)
    if lat_arr.shape != lon_arr.shape:
        raise ValueError("Latitude and longitude sequences must be the same length")
    ys = GEODESIC_DEG_TO_M * lat_arr
    xs = GEODESIC_DEG_TO_M * np.cos(lat_arr * DEG_TO_RAD) * lon_arr
    return np.column_stack((xs, ys)).astype(float, copy=False)
