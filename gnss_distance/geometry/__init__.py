"""Flat-earth geometry helpers: projection, interpolation, distance and bearing."""

from .bearing import compute, legacy_bearing, true_bearing
from .interpolation import interpolate, linear_map
from .projection import project, project_points

__all__ = [
    "compute",
    "interpolate",
    "legacy_bearing",
    "linear_map",
    "project",
    "project_points",
    "true_bearing",
]
