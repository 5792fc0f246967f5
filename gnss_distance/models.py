"""Dataclasses describing GNSS tracks and distance results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

LatLon = Tuple[float, float]


@dataclass(frozen=True, slots=True)
class Sample:
    """Single GNSS fix. Values are taken as-is, sentinels included."""

    latitude: float
    longitude: float
    timestamp: float

    @property
    def latlon(self) -> LatLon:
        return (self.latitude, self.longitude)


@dataclass(slots=True)
class Track:
    """Ordered GNSS samples in input order (never sorted or deduplicated)."""

    samples: List[Sample] = field(default_factory=list)
    source: Optional[str] = None

    def __len__(self) -> int:
        return len(self.samples)

    def __getitem__(self, index: int) -> Sample:
        return self.samples[index]

    def __iter__(self) -> Iterator[Sample]:
        return iter(self.samples)

    def timestamps(self) -> NDArray[np.float64]:
        """Return the sample timestamps as a float64 array."""

        return np.asarray([s.timestamp for s in self.samples], dtype=float)


@dataclass(frozen=True, slots=True)
class AlignmentEntry:
    """Reference indices bracketing the timestamp of a primary sample."""

    primary_index: int
    prev_index: int
    next_index: int


@dataclass(frozen=True, slots=True)
class DistanceBearing:
    """Planar offset between an input sample and its interpolated position."""

    distance: float
    dx: float
    dy: float
    angle: float


@dataclass(frozen=True, slots=True)
class ResultRecord:
    """Distance of one primary sample from the reference track."""

    input_sample: Sample
    prev_sample: Sample
    next_sample: Sample
    interpolated: LatLon
    distance: float
    dst_lat: float
    dst_lon: float
    angle: float
    counter: int

    @property
    def timestamp(self) -> float:
        return self.input_sample.timestamp


@dataclass(frozen=True, slots=True)
class ReportSummary:
    """Aggregate figures for a finished report."""

    primary_size: int
    reference_size: int
    connected_points: int
    record_count: int
    mean_distance_m: Optional[float] = None
    max_distance_m: Optional[float] = None
    rms_distance_m: Optional[float] = None
