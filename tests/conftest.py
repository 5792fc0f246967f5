"""Global pytest fixtures & helpers.

Adds project root to path and provides reusable tracks and a JSON file
writer shared across test modules.
"""
from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Any, Callable

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from gnss_distance.models import Sample, Track


# --- Factory helpers -------------------------------------------------
def make_track(*rows: tuple[float, float, float]) -> Track:
    return Track(samples=[Sample(lat, lon, ts) for lat, lon, ts in rows])


def as_document(track: Track) -> list[dict[str, float]]:
    return [
        {"lat": s.latitude, "lon": s.longitude, "timestamp": s.timestamp}
        for s in track
    ]


@pytest.fixture
def track_factory() -> Callable[..., Track]:
    return make_track


@pytest.fixture
def track_document() -> Callable[[Track], list[dict[str, float]]]:
    return as_document


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def reference_track() -> Track:
    return make_track((0.0, 0.0, 0.0), (20.0, 40.0, 10.0))


@pytest.fixture
def primary_track() -> Track:
    return make_track((10.0, 20.0, 5.0))


@pytest.fixture
def survey_reference() -> Track:
    """Short northbound reference run sampled once per second."""

    return make_track(
        (44.4900, 11.3400, 100.0),
        (44.4901, 11.3400, 101.0),
        (44.4902, 11.3401, 102.0),
        (44.4903, 11.3402, 103.0),
        (44.4904, 11.3402, 104.0),
    )


@pytest.fixture
def survey_primary() -> Track:
    """Measured track offset slightly east, with an origin glitch and gaps."""

    return make_track(
        (44.49005, 11.34003, 99.0),
        (44.49005, 11.34003, 100.5),
        (0.0, 0.0, 101.5),
        (44.49025, 11.34015, 102.5),
        (44.49035, 11.34022, 103.5),
        (44.49045, 11.34025, 104.5),
    )


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], Path]:
    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
