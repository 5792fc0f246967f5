"""Benchmark the linear-scan and binary-search alignment strategies."""

from __future__ import annotations

import argparse
import statistics
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Late imports rely on the adjusted sys.path above.
from gnss_distance.alignment import align  # noqa: E402
from gnss_distance.models import Sample, Track  # noqa: E402


@dataclass(slots=True)
class StageDurations:
    """Timing measurements (in seconds) for one iteration."""

    scan: float
    bisect: float


@dataclass(slots=True)
class BenchmarkSummary:
    """Aggregated statistics for multiple benchmark iterations."""

    primary_points: int
    reference_points: int
    iterations: int
    connected_points: int
    mean_scan_ms: float
    mean_bisect_ms: float
    speedup: float


def _build_track(point_count: int, *, step_s: float, offset_s: float = 0.0) -> Track:
    """Generate a straight northbound track sampled every ``step_s`` seconds."""

    base_lat = 44.49
    base_lon = 11.34
    step_deg = 1.2e-5
    return Track(
        samples=[
            Sample(base_lat + idx * step_deg, base_lon, offset_s + idx * step_s)
            for idx in range(point_count)
        ]
    )


def _run_iteration(primary: Track, reference: Track) -> StageDurations:
    start = time.perf_counter()
    scanned = align(primary, reference, strategy="scan")
    scan = time.perf_counter() - start

    start = time.perf_counter()
    bisected = align(primary, reference, strategy="bisect")
    bisect = time.perf_counter() - start

    if scanned != bisected:
        raise RuntimeError("Alignment strategies disagree on a sorted reference")
    return StageDurations(scan=scan, bisect=bisect)


def run_benchmark(
    primary_points: int,
    reference_points: int,
    iterations: int,
) -> BenchmarkSummary:
    """Time both strategies and return aggregated timings."""

    if primary_points <= 0 or reference_points < 2:
        raise ValueError("Need at least one primary and two reference points")
    if iterations <= 0:
        raise ValueError("iterations must be positive")

    reference = _build_track(reference_points, step_s=1.0)
    span = float(reference_points - 1)
    primary = _build_track(
        primary_points, step_s=span / primary_points, offset_s=0.5
    )

    durations: List[StageDurations] = []
    for _ in range(iterations):
        durations.append(_run_iteration(primary, reference))

    mean_scan = statistics.fmean(item.scan for item in durations)
    mean_bisect = statistics.fmean(item.bisect for item in durations)
    return BenchmarkSummary(
        primary_points=primary_points,
        reference_points=reference_points,
        iterations=iterations,
        connected_points=len(align(primary, reference, strategy="bisect")),
        mean_scan_ms=mean_scan * 1000.0,
        mean_bisect_ms=mean_bisect * 1000.0,
        speedup=mean_scan / mean_bisect if mean_bisect > 0 else float("inf"),
    )


def _format_summary(summary: BenchmarkSummary) -> Dict[str, float]:
    return {
        "primary_points": summary.primary_points,
        "reference_points": summary.reference_points,
        "iterations": summary.iterations,
        "connected_points": summary.connected_points,
        "mean_scan_ms": summary.mean_scan_ms,
        "mean_bisect_ms": summary.mean_bisect_ms,
        "speedup": summary.speedup,
    }


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compare alignment strategies on synthetic tracks",
    )
    parser.add_argument("--primary", type=int, default=2000)
    parser.add_argument("--reference", type=int, default=2000)
    parser.add_argument(
        "--iterations",
        type=int,
        default=3,
        help="Number of repetitions for averaging",
    )
    return parser.parse_args()


def main() -> None:
    """Entry point when running the module as a script."""

    args = _parse_args()
    summary = run_benchmark(args.primary, args.reference, args.iterations)
    for key, value in _format_summary(summary).items():
        if isinstance(value, int):
            print(f"{key}: {value}")
        else:
            print(f"{key}: {value:.3f}")


if __name__ == "__main__":
    main()
