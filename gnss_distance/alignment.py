"""Time alignment of a primary track against a reference track."""

from __future__ import annotations

import logging
from typing import Dict, Optional

import numpy as np
from numpy.typing import NDArray

from .config import ALIGNMENT_STRATEGIES, ALIGNMENT_STRATEGY
from .models import AlignmentEntry, Track

LOGGER = logging.getLogger(__name__)

AlignmentMap = Dict[int, AlignmentEntry]


def find_prev_index(target: float, ref_timestamps: NDArray[np.float64]) -> Optional[int]:
    """Return the index just before the first later reference sample past the head.

    The head sample has no predecessor, so a later head is passed over and
    the search goes on from index 1. ``None`` when no sample after the head
    is later than ``target``.
    """

    for j in range(1, len(ref_timestamps)):
        if target < ref_timestamps[j]:
            return j - 1
    return None


def find_next_index(target: float, ref_timestamps: NDArray[np.float64]) -> Optional[int]:
    """Return the index just after the last reference sample earlier than ``target``.

    ``None`` when no reference sample is earlier, or when the very last one is.
    """

    count = len(ref_timestamps)
    for j in range(count - 1, -1, -1):
        if target > ref_timestamps[j]:
            return j + 1 if j + 1 < count else None
    return None


def _align_scan(
    primary_ts: NDArray[np.float64], ref_ts: NDArray[np.float64]
) -> AlignmentMap:
    mapping: AlignmentMap = {}
    for i, target in enumerate(primary_ts):
        prev_idx = find_prev_index(float(target), ref_ts)
        if prev_idx is None:
            continue
        next_idx = find_next_index(float(target), ref_ts)
        if next_idx is None:
            continue
        mapping[i] = AlignmentEntry(i, prev_idx, next_idx)
    return mapping


def _align_bisect(
    primary_ts: NDArray[np.float64], ref_ts: NDArray[np.float64]
) -> AlignmentMap:
    count = ref_ts.shape[0]
    # First index whose timestamp exceeds / is not below each target.
    first_after = np.searchsorted(ref_ts, primary_ts, side="right")
    first_not_before = np.searchsorted(ref_ts, primary_ts, side="left")
    mapping: AlignmentMap = {}
    for i in range(primary_ts.shape[0]):
        after = int(first_after[i])
        not_before = int(first_not_before[i])
        if after == 0 or after >= count:
            continue
        if not_before == 0 or not_before >= count:
            continue
        mapping[i] = AlignmentEntry(i, after - 1, not_before)
    return mapping


def align(
    primary: Track,
    reference: Track,
    *,
    strategy: str = ALIGNMENT_STRATEGY,
) -> AlignmentMap:
    """Bracket every primary sample's timestamp within the reference track.

    Args:
        primary: Track whose samples are measured.
        reference: Track providing the bracketing samples.
        strategy: ``"scan"`` walks the reference track for every primary
            sample in file order, so unsorted references are bracketed by
            position. ``"bisect"`` binary searches and gives the same result
            when reference timestamps are non-decreasing.

    Returns:
        Mapping of primary index to :class:`AlignmentEntry`, in ascending
        primary index order. Samples outside the reference coverage are
        omitted.

    Raises:
        ValueError: If ``strategy`` is unknown.
    """

    if strategy not in ALIGNMENT_STRATEGIES:
        raise ValueError(
            f"Unknown alignment strategy {strategy!r}; "
            f"expected one of {', '.join(ALIGNMENT_STRATEGIES)}"
        )
    primary_ts = primary.timestamps()
    ref_ts = reference.timestamps()
    if strategy == "bisect":
        mapping = _align_bisect(primary_ts, ref_ts)
    else:
        mapping = _align_scan(primary_ts, ref_ts)
    skipped = len(primary) - len(mapping)
    if skipped:
        LOGGER.debug(
            "%d of %d primary samples fall outside the reference time range",
            skipped,
            len(primary),
        )
    return mapping


__all__ = ["AlignmentMap", "align", "find_next_index", "find_prev_index"]
