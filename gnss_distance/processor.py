"""End-to-end distance computation over two in-memory tracks."""

from __future__ import annotations

import logging
from typing import List, Tuple

from .alignment import align
from .config import ALIGNMENT_STRATEGY, BEARING_MODE
from .models import ReportSummary, ResultRecord, Track
from .report import build_report, summarize_report

LOGGER = logging.getLogger(__name__)


def process_tracks(
    primary: Track,
    reference: Track,
    *,
    filter_origin: bool = True,
    strategy: str = ALIGNMENT_STRATEGY,
    bearing: str = BEARING_MODE,
) -> Tuple[List[ResultRecord], ReportSummary]:
    """Align ``primary`` against ``reference`` and build the distance report.

    Returns:
        The ordered records plus a :class:`ReportSummary`.

    Raises:
        ValueError: If ``strategy`` or ``bearing`` is unknown.
    """

    alignment = align(primary, reference, strategy=strategy)
    LOGGER.info("Input size       : %6d", len(primary))
    LOGGER.info("Reference size   : %6d", len(reference))
    LOGGER.info("Connected points : %6d", len(alignment))
    records = build_report(
        primary,
        reference,
        alignment,
        filter_origin=filter_origin,
        bearing=bearing,
    )
    summary = summarize_report(
        records,
        primary_size=len(primary),
        reference_size=len(reference),
        connected_points=len(alignment),
    )
    return records, summary
