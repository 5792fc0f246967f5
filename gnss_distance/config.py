"""Central configuration for the GNSS distance calculator.

All values are constants imported by the rest of the package. Adjust as needed
for your environment. Selected values can be overridden through environment
variables (optionally via a local `.env`).
"""

from __future__ import annotations

import math
import os
from typing import Callable, TypeVar

from dotenv import load_dotenv

T = TypeVar("T")

# A `.env` in the working directory (or a parent) feeds the GNSS_* overrides.
load_dotenv()


def _from_env(key: str, default: T, parse: Callable[[str], T]) -> T:
    """Return ``parse(os.environ[key])``, or ``default`` when unset or unparsable."""

    raw = os.getenv(key)
    if raw is None:
        return default
    try:
        return parse(raw)
    except ValueError:
        return default


def _choice(choices: tuple[str, ...]) -> Callable[[str], str]:
    def parse(raw: str) -> str:
        value = raw.strip().lower()
        if value not in choices:
            raise ValueError(value)
        return value

    return parse


VERSION = "1.1"


# ---------------------------------------------------------------------------
# Geodesy
# ---------------------------------------------------------------------------
# Metres per degree of latitude used by the equirectangular projection.
GEODESIC_DEG_TO_M = 111070.4
DEG_TO_RAD = math.pi / 180.0
RAD_TO_DEG = 180.0 / math.pi


# ---------------------------------------------------------------------------
# Tolerances
# ---------------------------------------------------------------------------
# Brackets narrower than this (seconds) fall back to the previous sample.
INTERPOLATION_EPSILON = 1e-5

# Inputs with |lat| and |lon| both below this (degrees) count as "at the
# origin" and are dropped unless filtering is disabled.
ORIGIN_EPSILON = 1e-5


# ---------------------------------------------------------------------------
# Track loading
# ---------------------------------------------------------------------------
# Sentinel used for a missing lat/lon. Out of range on purpose.
MISSING_COORDINATE_DEFAULT = 90.0

# Applied to every sample without a timestamp, in both tracks.
MISSING_TIMESTAMP_DEFAULT = _from_env("GNSS_MISSING_TIMESTAMP_DEFAULT", 0.0, float)


# ---------------------------------------------------------------------------
# Processing
# ---------------------------------------------------------------------------
# "scan" keeps the linear bracket search in reference file order;
# "bisect" uses a binary search and expects sorted reference timestamps.
ALIGNMENT_STRATEGIES = ("scan", "bisect")
ALIGNMENT_STRATEGY = _from_env(
    "GNSS_ALIGNMENT_STRATEGY", "scan", _choice(ALIGNMENT_STRATEGIES)
)

# "legacy" keeps the historical acos angle of the raw degree offset, measured
# from east and mirrored south of the input; "atan2" is a compass bearing
# from the input sample towards the interpolated point.
BEARING_MODES = ("legacy", "atan2")
BEARING_MODE = _from_env("GNSS_BEARING_MODE", "legacy", _choice(BEARING_MODES))


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------
OUTPUT_JSON_INDENT = _from_env("GNSS_OUTPUT_JSON_INDENT", 2, int)

# Excel column widths, in characters, derived from the longest cell text.
EXCEL_AUTOSIZE_COLUMNS = True
EXCEL_AUTOSIZE_MAX_WIDTH = 40
EXCEL_AUTOSIZE_MIN_WIDTH = 6
EXCEL_AUTOSIZE_PADDING = 2
# Sheets with more data rows than this keep default widths.
EXCEL_AUTOSIZE_MAX_ROWS = 5000
