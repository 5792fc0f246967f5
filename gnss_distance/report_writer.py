"""Writers for distance reports: JSON (primary output) and an optional Excel workbook."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from os import PathLike
from pathlib import Path
from typing import Sequence

import pandas as pd
from openpyxl.styles import Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from .config import (
    EXCEL_AUTOSIZE_COLUMNS,
    EXCEL_AUTOSIZE_MAX_ROWS,
    EXCEL_AUTOSIZE_MAX_WIDTH,
    EXCEL_AUTOSIZE_MIN_WIDTH,
    EXCEL_AUTOSIZE_PADDING,
    OUTPUT_JSON_INDENT,
)
from .models import ReportSummary, ResultRecord
from .report import flatten_record, record_to_dict, summary_to_dict

LOGGER = logging.getLogger(__name__)

PathInput = str | Path | PathLike[str]

DISTANCES_SHEET = "Distances"
SUMMARY_SHEET = "Summary"
HEADER_FONT = Font(bold=True)
HEADER_FILL = PatternFill(patternType="solid", fgColor="FFDDEBF7")
HEADER_BORDER = Border(
    left=Side(style="thin", color="000000"),
    right=Side(style="thin", color="000000"),
    top=Side(style="thin", color="000000"),
    bottom=Side(style="thin", color="000000"),
)


def dumps_report(records: Sequence[ResultRecord], *, indent: int = OUTPUT_JSON_INDENT) -> str:
    """Return the JSON text of a report."""

    payload = [record_to_dict(record) for record in records]
    return json.dumps(payload, indent=indent)


def write_report_json(
    path: PathInput,
    records: Sequence[ResultRecord],
    *,
    indent: int = OUTPUT_JSON_INDENT,
) -> Path:
    """Write ``records`` as a JSON array.

    The document goes to a uniquely named temporary file in the target's
    directory and is renamed into place, so a failure never leaves a
    truncated report behind and no neighbouring file is touched.
    """

    target = Path(path)
    text = dumps_report(records, indent=indent)
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            temp_path = Path(handle.name)
            handle.write(text)
            handle.write("\n")
        os.replace(temp_path, target)
    except OSError:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise
    LOGGER.debug("Wrote %d records to %s", len(records), target)
    return target


def _column_widths(df: pd.DataFrame) -> list[int]:
    """Return one width per column: the longest rendered value or header, padded and bounded."""

    widths = []
    for name in df.columns:
        longest = max([len(str(name))] + [len(str(v)) for v in df[name].dropna()])
        widths.append(
            min(
                EXCEL_AUTOSIZE_MAX_WIDTH,
                max(EXCEL_AUTOSIZE_MIN_WIDTH, longest + EXCEL_AUTOSIZE_PADDING),
            )
        )
    return widths


def _apply_widths(ws: Worksheet, df: pd.DataFrame) -> None:
    if not EXCEL_AUTOSIZE_COLUMNS or len(df) > EXCEL_AUTOSIZE_MAX_ROWS:
        return
    for col_idx, width in enumerate(_column_widths(df), start=1):
        ws.column_dimensions[get_column_letter(col_idx)].width = width


def _style_header_row(ws: Worksheet, max_col: int) -> None:
    for col_idx in range(1, max_col + 1):
        cell = ws.cell(row=1, column=col_idx)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.border = HEADER_BORDER


def write_report_excel(
    path: PathInput,
    records: Sequence[ResultRecord],
    summary: ReportSummary,
) -> Path:
    """Write a workbook with a flattened ``Distances`` sheet and a ``Summary`` sheet."""

    target = Path(path)
    distances_df = pd.DataFrame([flatten_record(r) for r in records])
    if distances_df.empty:
        distances_df = pd.DataFrame({"Message": ["No connected points."]})
    summary_df = pd.DataFrame(
        [{"Metric": key, "Value": value} for key, value in summary_to_dict(summary).items()]
    )
    with pd.ExcelWriter(target, engine="openpyxl") as writer:
        for sheet_name, df in (
            (DISTANCES_SHEET, distances_df),
            (SUMMARY_SHEET, summary_df),
        ):
            df.to_excel(writer, sheet_name=sheet_name, index=False)
            ws = writer.sheets[sheet_name]
            _style_header_row(ws, len(df.columns))
            _apply_widths(ws, df)
    LOGGER.info("Excel report saved to %s (rows=%d)", target, len(records))
    return target


__all__ = ["dumps_report", "write_report_excel", "write_report_json"]
