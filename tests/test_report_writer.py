"""Tests for JSON and Excel report output."""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest
from openpyxl import load_workbook

from gnss_distance.processor import process_tracks
from gnss_distance.report import record_to_dict
from gnss_distance.report_writer import (
    DISTANCES_SHEET,
    SUMMARY_SHEET,
    write_report_excel,
    write_report_json,
)


def test_json_report_round_trips_record_layout(
    tmp_path: Path, survey_primary, survey_reference
) -> None:
    records, _ = process_tracks(survey_primary, survey_reference)
    target = tmp_path / "out.json"
    write_report_json(target, records)
    payload = json.loads(target.read_text(encoding="utf-8"))
    assert payload == [record_to_dict(r) for r in records]
    assert [item["counter"] for item in payload] == [1, 2, 3]
    assert [p.name for p in tmp_path.iterdir()] == ["out.json"]


def test_empty_report_is_empty_array(tmp_path: Path) -> None:
    target = write_report_json(tmp_path / "empty.json", [])
    assert json.loads(target.read_text(encoding="utf-8")) == []


def test_json_report_overwrites_existing_file(tmp_path: Path) -> None:
    target = tmp_path / "out.json"
    target.write_text("stale", encoding="utf-8")
    write_report_json(target, [])
    assert json.loads(target.read_text(encoding="utf-8")) == []


def test_json_report_leaves_sibling_tmp_file_alone(tmp_path: Path) -> None:
    sibling = tmp_path / "distance.tmp"
    sibling.write_text("notes", encoding="utf-8")
    write_report_json(tmp_path / "distance.json", [])
    assert sibling.read_text(encoding="utf-8") == "notes"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["distance.json", "distance.tmp"]


def test_unwritable_destination_leaves_nothing(tmp_path: Path) -> None:
    target = tmp_path / "missing-dir" / "out.json"
    with pytest.raises(OSError):
        write_report_json(target, [])
    assert not target.exists()


def test_excel_report_has_records_and_summary(
    tmp_path: Path, survey_primary, survey_reference
) -> None:
    records, summary = process_tracks(survey_primary, survey_reference)
    target = tmp_path / "report.xlsx"
    write_report_excel(target, records, summary)

    sheets = pd.read_excel(target, sheet_name=None)
    assert set(sheets) == {DISTANCES_SHEET, SUMMARY_SHEET}
    distances = sheets[DISTANCES_SHEET]
    assert len(distances) == len(records)
    assert list(distances["counter"]) == [1, 2, 3]
    assert distances["distance"].tolist() == pytest.approx([r.distance for r in records])

    summary_df = sheets[SUMMARY_SHEET].set_index("Metric")
    assert summary_df.loc["Connected Points", "Value"] == 4
    assert summary_df.loc["Records", "Value"] == 3


def test_excel_report_without_records(tmp_path: Path, track_factory) -> None:
    records, summary = process_tracks(track_factory(), track_factory())
    target = tmp_path / "empty.xlsx"
    write_report_excel(target, records, summary)
    distances = pd.read_excel(target, sheet_name=DISTANCES_SHEET)
    assert list(distances.columns) == ["Message"]


def test_excel_columns_are_sized_to_content(tmp_path: Path, track_factory) -> None:
    records, summary = process_tracks(track_factory(), track_factory())
    target = tmp_path / "empty.xlsx"
    write_report_excel(target, records, summary)
    workbook = load_workbook(target)
    # "No connected points." plus two characters of padding.
    assert workbook[DISTANCES_SHEET].column_dimensions["A"].width == 22
    for dimension in workbook[SUMMARY_SHEET].column_dimensions.values():
        assert 6 <= dimension.width <= 40
