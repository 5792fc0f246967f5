"""Tests for the command-line entry point and its exit codes."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pandas as pd
import pytest

from gnss_distance.errors import ExitCode
from gnss_distance.main import main


@pytest.fixture
def track_files(write_json, track_document, survey_primary, survey_reference):
    primary = write_json("input.json", track_document(survey_primary))
    reference = write_json("reference.json", track_document(survey_reference))
    return primary, reference


def _argv(primary: Path, reference: Path, output: Path | str, *extra: str) -> list[str]:
    return ["-i", str(primary), "-d", str(reference), "-o", str(output), *extra]


def test_successful_run_writes_report(tmp_path: Path, track_files, caplog) -> None:
    caplog.set_level(logging.INFO)
    output = tmp_path / "distance.json"
    assert main(_argv(*track_files, output)) == ExitCode.OK
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert [item["counter"] for item in payload] == [1, 2, 3]
    assert "Connected points" in caplog.text


def test_keep_origin_flag(tmp_path: Path, track_files) -> None:
    output = tmp_path / "distance.json"
    assert main(_argv(*track_files, output, "-a")) == ExitCode.OK
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert len(payload) == 4
    assert payload[1]["input_gnss_coordinate"]["lat"] == 0.0


def test_rerun_produces_identical_bytes(tmp_path: Path, track_files) -> None:
    first = tmp_path / "first.json"
    second = tmp_path / "second.json"
    assert main(_argv(*track_files, first)) == ExitCode.OK
    assert main(_argv(*track_files, second)) == ExitCode.OK
    assert first.read_bytes() == second.read_bytes()


def test_bisect_alignment_matches_scan(tmp_path: Path, track_files) -> None:
    scan = tmp_path / "scan.json"
    bisect = tmp_path / "bisect.json"
    assert main(_argv(*track_files, scan, "--alignment", "scan")) == ExitCode.OK
    assert main(_argv(*track_files, bisect, "--alignment", "bisect")) == ExitCode.OK
    assert scan.read_bytes() == bisect.read_bytes()


def test_excel_export(tmp_path: Path, track_files) -> None:
    output = tmp_path / "distance.json"
    workbook = tmp_path / "distance.xlsx"
    assert main(_argv(*track_files, output, "--excel", str(workbook))) == ExitCode.OK
    assert len(pd.read_excel(workbook, sheet_name="Distances")) == 3


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["-i", "input.json"],
        ["-i", "a.json", "-d", "b.json"],
        ["-i", "a.json", "-d", "b.json", "-o", "c.json", "-x"],
        ["-i", "a.json", "-d", "b.json", "-o", "c.json", "stray"],
    ],
)
def test_usage_errors(argv: list[str]) -> None:
    assert main(argv) == ExitCode.USAGE


def test_input_with_wrong_suffix(tmp_path: Path, track_files) -> None:
    _, reference = track_files
    bad = tmp_path / "input.txt"
    bad.write_text("[]", encoding="utf-8")
    assert main(_argv(bad, reference, tmp_path / "o.json")) == ExitCode.INPUT_EXTENSION


def test_reference_with_wrong_suffix(tmp_path: Path, track_files) -> None:
    primary, _ = track_files
    code = main(_argv(primary, tmp_path / "reference.csv", tmp_path / "o.json"))
    assert code == ExitCode.INPUT_EXTENSION


def test_input_name_too_short(tmp_path: Path, track_files) -> None:
    _, reference = track_files
    assert main(_argv(".json", reference, tmp_path / "o.json")) == ExitCode.INPUT_NAME_TOO_SHORT


def test_input_cannot_be_opened(tmp_path: Path, track_files, caplog) -> None:
    _, reference = track_files
    code = main(_argv(tmp_path / "missing.json", reference, tmp_path / "o.json"))
    assert code == ExitCode.INPUT_UNREADABLE
    assert "could not be opened" in caplog.text


def test_output_with_wrong_suffix(tmp_path: Path, track_files) -> None:
    code = main(_argv(*track_files, tmp_path / "out.txt"))
    assert code == ExitCode.OUTPUT_EXTENSION
    assert not (tmp_path / "out.txt").exists()


def test_output_name_too_short(track_files) -> None:
    assert main(_argv(*track_files, "o.txt")) == ExitCode.OUTPUT_NAME_TOO_SHORT


def test_output_directory_missing(tmp_path: Path, track_files) -> None:
    code = main(_argv(*track_files, tmp_path / "nowhere" / "out.json"))
    assert code == ExitCode.OUTPUT_UNWRITABLE


def test_malformed_track_aborts_before_output(tmp_path: Path, write_json, track_files) -> None:
    _, reference = track_files
    broken = write_json("broken.json", 17)
    output = tmp_path / "out.json"
    assert main(_argv(broken, reference, output)) == ExitCode.TRACK_FORMAT
    assert not output.exists()


def test_excel_path_must_be_xlsx(tmp_path: Path, track_files) -> None:
    output = tmp_path / "out.json"
    code = main(_argv(*track_files, output, "--excel", str(tmp_path / "out.csv")))
    assert code == ExitCode.EXCEL_EXPORT
    assert not output.exists()


def test_excel_directory_missing_aborts_before_output(tmp_path: Path, track_files) -> None:
    output = tmp_path / "out.json"
    workbook = tmp_path / "nowhere" / "out.xlsx"
    code = main(_argv(*track_files, output, "--excel", str(workbook)))
    assert code == ExitCode.EXCEL_EXPORT
    assert not output.exists()


def test_excel_path_that_is_a_directory_is_rejected(tmp_path: Path, track_files) -> None:
    output = tmp_path / "out.json"
    folder = tmp_path / "book.xlsx"
    folder.mkdir()
    code = main(_argv(*track_files, output, "--excel", str(folder)))
    assert code == ExitCode.EXCEL_EXPORT
    assert not output.exists()


def test_exit_codes_fit_posix_status() -> None:
    assert all(0 <= code <= 255 for code in ExitCode)
    assert len({int(code) for code in ExitCode}) == len(ExitCode)
