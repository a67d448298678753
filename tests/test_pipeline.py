"""Tests for the import pipeline."""

import json
from pathlib import Path

import pytest

from miniprof_import.errors import (
    ImportFailure,
    MalformedRecordError,
    TimestampOverflowError,
    TraceIOError,
)
from miniprof_import.output import FileCompression, read_trace
from miniprof_import.pipeline import run_import
from miniprof_import.schema import UINT64_MAX


SAMPLE_TRACES_DIR = Path(__file__).parent / "sample_traces"

SINGLE_RECORD = [{
    "thread_id": 1,
    "thread_name": "main",
    "timings": [{
        "location": {"file": "a.c", "line": 10, "column": 2},
        "start": 100,
        "duration": 50,
    }],
}]


@pytest.fixture
def write_input(tmp_path):
    """Write a document to a JSON file and return its path."""
    def _write(document, name="input.json"):
        path = tmp_path / name
        path.write_text(json.dumps(document))
        return path
    return _write


class TestRunImport:
    """Tests for complete import runs."""

    def test_single_record(self, tmp_path, write_input):
        """Test a single record becomes one zone starting at zero."""
        output = tmp_path / "out.trace"
        summary = run_import(write_input(SINGLE_RECORD), output)

        assert summary.record_count == 1
        assert summary.event_count == 2
        assert summary.mts == 100
        assert summary.span == 50
        assert summary.named_thread_count == 1

        payload = read_trace(output)
        assert payload["capture_name"] == "out.trace"
        assert payload["capture_program"] == "input.json"
        zones = payload["threads"][0]["zones"]
        assert [(z["name"], z["start"], z["end"]) for z in zones] == [("a.c:10:2", 0, 50)]

    def test_empty_input(self, tmp_path, write_input):
        """Test an empty export still produces a trace file."""
        output = tmp_path / "out.trace"
        summary = run_import(write_input([]), output)

        assert summary.record_count == 0
        assert summary.event_count == 0
        assert summary.mts == 0
        assert output.exists()
        assert read_trace(output)["threads"] == []

    def test_sample_file(self, tmp_path):
        """Test the two-thread sample export."""
        output = tmp_path / "sample.trace"
        summary = run_import(
            SAMPLE_TRACES_DIR / "two_threads.json",
            output,
            compression=FileCompression.EXTREME,
        )

        assert summary.record_count == 4
        assert summary.thread_count == 2
        assert summary.zone_count == 4
        assert summary.mts == 1000
        assert summary.span == 100

        payload = read_trace(output)
        by_id = {t["id"]: t for t in payload["threads"]}
        assert by_id[1]["name"] == "main"
        assert by_id[7]["name"] == "worker"
        assert [(z["start"], z["end"], z["depth"]) for z in by_id[1]["zones"]] == [
            (0, 100, 0),
            (10, 35, 1),
        ]

    def test_stages_reported(self, tmp_path, write_input):
        """Test the stage callback sees each stage in order."""
        stages = []
        run_import(write_input([]), tmp_path / "out.trace", on_stage=stages.append)
        assert stages == ["Loading...", "Processing...", "Saving..."]


class TestRunImportFailures:
    """Tests for runs that must abort without output."""

    def test_missing_duration(self, tmp_path, write_input):
        """Test a timing without duration aborts with no artifact."""
        document = json.loads(json.dumps(SINGLE_RECORD))
        del document[0]["timings"][0]["duration"]
        output = tmp_path / "out.trace"

        with pytest.raises(MalformedRecordError) as exc_info:
            run_import(write_input(document), output)

        assert exc_info.value.field == "duration"
        assert not output.exists()

    def test_overflow(self, tmp_path, write_input):
        """Test an overflowing end timestamp aborts with no artifact."""
        document = json.loads(json.dumps(SINGLE_RECORD))
        document[0]["timings"][0]["start"] = UINT64_MAX
        output = tmp_path / "out.trace"

        with pytest.raises(TimestampOverflowError):
            run_import(write_input(document), output)
        assert not output.exists()

    def test_missing_input(self, tmp_path):
        """Test a missing input file is an I/O failure."""
        with pytest.raises(TraceIOError):
            run_import(tmp_path / "absent.json", tmp_path / "out.trace")

    def test_unwritable_output(self, tmp_path, write_input):
        """Test an unopenable output path is an I/O failure."""
        output = tmp_path / "no" / "such" / "dir" / "out.trace"
        with pytest.raises(TraceIOError):
            run_import(write_input(SINGLE_RECORD), output)
        assert not output.exists()

    def test_existing_output_untouched_on_failure(self, tmp_path, write_input):
        """Test a failed run leaves a previous output file as it was."""
        output = tmp_path / "out.trace"
        output.write_bytes(b"previous")

        with pytest.raises(ImportFailure):
            run_import(write_input({"not": "an array"}), output)

        assert output.read_bytes() == b"previous"
