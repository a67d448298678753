"""
Import pipeline.

Composes the stages into one run:
load -> read -> synthesize -> sort/normalize -> export.
Each stage takes the previous stage's output and returns a new value; the
first failure aborts the run.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from miniprof_import.ingestion import load_document, read_document
from miniprof_import.output import FileCompression, export_timeline
from miniprof_import.schema import Timeline, ThreadNameMap
from miniprof_import.timeline import sort_and_normalize, synthesize_all


@dataclass(frozen=True)
class ImportedTimeline:
    """A normalized timeline ready for export."""
    timeline: Timeline
    thread_names: ThreadNameMap
    mts: int
    record_count: int


@dataclass
class ImportSummary:
    """Outcome of a completed import run."""
    input_path: Path
    output_path: Path
    record_count: int
    event_count: int
    thread_count: int
    named_thread_count: int
    zone_count: int
    mts: int
    span: int
    compression: FileCompression

    def to_dict(self) -> dict[str, Any]:
        return {
            "input": str(self.input_path),
            "output": str(self.output_path),
            "records": self.record_count,
            "events": self.event_count,
            "threads": self.thread_count,
            "named_threads": self.named_thread_count,
            "zones": self.zone_count,
            "origin": self.mts,
            "span": self.span,
            "compression": self.compression.value,
        }


def build_timeline(document: Any) -> ImportedTimeline:
    """Validate a decoded export and turn it into a normalized timeline."""
    result = read_document(document)
    events = synthesize_all(result.records)
    timeline, mts = sort_and_normalize(events)

    return ImportedTimeline(
        timeline=timeline,
        thread_names=result.thread_names,
        mts=mts,
        record_count=len(result.records),
    )


def run_import(
    input_path: str | Path,
    output_path: str | Path,
    compression: FileCompression = FileCompression.FAST,
    on_stage: Callable[[str], None] | None = None,
) -> ImportSummary:
    """
    Convert a miniprofiler export into a trace file.

    Args:
        input_path: Path to the JSON export
        output_path: Path of the trace file to create
        compression: Payload compression effort
        on_stage: Optional callback receiving a description of each stage

    Returns:
        ImportSummary describing the written trace

    Raises:
        ImportFailure: On the first validation or I/O failure
    """
    notify = on_stage or (lambda description: None)

    notify("Loading...")
    document = load_document(input_path)

    notify("Processing...")
    imported = build_timeline(document)

    notify("Saving...")
    worker = export_timeline(
        imported.timeline,
        imported.thread_names,
        input_path,
        output_path,
        compression,
    )

    timeline = imported.timeline
    return ImportSummary(
        input_path=Path(input_path),
        output_path=Path(output_path),
        record_count=imported.record_count,
        event_count=len(timeline),
        thread_count=len(worker.threads),
        named_thread_count=len(imported.thread_names),
        zone_count=worker.zone_count,
        mts=imported.mts,
        span=timeline[-1].timestamp if timeline else 0,
        compression=compression,
    )
