"""
Export adapter.

Hands a normalized timeline and its thread names to the trace writer. The
output sink is opened before anything is serialized; if it cannot be
opened nothing is written.
"""

from pathlib import Path

from miniprof_import.schema import Timeline, ThreadNameMap
from miniprof_import.utils.paths import basename
from .file_write import FileCompression, FileWrite
from .worker import TraceWorker


def export_timeline(
    timeline: Timeline,
    thread_names: ThreadNameMap,
    input_path: str | Path,
    output_path: str | Path,
    compression: FileCompression = FileCompression.FAST,
) -> TraceWorker:
    """
    Build the trace model and write it to ``output_path``.

    Ownership of ``timeline`` and ``thread_names`` passes to the returned
    worker; callers must not modify them afterwards.

    Args:
        timeline: Sorted, zero-based events
        thread_names: Names for the threads that have one
        input_path: Source export, used for the program display name
        output_path: Destination trace file
        compression: Payload compression effort

    Returns:
        The TraceWorker that was written

    Raises:
        TraceIOError: If the output file cannot be opened or written
    """
    worker = TraceWorker(
        basename(output_path),
        basename(input_path),
        timeline,
        [],
        [],
        thread_names,
    )

    with FileWrite.open(output_path, compression) as sink:
        worker.write(sink)

    return worker
